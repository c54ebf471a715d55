"""
Game constants for powersnake.
"""

from enum import Enum

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Screen coordinates: (1, 1) is the top-left cell, y grows downward.
DIRECTION_VECTORS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITE = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Where food lands when the spawner cannot find a free cell
DEFAULT_FOOD_CELL = (1, 1)

# Tick timing
SPEED_STEP_PER_POINT = 0.002  # seconds shaved off the interval per point scored
SLOW_INTERVAL_MULTIPLIER = 1.75


class PowerupKind(str, Enum):
    SHIELD = "shield"
    GHOST = "ghost"
    DOUBLE = "double"
    SLOW = "slow"

    @property
    def timed(self) -> bool:
        """Shield is a one-shot flag; every other kind runs on a countdown."""
        return self is not PowerupKind.SHIELD


POWERUP_KINDS = tuple(PowerupKind)


class RoundState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    ENDED = "ended"
