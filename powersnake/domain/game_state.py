"""
GameState entity - a read-only snapshot of the round at a point in time.
"""

from typing import Any, Dict, List, Optional, Tuple

from .constants import PowerupKind, RoundState

POWERUP_SYMBOLS = {
    PowerupKind.SHIELD: "S",
    PowerupKind.GHOST: "G",
    PowerupKind.DOUBLE: "D",
    PowerupKind.SLOW: "L",
}


class GameState:
    """
    A snapshot of the round at a specific tick.

    Attributes:
        round_state: NOT_STARTED, RUNNING, PAUSED or ENDED
        tick: number of ticks resolved this round
        snake_positions: list of (x, y), head first
        food: (x, y) of the food, or None
        powerup: dict with 'kind', 'position' and 'ttl', or None
        score: current score
        shield: whether a Shield is held
        active_effect: dict with 'kind' and 'remaining' seconds, or None
        width, height: board dimensions
        death_reason: 'wall' or 'self' once the round ended by collision
    """

    def __init__(
        self,
        round_state: RoundState,
        tick: int,
        snake_positions: List[Tuple[int, int]],
        food: Optional[Tuple[int, int]],
        powerup: Optional[Dict[str, Any]],
        score: int,
        shield: bool,
        active_effect: Optional[Dict[str, Any]],
        width: int,
        height: int,
        death_reason: Optional[str] = None
    ):
        self.round_state = round_state
        self.tick = tick
        self.snake_positions = snake_positions
        self.food = food
        self.powerup = powerup
        self.score = score
        self.shield = shield
        self.active_effect = active_effect
        self.width = width
        self.height = height
        self.death_reason = death_reason

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        S/G/D/L = shield/ghost/double/slow powerup
        H = snake head
        o = snake body
        Row 1 is printed first, matching screen coordinates.
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        if self.food is not None:
            fx, fy = self.food
            board[fy - 1][fx - 1] = 'F'

        if self.powerup is not None:
            px, py = self.powerup["position"]
            board[py - 1][px - 1] = POWERUP_SYMBOLS[self.powerup["kind"]]

        # Draw the body tail-first so the head wins on shared cells
        for pos_idx in range(len(self.snake_positions) - 1, -1, -1):
            x, y = self.snake_positions[pos_idx]
            board[y - 1][x - 1] = 'H' if pos_idx == 0 else 'o'

        result = []
        for y in range(self.height):
            result.append(f"{y + 1:2d} {' '.join(board[y])}")

        # x-axis labels, last digit only so columns stay aligned
        result.append("   " + " ".join(str(x % 10) for x in range(1, self.width + 1)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (tuples become lists when dumped)."""
        powerup = None
        if self.powerup is not None:
            powerup = dict(self.powerup, kind=self.powerup["kind"].value)
        active_effect = None
        if self.active_effect is not None:
            active_effect = dict(self.active_effect, kind=self.active_effect["kind"].value)

        return {
            "round_state": self.round_state.value,
            "tick": self.tick,
            "snake_positions": list(self.snake_positions),
            "food": self.food,
            "powerup": powerup,
            "score": self.score,
            "shield": self.shield,
            "active_effect": active_effect,
            "width": self.width,
            "height": self.height,
            "death_reason": self.death_reason,
        }

    def __repr__(self):
        return (
            f"<GameState {self.round_state.value} tick={self.tick}, score={self.score}, "
            f"length={len(self.snake_positions)}, food={self.food}>"
        )
