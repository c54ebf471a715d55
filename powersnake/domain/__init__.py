"""
Domain entities for the powersnake simulation engine.

This module contains the board, snake and powerup entities that the engine
drives. They carry no timing or input handling of their own.
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, DIRECTION_VECTORS, OPPOSITE,
    PowerupKind, RoundState,
)
from .grid import Grid
from .snake import Snake
from .powerups import Powerup, ActiveEffect, ShieldGuard, PowerupLifecycle
from .spawner import Spawner
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'DIRECTION_VECTORS', 'OPPOSITE',
    'PowerupKind', 'RoundState',
    'Grid',
    'Snake',
    'Powerup', 'ActiveEffect', 'ShieldGuard', 'PowerupLifecycle',
    'Spawner',
    'GameState',
]
