"""
Autopilot players for headless powersnake runs.

A player looks at a GameState snapshot and returns the direction it wants
the snake to take next.
"""

from .base import Player
from .random_player import RandomPlayer

__all__ = [
    'Player',
    'RandomPlayer',
]
