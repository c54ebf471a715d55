"""
Base player interface for the game engine.
"""

from typing import Optional

from ..domain.game_state import GameState


class Player:
    """
    Base class/interface for player logic.

    Each player is responsible for returning a move for the snake given the
    current game state.
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__

    def get_move(self, game_state: GameState) -> str:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT"
        """
        raise NotImplementedError
