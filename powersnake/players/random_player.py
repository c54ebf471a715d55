"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from ..domain.constants import DIRECTION_VECTORS, VALID_MOVES
from ..domain.game_state import GameState
from ..domain.grid import Grid
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a valid direction that avoids walls and self-collisions.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        wrap_walls: bool = False,
        rng: Optional[random.Random] = None
    ):
        super().__init__(name)
        self.wrap_walls = wrap_walls
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> str:
        snake_positions = game_state.snake_positions
        head_x, head_y = snake_positions[0]
        grid = Grid(game_state.width, game_state.height)

        # Filter out moves that:
        # 1. Hit walls (unless they wrap)
        # 2. Hit own body (except tail, which will move)
        valid_moves: List[str] = []
        for move in sorted(VALID_MOVES):
            dx, dy = DIRECTION_VECTORS[move]
            new_pos = (head_x + dx, head_y + dy)

            if self.wrap_walls:
                new_pos = grid.wrap(new_pos)
            elif not grid.in_bounds(new_pos):
                continue

            if new_pos in snake_positions[:-1]:
                continue

            valid_moves.append(move)

        # If no valid moves, just return a random move (we'll die anyway)
        if not valid_moves:
            return self.rng.choice(sorted(VALID_MOVES))

        return self.rng.choice(valid_moves)
