"""
Random placement of food and powerups.
"""

import random
from typing import Optional, Tuple

from .constants import DEFAULT_FOOD_CELL, POWERUP_KINDS
from .grid import Grid
from .powerups import Powerup
from .snake import Snake


class Spawner:
    """
    Places items on free cells by rejection sampling.

    Each placement tries at most width * height random cells, so a full board
    can never loop forever.
    """

    def __init__(self, grid: Grid, rng: Optional[random.Random] = None):
        self.grid = grid
        self.rng = rng or random.Random()

    def _random_cell(self) -> Tuple[int, int]:
        x = self.rng.randint(1, self.grid.width)
        y = self.rng.randint(1, self.grid.height)
        return (x, y)

    def spawn_food(self, snake: Snake, powerup: Optional[Powerup]) -> Tuple[int, int]:
        """
        Return a cell not occupied by the snake or the powerup.

        Falls back to DEFAULT_FOOD_CELL when no free cell turns up.
        """
        for _ in range(self.grid.cell_count):
            cell = self._random_cell()
            if snake.occupies(cell):
                continue
            if powerup is not None and powerup.position == cell:
                continue
            return cell
        return DEFAULT_FOOD_CELL

    def spawn_powerup(
        self,
        snake: Snake,
        food: Optional[Tuple[int, int]],
        ttl: float,
    ) -> Optional[Powerup]:
        """Return a powerup of random kind on a free cell, or None if none was found."""
        kind = self.rng.choice(POWERUP_KINDS)
        for _ in range(self.grid.cell_count):
            cell = self._random_cell()
            if cell == food or snake.occupies(cell):
                continue
            return Powerup(kind=kind, position=cell, ttl=ttl)
        return None
