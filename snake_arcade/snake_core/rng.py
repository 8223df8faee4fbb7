"""
RNG - Food Generator
====================

Places new food on a free cell with a weighted type distribution.
"""

from __future__ import annotations

import random
from typing import Callable, List, Optional, Sequence

from snake_arcade.snake_core.config_loader import GameConfig, get_config
from snake_arcade.snake_core.food_catalog import FoodCatalog
from snake_arcade.snake_core.grid import Food, FoodType, Position

# Anything that can place food given the current snake; None means the board is full.
FoodSource = Callable[[Sequence[Position]], Optional[Food]]


class FoodGenerator:
    """
    Rejection-sampling food placement.

    Each attempt draws a uniform cell and a type roll; the first cell not
    covered by the snake wins. After max_placement_attempts misses the
    cell is drawn directly from the free cells, which keeps the placement
    uniform while bounding the work on a crowded board.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize food generator.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._catalog = FoodCatalog(config)
        self._rng = random.Random(seed)
        self._grid_size = config.board.grid_size
        self._max_attempts = config.food.max_placement_attempts

    def _roll_type(self) -> FoodType:
        return self._catalog.type_for_roll(self._rng.random())

    def generate(self, snake: Sequence[Position]) -> Optional[Food]:
        """
        Place a new food item.

        Args:
            snake: Current snake segments (any order).

        Returns:
            A Food on a free cell, or None if the snake covers the board.
        """
        occupied = set(snake)
        size = self._grid_size
        if len(occupied) >= size * size:
            return None

        for _ in range(self._max_attempts):
            position = (self._rng.randrange(size), self._rng.randrange(size))
            food_type = self._roll_type()
            if position not in occupied:
                return Food(position, food_type)

        free = self.free_cells(occupied)
        return Food(self._rng.choice(free), self._roll_type())

    __call__ = generate

    def free_cells(self, occupied) -> List[Position]:
        """All cells not in occupied, row-major."""
        size = self._grid_size
        return [
            (x, y)
            for y in range(size)
            for x in range(size)
            if (x, y) not in occupied
        ]

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the generator with optional new seed.

        Args:
            seed: New random seed. Keeps current sequence if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
