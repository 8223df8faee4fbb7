"""
Grid Primitives
===============

Positions, directions and food placements on the square board.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

# (x, y), x grows to the right and y grows downward.
Position = Tuple[int, int]


class Direction(Enum):
    """Movement direction of the snake head."""
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def is_reverse_of(self, other: "Direction") -> bool:
        """True if moving this way would turn back through the neck."""
        return _OPPOSITES[self] is other

    def translate(self, position: Position) -> Position:
        """Move a position one cell along this direction."""
        dx, dy = _DELTAS[self]
        return (position[0] + dx, position[1] + dy)


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class FoodType(Enum):
    """Kind of food; non-NORMAL kinds grant a timed effect when eaten."""
    NORMAL = "NORMAL"
    SPEED = "SPEED"
    DOUBLE_SCORE = "DOUBLE_SCORE"

    @property
    def grants_effect(self) -> bool:
        return self is not FoodType.NORMAL


@dataclass(frozen=True)
class Food:
    """A food item placed on one cell."""
    position: Position
    type: FoodType = FoodType.NORMAL

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]


def in_bounds(position: Position, grid_size: int) -> bool:
    """True if the position lies on a grid_size x grid_size board."""
    x, y = position
    return 0 <= x < grid_size and 0 <= y < grid_size
