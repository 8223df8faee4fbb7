"""
Food Catalog
============

Provides convenient access to food type definitions loaded from config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Optional

from snake_arcade.snake_core.config_loader import (
    GameConfig,
    FoodKindConfig,
    get_config
)
from snake_arcade.snake_core.grid import FoodType

# Snapshot grid codes; food kinds follow FOOD_CODE_BASE in FoodType order
CELL_EMPTY = 0
CELL_BODY = 1
CELL_HEAD = 2
FOOD_CODE_BASE = 3


@dataclass
class FoodKind:
    """
    Runtime representation of a food type.

    Wraps FoodKindConfig with the grid code used by snapshots.
    """
    config: FoodKindConfig
    code: int

    @property
    def type(self) -> FoodType:
        return self.config.type

    @property
    def label(self) -> str:
        return self.config.label

    @property
    def color(self) -> Tuple[int, int, int]:
        return self.config.color

    @property
    def grants_effect(self) -> bool:
        return self.config.type.grants_effect

    def __repr__(self) -> str:
        return f"FoodKind({self.type.value}: {self.label})"


class FoodCatalog:
    """
    Collection of all food kinds plus the roll-to-type mapping.

    A roll r in [0, 1) maps to DOUBLE_SCORE above the double score threshold,
    to SPEED above the speed threshold, and to NORMAL otherwise.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catalog from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._kinds: Dict[FoodType, FoodKind] = {
            food_type: FoodKind(config.get_food_kind(food_type), FOOD_CODE_BASE + i)
            for i, food_type in enumerate(FoodType)
        }
        self._double_score_threshold = config.food.double_score_threshold
        self._speed_threshold = config.food.speed_threshold

    def __len__(self) -> int:
        return len(self._kinds)

    def __getitem__(self, food_type: FoodType) -> FoodKind:
        return self._kinds[food_type]

    def __iter__(self):
        """Iterate over food kinds in FoodType order."""
        return iter(self._kinds.values())

    @property
    def effect_types(self) -> Tuple[FoodType, ...]:
        """Food types that grant an effect when eaten."""
        return tuple(t for t in self._kinds if t.grants_effect)

    def type_for_roll(self, roll: float) -> FoodType:
        """Map a uniform roll in [0, 1) to a food type."""
        if roll > self._double_score_threshold:
            return FoodType.DOUBLE_SCORE
        if roll > self._speed_threshold:
            return FoodType.SPEED
        return FoodType.NORMAL

    def get_by_code(self, code: int) -> Optional[FoodKind]:
        """Get the food kind drawn with a snapshot grid code."""
        for kind in self._kinds.values():
            if kind.code == code:
                return kind
        return None

