"""
Scoring System
==============

Points per food eaten and the high score rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from snake_arcade.snake_core.config_loader import GameConfig, get_config
from snake_arcade.snake_core.effects import ActiveEffect, is_double_score_active
from snake_arcade.snake_core.grid import FoodType


@dataclass(frozen=True)
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    food_type: FoodType
    doubled: bool

    def __repr__(self) -> str:
        suffix = ", doubled" if self.doubled else ""
        return f"ScoreEvent({self.food_type.value}={self.points}{suffix})"


class ScoreRules:
    """
    Score calculations.

    Eating any food is worth base_points; while a DOUBLE_SCORE effect is
    active it is worth base_points * double_score_multiplier. The effect
    set passed in must already be ticked for the current step, so the
    food that grants DOUBLE_SCORE is itself scored at the base rate.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._base_points = config.scoring.base_points
        self._multiplier = config.scoring.double_score_multiplier

    @property
    def base_points(self) -> int:
        return self._base_points

    def score_food(self, food_type: FoodType, effects: Iterable[ActiveEffect]) -> ScoreEvent:
        """
        Score one food item.

        Args:
            food_type: Type of the food eaten.
            effects: Active effects after this tick's decrement.

        Returns:
            ScoreEvent describing the points awarded.
        """
        doubled = is_double_score_active(effects)
        points = self._base_points * self._multiplier if doubled else self._base_points
        return ScoreEvent(points=points, food_type=food_type, doubled=doubled)


def next_high_score(high_score: int, score: int) -> int:
    """High score after a finished game; never decreases."""
    return max(high_score, score)
