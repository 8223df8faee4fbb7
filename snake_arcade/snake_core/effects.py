"""
Effect Ledger
=============

Time-boxed power-ups granted by special food.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from snake_arcade.snake_core.config_loader import GameConfig, get_config
from snake_arcade.snake_core.grid import FoodType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActiveEffect:
    """An effect with ticks left; active while remaining_ticks > 0."""
    type: FoodType
    remaining_ticks: int

    def __repr__(self) -> str:
        return f"ActiveEffect({self.type.value}, {self.remaining_ticks})"


Effects = Tuple[ActiveEffect, ...]


def is_active(effects: Iterable[ActiveEffect], food_type: FoodType) -> bool:
    """True if an effect of the given type is in the set."""
    return any(e.type is food_type for e in effects)


def is_speed_active(effects: Iterable[ActiveEffect]) -> bool:
    return is_active(effects, FoodType.SPEED)


def is_double_score_active(effects: Iterable[ActiveEffect]) -> bool:
    return is_active(effects, FoodType.DOUBLE_SCORE)


class EffectLedger:
    """
    Rules for the active effect list stored in GameState.

    - At most one effect per type; acquiring again refreshes the duration.
    - Every tick decrements all effects and drops those reaching zero.

    All methods return new tuples and never modify their input.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize effect ledger.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._duration = config.effects.duration_ticks

    @property
    def duration_ticks(self) -> int:
        """Ticks granted by a freshly acquired effect."""
        return self._duration

    def tick(self, effects: Effects) -> Effects:
        """Decrement every effect by one tick and prune expired ones."""
        remaining = []
        for effect in effects:
            ticks = effect.remaining_ticks - 1
            if ticks > 0:
                remaining.append(ActiveEffect(effect.type, ticks))
            else:
                logger.debug("Effect %s expired", effect.type.value)
        return tuple(remaining)

    def acquire(self, effects: Effects, food_type: FoodType) -> Effects:
        """
        Grant the effect of an eaten food.

        NORMAL food grants nothing. Any existing effect of the same type is
        replaced by a fresh one appended at the end.
        """
        if not food_type.grants_effect:
            return effects
        kept = tuple(e for e in effects if e.type is not food_type)
        logger.debug("Effect %s acquired for %d ticks", food_type.value, self._duration)
        return kept + (ActiveEffect(food_type, self._duration),)

    def progress(self, effect: ActiveEffect) -> float:
        """Fraction of the effect window left, in (0, 1]."""
        return min(1.0, effect.remaining_ticks / self._duration)
