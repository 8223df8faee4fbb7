"""
State Snapshot
==============

Projects a GameState onto fixed-size numpy arrays for renderers and
headless consumers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, TYPE_CHECKING
import numpy as np

from snake_arcade.snake_core.config_loader import GameConfig, get_config
from snake_arcade.snake_core.food_catalog import (
    CELL_BODY,
    CELL_EMPTY,
    CELL_HEAD,
    FoodCatalog,
)
from snake_arcade.snake_core.grid import FoodType

if TYPE_CHECKING:
    from snake_arcade.snake_core.state import GameState

# Effect types in the order used by effect_ticks / effect_progress
EFFECT_TYPES = (FoodType.SPEED, FoodType.DOUBLE_SCORE)


@dataclass
class GameSnapshot:
    """
    Read-only projection of the game state.

    grid is indexed [y, x] so it prints the way the board looks.
    """
    # Core state
    score: int
    high_score: int
    length: int
    ticks: int
    is_playing: bool
    game_over: bool
    won: bool

    # Board
    grid: np.ndarray              # (GRID, GRID) int8 cell codes
    head_x: int
    head_y: int
    food_x: int
    food_y: int
    food_code: int

    # Effects, ordered as EFFECT_TYPES
    effect_ticks: np.ndarray      # (2,) int32, 0 when inactive
    effect_progress: np.ndarray   # (2,) float32 in [0, 1]

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to a dictionary of numpy arrays."""
        return {
            "score": np.array(self.score, dtype=np.int64),
            "high_score": np.array(self.high_score, dtype=np.int64),
            "length": np.array(self.length, dtype=np.int32),
            "ticks": np.array(self.ticks, dtype=np.int64),
            "is_playing": np.array(self.is_playing, dtype=bool),
            "game_over": np.array(self.game_over, dtype=bool),
            "won": np.array(self.won, dtype=bool),
            "grid": self.grid,
            "head": np.array([self.head_x, self.head_y], dtype=np.int32),
            "food": np.array([self.food_x, self.food_y], dtype=np.int32),
            "food_code": np.array(self.food_code, dtype=np.int32),
            "effect_ticks": self.effect_ticks,
            "effect_progress": self.effect_progress,
        }


class SnapshotBuilder:
    """Builds game state snapshots with pre-allocated arrays."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._catalog = FoodCatalog(config)
        self._grid_size = config.board.grid_size
        self._duration = config.effects.duration_ticks

        # Pre-allocate arrays
        self._grid = np.zeros((self._grid_size, self._grid_size), dtype=np.int8)
        self._effect_ticks = np.zeros(len(EFFECT_TYPES), dtype=np.int32)
        self._effect_progress = np.zeros(len(EFFECT_TYPES), dtype=np.float32)

    @property
    def grid_size(self) -> int:
        return self._grid_size

    def build(self, state: "GameState") -> GameSnapshot:
        """Build a snapshot from current game state."""
        self._grid.fill(CELL_EMPTY)
        self._effect_ticks.fill(0)
        self._effect_progress.fill(0)

        food_code = self._catalog[state.food.type].code
        self._grid[state.food.y, state.food.x] = food_code

        # Body after food: on the winning tick the head sits on the eaten food
        for x, y in state.snake[1:]:
            self._grid[y, x] = CELL_BODY
        head_x, head_y = state.head
        self._grid[head_y, head_x] = CELL_HEAD

        for i, food_type in enumerate(EFFECT_TYPES):
            ticks = state.effect_ticks(food_type)
            self._effect_ticks[i] = ticks
            self._effect_progress[i] = min(1.0, ticks / self._duration)

        return GameSnapshot(
            score=state.score,
            high_score=state.high_score,
            length=state.length,
            ticks=state.ticks,
            is_playing=state.is_playing,
            game_over=state.game_over,
            won=state.won,
            grid=self._grid.copy(),
            head_x=head_x,
            head_y=head_y,
            food_x=state.food.x,
            food_y=state.food.y,
            food_code=food_code,
            effect_ticks=self._effect_ticks.copy(),
            effect_progress=self._effect_progress.copy(),
        )

    def render_text(self, state: "GameState") -> str:
        """ASCII board: '@' head, 'o' body, food by first letter, '.' empty."""
        grid = self.build(state).grid
        symbols = {CELL_EMPTY: ".", CELL_BODY: "o", CELL_HEAD: "@"}
        for kind in self._catalog:
            symbols[kind.code] = kind.type.value[0]
        return "\n".join(
            "".join(symbols[int(code)] for code in row)
            for row in grid
        )
