"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml

from snake_arcade.snake_core.grid import Direction, FoodType, Position, in_bounds

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)),
    "game_config.yaml"
)


@dataclass(frozen=True)
class BoardConfig:
    """Board geometry and the layout shown before the first game."""
    grid_size: int                        # Cells per side
    initial_snake: Tuple[Position, ...]   # Head first
    initial_direction: Direction
    initial_food: Position

    @property
    def cell_count(self) -> int:
        return self.grid_size * self.grid_size


@dataclass(frozen=True)
class TimingConfig:
    """Tick intervals in milliseconds."""
    base_speed_ms: int
    fast_speed_ms: int   # Used while a SPEED effect is active


@dataclass(frozen=True)
class EffectsConfig:
    """Power-up effect parameters."""
    duration_ticks: int


@dataclass(frozen=True)
class FoodKindConfig:
    """Presentation settings for one food type."""
    type: FoodType
    label: str
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class FoodConfig:
    """Food placement and type distribution."""
    double_score_threshold: float
    speed_threshold: float
    max_placement_attempts: int
    kinds: Tuple[FoodKindConfig, ...]


@dataclass(frozen=True)
class ScoringConfig:
    """Points per food eaten."""
    base_points: int
    double_score_multiplier: int


@dataclass(frozen=True)
class PersistenceConfig:
    """High score storage."""
    high_score_key: str
    high_score_path: str


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    timing: TimingConfig
    effects: EffectsConfig
    food: FoodConfig
    scoring: ScoringConfig
    persistence: PersistenceConfig

    @property
    def grid_size(self) -> int:
        return self.board.grid_size

    def get_food_kind(self, food_type: FoodType) -> FoodKindConfig:
        """Get presentation settings for a food type."""
        for kind in self.food.kinds:
            if kind.type is food_type:
                return kind
        raise ValueError(f"No food kind configured for {food_type.value}")


def _parse_position(data: List, field_name: str) -> Position:
    """Parse an [x, y] pair from YAML."""
    if len(data) != 2:
        raise ValueError(f"{field_name} must have 2 values [x, y], got {data}")
    return (int(data[0]), int(data[1]))


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_direction(name: str) -> Direction:
    try:
        return Direction(str(name).upper())
    except ValueError:
        raise ValueError(f"Unknown direction: {name!r}") from None


def _parse_food_kind(kind_data: dict) -> FoodKindConfig:
    """Parse a single food kind from YAML."""
    try:
        food_type = FoodType(str(kind_data["type"]).upper())
    except ValueError:
        raise ValueError(f"Unknown food type: {kind_data['type']!r}") from None
    return FoodKindConfig(
        type=food_type,
        label=str(kind_data.get("label", food_type.value.title())),
        color=_parse_color(kind_data["color"]),
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    size = config.board.grid_size
    if size < 2:
        raise ValueError(f"grid_size must be at least 2, got {size}")

    # Initial snake must be on the board, contiguous and non-overlapping
    snake = config.board.initial_snake
    if not snake:
        raise ValueError("initial_snake must contain at least one segment")
    for segment in snake:
        if not in_bounds(segment, size):
            raise ValueError(f"initial_snake segment {segment} is outside the {size}x{size} grid")
    if len(set(snake)) != len(snake):
        raise ValueError("initial_snake segments must not overlap")
    for a, b in zip(snake, snake[1:]):
        if abs(a[0] - b[0]) + abs(a[1] - b[1]) != 1:
            raise ValueError(f"initial_snake segments {a} and {b} are not adjacent")

    # Initial direction must not run straight back into the neck
    if len(snake) > 1 and config.board.initial_direction.translate(snake[0]) == snake[1]:
        raise ValueError(
            f"initial_direction {config.board.initial_direction.value} points into the snake body"
        )

    food = config.board.initial_food
    if not in_bounds(food, size):
        raise ValueError(f"initial_food {food} is outside the {size}x{size} grid")
    if food in snake:
        raise ValueError(f"initial_food {food} overlaps the initial snake")

    # Timing
    if config.timing.base_speed_ms <= 0 or config.timing.fast_speed_ms <= 0:
        raise ValueError("Tick intervals must be positive")

    if config.effects.duration_ticks <= 0:
        raise ValueError(f"effects.duration_ticks must be positive, got {config.effects.duration_ticks}")

    # Food type thresholds: NORMAL below speed, SPEED below double score
    food_cfg = config.food
    if not 0.0 <= food_cfg.speed_threshold <= food_cfg.double_score_threshold <= 1.0:
        raise ValueError(
            f"Food thresholds must satisfy 0 <= speed_threshold ({food_cfg.speed_threshold}) "
            f"<= double_score_threshold ({food_cfg.double_score_threshold}) <= 1"
        )
    if food_cfg.max_placement_attempts < 1:
        raise ValueError("food.max_placement_attempts must be at least 1")

    configured = [kind.type for kind in food_cfg.kinds]
    for food_type in FoodType:
        if configured.count(food_type) != 1:
            raise ValueError(f"food.kinds must list {food_type.value} exactly once")

    if config.scoring.base_points < 0 or config.scoring.double_score_multiplier < 1:
        raise ValueError("scoring.base_points must be >= 0 and double_score_multiplier >= 1")

    if not config.persistence.high_score_key:
        raise ValueError("persistence.high_score_key must not be empty")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        grid_size=int(board_data["grid_size"]),
        initial_snake=tuple(
            _parse_position(p, "initial_snake segment") for p in board_data["initial_snake"]
        ),
        initial_direction=_parse_direction(board_data.get("initial_direction", "UP")),
        initial_food=_parse_position(board_data["initial_food"], "initial_food"),
    )

    timing_data = raw["timing"]
    timing = TimingConfig(
        base_speed_ms=int(timing_data["base_speed_ms"]),
        fast_speed_ms=int(timing_data["fast_speed_ms"]),
    )

    effects_data = raw["effects"]
    effects = EffectsConfig(
        duration_ticks=int(effects_data["duration_ticks"]),
    )

    food_data = raw["food"]
    food = FoodConfig(
        double_score_threshold=float(food_data["double_score_threshold"]),
        speed_threshold=float(food_data["speed_threshold"]),
        max_placement_attempts=int(food_data.get("max_placement_attempts", 1000)),
        kinds=tuple(_parse_food_kind(k) for k in food_data["kinds"]),
    )

    scoring_data = raw["scoring"]
    scoring = ScoringConfig(
        base_points=int(scoring_data["base_points"]),
        double_score_multiplier=int(scoring_data.get("double_score_multiplier", 2)),
    )

    # Persistence section is optional
    persistence_data = raw.get("persistence", {})
    persistence = PersistenceConfig(
        high_score_key=str(persistence_data.get("high_score_key", "snakeHighScore")),
        high_score_path=str(
            persistence_data.get("high_score_path", "~/.snake_arcade/highscore.json")
        ),
    )

    config = GameConfig(
        board=board,
        timing=timing,
        effects=effects,
        food=food,
        scoring=scoring,
        persistence=persistence,
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
