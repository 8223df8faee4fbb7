"""
Snake Core - The heart of the arcade game.

This module provides the tick-driven snake simulation and all supporting
systems (rules, effects, scoring, food RNG, input latch, tick driver and
high score persistence).

Main exports:
- SnakeEngine: Engine facade used by hosts (start, update, input, state)
- GameStepper / step: Pure one-tick transition
- GameState: Immutable game state
- TickDriver: Variable-interval scheduler pumped by the host loop
- GameConfig: Configuration loaded from game_config.yaml
"""

from snake_arcade.snake_core.config_loader import GameConfig, load_config
from snake_arcade.snake_core.grid import Direction, Food, FoodType
from snake_arcade.snake_core.food_catalog import FoodCatalog, FoodKind
from snake_arcade.snake_core.effects import ActiveEffect, EffectLedger
from snake_arcade.snake_core.state import GameState, initial_state, new_game
from snake_arcade.snake_core.rng import FoodGenerator
from snake_arcade.snake_core.input_latch import InputLatch, direction_for_key
from snake_arcade.snake_core.tick_driver import DriverState, TickDriver
from snake_arcade.snake_core.persistence import (
    JsonFileStore,
    MemoryStore,
    PersistenceError,
)
from snake_arcade.snake_core.game import GameStepper, SnakeEngine, step

__all__ = [
    "GameConfig",
    "load_config",
    "Direction",
    "Food",
    "FoodType",
    "FoodCatalog",
    "FoodKind",
    "ActiveEffect",
    "EffectLedger",
    "GameState",
    "initial_state",
    "new_game",
    "FoodGenerator",
    "InputLatch",
    "direction_for_key",
    "DriverState",
    "TickDriver",
    "JsonFileStore",
    "MemoryStore",
    "PersistenceError",
    "GameStepper",
    "SnakeEngine",
    "step",
]
