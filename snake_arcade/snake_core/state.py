"""
Game State
==========

Immutable snapshot of one moment of a snake game. Every tick produces a
new GameState from the previous one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from snake_arcade.snake_core.config_loader import GameConfig, get_config
from snake_arcade.snake_core.effects import (
    ActiveEffect,
    is_double_score_active,
    is_speed_active,
)
from snake_arcade.snake_core.grid import Direction, Food, FoodType, Position


@dataclass(frozen=True)
class GameState:
    """
    Authoritative game state.

    snake is head first. high_score carries over between games and is
    only raised on a terminal transition.
    """
    snake: Tuple[Position, ...]
    direction: Direction
    food: Food
    effects: Tuple[ActiveEffect, ...] = ()
    score: int = 0
    is_playing: bool = False
    game_over: bool = False
    high_score: int = 0
    ticks: int = 0
    termination_reason: str = ""
    won: bool = False

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def length(self) -> int:
        return len(self.snake)

    @property
    def is_running(self) -> bool:
        """True while ticks should advance the game."""
        return self.is_playing and not self.game_over

    @property
    def is_speed_active(self) -> bool:
        return is_speed_active(self.effects)

    @property
    def is_double_score_active(self) -> bool:
        return is_double_score_active(self.effects)

    def effect_ticks(self, food_type: FoodType) -> int:
        """Remaining ticks of an effect, 0 if inactive."""
        for effect in self.effects:
            if effect.type is food_type:
                return effect.remaining_ticks
        return 0


def initial_state(config: Optional[GameConfig] = None, high_score: int = 0) -> GameState:
    """
    State shown before the first game: fixed snake and food, not playing.

    Args:
        config: Game configuration. Uses default if None.
        high_score: Previously stored high score.
    """
    if config is None:
        config = get_config()

    return GameState(
        snake=tuple(config.board.initial_snake),
        direction=config.board.initial_direction,
        food=Food(config.board.initial_food, FoodType.NORMAL),
        high_score=high_score,
    )


def new_game(previous: GameState, food: Food, config: Optional[GameConfig] = None) -> GameState:
    """
    Start or restart a game.

    Resets snake, direction, food, score and effects and sets is_playing.
    The high score is kept from the previous state.

    Args:
        previous: State before the reset.
        food: Food placed for the fresh snake.
        config: Game configuration. Uses default if None.
    """
    if config is None:
        config = get_config()

    return GameState(
        snake=tuple(config.board.initial_snake),
        direction=config.board.initial_direction,
        food=food,
        is_playing=True,
        high_score=previous.high_score,
    )
