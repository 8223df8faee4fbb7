"""
Core Game
=========

The step function and the engine that drives it.

GameStepper.step is a pure transition from one GameState to the next.
SnakeEngine owns the current state together with the input latch, food
generator, tick driver and high score store, and is what hosts talk to.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from snake_arcade.snake_core.config_loader import GameConfig, get_config
from snake_arcade.snake_core.effects import EffectLedger
from snake_arcade.snake_core.food_catalog import FoodCatalog
from snake_arcade.snake_core.grid import Direction
from snake_arcade.snake_core.input_latch import InputLatch, direction_for_key
from snake_arcade.snake_core.persistence import (
    HighScoreStore,
    load_high_score,
    save_high_score,
)
from snake_arcade.snake_core.rng import FoodGenerator, FoodSource
from snake_arcade.snake_core.rules import REASON_BOARD_FULL, GameRules, TerminationResult
from snake_arcade.snake_core.scoring import ScoreRules, next_high_score
from snake_arcade.snake_core.state import GameState, initial_state, new_game
from snake_arcade.snake_core.state_snapshot import GameSnapshot, SnapshotBuilder
from snake_arcade.snake_core.tick_driver import TickDriver

logger = logging.getLogger(__name__)


class GameStepper:
    """
    One tick of snake movement.

    Order within a tick:
    1. resolve direction (reverse turns ignored)
    2. wall and self collision end the game
    3. prepend the new head
    4. tick effects down, pruning expired ones
    5. on food: score against the ticked effects, grant the food's
       effect, place new food on the grown snake
    6. otherwise drop the tail
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize stepper.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rules = GameRules(config)
        self._ledger = EffectLedger(config)
        self._scorer = ScoreRules(config)

    @property
    def ledger(self) -> EffectLedger:
        return self._ledger

    def step(
        self,
        state: GameState,
        pending_direction: Optional[Direction],
        generate_food: FoodSource
    ) -> GameState:
        """
        Advance the game by one tick.

        Args:
            state: Current state; returned unchanged unless it is running.
            pending_direction: Latest requested direction.
            generate_food: Places food given the grown snake.

        Returns:
            The next state.
        """
        if not state.is_running:
            return state

        direction = self._rules.direction.resolve(state.direction, pending_direction)
        new_head = direction.translate(state.head)

        term = self._rules.termination.check_move(new_head, state.snake)
        if term.terminated:
            return self._finish(state, term)

        snake = (new_head,) + state.snake
        effects = self._ledger.tick(state.effects)
        score = state.score
        food = state.food

        if new_head == food.position:
            event = self._scorer.score_food(food.type, effects)
            score += event.points
            effects = self._ledger.acquire(effects, food.type)

            term = self._rules.termination.check_board_full(snake)
            new_food = None if term.terminated else generate_food(snake)
            if new_food is None:
                if not term.terminated:
                    term = TerminationResult.victory(REASON_BOARD_FULL)
                grown = replace(state, snake=snake, direction=direction, effects=effects, score=score)
                return self._finish(grown, term)
            food = new_food
        else:
            snake = snake[:-1]

        return replace(
            state,
            snake=snake,
            direction=direction,
            food=food,
            effects=effects,
            score=score,
            ticks=state.ticks + 1,
        )

    def _finish(self, state: GameState, term: TerminationResult) -> GameState:
        """Terminal transition: stop playing and raise the high score."""
        return replace(
            state,
            is_playing=False,
            game_over=True,
            high_score=next_high_score(state.high_score, state.score),
            ticks=state.ticks + 1,
            termination_reason=term.reason,
            won=term.won,
        )


def step(
    state: GameState,
    pending_direction: Optional[Direction],
    generate_food: FoodSource,
    config: Optional[GameConfig] = None
) -> GameState:
    """Functional form of GameStepper.step."""
    return GameStepper(config).step(state, pending_direction, generate_food)


class SnakeEngine:
    """
    Main game engine.

    Orchestrates:
    - Game state (read-only to callers)
    - Input latch
    - Food generator (RNG)
    - Tick driver
    - High score persistence

    Hosts call start(now_ms) to begin, update(now_ms) every frame, and
    submit_direction()/handle_key() on input.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[HighScoreStore] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize engine.

        Args:
            config: Game configuration. Uses default if None.
            store: High score store. Nothing is persisted if None.
            seed: Random seed for food placement.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._store = store
        self._key = config.persistence.high_score_key
        self._catalog = FoodCatalog(config)
        self._food_generator = FoodGenerator(config, seed)
        self._stepper = GameStepper(config)
        self._latch = InputLatch(config.board.initial_direction)
        self._snapshot_builder = SnapshotBuilder(config)

        self._state = initial_state(config, load_high_score(store, self._key))
        self._driver = TickDriver(self._on_tick, lambda: self.current_speed_ms)

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def state(self) -> GameState:
        """Current game state."""
        return self._state

    @property
    def driver(self) -> TickDriver:
        return self._driver

    @property
    def latch(self) -> InputLatch:
        return self._latch

    @property
    def food_generator(self) -> FoodGenerator:
        return self._food_generator

    @property
    def current_speed_ms(self) -> int:
        """Tick interval implied by the current effects."""
        if self._state.is_speed_active:
            return self._config.timing.fast_speed_ms
        return self._config.timing.base_speed_ms

    def reset(self) -> GameState:
        """Start a fresh game without touching the tick driver."""
        food = self._food_generator.generate(self._config.board.initial_snake)
        self._state = new_game(self._state, food, self._config)
        self._latch.reset(self._config.board.initial_direction)
        logger.info("New game (high score %d)", self._state.high_score)
        return self._state

    def start(self, now_ms: int = 0) -> GameState:
        """Reset and begin ticking from now_ms."""
        self.reset()
        self._driver.start(now_ms)
        return self._state

    def stop(self) -> None:
        """Stop ticking. Safe to call repeatedly."""
        self._driver.stop()

    def load_state(self, state: GameState) -> None:
        """
        Replace the current state (scripted scenarios, replays).

        The tick driver keeps its schedule; a changed speed applies after
        the next step.
        """
        self._state = state
        self._latch.reset(state.direction)

    def update(self, now_ms: int) -> int:
        """Pump the tick driver; returns the number of steps fired."""
        return self._driver.update(now_ms)

    def _on_tick(self) -> None:
        self.tick()

    def tick(self) -> GameState:
        """Run one step now, committing the high score if the game ends."""
        previous = self._state
        if not previous.is_running:
            return previous

        self._state = self._stepper.step(
            previous,
            self._latch.read(),
            self._food_generator.generate
        )

        if self._state.game_over and not previous.game_over:
            self._on_game_over(self._state)
        return self._state

    def _on_game_over(self, state: GameState) -> None:
        self._driver.stop()
        save_high_score(self._store, self._key, state.high_score)
        if state.won:
            logger.info("Board cleared! Score %d, high score %d", state.score, state.high_score)
        else:
            logger.info(
                "Game over (%s): score %d, high score %d",
                state.termination_reason, state.score, state.high_score
            )

    def submit_direction(self, direction: Direction) -> bool:
        """
        Request a direction for the next tick.

        Returns:
            False if ignored because no game is being played.
        """
        if not self._state.is_playing:
            return False
        self._latch.push(direction)
        return True

    def handle_key(self, key: str) -> bool:
        """Map a key name to a direction request; unknown keys are ignored."""
        direction = direction_for_key(key)
        if direction is None:
            return False
        return self.submit_direction(direction)

    def snapshot(self) -> GameSnapshot:
        """Numpy projection of the current state."""
        return self._snapshot_builder.build(self._state)

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with snake, food, effects, scores and flags.
        """
        state = self._state
        food_kind = self._catalog[state.food.type]
        ledger = self._stepper.ledger

        effects_data = []
        for effect in state.effects:
            kind = self._catalog[effect.type]
            effects_data.append({
                "type": effect.type.value,
                "label": kind.label,
                "color": kind.color,
                "remaining_ticks": effect.remaining_ticks,
                "progress": ledger.progress(effect),
            })

        return {
            "grid_size": self._config.board.grid_size,
            "snake": list(state.snake),
            "head": state.head,
            "direction": state.direction.value,
            "food": {
                "x": state.food.x,
                "y": state.food.y,
                "type": state.food.type.value,
                "label": food_kind.label,
                "color": food_kind.color,
            },
            "effects": effects_data,
            "score": state.score,
            "high_score": state.high_score,
            "is_playing": state.is_playing,
            "game_over": state.game_over,
            "won": state.won,
            "termination_reason": state.termination_reason,
            "speed_ms": self.current_speed_ms,
        }
