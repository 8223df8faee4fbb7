"""
Tests for the engine facade: lifecycle, input and high score persistence.
"""

from dataclasses import replace

import pytest

from snake_arcade.snake_core.config_loader import load_config
from snake_arcade.snake_core.effects import ActiveEffect
from snake_arcade.snake_core.game import SnakeEngine
from snake_arcade.snake_core.grid import Direction, Food, FoodType
from snake_arcade.snake_core.persistence import MemoryStore, PersistenceError
from snake_arcade.snake_core.tick_driver import DriverState

KEY = "snakeHighScore"


@pytest.fixture
def config():
    return load_config()


class RecordingStore(MemoryStore):
    """Memory store that records every write."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.writes = []

    def set(self, key, value):
        self.writes.append((key, value))
        super().set(key, value)


class FailingStore:
    """Store whose writes always fail."""

    def get(self, key):
        return "15"

    def set(self, key, value):
        raise PersistenceError("disk on fire")


class ReadOnlyFileSystemStore:
    """Store that lets raw OS errors escape instead of wrapping them."""

    def get(self, key):
        raise OSError("read-only filesystem")

    def set(self, key, value):
        raise OSError("read-only filesystem")


def run_into_wall(engine, limit=50):
    """Tick straight ahead until the game ends."""
    for _ in range(limit):
        engine.tick()
        if engine.state.game_over:
            return engine.state
    raise AssertionError("game did not end")


def clear_path(engine):
    """Move the food out of the initial upward path."""
    engine.load_state(replace(engine.state, food=Food((0, 19), FoodType.NORMAL)))


class TestInitialization:
    """Test state before the first game."""

    def test_initial_state(self, config):
        engine = SnakeEngine(config)
        state = engine.state

        assert state.snake == ((10, 10), (10, 11), (10, 12))
        assert state.direction is Direction.UP
        assert state.food == Food((5, 5), FoodType.NORMAL)
        assert state.score == 0
        assert not state.is_playing
        assert not state.game_over
        assert engine.driver.state is DriverState.STOPPED

    def test_high_score_loaded_from_store(self, config):
        engine = SnakeEngine(config, MemoryStore({KEY: "120"}))
        assert engine.state.high_score == 120

    # Only whole non-negative integers are accepted; "12.5" is malformed and
    # reads as 0 rather than being truncated to 12.
    @pytest.mark.parametrize("stored", [None, "", "abc", "-5", "12.5"])
    def test_bad_stored_high_score_defaults_to_zero(self, config, stored):
        store = MemoryStore() if stored is None else MemoryStore({KEY: stored})
        assert SnakeEngine(config, store).state.high_score == 0

    def test_no_store(self, config):
        assert SnakeEngine(config).state.high_score == 0


class TestLifecycle:
    """Test start, ticking and game over."""

    def test_start_begins_a_game(self, config):
        engine = SnakeEngine(config, MemoryStore(), seed=4)

        state = engine.start(0)

        assert state.is_playing
        assert not state.game_over
        assert state.score == 0
        assert state.effects == ()
        assert state.food.position not in state.snake
        assert engine.driver.is_running

    def test_tick_before_start_does_nothing(self, config):
        engine = SnakeEngine(config)
        before = engine.state
        assert engine.tick() is before

    def test_game_over_commits_high_score_once(self, config):
        store = RecordingStore()
        engine = SnakeEngine(config, store, seed=2)
        engine.start(0)
        clear_path(engine)
        engine.load_state(replace(engine.state, score=40))

        state = run_into_wall(engine)

        assert state.termination_reason == "wall"
        assert not state.is_playing
        assert state.high_score == 40
        assert store.writes == [(KEY, "40")]
        assert engine.driver.state is DriverState.STOPPED

        # Further ticks and updates after game over write nothing
        engine.tick()
        engine.update(100_000)
        assert store.writes == [(KEY, "40")]

    def test_high_score_never_decreases(self, config):
        store = RecordingStore({KEY: "500"})
        engine = SnakeEngine(config, store, seed=2)
        engine.start(0)
        clear_path(engine)

        state = run_into_wall(engine)

        assert state.high_score == 500
        assert store.get(KEY) == "500"

    def test_restart_keeps_high_score(self, config):
        engine = SnakeEngine(config, MemoryStore(), seed=2)
        engine.start(0)
        clear_path(engine)
        engine.load_state(replace(engine.state, score=70))
        run_into_wall(engine)

        state = engine.start(5000)

        assert state.is_playing
        assert state.score == 0
        assert state.high_score == 70
        assert state.snake == config.board.initial_snake

    def test_store_failure_is_not_fatal(self, config):
        engine = SnakeEngine(config, FailingStore(), seed=2)
        assert engine.state.high_score == 15
        engine.start(0)
        clear_path(engine)

        state = run_into_wall(engine)

        assert state.game_over
        assert state.high_score == 15

    def test_unwrapped_os_error_is_not_fatal(self, config):
        engine = SnakeEngine(config, ReadOnlyFileSystemStore(), seed=2)
        assert engine.state.high_score == 0
        engine.start(0)
        clear_path(engine)

        state = run_into_wall(engine)

        assert state.game_over
        assert state.termination_reason == "wall"
        assert not engine.driver.is_running

    def test_driver_runs_game_to_completion(self, config):
        """Pumping update drives the game until the wall."""
        engine = SnakeEngine(config, MemoryStore(), seed=2)
        engine.start(0)
        clear_path(engine)

        now = 0
        while engine.state.is_playing and now < 10_000:
            now += 10
            engine.update(now)

        assert engine.state.game_over
        # Ten moves to y=0, the eleventh hits the wall
        assert engine.state.ticks == 11
        assert now == 11 * 150


class TestInput:
    """Test input latch handling through the engine."""

    def test_input_ignored_when_not_playing(self, config):
        engine = SnakeEngine(config)

        assert not engine.submit_direction(Direction.LEFT)
        assert not engine.handle_key("a")
        assert engine.latch.pending is Direction.UP

    def test_latest_input_wins(self, config):
        engine = SnakeEngine(config, seed=1)
        engine.start(0)
        clear_path(engine)

        engine.submit_direction(Direction.LEFT)
        engine.submit_direction(Direction.RIGHT)
        state = engine.tick()

        assert state.head == (11, 10)
        assert state.direction is Direction.RIGHT

    def test_latch_is_read_not_cleared(self, config):
        """The same pending direction applies on later ticks."""
        engine = SnakeEngine(config, seed=1)
        engine.start(0)
        clear_path(engine)

        engine.submit_direction(Direction.LEFT)
        engine.tick()
        state = engine.tick()

        assert state.head == (8, 10)
        assert engine.latch.pending is Direction.LEFT

    def test_reverse_input_filtered_at_tick(self, config):
        engine = SnakeEngine(config, seed=1)
        engine.start(0)
        clear_path(engine)

        engine.submit_direction(Direction.DOWN)
        state = engine.tick()

        assert state.head == (10, 9)
        assert state.direction is Direction.UP

    @pytest.mark.parametrize("key,expected", [
        ("w", Direction.UP),
        ("ArrowLeft", Direction.LEFT),
        ("S", Direction.DOWN),
        ("arrowright", Direction.RIGHT),
    ])
    def test_handle_key(self, config, key, expected):
        engine = SnakeEngine(config, seed=1)
        engine.start(0)

        assert engine.handle_key(key)
        assert engine.latch.pending is expected

    def test_unknown_key_ignored(self, config):
        engine = SnakeEngine(config, seed=1)
        engine.start(0)

        assert not engine.handle_key("x")
        assert engine.latch.pending is Direction.UP


class TestRenderData:
    """Test render data projection."""

    def test_render_data_fields(self, config):
        engine = SnakeEngine(config, MemoryStore({KEY: "9"}), seed=3)
        engine.start(0)
        data = engine.get_render_data()

        assert data["grid_size"] == 20
        assert data["snake"] == [(10, 10), (10, 11), (10, 12)]
        assert data["head"] == (10, 10)
        assert data["high_score"] == 9
        assert data["is_playing"] is True
        assert data["speed_ms"] == 150
        assert data["food"]["type"] in {t.value for t in FoodType}
        assert len(data["food"]["color"]) == 3

    def test_render_data_effects(self, config):
        engine = SnakeEngine(config, seed=3)
        engine.start(0)
        engine.load_state(replace(engine.state, effects=(ActiveEffect(FoodType.SPEED, 25),)))
        data = engine.get_render_data()

        assert data["speed_ms"] == 80
        assert data["effects"] == [{
            "type": "SPEED",
            "label": "Speed Boost",
            "color": (34, 211, 238),
            "remaining_ticks": 25,
            "progress": 0.25,
        }]

    def test_catalog_follows_engine_config(self, config):
        """Each engine labels food from its own config."""
        kinds = tuple(
            replace(kind, label="Turbo") if kind.type is FoodType.SPEED else kind
            for kind in config.food.kinds
        )
        custom = replace(config, food=replace(config.food, kinds=kinds))
        custom_engine = SnakeEngine(custom, seed=3)
        default_engine = SnakeEngine(config, seed=3)
        effects = (ActiveEffect(FoodType.SPEED, 50),)
        for engine in (custom_engine, default_engine):
            engine.start(0)
            engine.load_state(replace(engine.state, effects=effects))

        assert custom_engine.get_render_data()["effects"][0]["label"] == "Turbo"
        assert default_engine.get_render_data()["effects"][0]["label"] == "Speed Boost"
