"""
Tests for the one-tick step function.
"""

import random
from dataclasses import replace

import pytest

from snake_arcade.snake_core.config_loader import load_config
from snake_arcade.snake_core.effects import ActiveEffect
from snake_arcade.snake_core.game import GameStepper, step
from snake_arcade.snake_core.grid import Direction, Food, FoodType
from snake_arcade.snake_core.rng import FoodGenerator
from snake_arcade.snake_core.state import GameState, initial_state, new_game


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def stepper(config):
    return GameStepper(config)


def playing(snake, direction, food, effects=(), score=0, high_score=0):
    return GameState(
        snake=tuple(snake),
        direction=direction,
        food=food,
        effects=tuple(effects),
        score=score,
        is_playing=True,
        high_score=high_score,
    )


def scripted(*foods):
    """Food source returning the given foods in order."""
    queue = list(foods)

    def generate(snake):
        return queue.pop(0)
    return generate


def no_food(snake):
    raise AssertionError("food should not be generated")


class TestMovement:
    """Test plain movement and direction handling."""

    def test_moves_one_cell_without_growing(self, stepper):
        """Moving up shifts every segment and keeps the length."""
        state = playing([(10, 10), (10, 11), (10, 12)], Direction.UP, Food((5, 5)))

        after = stepper.step(state, Direction.UP, no_food)

        assert after.snake == ((10, 9), (10, 10), (10, 11))
        assert after.length == 3
        assert after.direction is Direction.UP
        assert after.score == 0
        assert after.ticks == 1

    def test_reverse_direction_is_ignored(self, stepper):
        """A pending reverse turn keeps the current heading."""
        state = playing([(10, 10), (9, 10), (8, 10)], Direction.RIGHT, Food((0, 0)))

        after = stepper.step(state, Direction.LEFT, no_food)

        assert after.head == (11, 10)
        assert after.direction is Direction.RIGHT

    def test_perpendicular_turn_is_applied(self, stepper):
        """A pending quarter turn becomes the new direction."""
        state = playing([(10, 10), (9, 10), (8, 10)], Direction.RIGHT, Food((0, 0)))

        after = stepper.step(state, Direction.DOWN, no_food)

        assert after.head == (10, 11)
        assert after.direction is Direction.DOWN

    def test_no_pending_direction_keeps_heading(self, stepper):
        state = playing([(10, 10), (10, 11)], Direction.UP, Food((0, 0)))
        assert stepper.step(state, None, no_food).head == (10, 9)

    def test_not_running_state_is_unchanged(self, stepper, config):
        """Steps before start and after game over are no-ops."""
        idle = initial_state(config)
        assert stepper.step(idle, Direction.LEFT, no_food) is idle

        over = replace(playing([(1, 1)], Direction.UP, Food((0, 0))), game_over=True, is_playing=False)
        assert stepper.step(over, Direction.UP, no_food) is over

    def test_functional_step_matches_stepper(self, config):
        state = playing([(10, 10), (10, 11), (10, 12)], Direction.UP, Food((5, 5)))
        assert step(state, Direction.LEFT, no_food, config).head == (9, 10)


class TestEating:
    """Test food consumption, scoring and effects."""

    def test_normal_food_scores_and_grows(self, stepper, config):
        """Normal food: +10, tail kept, new food off the snake."""
        state = playing([(10, 10), (10, 11), (10, 12)], Direction.UP, Food((10, 9)))
        generator = FoodGenerator(config, seed=7)

        after = stepper.step(state, Direction.UP, generator.generate)

        assert after.score == 10
        assert after.snake == ((10, 9), (10, 10), (10, 11), (10, 12))
        assert after.food.position not in after.snake
        assert after.effects == ()

    def test_double_score_food_applies_from_next_food(self, stepper):
        """The food granting double score is itself worth the base rate."""
        state = playing([(10, 10), (10, 11), (10, 12)], Direction.UP,
                        Food((10, 9), FoodType.DOUBLE_SCORE))
        foods = scripted(Food((10, 8), FoodType.NORMAL), Food((0, 0), FoodType.NORMAL))

        first = stepper.step(state, Direction.UP, foods)
        assert first.score == 10
        assert first.effects == (ActiveEffect(FoodType.DOUBLE_SCORE, 100),)

        second = stepper.step(first, Direction.UP, foods)
        assert second.score == 30
        assert second.effects == (ActiveEffect(FoodType.DOUBLE_SCORE, 99),)

    def test_effect_expiring_this_tick_does_not_double(self, stepper):
        """Effects tick down before the double score check."""
        state = playing([(10, 10), (10, 11)], Direction.UP, Food((10, 9)),
                        effects=[ActiveEffect(FoodType.DOUBLE_SCORE, 1)])

        after = stepper.step(state, Direction.UP, scripted(Food((0, 0))))

        assert after.score == 10
        assert after.effects == ()

    def test_effect_with_ticks_left_doubles(self, stepper):
        state = playing([(10, 10), (10, 11)], Direction.UP, Food((10, 9)),
                        effects=[ActiveEffect(FoodType.DOUBLE_SCORE, 2)])

        after = stepper.step(state, Direction.UP, scripted(Food((0, 0))))

        assert after.score == 20
        assert after.effects == (ActiveEffect(FoodType.DOUBLE_SCORE, 1),)

    def test_reacquiring_refreshes_instead_of_stacking(self, stepper):
        """Eating a speed food while sped up resets the duration."""
        state = playing([(10, 10), (10, 11)], Direction.UP, Food((10, 9), FoodType.SPEED),
                        effects=[ActiveEffect(FoodType.SPEED, 5),
                                 ActiveEffect(FoodType.DOUBLE_SCORE, 40)])

        after = stepper.step(state, Direction.UP, scripted(Food((0, 0))))

        assert after.effects == (
            ActiveEffect(FoodType.DOUBLE_SCORE, 39),
            ActiveEffect(FoodType.SPEED, 100),
        )

    def test_effects_tick_down_without_food(self, stepper):
        state = playing([(10, 10), (10, 11)], Direction.UP, Food((0, 0)),
                        effects=[ActiveEffect(FoodType.SPEED, 1),
                                 ActiveEffect(FoodType.DOUBLE_SCORE, 3)])

        after = stepper.step(state, Direction.UP, no_food)

        assert after.effects == (ActiveEffect(FoodType.DOUBLE_SCORE, 2),)
        assert not after.is_speed_active


class TestTermination:
    """Test collisions and the board-full win."""

    def test_wall_collision_ends_game(self, stepper):
        """Moving to y=-1 ends the game and commits the high score."""
        state = playing([(3, 0), (3, 1), (3, 2)], Direction.UP, Food((9, 9)),
                        score=50, high_score=40)

        after = stepper.step(state, Direction.UP, no_food)

        assert after.game_over
        assert not after.is_playing
        assert after.high_score == 50
        assert after.termination_reason == "wall"
        assert after.snake == state.snake

    def test_wall_collision_keeps_higher_high_score(self, stepper):
        state = playing([(19, 4), (18, 4)], Direction.RIGHT, Food((0, 0)),
                        score=30, high_score=70)

        after = stepper.step(state, Direction.RIGHT, no_food)

        assert after.game_over
        assert after.high_score == 70

    def test_self_collision_ends_game(self, stepper):
        """Turning into the body ends the game."""
        snake = [(5, 5), (5, 6), (4, 6), (4, 5), (3, 5)]
        state = playing(snake, Direction.UP, Food((0, 0)), score=20)

        after = stepper.step(state, Direction.LEFT, no_food)

        assert after.game_over
        assert after.termination_reason == "self"
        assert after.high_score == 20

    def test_moving_into_tail_is_a_collision(self, stepper):
        """The tail cell counts as occupied even though it would move away."""
        snake = [(5, 5), (5, 6), (4, 6), (4, 5)]
        state = playing(snake, Direction.UP, Food((0, 0)))

        after = stepper.step(state, Direction.LEFT, no_food)

        assert after.game_over
        assert after.termination_reason == "self"

    def test_filling_the_board_is_a_win(self, config):
        """No free cell after growing ends the game as a win."""
        small = replace(config, board=replace(
            config.board, grid_size=2, initial_snake=((0, 0), (0, 1)), initial_food=(1, 1)
        ))
        stepper = GameStepper(small)
        state = playing([(1, 1), (0, 1), (0, 0)], Direction.RIGHT, Food((1, 0)), high_score=5)

        after = stepper.step(state, Direction.UP, no_food)

        assert after.game_over
        assert after.won
        assert after.termination_reason == "board_full"
        assert after.length == 4
        assert after.score == 10
        assert after.high_score == 10

    def test_generator_reporting_full_board_is_a_win(self, stepper):
        state = playing([(10, 10), (10, 11)], Direction.UP, Food((10, 9)))

        after = stepper.step(state, Direction.UP, lambda snake: None)

        assert after.won
        assert after.game_over


class TestInvariants:
    """Randomized play keeps the state invariants."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_random_play_keeps_invariants(self, config, stepper, seed):
        rng = random.Random(seed)
        generator = FoodGenerator(config, seed=seed)
        state = initial_state(config)
        high_scores = [state.high_score]

        for _ in range(2000):
            if not state.is_running:
                state = new_game(state, generator.generate(config.board.initial_snake), config)
            state = stepper.step(state, rng.choice(list(Direction)), generator.generate)

            if not state.game_over:
                assert len(set(state.snake)) == len(state.snake)
                assert state.food.position not in state.snake
            types = [e.type for e in state.effects]
            assert len(types) == len(set(types))
            assert all(e.remaining_ticks > 0 for e in state.effects)
            high_scores.append(state.high_score)

        assert high_scores == sorted(high_scores)
