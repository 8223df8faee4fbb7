"""
Game Rules
==========

Handles direction changes and termination conditions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from snake_arcade.snake_core.config_loader import GameConfig, get_config
from snake_arcade.snake_core.grid import Direction, Position, in_bounds

REASON_WALL = "wall"
REASON_SELF = "self"
REASON_BOARD_FULL = "board_full"


@dataclass(frozen=True)
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    won: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, False, reason)

    @staticmethod
    def victory(reason: str) -> "TerminationResult":
        return TerminationResult(True, True, reason)


class DirectionRules:
    """
    Resolves the direction applied on a tick.

    A pending direction that reverses the current one would turn the head
    into the neck, so it is ignored and the snake keeps going straight.
    """

    @staticmethod
    def resolve(current: Direction, pending: Optional[Direction]) -> Direction:
        if pending is None or pending.is_reverse_of(current):
            return current
        return pending


class TerminationRules:
    """
    Handles game termination conditions.

    - Wall: head leaves the board
    - Self: head enters any current body segment (tail included)
    - Board full: no free cell left for food after growing
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize termination rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._grid_size = config.board.grid_size

    @property
    def grid_size(self) -> int:
        return self._grid_size

    def check_move(self, new_head: Position, snake: Sequence[Position]) -> TerminationResult:
        """
        Check a head move against the snake before it moves.

        Args:
            new_head: Candidate head position.
            snake: Body before the move, head first.

        Returns:
            TerminationResult indicating game state.
        """
        if not in_bounds(new_head, self._grid_size):
            return TerminationResult.game_over(REASON_WALL)

        if new_head in snake:
            return TerminationResult.game_over(REASON_SELF)

        return TerminationResult.none()

    def check_board_full(self, snake: Sequence[Position]) -> TerminationResult:
        """Snake covering every cell ends the game as a win."""
        if len(snake) >= self._grid_size * self._grid_size:
            return TerminationResult.victory(REASON_BOARD_FULL)
        return TerminationResult.none()


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize game rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self.direction = DirectionRules()
        self.termination = TerminationRules(config)
