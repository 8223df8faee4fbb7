"""
Input Latch
===========

Single-slot mailbox between asynchronous input and the tick loop.
"""

from __future__ import annotations

from typing import Dict, Optional

from snake_arcade.snake_core.grid import Direction

# Key names as reported by keyboards and the on-screen WASD pad
KEY_BINDINGS: Dict[str, Direction] = {
    "w": Direction.UP,
    "arrowup": Direction.UP,
    "up": Direction.UP,
    "s": Direction.DOWN,
    "arrowdown": Direction.DOWN,
    "down": Direction.DOWN,
    "a": Direction.LEFT,
    "arrowleft": Direction.LEFT,
    "left": Direction.LEFT,
    "d": Direction.RIGHT,
    "arrowright": Direction.RIGHT,
    "right": Direction.RIGHT,
}


def direction_for_key(key: str) -> Optional[Direction]:
    """Map a key name (case-insensitive) to a direction, or None."""
    return KEY_BINDINGS.get(key.lower())


class InputLatch:
    """
    Holds the most recent requested direction.

    Every push overwrites the slot, so several key presses between two
    ticks collapse to the last one. Reading does not clear the slot.
    Reverse turns are not filtered here; the step function drops them
    against the direction actually in effect on that tick.
    """

    def __init__(self, initial: Direction = Direction.UP):
        self._pending = initial

    @property
    def pending(self) -> Direction:
        return self._pending

    def push(self, direction: Direction) -> None:
        self._pending = direction

    def read(self) -> Direction:
        """Read the pending direction for this tick."""
        return self._pending

    def reset(self, direction: Direction) -> None:
        self._pending = direction
