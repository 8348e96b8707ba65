"""Shared enumerations for the game core."""

from __future__ import annotations

import enum


class Direction(str, enum.Enum):
    """Movement direction of the snake head."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def offset(self, board_size: int) -> int:
        """Flat-index delta of one step on a board with ``board_size`` columns."""
        if self is Direction.UP:
            return -board_size
        if self is Direction.DOWN:
            return board_size
        if self is Direction.LEFT:
            return -1
        return 1


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Phase(str, enum.Enum):
    """Lifecycle of a round."""

    IDLE = "IDLE"
    RUNNING = "RUNNING"
    WON = "WON"
    LOST = "LOST"

    @property
    def is_over(self) -> bool:
        return self in (Phase.WON, Phase.LOST)
