"""Directional input filtering."""

from __future__ import annotations

import logging
from typing import Union

from .enums import Direction
from .state import GameState

logger = logging.getLogger(__name__)

KEY_TO_DIRECTION: dict[str, Direction] = {
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

Intent = Union[Direction, str]


def parse_intent(intent: Intent) -> Direction | None:
    """Map a raw key name or direction to a Direction, or None if unknown."""
    if isinstance(intent, Direction):
        return intent
    if not isinstance(intent, str):
        return None
    return KEY_TO_DIRECTION.get(intent.strip().lower())


class InputRouter:
    """Turns directional intents into the buffered next direction.

    A turn is checked against the active direction, not the buffered one,
    so a 180 degree reversal can never be queued no matter how many intents
    arrive between two ticks. The last accepted intent wins.
    """

    def __init__(self, state: GameState):
        self.state = state

    def set_next_direction(self, direction: Direction) -> bool:
        """Buffer ``direction`` unless it reverses the active direction.

        Returns:
            True if the buffered direction was written
        """
        if direction is self.state.direction.opposite:
            logger.debug(
                "Rejected reversal %s while moving %s",
                direction.value,
                self.state.direction.value,
            )
            return False
        self.state.set_next_direction(direction)
        return True

    def handle_key(self, key: Intent) -> bool:
        """Route a raw key press; keys that are not directions are ignored."""
        direction = parse_intent(key)
        if direction is None:
            return False
        return self.set_next_direction(direction)
