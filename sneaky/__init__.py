"""Sneaky - snake game core."""

from sneaky.config import GameConfig, load_config
from sneaky.driver import TickDriver
from sneaky.engine import TickEngine, TickOutcome
from sneaky.enums import Direction, Phase
from sneaky.input import InputRouter
from sneaky.state import GameSnapshot, GameState

__all__ = [
    "Direction",
    "GameConfig",
    "GameSnapshot",
    "GameState",
    "InputRouter",
    "Phase",
    "TickDriver",
    "TickEngine",
    "TickOutcome",
    "load_config",
]
