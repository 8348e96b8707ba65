"""Game configuration loaded from YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, field_validator, model_validator

CONFIG_ENV_VAR = "SNEAKY_CONFIG"


class GameConfig(BaseModel):
    """Numeric policy for a game session.

    The board is always square; sizes are expressed as cells per side.
    """

    board_size: int = 20
    min_board_size: int = Field(default=10, ge=3)
    max_board_size: int = 30
    initial_snake: list[int] = Field(default_factory=lambda: [2, 1, 0])
    initial_food: int = Field(default=50, ge=0)
    food_reward: int = Field(default=3, ge=1)
    win_threshold: int = Field(default=30, ge=1)
    tick_interval_ms: int = Field(default=150, ge=10, le=5000)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_ranges(self) -> GameConfig:
        if self.min_board_size > self.max_board_size:
            raise ValueError("min_board_size must not exceed max_board_size")
        if not self.min_board_size <= self.board_size <= self.max_board_size:
            raise ValueError(
                f"board_size {self.board_size} outside "
                f"[{self.min_board_size}, {self.max_board_size}]"
            )
        snake = self.initial_snake
        if not snake:
            raise ValueError("initial_snake must not be empty")
        if len(set(snake)) != len(snake):
            raise ValueError("initial_snake must not contain duplicates")
        # The starting snake has to fit in the first row of the smallest board,
        # otherwise it would not be contiguous after a board size change.
        if min(snake) < 0 or max(snake) >= self.min_board_size:
            raise ValueError("initial_snake must lie in row 0 of the smallest board")
        for a, b in zip(snake, snake[1:]):
            if abs(a - b) != 1:
                raise ValueError("initial_snake segments must be adjacent")
        return self


def load_config(path: str | Path | None = None) -> GameConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to a YAML file. When omitted, the ``SNEAKY_CONFIG``
            environment variable is consulted; if that is unset too the
            defaults are returned.

    Returns:
        Validated GameConfig

    Raises:
        FileNotFoundError: If an explicit path does not exist
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return GameConfig()

    with open(path) as f:
        data: dict[str, Any] | None = yaml.safe_load(f)
    return GameConfig(**(data or {}))
