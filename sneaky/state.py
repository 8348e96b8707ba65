from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any

from .config import GameConfig
from .engine import TickEngine, TickOutcome
from .enums import Direction, Phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of the game state handed to renderers."""

    player_name: str
    board_size: int
    snake: tuple[int, ...]  # Cell indices, head first
    food: int
    direction: Direction
    next_direction: Direction
    score: int
    games_played: int
    phase: Phase

    def to_dict(self) -> dict[str, Any]:
        """Convert the snapshot to a dictionary for JSON serialization."""
        return {
            "player_name": self.player_name,
            "board_size": self.board_size,
            "snake": list(self.snake),
            "food": self.food,
            "direction": self.direction.value,
            "next_direction": self.next_direction.value,
            "score": self.score,
            "games_played": self.games_played,
            "phase": self.phase.value,
        }


class GameState:
    """Authoritative state of one game session.

    All mutation goes through the command methods below. Simulation fields
    (snake, food, direction, score, phase) are only rewritten by tick() and
    the lifecycle commands; input code may only touch the buffered
    direction.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        engine: TickEngine | None = None,
        rng: random.Random | None = None,
    ):
        """Create a session in the IDLE phase with default values.

        Args:
            config: Numeric policy; defaults to GameConfig()
            engine: Tick engine; built from config when omitted
            rng: Random source shared with the engine for food placement
        """
        self.config = config or GameConfig()
        self.engine = engine or TickEngine(
            reward=self.config.food_reward,
            win_threshold=self.config.win_threshold,
            rng=rng,
        )
        self._player_name = ""
        self._board_size = self.config.board_size
        self._score = 0
        self._games_played = 0
        self._phase = Phase.IDLE
        self._restore_layout()

    # --- read access -----------------------------------------------------

    @property
    def player_name(self) -> str:
        return self._player_name

    @property
    def board_size(self) -> int:
        return self._board_size

    @property
    def snake(self) -> tuple[int, ...]:
        return self._snake

    @property
    def food(self) -> int:
        return self._food

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def next_direction(self) -> Direction:
        return self._next_direction

    @property
    def score(self) -> int:
        return self._score

    @property
    def games_played(self) -> int:
        return self._games_played

    @property
    def phase(self) -> Phase:
        return self._phase

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            player_name=self._player_name,
            board_size=self._board_size,
            snake=self._snake,
            food=self._food,
            direction=self._direction,
            next_direction=self._next_direction,
            score=self._score,
            games_played=self._games_played,
            phase=self._phase,
        )

    # --- commands ----------------------------------------------------------

    def set_player_name(self, name: str) -> None:
        if self._phase is not Phase.IDLE:
            logger.debug("Ignoring player name change in phase %s", self._phase.value)
            return
        self._player_name = name

    def set_board_size(self, size: int) -> None:
        """Change the board size before a round starts.

        Sizes outside the configured range are ignored. The food cell is
        moved back onto the board if the new size no longer contains it.
        """
        if self._phase is not Phase.IDLE:
            logger.debug("Ignoring board size change in phase %s", self._phase.value)
            return
        if not self.config.min_board_size <= size <= self.config.max_board_size:
            logger.debug("Ignoring out of range board size %d", size)
            return
        self._board_size = size
        self._food = self._place_initial_food(self._food)

    def set_next_direction(self, direction: Direction) -> None:
        """Overwrite the buffered direction. Legality is checked by InputRouter."""
        self._next_direction = direction

    def start(self) -> None:
        if self._phase is not Phase.IDLE:
            logger.debug("Ignoring start in phase %s", self._phase.value)
            return
        self._phase = Phase.RUNNING
        logger.info(
            "Round started for %r on a %dx%d board",
            self._player_name,
            self._board_size,
            self._board_size,
        )

    def tick(self) -> TickOutcome | None:
        """Advance the simulation by one step.

        Returns:
            The applied TickOutcome, or None when the round is not running
        """
        if self._phase is not Phase.RUNNING:
            return None

        outcome = self.engine.step(self)
        self._direction = outcome.direction
        self._snake = outcome.snake
        self._food = outcome.food
        self._score = outcome.score
        self._phase = outcome.phase

        if self._phase.is_over:
            logger.info(
                "Round over for %r: %s with score %d",
                self._player_name,
                self._phase.value,
                self._score,
            )
        return outcome

    def reset(self) -> None:
        """Start a fresh round keeping the player and board size."""
        self._snake = tuple(self.config.initial_snake)
        self._direction = Direction.RIGHT
        self._next_direction = Direction.RIGHT
        self._score = 0
        self._food = self.engine.spawn_food(self._snake, self._board_size)
        self._phase = Phase.RUNNING
        self._games_played += 1
        logger.info("Round reset, games played %d", self._games_played)

    def quit(self) -> None:
        """Leave the session and return to the landing state."""
        self._phase = Phase.IDLE
        self._player_name = ""
        self._score = 0
        self._board_size = self.config.board_size
        self._restore_layout()

    # --- helpers -----------------------------------------------------------

    def _restore_layout(self) -> None:
        self._snake = tuple(self.config.initial_snake)
        self._direction = Direction.RIGHT
        self._next_direction = Direction.RIGHT
        self._food = self._place_initial_food(self.config.initial_food)

    def _place_initial_food(self, cell: int) -> int:
        """Bring ``cell`` onto the board and off the snake deterministically."""
        cells = self._board_size * self._board_size
        cell %= cells
        occupied = set(self._snake)
        while cell in occupied:
            cell = (cell + 1) % cells
        return cell
