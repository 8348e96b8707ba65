from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .enums import Direction, Phase

if TYPE_CHECKING:
    from .state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickOutcome:
    """Result of advancing the board by one tick."""

    snake: tuple[int, ...]
    food: int
    direction: Direction
    score: int
    phase: Phase
    ate: bool = False
    collided: bool = False


class TickEngine:
    """Computes one discrete simulation step for a GameState.

    The engine never mutates the state itself; GameState.tick() applies the
    returned TickOutcome in one go.
    """

    def __init__(
        self,
        reward: int = 3,
        win_threshold: int = 30,
        rng: random.Random | None = None,
    ):
        """Initialize the engine.

        Args:
            reward: Points added to the score per food eaten
            win_threshold: Score at which the round is won
            rng: Random source for food placement
        """
        self.reward = reward
        self.win_threshold = win_threshold
        self.rng = rng or random.Random()

    def step(self, state: GameState) -> TickOutcome:
        """Advance ``state`` by one tick and return the outcome.

        Args:
            state: Current game state; only read, never written

        Returns:
            TickOutcome describing the next state
        """
        direction = state.next_direction
        size = state.board_size
        snake = state.snake
        head = snake[0]
        new_head = head + direction.offset(size)

        if self.hits_wall(head, new_head, direction, size) or new_head in snake:
            logger.debug(
                "Collision at cell %d moving %s, score %d", new_head, direction.value, state.score
            )
            return TickOutcome(
                snake=snake,
                food=state.food,
                direction=direction,
                score=state.score,
                phase=Phase.LOST,
                collided=True,
            )

        if new_head != state.food:
            # Constant length: new head in, tail out
            return TickOutcome(
                snake=(new_head,) + snake[:-1],
                food=state.food,
                direction=direction,
                score=state.score,
                phase=Phase.RUNNING,
            )

        grown = (new_head,) + snake
        score = state.score + self.reward
        food = state.food
        if score >= self.win_threshold:
            phase = Phase.WON
            logger.info("Win threshold reached with score %d", score)
        elif len(grown) >= size * size:
            # No free cell left to place food on
            phase = Phase.WON
            logger.info("Board filled with score %d", score)
        else:
            phase = Phase.RUNNING
            food = self.spawn_food(grown, size)

        return TickOutcome(
            snake=grown,
            food=food,
            direction=direction,
            score=score,
            phase=phase,
            ate=True,
        )

    @staticmethod
    def hits_wall(head: int, new_head: int, direction: Direction, size: int) -> bool:
        """Check whether moving from ``head`` to ``new_head`` leaves the board.

        Flat indices wrap silently across row edges, so horizontal moves are
        checked against the column of the current head.
        """
        if new_head < 0 or new_head >= size * size:
            return True
        if direction is Direction.LEFT and head % size == 0:
            return True
        if direction is Direction.RIGHT and head % size == size - 1:
            return True
        return False

    def spawn_food(self, snake: tuple[int, ...] | list[int], size: int) -> int:
        """Sample cells uniformly until one is not occupied by the snake."""
        occupied = set(snake)
        while True:
            cell = self.rng.randrange(size * size)
            if cell not in occupied:
                return cell
