import random

import pytest

from sneaky import Direction, GameConfig, GameState, Phase


def arrange(
    state: GameState,
    snake=None,
    food=None,
    direction=None,
    score=None,
    board_size=None,
    phase=Phase.RUNNING,
) -> GameState:
    """Put a state into a specific position for a test."""
    if board_size is not None:
        state._board_size = board_size
    if snake is not None:
        state._snake = tuple(snake)
    if food is not None:
        state._food = food
    if direction is not None:
        state._direction = direction
        state._next_direction = direction
    if score is not None:
        state._score = score
    state._phase = phase
    return state


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def state(config) -> GameState:
    return GameState(config, rng=random.Random(1234))


@pytest.fixture
def running(state) -> GameState:
    """Default board in the RUNNING phase, snake [2, 1, 0] heading right."""
    state.set_player_name("tester")
    state.start()
    assert state.direction is Direction.RIGHT
    return state
