import pytest

from sneaky import Direction, InputRouter

from conftest import arrange


@pytest.fixture
def router(running):
    return InputRouter(running)


def test_reversal_is_rejected(router, running):
    arrange(running, direction=Direction.UP)

    assert not router.set_next_direction(Direction.DOWN)
    assert running.next_direction is Direction.UP


@pytest.mark.parametrize("turn", [Direction.LEFT, Direction.RIGHT])
def test_perpendicular_turn_is_buffered(router, running, turn):
    arrange(running, direction=Direction.UP)

    assert router.set_next_direction(turn)
    assert running.next_direction is turn
    assert running.direction is Direction.UP


@pytest.mark.parametrize(
    "current, prevented",
    [
        (Direction.UP, Direction.DOWN),
        (Direction.DOWN, Direction.UP),
        (Direction.LEFT, Direction.RIGHT),
        (Direction.RIGHT, Direction.LEFT),
    ],
)
def test_all_reversals_rejected(router, running, current, prevented):
    arrange(running, direction=current)
    assert not router.set_next_direction(prevented)
    assert running.next_direction is current


def test_same_direction_is_accepted(router, running):
    assert router.set_next_direction(Direction.RIGHT)
    assert running.next_direction is Direction.RIGHT


def test_reversal_checked_against_active_direction(router, running):
    # Moving RIGHT with UP buffered: DOWN is still legal, LEFT never is
    assert router.set_next_direction(Direction.UP)
    assert router.set_next_direction(Direction.DOWN)
    assert running.next_direction is Direction.DOWN
    assert not router.set_next_direction(Direction.LEFT)
    assert running.next_direction is Direction.DOWN


def test_last_accepted_intent_wins(router, running):
    router.handle_key("ArrowUp")
    router.handle_key("ArrowDown")
    running.tick()
    assert running.direction is Direction.DOWN
    assert running.snake[0] == 22


def test_arrow_keys_when_moving_right(router, running):
    accepted = [
        key for key in ["ArrowUp", "ArrowDown", "ArrowLeft", "ArrowRight"]
        if router.handle_key(key)
    ]
    assert accepted == ["ArrowUp", "ArrowDown", "ArrowRight"]


@pytest.mark.parametrize(
    "key, expected",
    [
        ("ArrowUp", Direction.UP),
        ("w", Direction.UP),
        ("S", Direction.DOWN),
        ("down", Direction.DOWN),
        ("UP", Direction.UP),
        (Direction.DOWN, Direction.DOWN),
    ],
)
def test_key_mapping(router, running, key, expected):
    assert router.handle_key(key)
    assert running.next_direction is expected


@pytest.mark.parametrize("key", ["Space", "Enter", "", "q", 42, None])
def test_non_directional_keys_ignored(router, running, key):
    assert not router.handle_key(key)
    assert running.next_direction is Direction.RIGHT
