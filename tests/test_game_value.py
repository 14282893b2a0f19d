import pytest

from tinue.search.value import MAX_VALUE, MIN_VALUE, UNKNOWN, GameValue

win = GameValue.win_in
loss = GameValue.loss_in


def test_node_values_sorting() -> None:
    values = [loss(9), UNKNOWN, win(2), win(4), loss(3)]
    values.sort()
    assert values == [loss(3), loss(9), UNKNOWN, win(4), win(2)]


def test_total_order_chain() -> None:
    assert win(2) > win(4) > UNKNOWN > loss(4) > loss(2)
    assert MAX_VALUE == win(0)
    assert MIN_VALUE == loss(0)
    assert max(win(7), win(1)) == win(1)
    assert min(loss(7), loss(1)) == loss(1)


@pytest.mark.parametrize(
    "value,up,down",
    [
        (win(3), loss(4), loss(2)),
        (loss(3), win(4), win(2)),
        (UNKNOWN, UNKNOWN, UNKNOWN),
        (win(0), loss(1), loss(0)),
        (loss(0), win(1), win(0)),
    ],
)
def test_propagation(value: GameValue, up: GameValue, down: GameValue) -> None:
    assert value.propagate_up() == up
    assert value.propagate_down() == down


def test_propagate_down_saturates_at_zero() -> None:
    # Not a round trip at zero: the ply count cannot go negative.
    assert win(0).propagate_down().propagate_up() == win(1)
    assert win(0).propagate_down().propagate_up() != win(0)
    assert win(5).propagate_down().propagate_up() == win(5)


def test_repr_and_flags() -> None:
    assert repr(win(3)) == "WinInPly(3)"
    assert repr(loss(1)) == "LossInPly(1)"
    assert repr(UNKNOWN) == "Unknown"
    assert win(1).is_win and not win(1).is_loss
    assert loss(1).is_loss and not UNKNOWN.is_loss
