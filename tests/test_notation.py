import pytest

from tinue.core.types import Direction, Move, Role, move_from_ptn, square_to_str, str_to_square
from tinue.errors import InvalidMoveError
from tinue.protocols.playtak import move_to_server, parse_move, parse_server_notation


@pytest.mark.parametrize(
    "name,size,index",
    [("a1", 5, 0), ("b1", 5, 1), ("a2", 5, 5), ("e5", 5, 24), ("h8", 8, 63), ("c3", 3, 8)],
)
def test_squares(name: str, size: int, index: int) -> None:
    assert str_to_square(name, size) == index
    assert square_to_str(index, size) == name


@pytest.mark.parametrize("name,size", [("f1", 5), ("a0", 5), ("a", 5), ("a10", 8)])
def test_bad_squares(name: str, size: int) -> None:
    with pytest.raises(InvalidMoveError):
        str_to_square(name, size)


def test_ptn_spread() -> None:
    move = move_from_ptn("2c5>11", 5)
    assert move == Move.spread(str_to_square("c5", 5), Direction.EAST, (1, 1))
    assert move.pieces_taken == 2
    assert move.ptn(5) == "2c5>11"


@pytest.mark.parametrize(
    "text,size",
    [("a1", 5), ("Sb2", 5), ("Cc3", 5), ("c4+", 5), ("5e4+", 5), ("d1<", 5), ("3e6-111", 6), ("2f4-11", 6)],
)
def test_ptn_canonical_form(text: str, size: int) -> None:
    assert move_from_ptn(text, size).ptn(size) == text


@pytest.mark.parametrize(
    "text,canonical",
    [("1c4+1", "c4+"), ("Fa1", "a1"), ("2b3-2", "2b3-"), ("c3<'", "c3<"), ("Sd4!", "Sd4"), ("a5*", "a5")],
)
def test_ptn_normalised(text: str, canonical: str) -> None:
    assert move_from_ptn(text, 5).ptn(5) == canonical


@pytest.mark.parametrize("text", ["", "x1", "2a1", "Sa1+", "3a1>11", "6a1+", "a6", "a1^"])
def test_ptn_rejected(text: str) -> None:
    with pytest.raises(InvalidMoveError):
        move_from_ptn(text, 5)


@pytest.mark.parametrize(
    "text,move",
    [
        ("P A1", Move.place(Role.FLAT, 0)),
        ("P C3 W", Move.place(Role.WALL, 12)),
        ("P E5 C", Move.place(Role.CAP, 24)),
        ("M A1 A3 2 1", Move.spread(0, Direction.NORTH, (2, 1))),
        ("M E4 C4 1 1", Move.spread(19, Direction.WEST, (1, 1))),
        ("M B2 B1 3", Move.spread(6, Direction.SOUTH, (3,))),
        ("M A5 E5 1 1 1 1", Move.spread(20, Direction.EAST, (1, 1, 1, 1))),
    ],
)
def test_server_moves(text: str, move: Move) -> None:
    assert parse_move(text, 5) == move
    assert move_to_server(move, 5) == text


@pytest.mark.parametrize(
    "text",
    ["", "P", "P A1 Q", "P A1 W C", "M A1 B2 1", "M A1 A3 1", "M A1 A1 1", "M A1 A2 x", "M A1 A2 0", "M A1", "X A1"],
)
def test_server_moves_rejected(text: str) -> None:
    with pytest.raises(InvalidMoveError):
        parse_move(text, 5)


def test_server_notation_list() -> None:
    moves = parse_server_notation("P A1,P E5,M E5 E4 1,", 5)
    assert moves == [
        Move.place(Role.FLAT, 0),
        Move.place(Role.FLAT, 24),
        Move.spread(24, Direction.SOUTH, (1,)),
    ]
    assert parse_server_notation("", 5) == []
