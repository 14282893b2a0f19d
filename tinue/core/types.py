from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

from tinue.errors import InvalidMoveError, UnsupportedBoardSizeError

MIN_BOARD_SIZE = 3
MAX_BOARD_SIZE = 8

# (stones, capstones) per player
RESERVES = {
    3: (10, 0),
    4: (15, 0),
    5: (21, 1),
    6: (30, 1),
    7: (40, 2),
    8: (50, 2),
}


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    def other(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class Role(IntEnum):
    FLAT = 0
    WALL = 1
    CAP = 2

    @property
    def prefix(self) -> str:
        return ("", "S", "C")[self]


class Direction(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def symbol(self) -> str:
        return "+>-<"[self]

    def step(self) -> Tuple[int, int]:
        """(rank delta, file delta) of one step in this direction."""
        return ((1, 0), (0, 1), (-1, 0), (0, -1))[self]


SYMBOL_TO_DIRECTION = {d.symbol: d for d in Direction}


class GameResult(IntEnum):
    WHITE_WIN = 0
    BLACK_WIN = 1
    DRAW = 2

    @staticmethod
    def win_for(color: Color) -> "GameResult":
        return GameResult.WHITE_WIN if color == Color.WHITE else GameResult.BLACK_WIN

    @property
    def winner(self) -> Optional[Color]:
        if self == GameResult.WHITE_WIN:
            return Color.WHITE
        if self == GameResult.BLACK_WIN:
            return Color.BLACK
        return None


Piece = Tuple[Color, Role]


def check_board_size(size: int) -> int:
    if not (MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE):
        raise UnsupportedBoardSizeError(size)
    return size


def str_to_square(s: str, size: int) -> int:
    """
    'a1' -> 0, 'b1' -> 1, ... on the given board size.
    Rank 1 is index 0..size-1.
    """
    s = s.strip().lower()
    if len(s) != 2:
        raise InvalidMoveError(f"invalid square: {s!r}")
    file = ord(s[0]) - ord("a")
    rank = ord(s[1]) - ord("1")
    if not (0 <= file < size and 0 <= rank < size):
        raise InvalidMoveError(f"invalid square for size {size}: {s!r}")
    return rank * size + file


def square_to_str(idx: int, size: int) -> str:
    if not (0 <= idx < size * size):
        raise ValueError(f"square out of range: {idx}")
    rank, file = divmod(idx, size)
    return chr(ord("a") + file) + chr(ord("1") + rank)


@dataclass(frozen=True, slots=True)
class Move:
    """
    Either a placement (``role`` set) or a spread (``direction`` and
    ``drops`` set). ``drops`` lists how many pieces are left on each square
    travelled, nearest first.
    """

    square: int
    role: Optional[Role] = None
    direction: Optional[Direction] = None
    drops: Tuple[int, ...] = ()

    @staticmethod
    def place(role: Role, square: int) -> "Move":
        return Move(square, role=role)

    @staticmethod
    def spread(square: int, direction: Direction, drops: Tuple[int, ...]) -> "Move":
        return Move(square, direction=direction, drops=tuple(drops))

    @property
    def is_placement(self) -> bool:
        return self.role is not None

    @property
    def pieces_taken(self) -> int:
        return sum(self.drops)

    def ptn(self, size: int) -> str:
        square = square_to_str(self.square, size)
        if self.role is not None:
            return self.role.prefix + square

        taken = self.pieces_taken
        text = (str(taken) if taken > 1 else "") + square + self.direction.symbol
        if len(self.drops) > 1:
            text += "".join(str(d) for d in self.drops)
        return text


_PTN_RE = re.compile(
    r"^(?P<count>[1-8])?(?P<role>[FSC])?(?P<square>[a-h][1-8])"
    r"(?P<dir>[+\-<>])?(?P<drops>[1-8]*)\*?$"
)


def move_from_ptn(text: str, size: int) -> Move:
    """Parse a PTN move such as ``a1``, ``Sb2``, ``Cc3``, ``3c3>12`` or ``1c4+1``."""
    raw = text
    text = text.strip().rstrip("'!?")
    m = _PTN_RE.match(text)
    if m is None:
        raise InvalidMoveError(f"invalid PTN move: {raw!r}")

    square = str_to_square(m.group("square"), size)
    direction_symbol = m.group("dir")

    if direction_symbol is None:
        if m.group("count") or m.group("drops"):
            raise InvalidMoveError(f"invalid PTN placement: {raw!r}")
        role = {None: Role.FLAT, "F": Role.FLAT, "S": Role.WALL, "C": Role.CAP}[m.group("role")]
        return Move.place(role, square)

    if m.group("role"):
        raise InvalidMoveError(f"spread cannot name a piece type: {raw!r}")

    count = int(m.group("count") or 1)
    drops = tuple(int(ch) for ch in m.group("drops")) or (count,)
    if count > size:
        raise InvalidMoveError(f"cannot carry {count} pieces on size {size}: {raw!r}")
    if sum(drops) != count:
        raise InvalidMoveError(f"drops do not add up to {count}: {raw!r}")
    return Move.spread(square, SYMBOL_TO_DIRECTION[direction_symbol], drops)
