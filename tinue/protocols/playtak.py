"""
Playtak server notation.

Game records from the playtak.com database store moves as comma separated
server commands:

    P A1          place a flat on a1
    P C3 W        place a wall (standing stone)
    P D4 C        place a capstone
    M A1 A3 2 1   spread from a1 towards a3, dropping 2 then 1
"""

from __future__ import annotations

from typing import List

from tinue.core.types import Direction, Move, Role, square_to_str, str_to_square
from tinue.errors import InvalidMoveError

_ROLES = {None: Role.FLAT, "W": Role.WALL, "C": Role.CAP}


def parse_move(text: str, size: int) -> Move:
    words = text.split()
    if not words:
        raise InvalidMoveError("empty server move")

    if words[0] == "P":
        if len(words) not in (2, 3):
            raise InvalidMoveError(f"invalid placement: {text!r}")
        square = str_to_square(words[1], size)
        role_word = words[2] if len(words) == 3 else None
        if role_word not in _ROLES:
            raise InvalidMoveError(f"unknown role {role_word!r} for move {text!r}")
        return Move.place(_ROLES[role_word], square)

    if words[0] == "M":
        if len(words) < 4:
            raise InvalidMoveError(f"invalid movement: {text!r}")
        start = str_to_square(words[1], size)
        end = str_to_square(words[2], size)
        try:
            drops = tuple(int(w) for w in words[3:])
        except ValueError:
            raise InvalidMoveError(f"invalid drop counts in {text!r}") from None
        if any(d <= 0 for d in drops) or sum(drops) > size:
            raise InvalidMoveError(f"invalid drop counts in {text!r}")

        start_rank, start_file = divmod(start, size)
        end_rank, end_file = divmod(end, size)
        if start_file == end_file and end_rank > start_rank:
            direction = Direction.NORTH
        elif start_file == end_file and end_rank < start_rank:
            direction = Direction.SOUTH
        elif start_rank == end_rank and end_file > start_file:
            direction = Direction.EAST
        elif start_rank == end_rank and end_file < start_file:
            direction = Direction.WEST
        else:
            raise InvalidMoveError(f"diagonal or empty movement {text!r}")

        distance = abs(end_rank - start_rank) + abs(end_file - start_file)
        if distance != len(drops):
            raise InvalidMoveError(f"{len(drops)} drops over {distance} squares in {text!r}")
        return Move.spread(start, direction, drops)

    raise InvalidMoveError(f"unknown server command {words[0]!r} in {text!r}")


def parse_server_notation(notation: str, size: int) -> List[Move]:
    """Parse a comma separated move list; blank entries (e.g. a trailing comma) are ignored."""
    return [parse_move(part, size) for part in notation.split(",") if part.strip()]


def move_to_server(move: Move, size: int) -> str:
    square = square_to_str(move.square, size).upper()
    if move.role is not None:
        suffix = {Role.FLAT: "", Role.WALL: " W", Role.CAP: " C"}[move.role]
        return f"P {square}{suffix}"

    rank, file = divmod(move.square, size)
    dr, df = move.direction.step()
    n = len(move.drops)
    end = square_to_str((rank + dr * n) * size + file + df * n, size).upper()
    return f"M {square} {end} " + " ".join(str(d) for d in move.drops)
