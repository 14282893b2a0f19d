from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Protocol

from tinue.core.types import Color, GameResult


class Position(Protocol):
    """
    What the search needs from a game position.

    Moves are opaque to the search; they only travel from ``generate_legal``
    back into the other methods. ``make_move`` mutates in place and returns a
    token that ``unmake_move`` consumes, last applied first undone.
    """

    side_to_move: Color

    def generate_legal(self) -> List[Any]: ...

    def heuristic_score(self, move: Any) -> float: ...

    def make_move(self, move: Any) -> Any: ...

    def unmake_move(self, undo: Any) -> None: ...

    def game_result(self) -> Optional[GameResult]: ...

    def move_to_ptn(self, move: Any) -> str: ...

    def is_wall_placement(self, move: Any) -> bool: ...


@contextmanager
def applied(position: Position, move: Any) -> Iterator[Any]:
    """Apply ``move`` for the duration of the block; always undo it on exit."""
    undo = position.make_move(move)
    try:
        yield undo
    finally:
        position.unmake_move(undo)
