from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from tinue.core.position import Position, applied
from tinue.search.alphabeta import alphabeta
from tinue.search.ordering import generate_sorted_moves
from tinue.search.value import GameValue

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class SearchResult(Generic[T]):
    """A certified tinue length and what was found at that length."""

    depth: int
    result: T


class TinueStatus(Enum):
    NOT_FOUND = auto()
    FOUND = auto()
    MULTIPLE = auto()


@dataclass(frozen=True, slots=True)
class UniqueWin:
    status: TinueStatus
    move: Any = None


def deepen(depths: Iterable[int], search: Callable[[int], Optional[T]]) -> Optional[SearchResult[T]]:
    """
    Run ``search`` at each depth in turn and return the first result that is
    neither ``None`` nor empty, together with its depth.
    """
    for depth in depths:
        result = search(depth)
        if result is None:
            continue
        if isinstance(result, list) and not result:
            continue
        return SearchResult(depth=depth, result=result)
    return None


def find_unique_win_for_depth(position: Position, depth: int) -> UniqueWin:
    """
    Look for a root move that forces a win within ``depth`` plies, and check
    that it is the only one. Stops at the second winning move.
    """
    alpha = GameValue.win_in(0).propagate_down()
    beta = GameValue.win_in(depth + 1).propagate_down()

    tinue_move: Any = None
    for move, _score in generate_sorted_moves(position):
        with applied(position, move):
            result = alphabeta(position, depth - 1, alpha, beta)
        if result.is_loss:
            if tinue_move is not None:
                return UniqueWin(TinueStatus.MULTIPLE)
            tinue_move = move

    if tinue_move is None:
        return UniqueWin(TinueStatus.NOT_FOUND)
    return UniqueWin(TinueStatus.FOUND, tinue_move)


def find_unique_tinue(position: Position, max_depth: int) -> Optional[SearchResult[Any]]:
    """
    Shortest unique tinue for the side to move, as ``SearchResult(depth, move)``.

    Only odd depths are searched since the winning ply must be ours. Returns
    ``None`` when nothing is found up to ``max_depth``, or when the first
    depth with a tinue has more than one winning move.
    """

    def search(depth: int) -> Optional[UniqueWin]:
        found = find_unique_win_for_depth(position, depth)
        logger.debug("unique tinue search depth=%d status=%s", depth, found.status.name)
        # MULTIPLE is returned too, so deepening stops at the first depth with any win.
        return None if found.status == TinueStatus.NOT_FOUND else found

    result = deepen(range(1, max_depth + 1, 2), search)
    if result is None or result.result.status == TinueStatus.MULTIPLE:
        return None
    return SearchResult(depth=result.depth, result=result.result.move)
