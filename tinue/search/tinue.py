from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional

from tinue.core.position import Position, applied
from tinue.core.types import Color
from tinue.search.iterative import SearchResult, deepen
from tinue.search.ordering import generate_sorted_moves

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TinueMove:
    """
    A move on the road to tinue.

    ``next`` holds every reply that stays on the road; ``None`` means the
    move wins on the spot.
    """

    mv: str
    next: Optional[List["TinueMove"]] = None


def _candidate_moves(position: Position, depth: int, my_turn: bool, prune_late_walls: bool) -> Iterator[Any]:
    for move, _score in generate_sorted_moves(position):
        # A wall never completes a road and never counts as a flat, so the
        # flat on the same square is at least as good for the final plies.
        if prune_late_walls and my_turn and depth <= 2 and position.is_wall_placement(move):
            continue
        yield move


def win_in_n(
    position: Position,
    depth: int,
    me: Color,
    find_only_one_tinue: bool = False,
    prune_late_walls: bool = False,
) -> List[TinueMove]:
    """
    All roads to tinue for ``me`` within ``depth`` plies from ``position``.

    On my turn every move that forces a win is returned (only the first one
    if ``find_only_one_tinue``). On the opponent's turn the result is either
    a winning answer to every single reply, or empty as soon as one reply
    escapes.

    This gets expensive quickly; depth 5, maybe 7, is the practical limit.
    With a large ``depth`` the line may be longer than necessary where the
    opponent does not block and ``me`` can afford to waste a ply.
    """
    my_turn = position.side_to_move == me
    tinue_moves: List[TinueMove] = []

    for move in _candidate_moves(position, depth, my_turn, prune_late_walls):
        text = position.move_to_ptn(move)
        with applied(position, move):
            result = position.game_result()
            if result is not None:
                if result.winner == me:
                    if not my_turn:
                        # Handed to me by the opponent; not part of a forced line.
                        continue
                    if find_only_one_tinue:
                        return [TinueMove(text)]
                    tinue_moves.append(TinueMove(text))
                    continue
                if my_turn:
                    continue
                return []

            if depth <= 1:
                continue
            winning_moves = iddf_win_in_n(position, depth - 1, me, find_only_one_tinue, prune_late_walls)

        if my_turn:
            if winning_moves:
                this_move = TinueMove(text, winning_moves)
                if find_only_one_tinue:
                    return [this_move]
                tinue_moves.append(this_move)
        else:
            if not winning_moves:
                # This reply escapes, so the whole branch is off the road to tinue.
                return []
            tinue_moves.append(TinueMove(text, winning_moves))

    return tinue_moves


def iddf_win_in_n(
    position: Position,
    max_depth: int,
    me: Color,
    find_only_one_tinue: bool = False,
    prune_late_walls: bool = False,
) -> List[TinueMove]:
    """
    ``win_in_n`` at depths 1, 2, ... up to ``max_depth``, keeping the first
    non-empty result. Recursing through this removes tinues padded out by
    moves that do not affect them.
    """
    found = deepen(
        range(1, max_depth + 1),
        lambda depth: win_in_n(position, depth, me, find_only_one_tinue, prune_late_walls),
    )
    return found.result if found is not None else []


def iddf_tinue_search(
    position: Position,
    max_depth: int,
    me: Optional[Color] = None,
    find_only_one_tinue: bool = False,
    prune_late_walls: bool = False,
) -> Optional[SearchResult[List[TinueMove]]]:
    """
    Shortest tinue for ``me`` (default: the side to move) and its length.

    Only odd depths are tried: the last ply of a tinue is always ours.
    """
    if me is None:
        me = position.side_to_move

    def search(depth: int) -> List[TinueMove]:
        moves = win_in_n(position, depth, me, find_only_one_tinue, prune_late_walls)
        logger.debug("tinue search depth=%d found=%d", depth, len(moves))
        return moves

    return deepen(range(1, max_depth + 1, 2), search)
