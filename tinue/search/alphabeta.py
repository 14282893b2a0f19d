from __future__ import annotations

from contextlib import ExitStack
from typing import Any, List, Optional

from tinue.core.position import Position, applied
from tinue.core.types import Color, GameResult
from tinue.errors import ContractViolationError
from tinue.search.ordering import generate_sorted_moves
from tinue.search.value import MAX_VALUE, MIN_VALUE, UNKNOWN, GameValue


def terminal_value(result: Optional[GameResult], side_to_move: Color) -> GameValue:
    if result is None or result.winner is None:
        return UNKNOWN
    if result.winner == side_to_move:
        return GameValue.win_in(0)
    return GameValue.loss_in(0)


def alphabeta(
    position: Position,
    depth: int,
    alpha: GameValue = MIN_VALUE,
    beta: GameValue = MAX_VALUE,
) -> GameValue:
    """
    Search for any forced result up to ``depth`` plies within ``[alpha, beta]``.

    ``alpha`` is a value we already know we can reach, so lines that cannot
    improve on it are not looked for. ``beta`` is a value we already know we
    cannot exceed. Results inside the window are exact; outside it they are
    only bounds. The position is left as it was found.
    """
    result = position.game_result()
    if depth == 0 or result is not None:
        return terminal_value(result, position.side_to_move)

    value = MIN_VALUE
    for move, _score in generate_sorted_moves(position):
        with applied(position, move):
            child = alphabeta(position, depth - 1, beta.propagate_down(), alpha.propagate_down())
        value = max(value, child.propagate_up())
        alpha = max(alpha, value)
        if alpha >= beta:
            break
    return value


def best_move(position: Position, depth: int) -> Any:
    """Best move by a full-window search of every legal move; first one wins ties."""
    moves = generate_sorted_moves(position)
    if not moves:
        raise ContractViolationError("best_move called on a position without legal moves")

    best = moves[0][0]
    best_score = MIN_VALUE
    for move, _score in moves:
        with applied(position, move):
            score = alphabeta(position, depth - 1, MIN_VALUE, MAX_VALUE).propagate_up()
        if score > best_score:
            best = move
            best_score = score
    return best


def pv(position: Position, depth: int) -> List[str]:
    """
    Principal variation of a tinue of ``depth`` plies, in PTN.

    Kept apart from the tinue search itself: the narrow window used there
    only proves that a reply loses, while the PV needs the opponent's best
    (longest) defence at every ply. The position is restored before returning.
    """
    line: List[str] = []
    with ExitStack() as played:
        while position.game_result() is None:
            if depth <= 0:
                raise ContractViolationError("principal variation ran past the certified depth")
            move = best_move(position, depth)
            line.append(position.move_to_ptn(move))
            played.enter_context(applied(position, move))
            depth -= 1
    return line
