"""
Post-processing of enumerated tinue trees into compact, serialisable forms.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import groupby
from typing import Any, Dict, List, Optional, Tuple

from tinue.search.tinue import TinueMove


@dataclass(slots=True)
class TinueMoveOptions:
    """
    Sibling moves that share the same winning continuations.

    If the player to move plays any of ``moves``, the other side has to
    answer with one of ``solutions`` to stay on the road to tinue.
    """

    moves: List[str]
    solutions: List["TinueMoveOptions"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"moves": list(self.moves)}
        if self.solutions:
            out["solutions"] = [s.to_dict() for s in self.solutions]
        return out


def _canonical(options: List[TinueMoveOptions]) -> Tuple[Any, ...]:
    return tuple(sorted((tuple(o.moves), _canonical(o.solutions)) for o in options))


def tinuemove_to_options(tinue_moves: List[TinueMove]) -> List[TinueMoveOptions]:
    """
    Collapse a forest of ``TinueMove`` into ``TinueMoveOptions``.

    Only runs of consecutive siblings are merged, in a single pass; two equal
    continuations separated by a different one stay in separate groups.
    Continuations compare equal regardless of the order of their entries.
    """
    converted: List[Tuple[str, Optional[List[TinueMoveOptions]], Any]] = []
    for tm in tinue_moves:
        solutions = tinuemove_to_options(tm.next) if tm.next is not None else None
        key = _canonical(solutions) if solutions is not None else None
        converted.append((tm.mv, solutions, key))

    groups: List[TinueMoveOptions] = []
    for _key, run in groupby(converted, key=lambda item: item[2]):
        members = list(run)
        first_solutions = members[0][1]
        groups.append(
            TinueMoveOptions(
                moves=[mv for mv, _solutions, _k in members],
                solutions=first_solutions if first_solutions is not None else [],
            )
        )
    return groups


def options_to_json(options: Optional[List[TinueMoveOptions]]) -> Optional[List[Dict[str, Any]]]:
    if options is None:
        return None
    return [o.to_dict() for o in options]


@dataclass(slots=True)
class MoveListNode:
    mv: str
    next: Optional["MoveListNode"] = None


def get_longest_sequence(tinue_move: TinueMove) -> Tuple[int, MoveListNode]:
    """
    One longest road to tinue through ``tinue_move`` and its length in plies.

    Probably a line where the opponent defends fairly well, although in a
    tinue no defence actually works. Ties keep the first continuation.
    """
    if tinue_move.next:
        depth, line = max(
            (get_longest_sequence(n) for n in tinue_move.next),
            key=lambda pair: pair[0],
        )
        return depth + 1, MoveListNode(tinue_move.mv, line)
    return 1, MoveListNode(tinue_move.mv)


def move_list_to_vec(node: MoveListNode) -> List[str]:
    moves = []
    current: Optional[MoveListNode] = node
    while current is not None:
        moves.append(current.mv)
        current = current.next
    return moves


def tinue_moves_to_dict(tinue_moves: List[TinueMove]) -> Dict[str, Any]:
    """Nested ``{move: {reply: {...}}}`` view of a tree, for inspection."""
    return {tm.mv: tinue_moves_to_dict(tm.next or []) for tm in tinue_moves}
