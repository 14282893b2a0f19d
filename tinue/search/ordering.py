from __future__ import annotations

from typing import Any, List, Tuple

from tinue.core.position import Position


def generate_sorted_moves(position: Position) -> List[Tuple[Any, float]]:
    """
    Legal moves paired with their heuristic score, best first.

    Trying likely winning moves first makes cutoffs happen sooner; the order
    never changes a search result. The sort is stable, so equal scores keep
    generation order and the search stays deterministic.
    """
    scored = [(mv, position.heuristic_score(mv)) for mv in position.generate_legal()]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored
