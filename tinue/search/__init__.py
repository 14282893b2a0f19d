"""
Forced-win (tinue) search.

Alpha-beta over game-theoretic values, unique tinue detection, enumeration of
every road to tinue and post-processing of the enumerated trees.
"""

from .value import GameValue, MAX_VALUE, MIN_VALUE, UNKNOWN
from .alphabeta import alphabeta, best_move, pv
from .iterative import SearchResult, TinueStatus, UniqueWin, find_unique_tinue, find_unique_win_for_depth
from .tinue import TinueMove, iddf_tinue_search, iddf_win_in_n, win_in_n
from .tree import (
    MoveListNode,
    TinueMoveOptions,
    get_longest_sequence,
    move_list_to_vec,
    tinuemove_to_options,
)

__all__ = [
    "GameValue",
    "MAX_VALUE",
    "MIN_VALUE",
    "UNKNOWN",
    "alphabeta",
    "best_move",
    "pv",
    "SearchResult",
    "TinueStatus",
    "UniqueWin",
    "find_unique_tinue",
    "find_unique_win_for_depth",
    "TinueMove",
    "iddf_tinue_search",
    "iddf_win_in_n",
    "win_in_n",
    "MoveListNode",
    "TinueMoveOptions",
    "get_longest_sequence",
    "move_list_to_vec",
    "tinuemove_to_options",
]
