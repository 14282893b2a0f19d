"""
Tinues from real games, each with exactly one winning first move.

These take minutes in pure Python, so they only run with ``-m slow``.
"""

from typing import List

import pytest

from tinue.core.board import Board
from tinue.search.iterative import SearchResult, find_unique_tinue

POSITIONS_5S = [
    (
        3,
        [
            "a1", "a5", "b5", "Cc3", "c5", "d5", "Cd4", "c4", "e5", "1c4+1", "1d4+1", "c4", "1d5<1",
            "1d5>1", "d5", "e4", "2c5>11", "1d5<1", "2e5<11", "2d5>2",
        ],
        "2c5>11",
    ),
    (
        3,
        [
            "a5", "e4", "Cc3", "c4", "b3", "Cd3", "b4", "b5", "d4", "d5", "a4", "c4>", "e4<", "d3+",
            "e3", "d3", "d2", "4d4<22", "a3", "3b4-", "c5", "2c4+", "a4+", "b2", "b4", "c4", "b1",
            "c2", "c1", "d1", "d4", "a2", "a4", "e2", "d2<", "c4<", "a4>", "d2", "c4", "b2>", "c1+",
            "b5-", "4c2>22", "4b4>22", "c3+", "d3-", "3c4>", "3d2>", "4d4-22", "5e2+122", "d4>",
            "2e3+", "d4>", "2e5-", "d4", "3e4<", "e3", "c2", "a4", "e1", "e3+", "4d4>", "a1", "a2+",
            "a2",
        ],
        "5e4+",
    ),
    (
        3,
        [
            "b4", "a5", "e5", "b5", "b3", "Cc3", "Cc5", "d5", "d4", "d3", "b3+", "a4", "2b4+", "a4+",
            "a4", "b4", "d4+", "b4<", "b4", "a3", "b3", "a2", "3b5<", "2a4+", "Sa4", "b2", "e3", "e2",
            "a4+", "d2", "5a5-122", "3a5-21", "3a2+", "c2", "5a3-", "c3<", "5a2>113", "2a4-", "a5",
            "Sb5", "d4", "c3", "e3<", "c3>", "4d2<", "e3", "Sc3", "3d3+12", "c5>", "e4", "5d5>", "c4",
            "5e5-212", "2d4>", "e3+", "e1",
        ],
        "2e2+11",
    ),
    (
        5,
        [
            "e1", "e5", "Cc3", "c1", "d1", "d2", "a3", "b1", "b3", "d2-", "a1", "a2", "a1>", "Cb2",
            "Sc2", "a1", "2b1>", "b2+", "b5", "b1", "c4", "d2", "c5",
        ],
        "2b3-11",
    ),
    (
        5,
        [
            "c4", "a5", "e1", "c3", "d1", "c2", "c1", "b1", "Cb2", "c5", "b2-", "a1", "a2", "c2-",
            "c2", "2c1>", "d2", "Cb2", "c1", "b2>", "d2-", "2c2-", "c2", "3c1>", "b2", "d3", "Sd2",
            "c1", "a3", "a1+", "a3-",
        ],
        "d1<",
    ),
]

POSITIONS_6S = [
    (
        5,
        [
            "a6", "f1", "d3", "b6", "c3", "c6", "b3", "d6", "Se6", "d5", "e5", "d4", "Ce4", "e3", "f3",
            "Cc4", "f6", "f2", "f5", "1c4-1", "e2", "d2", "e1", "1e3-1", "1e1+1", "1d2>1", "Sd2", "c4",
            "1d2>1", "c1", "Sc2", "f4", "4e2>4", "Se3", "e1", "d2", "1e4>1", "1e3-1",
        ],
        "2f4-11",
    ),
    (
        # Spreading gives us a capstone next to the critical square.
        3,
        [
            "b6", "a6", "a5", "b3", "b5", "c3", "c5", "d3", "e5", "d5", "f5", "d4", "d6", "d5>", "e6",
            "Cd5", "c6", "b6>", "Cc4", "d2", "c5+", "d1", "c4>", "a3", "f6", "d5+", "d5", "Sc5", "c2",
            "e1", "f1", "f2", "2d4-", "e2", "f3", "b1", "f4", "c1", "f3-", "2e5>", "f4+", "Sf4", "b2",
            "e3", "f3", "f4+", "d4", "5f5-122", "3d3>12", "3f2-", "3f3-", "e3>", "f4-", "e3>", "e3",
            "5f3<32", "Sf3", "2d6>", "f5", "a1", "f4",
        ],
        "3e6-111",
    ),
    (
        # The capstone flattens our own wall, making two orthogonal road threats.
        3,
        [
            "a6", "f1", "d3", "b6", "d4", "c6", "e6", "d6", "Cd5", "d2", "e5", "e2", "c3", "Cc2", "f2",
            "f3", "e3", "c2+", "e1", "f3<", "e4", "f3", "d3>", "e2+", "e2", "d3", "d5>", "4e3-22",
            "Se3", "c4", "e3-", "c5", "d4<", "Se3", "3e2-", "b3", "2e5-11", "d6>", "2e4+11", "Se4",
        ],
        "2e3-11",
    ),
]


def run_tinue_test(size: int, depth: int, moves: List[str], answer: str) -> None:
    board = Board.from_ptn_moves(size, moves)
    answer_move = board.move_from_ptn(answer)
    assert answer_move in board.generate_legal()
    assert find_unique_tinue(board, depth) == SearchResult(depth, answer_move)


@pytest.mark.slow
@pytest.mark.parametrize("depth,moves,answer", POSITIONS_5S)
def test_tinue_5s(depth: int, moves: List[str], answer: str) -> None:
    run_tinue_test(5, depth, moves, answer)


@pytest.mark.slow
@pytest.mark.parametrize("depth,moves,answer", POSITIONS_6S)
def test_tinue_6s(depth: int, moves: List[str], answer: str) -> None:
    run_tinue_test(6, depth, moves, answer)


def test_positions_replay() -> None:
    for size, positions in ((5, POSITIONS_5S), (6, POSITIONS_6S)):
        for _depth, moves, answer in positions:
            board = Board.from_ptn_moves(size, moves)
            assert board.game_result() is None
            assert board.move_from_ptn(answer) in board.generate_legal()
