"""
Batch tinue search over a playtak games database.

Each game is replayed up to ``plies_to_undo`` plies before its end and the
side to move at that point is searched for a tinue. Games are independent, so
they are spread over a process pool; every worker rebuilds its own board from
the notation and only plain results travel back. The parent process is the
only writer to the database.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any, Dict, Iterable, Iterator, Optional, TextIO, Tuple

from tinue.config import FinderConfig
from tinue.core.board import Board
from tinue.protocols.playtak import parse_server_notation
from tinue.search.alphabeta import pv
from tinue.search.iterative import find_unique_tinue
from tinue.search.tinue import iddf_tinue_search
from tinue.search.tree import get_longest_sequence, move_list_to_vec, options_to_json, tinuemove_to_options
from tinue.storage.db import GameRow, TinueDatabase, TinueGameRow

logger = logging.getLogger(__name__)

GameOutcome = Tuple[Dict[str, Any], Optional[TinueGameRow]]


def replay(size: int, notation: str, plies_to_undo: int) -> Board:
    """Board after all but the last ``plies_to_undo`` plies of ``notation``."""
    moves = parse_server_notation(notation, size)
    board = Board(size)
    for move in moves[: max(len(moves) - plies_to_undo, 0)]:
        board.play(move)
    return board


def search_game(board: Board, config: FinderConfig) -> Tuple[int, Any]:
    """
    Search ``board`` for the side to move. Returns the tinue depth (0 when
    none was found) and the JSON-ready payload for storage.
    """
    if config.unique:
        found = find_unique_tinue(board, config.max_depth)
        if found is None:
            return 0, None
        return found.depth, pv(board, found.depth)

    result = iddf_tinue_search(
        board,
        config.max_depth,
        board.side_to_move,
        config.find_only_one_tinue,
        config.prune_late_walls,
    )
    if result is None:
        return 0, None
    if config.find_only_one_tinue:
        # Storing every reply would be massive; keep one longest example line.
        _length, line = get_longest_sequence(result.result[0])
        return result.depth, move_list_to_vec(line)
    return result.depth, options_to_json(tinuemove_to_options(result.result))


def handle_game(game: GameRow, config: FinderConfig) -> GameOutcome:
    logger.info("processing game #%d", game.id)
    started = time.perf_counter()

    board = replay(game.size, game.notation, config.plies_to_undo)
    depth, payload = search_game(board, config)
    time_ms = int((time.perf_counter() - started) * 1000)

    record = {
        "id": game.id,
        "size": game.size,
        "result": game.result,
        "max-depth": config.max_depth,
        "depth": depth,
        "movesToUndo": config.plies_to_undo,
        "timeMs": time_ms,
        "tinue": payload,
    }

    # No win at all, or an immediate win: nothing worth storing.
    if depth <= 1:
        return record, None
    row = TinueGameRow(
        gameid=game.id,
        size=game.size,
        plies_to_undo=config.plies_to_undo,
        tinue_depth=depth,
        tinue=json.dumps(payload),
    )
    return record, row


def _outcomes(games: Iterable[GameRow], config: FinderConfig) -> Iterator[GameOutcome]:
    if config.threads == 1:
        for game in games:
            yield handle_game(game, config)
        return

    with ProcessPoolExecutor(max_workers=config.threads) as pool:
        futures = [pool.submit(handle_game, game, config) for game in games]
        for future in as_completed(futures):
            yield future.result()


def run(config: FinderConfig, out: Optional[TextIO] = None) -> int:
    """Process every matching game; returns the number of tinues stored."""
    if out is None:
        out = sys.stdout
    stored = 0
    with TinueDatabase(config.database) as db:
        if not config.test:
            db.ensure_schema()
        games = db.fetch_games(config.board_size, config.start_id)

        for record, row in _outcomes(games, config):
            out.write(json.dumps(record) + "\n")
            out.flush()
            if row is None or config.test:
                continue
            db.insert_tinue(row)
            stored += 1

    logger.info("stored %d tinues from %d games", stored, len(games))
    return stored
