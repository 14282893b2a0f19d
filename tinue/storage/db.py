from __future__ import annotations

import logging
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from tinue.errors import StorageError

logger = logging.getLogger(__name__)

ROAD_WIN_RESULTS = ("R-0", "0-R")

TINUES_SCHEMA = """
CREATE TABLE IF NOT EXISTS tinues (
    id integer primary key,
    gameid integer NOT NULL REFERENCES games(id),
    size integer,
    plies_to_undo integer,
    tinue_depth integer,
    tinue TEXT)
"""


@dataclass(frozen=True, slots=True)
class GameRow:
    id: int
    notation: str
    result: str
    size: int


@dataclass(frozen=True, slots=True)
class TinueGameRow:
    gameid: int
    size: int
    plies_to_undo: int
    tinue_depth: int
    tinue: str


class TinueDatabase:
    """
    Playtak games database with an added ``tinues`` table.

    Reads come from the ``games`` table; every write goes through one lock so
    the connection can be shared by the threads of one process.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        if not self.path.is_file():
            raise StorageError(f"database not found: {self.path}")
        try:
            self._conn = sqlite3.connect(
                f"file:{self.path}?mode=rw", uri=True, check_same_thread=False
            )
        except sqlite3.Error as e:
            raise StorageError(f"cannot open database {self.path}: {e}") from e
        self._lock = threading.Lock()

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "TinueDatabase":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def ensure_schema(self) -> None:
        with self._lock:
            self._conn.execute(TINUES_SCHEMA)
            self._conn.commit()

    def fetch_games(self, board_size: int, min_game_id: int) -> List[GameRow]:
        """Road wins on ``board_size`` with id >= ``min_game_id``, oldest first."""
        rows = self._conn.execute(
            "SELECT id, notation, result, size FROM games "
            "WHERE (result = ? OR result = ?) AND id > ? AND size = ? ORDER BY id",
            (*ROAD_WIN_RESULTS, min_game_id - 1, board_size),
        ).fetchall()
        logger.info("fetched %d games of size %d from id %d", len(rows), board_size, min_game_id)
        return [GameRow(id=r[0], notation=r[1], result=r[2], size=r[3]) for r in rows]

    def insert_tinue(self, row: TinueGameRow) -> int:
        with self._lock:
            cur = self._conn.execute(
                "INSERT INTO tinues(gameid, size, plies_to_undo, tinue_depth, tinue) "
                "VALUES(?, ?, ?, ?, ?)",
                (row.gameid, row.size, row.plies_to_undo, row.tinue_depth, row.tinue),
            )
            self._conn.commit()
            return cur.lastrowid or 0

    def count_tinues(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM tinues").fetchone()[0]
