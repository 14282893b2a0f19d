from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tinue.config import FinderConfig
from tinue.errors import TinueError
from tinue.finder import run

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinue-finder",
        description="Checks a database of Tak games for tinues and writes them to a new table.",
    )
    parser.add_argument("--db", dest="database", required=True, help="Path of the database")
    parser.add_argument(
        "-n", "--board-size", type=int, required=True, help="Checks only games of this board size"
    )
    parser.add_argument(
        "-s",
        "--start-id",
        type=int,
        default=8000,
        help="ID of the game to start with, to continue where a previous run stopped (default: 8000)",
    )
    parser.add_argument(
        "-u", "--undo", dest="plies_to_undo", type=int, default=3,
        help="Number of plies to undo from the end position (default: 3)",
    )
    parser.add_argument(
        "-d", "--max-depth", type=int, default=3,
        help="Maximum length of a tinue in plies, must be odd (default: 3)",
    )
    parser.add_argument(
        "--threads", type=int, default=1, help="Number of worker processes (default: 1)"
    )
    parser.add_argument(
        "-m",
        "--multi-tinue",
        action="store_true",
        help="Search for all tinues and every opponent reply. Much slower and much more output.",
    )
    parser.add_argument(
        "--unique",
        action="store_true",
        help="Only accept tinues with a single winning first move and store their principal variation.",
    )
    parser.add_argument(
        "--prune-late-walls",
        action="store_true",
        help="Skip own wall placements in the last two plies (faster, may miss rare flat wins).",
    )
    parser.add_argument(
        "-t", "--test", action="store_true", help="Only log the output, do not write to the database"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> FinderConfig:
    return FinderConfig(
        database=Path(args.database),
        board_size=args.board_size,
        start_id=args.start_id,
        plies_to_undo=args.plies_to_undo,
        max_depth=args.max_depth,
        threads=args.threads,
        multi_tinue=args.multi_tinue,
        test=args.test,
        unique=args.unique,
        prune_late_walls=args.prune_late_walls,
    ).validate()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = config_from_args(args)
    except TinueError as e:
        parser.error(str(e))

    logger.info("configuration: %s", config)
    try:
        run(config)
    except TinueError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
