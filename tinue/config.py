from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tinue.core.types import check_board_size
from tinue.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class FinderConfig:
    database: Path
    board_size: int
    start_id: int = 8000
    plies_to_undo: int = 3
    max_depth: int = 3
    threads: int = 1
    multi_tinue: bool = False
    test: bool = False
    unique: bool = False
    prune_late_walls: bool = False

    @property
    def find_only_one_tinue(self) -> bool:
        return not self.multi_tinue

    def validate(self) -> "FinderConfig":
        check_board_size(self.board_size)
        if self.max_depth % 2 != 1:
            raise ConfigurationError(
                "max_depth must be odd: it counts plies ahead, and an even number "
                "would mean the opponent makes the final ply"
            )
        if self.plies_to_undo <= 1:
            raise ConfigurationError("plies_to_undo must be greater than 1")
        if self.threads <= 0:
            raise ConfigurationError("at least 1 worker is required")
        if self.unique and self.multi_tinue:
            raise ConfigurationError("--unique and --multi-tinue cannot be combined")
        return self
