"""
Error hierarchy for the tinue finder.

Search exhaustion (no tinue, several tinues, empty enumeration) is not an
error: it is reported through return values. Exceptions are reserved for bad
input at the parsing boundary, bad configuration and broken contracts.
"""

from __future__ import annotations

__all__ = [
    "TinueError",
    "InvalidMoveError",
    "UnsupportedBoardSizeError",
    "ConfigurationError",
    "ContractViolationError",
    "StorageError",
]


class TinueError(Exception):
    """Base exception for all tinue finder errors."""


class InvalidMoveError(TinueError, ValueError):
    """A move string could not be parsed, or the move is illegal in context."""


class UnsupportedBoardSizeError(TinueError, ValueError):
    """Board size outside the supported range."""

    def __init__(self, size: int) -> None:
        super().__init__(f"board size {size} is not supported")
        self.size = size


class ConfigurationError(TinueError):
    """Invalid command line or programmatic configuration."""


class ContractViolationError(TinueError, RuntimeError):
    """A caller broke a precondition of the core (e.g. undo out of order)."""


class StorageError(TinueError):
    """The results database could not be opened or used."""
