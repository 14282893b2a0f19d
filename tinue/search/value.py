from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import Tuple


class Outcome(IntEnum):
    LOSS = 0
    UNKNOWN = 1
    WIN = 2


@total_ordering
@dataclass(frozen=True, slots=True)
class GameValue:
    """
    Game-theoretic value from the side to move's perspective.

    Winning sooner beats winning later, any win beats ``Unknown``, and
    ``Unknown`` beats any loss. Between losses, the one further away ranks
    higher.
    """

    outcome: Outcome
    plies: int = 0

    @staticmethod
    def win_in(plies: int) -> "GameValue":
        return GameValue(Outcome.WIN, plies)

    @staticmethod
    def loss_in(plies: int) -> "GameValue":
        return GameValue(Outcome.LOSS, plies)

    @property
    def is_win(self) -> bool:
        return self.outcome == Outcome.WIN

    @property
    def is_loss(self) -> bool:
        return self.outcome == Outcome.LOSS

    def _rank(self) -> Tuple[int, int]:
        if self.outcome == Outcome.WIN:
            return (2, -self.plies)
        if self.outcome == Outcome.LOSS:
            return (0, self.plies)
        return (1, 0)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, GameValue):
            return NotImplemented
        return self._rank() < other._rank()

    def propagate_up(self) -> "GameValue":
        """Child value as seen from the parent, one ply further away."""
        if self.outcome == Outcome.WIN:
            return GameValue.loss_in(self.plies + 1)
        if self.outcome == Outcome.LOSS:
            return GameValue.win_in(self.plies + 1)
        return self

    def propagate_down(self) -> "GameValue":
        """Bound rebased for the child; saturates at zero plies."""
        if self.outcome == Outcome.WIN:
            return GameValue.loss_in(max(self.plies - 1, 0))
        if self.outcome == Outcome.LOSS:
            return GameValue.win_in(max(self.plies - 1, 0))
        return self

    def __repr__(self) -> str:
        if self.outcome == Outcome.WIN:
            return f"WinInPly({self.plies})"
        if self.outcome == Outcome.LOSS:
            return f"LossInPly({self.plies})"
        return "Unknown"


UNKNOWN = GameValue(Outcome.UNKNOWN)
MAX_VALUE = GameValue.win_in(0)
MIN_VALUE = GameValue.loss_in(0)
