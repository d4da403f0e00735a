"""Shared constants and enumerations for the crossword solver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def step(self) -> tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)


class PropagationMode(str, Enum):
    """How domains are pruned around the backtracking search."""

    FORWARD_CHECKING = "forward"
    AC3 = "ac3"
    NONE = "none"


class Backend(str, Enum):
    """Search backends able to fill a grid."""

    BACKTRACKING = "backtracking"
    CPSAT = "cpsat"


class TraceEventKind(str, Enum):
    """Decisions reported by the search engine."""

    TRY = "TRY"
    ASSIGN = "ASSIGN"
    INCONSISTENT = "INCONSISTENT"
    PRUNED = "PRUNED"
    BACKTRACK = "BACKTRACK"


FILLABLE_MARK = "?"
BLOCKED_SYMBOL = "."


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
