"""Structured decision events emitted by the search engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

from ..core.constants import TraceEventKind
from ..core.models import Variable
from ..utils.logger import get_logger


@dataclass(frozen=True)
class TraceEvent:
    kind: TraceEventKind
    variable: Variable
    word: str
    depth: int

    def describe(self) -> str:
        if self.kind == TraceEventKind.TRY:
            return f"Trying to assign word '{self.word}' to variable '{self.variable}'"
        if self.kind == TraceEventKind.ASSIGN:
            return f"Assigned word '{self.word}' to variable '{self.variable}'"
        if self.kind == TraceEventKind.INCONSISTENT:
            return f"Word '{self.word}' is inconsistent with variable '{self.variable}'"
        if self.kind == TraceEventKind.PRUNED:
            return f"Word '{self.word}' on variable '{self.variable}' leaves a neighbour without candidates"
        return f"Backtracking on variable '{self.variable}', removing word '{self.word}'"


class TraceSink(Protocol):
    def emit(self, event: TraceEvent) -> None:
        ...


class ListTraceSink:
    """Collects events in memory, e.g. for writing a steps file afterwards."""

    def __init__(self) -> None:
        self.events: List[TraceEvent] = []

    def emit(self, event: TraceEvent) -> None:
        self.events.append(event)

    def lines(self) -> List[str]:
        return [event.describe() for event in self.events]

    def count(self, kind: TraceEventKind) -> int:
        return sum(1 for event in self.events if event.kind == kind)


class LoggingTraceSink:
    """Forwards every event to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG) -> None:
        self.logger = logger or get_logger("crossfill.trace")
        self.level = level

    def emit(self, event: TraceEvent) -> None:
        self.logger.log(self.level, "%s%s", "  " * event.depth, event.describe())
