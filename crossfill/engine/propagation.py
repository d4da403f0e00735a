"""Domain pruning: node consistency, AC-3 and forward checking."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..core.models import Variable
from ..utils.logger import get_logger
from .domains import DomainStore
from .grid import CrosswordGrid


LOGGER = get_logger(__name__)

Arc = Tuple[Variable, Variable]


class InferenceLog:
    """Append-only record of values pruned on behalf of one assignment.

    Entries are undone in reverse order, exactly once, so the store returns
    to the state it had before the assignment was attempted.
    """

    def __init__(self) -> None:
        self._entries: List[Tuple[Variable, str]] = []

    def record(self, variable: Variable, word: str) -> None:
        self._entries.append((variable, word))

    def undo(self, domains: DomainStore) -> int:
        restored = len(self._entries)
        while self._entries:
            variable, word = self._entries.pop()
            domains.restore(variable, (word,))
        return restored

    def __iter__(self) -> Iterator[Tuple[Variable, str]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def enforce_node_consistency(grid: CrosswordGrid, domains: DomainStore) -> bool:
    """Drop values whose length differs from their variable's length.

    Returns ``False`` when any variable is left without candidates.
    """

    ok = True
    for variable in grid.variables:
        wrong_length = [w for w in domains.domain(variable) if len(w) != variable.length]
        if wrong_length:
            domains.discard_many(variable, wrong_length)
            LOGGER.debug("Node consistency removed %d values from %s", len(wrong_length), variable)
        if domains.is_empty(variable):
            ok = False
    return ok


def revise(grid: CrosswordGrid, domains: DomainStore, x: Variable, y: Variable) -> bool:
    """Make ``x`` arc consistent with ``y``; return whether ``x`` shrank."""

    overlap = grid.overlap(x, y)
    if overlap is None:
        return False
    i, j = overlap
    supported = {word[j] for word in domains.domain(y)}
    unsupported = [word for word in domains.domain(x) if word[i] not in supported]
    if not unsupported:
        return False
    domains.discard_many(x, unsupported)
    return True


def ac3(
    grid: CrosswordGrid,
    domains: DomainStore,
    arcs: Optional[Iterable[Arc]] = None,
) -> bool:
    """Enforce arc consistency over ``arcs`` (every neighbouring arc by default).

    Returns ``False`` as soon as a domain becomes empty, ``True`` once the
    queue drains.
    """

    if arcs is None:
        queue: Deque[Arc] = deque(
            (x, y) for x in grid.variables for y in grid.neighbors(x)
        )
    else:
        queue = deque(arcs)

    revisions = 0
    while queue:
        x, y = queue.popleft()
        if not revise(grid, domains, x, y):
            continue
        revisions += 1
        if domains.is_empty(x):
            LOGGER.debug("AC-3 emptied the domain of %s after %d revisions", x, revisions)
            return False
        for z in grid.neighbors(x):
            if z != y:
                queue.append((z, x))
    LOGGER.debug("AC-3 converged after %d revisions", revisions)
    return True


def forward_check(
    grid: CrosswordGrid,
    domains: DomainStore,
    variable: Variable,
    word: str,
    assignment: Mapping[Variable, str],
    log: InferenceLog,
) -> bool:
    """Prune unassigned neighbours against ``variable = word``.

    Every removal is recorded in ``log``; the caller undoes the log whether
    or not the check succeeds. Returns ``False`` as soon as a neighbour's
    domain becomes empty.
    """

    for neighbor in grid.neighbors(variable):
        if neighbor in assignment:
            continue
        overlap = grid.overlap(variable, neighbor)
        if overlap is None:
            continue
        i, j = overlap
        letter = word[i]
        conflicting = [value for value in domains.domain(neighbor) if value[j] != letter]
        for value in domains.discard_many(neighbor, conflicting):
            log.record(neighbor, value)
        if domains.is_empty(neighbor):
            return False
    return True


__all__ = ["InferenceLog", "enforce_node_consistency", "revise", "ac3", "forward_check"]
