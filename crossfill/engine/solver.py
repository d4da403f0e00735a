"""Backtracking crossword solver with MRV/degree and LCV ordering."""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from ..core.constants import Backend, PropagationMode, TraceEventKind
from ..core.exceptions import SolverError
from ..core.models import Assignment, Variable
from ..utils.logger import get_logger
from .cpsat import solve_with_cpsat
from .domains import DomainStore
from .grid import CrosswordGrid
from .propagation import InferenceLog, ac3, enforce_node_consistency, forward_check
from .trace import TraceEvent, TraceSink

LOGGER = get_logger(__name__)


@dataclass
class SolverConfig:
    """Knobs for a single solve."""

    propagation: PropagationMode = PropagationMode.FORWARD_CHECKING
    backend: Backend = Backend.BACKTRACKING
    max_assignments: Optional[int] = None
    cpsat_timeout: float = 30.0

    def __post_init__(self) -> None:
        try:
            self.propagation = PropagationMode(self.propagation)
            self.backend = Backend(self.backend)
        except ValueError as exc:
            raise SolverError(str(exc)) from exc
        if self.max_assignments is not None and self.max_assignments < 1:
            raise SolverError("max_assignments must be positive")


@dataclass
class SearchStats:
    assignments_tried: int = 0
    backtracks: int = 0
    inferences: int = 0
    elapsed_seconds: float = 0.0


@dataclass
class SolveResult:
    assignment: Optional[Assignment]
    stats: SearchStats = field(default_factory=SearchStats)
    limit_reached: bool = False

    @property
    def solved(self) -> bool:
        return self.assignment is not None


class _SearchLimitReached(Exception):
    pass


class CrosswordSolver:
    """Fills a :class:`CrosswordGrid` from a word collection.

    The domain store is rebuilt at the start of every :meth:`solve` and is
    owned by the solver for the duration of the search. In forward-checking
    mode, each attempted assignment keeps its own :class:`InferenceLog` that
    is undone whenever the attempt fails.
    """

    def __init__(
        self,
        grid: CrosswordGrid,
        words: Iterable[str],
        config: Optional[SolverConfig] = None,
        trace: Optional[TraceSink] = None,
    ) -> None:
        self.grid = grid
        self.words: Tuple[str, ...] = tuple(words)
        self.config = config or SolverConfig()
        self.trace = trace
        self.domains = DomainStore(grid.variables, self.words)
        self.stats = SearchStats()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def solve(self) -> SolveResult:
        self.domains = DomainStore(self.grid.variables, self.words)
        self.stats = SearchStats()
        started = time.perf_counter()
        limit_reached = False
        assignment: Optional[Assignment] = None

        if not enforce_node_consistency(self.grid, self.domains):
            LOGGER.info("Some variable has no candidate word of the right length")
        elif self.config.backend == Backend.CPSAT:
            assignment = solve_with_cpsat(self.grid, self.domains, timeout=self.config.cpsat_timeout)
        elif self.config.propagation == PropagationMode.AC3 and not ac3(self.grid, self.domains):
            LOGGER.info("Arc consistency left a variable without candidates")
        else:
            try:
                assignment = self.backtrack({})
            except _SearchLimitReached:
                limit_reached = True
                LOGGER.warning(
                    "Search stopped after %d assignments without a verdict",
                    self.stats.assignments_tried,
                )

        self.stats.elapsed_seconds = time.perf_counter() - started
        LOGGER.info(
            "%s after %.3fs (%d variables, %d tried, %d backtracks)",
            "Solution found" if assignment is not None else "No solution",
            self.stats.elapsed_seconds,
            len(self.grid.variables),
            self.stats.assignments_tried,
            self.stats.backtracks,
        )
        return SolveResult(assignment=assignment, stats=self.stats, limit_reached=limit_reached)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def backtrack(self, assignment: Assignment, depth: int = 0) -> Optional[Assignment]:
        if self.assignment_complete(assignment):
            return dict(assignment)

        variable = self.select_unassigned_variable(assignment)
        for word in self.order_domain_values(variable, assignment):
            self._count_attempt()
            self._emit(TraceEventKind.TRY, variable, word, depth)

            if not self.consistent(variable, word, assignment):
                self._emit(TraceEventKind.INCONSISTENT, variable, word, depth)
                continue

            assignment[variable] = word
            inferences = InferenceLog()
            result: Optional[Assignment] = None
            try:
                if self._propagate(variable, word, assignment, inferences):
                    self._emit(TraceEventKind.ASSIGN, variable, word, depth)
                    result = self.backtrack(assignment, depth + 1)
                    if result is not None:
                        return result
                else:
                    self._emit(TraceEventKind.PRUNED, variable, word, depth)
                self.stats.backtracks += 1
                self._emit(TraceEventKind.BACKTRACK, variable, word, depth)
            finally:
                if result is None:
                    inferences.undo(self.domains)
                    del assignment[variable]
        return None

    def assignment_complete(self, assignment: Assignment) -> bool:
        return len(assignment) == len(self.grid.variables)

    def select_unassigned_variable(self, assignment: Assignment) -> Variable:
        """Minimum remaining values, then highest degree, then grid order."""
        unassigned = [v for v in self.grid.variables if v not in assignment]
        return min(
            unassigned,
            key=lambda v: (self.domains.size(v), -self.grid.degree(v), self.grid.order(v)),
        )

    def order_domain_values(self, variable: Variable, assignment: Assignment) -> List[str]:
        """Least constraining value first; ties alphabetical."""
        constraints = []
        for neighbor in self.grid.neighbors(variable):
            if neighbor in assignment:
                continue
            overlap = self.grid.overlap(variable, neighbor)
            if overlap is None:
                continue
            i, j = overlap
            letters = Counter(word[j] for word in self.domains.domain(neighbor))
            constraints.append((i, letters, self.domains.size(neighbor)))

        def ruled_out(word: str) -> int:
            return sum(size - letters[word[i]] for i, letters, size in constraints)

        return sorted(self.domains.values(variable), key=lambda word: (ruled_out(word), word))

    def consistent(self, variable: Variable, word: str, assignment: Assignment) -> bool:
        if len(word) != variable.length:
            return False
        for other, assigned in assignment.items():
            if other != variable and assigned == word:
                return False
        for neighbor in self.grid.neighbors(variable):
            neighbor_word = assignment.get(neighbor)
            if neighbor_word is None:
                continue
            overlap = self.grid.overlap(variable, neighbor)
            if overlap is not None and word[overlap.first] != neighbor_word[overlap.second]:
                return False
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _propagate(
        self,
        variable: Variable,
        word: str,
        assignment: Assignment,
        inferences: InferenceLog,
    ) -> bool:
        if self.config.propagation != PropagationMode.FORWARD_CHECKING:
            return True
        ok = forward_check(self.grid, self.domains, variable, word, assignment, inferences)
        self.stats.inferences += len(inferences)
        return ok

    def _count_attempt(self) -> None:
        self.stats.assignments_tried += 1
        limit = self.config.max_assignments
        if limit is not None and self.stats.assignments_tried > limit:
            raise _SearchLimitReached()

    def _emit(self, kind: TraceEventKind, variable: Variable, word: str, depth: int) -> None:
        if self.trace is not None:
            self.trace.emit(TraceEvent(kind=kind, variable=variable, word=word, depth=depth))


def solve(
    grid: CrosswordGrid,
    dictionary: Iterable[str],
    config: Optional[SolverConfig] = None,
    trace: Optional[TraceSink] = None,
) -> Optional[Assignment]:
    """Fill ``grid`` from ``dictionary``; return the assignment or ``None``."""
    return CrosswordSolver(grid, dictionary, config=config, trace=trace).solve().assignment
