"""CP-SAT crossword filling backend using OR-Tools."""

from __future__ import annotations

import string
from collections import defaultdict
from itertools import combinations
from typing import Dict, List, Optional, Tuple

from ortools.sat.python import cp_model

from ..core.exceptions import SolverError
from ..core.models import Assignment, Variable
from ..utils.logger import get_logger
from .domains import DomainStore
from .grid import CrosswordGrid

LOGGER = get_logger(__name__)

ALPHABET = string.ascii_uppercase


def solve_with_cpsat(
    grid: CrosswordGrid,
    domains: DomainStore,
    timeout: float = 30.0,
) -> Optional[Assignment]:
    """Fill every variable of ``grid`` from ``domains`` via CP-SAT.

    Each fillable cell covered by a variable becomes a letter variable in
    ``0..25``; each variable is tied to its domain with a table constraint
    and same-length variables are forced to differ in at least one position.
    Only words spelled with ``A-Z`` can be expressed; others are skipped.

    Returns the assignment, or ``None`` when the model is infeasible.
    Raises :class:`SolverError` if the time limit expires undecided.
    """
    if not grid.variables:
        return {}

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Cell letter variables
    # ------------------------------------------------------------------
    cell_vars: Dict[Tuple[int, int], cp_model.IntVar] = {}
    for variable in grid.variables:
        for r, c in variable.cells:
            if (r, c) not in cell_vars:
                cell_vars[(r, c)] = model.new_int_var(0, len(ALPHABET) - 1, f"L_{r}_{c}")

    # ------------------------------------------------------------------
    # Step 2: Per-variable table constraints
    # ------------------------------------------------------------------
    for variable in grid.variables:
        tuples: List[List[int]] = []
        for word in domains.values(variable):
            if len(word) != variable.length or any(ch not in ALPHABET for ch in word):
                LOGGER.debug("CP-SAT skips '%s' for %s", word, variable)
                continue
            tuples.append([ALPHABET.index(ch) for ch in word])
        if not tuples:
            LOGGER.debug("No expressible candidates for %s", variable)
            return None
        model.add_allowed_assignments([cell_vars[cell] for cell in variable.cells], tuples)

    # ------------------------------------------------------------------
    # Step 3: Uniqueness constraints
    # ------------------------------------------------------------------
    by_length: Dict[int, List[Variable]] = defaultdict(list)
    for variable in grid.variables:
        by_length[variable.length].append(variable)

    for group in by_length.values():
        for first, second in combinations(group, 2):
            _add_differ_constraint(model, cell_vars, first, second)

    # ------------------------------------------------------------------
    # Step 4: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 1

    LOGGER.info(
        "CP-SAT: %d variables, %d cell vars, solving (timeout=%0.1fs)...",
        len(grid.variables),
        len(cell_vars),
        timeout,
    )

    status = solver.solve(model)

    if status == cp_model.INFEASIBLE:
        LOGGER.info("CP-SAT: no solution exists")
        return None
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        raise SolverError(f"CP-SAT stopped without a verdict (status={solver.status_name(status)})")

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)

    # ------------------------------------------------------------------
    # Step 5: Extract solution
    # ------------------------------------------------------------------
    return {
        variable: "".join(ALPHABET[solver.value(cell_vars[cell])] for cell in variable.cells)
        for variable in grid.variables
    }


def _add_differ_constraint(
    model: cp_model.CpModel,
    cell_vars: Dict[Tuple[int, int], cp_model.IntVar],
    first: Variable,
    second: Variable,
) -> None:
    """Ensure two same-length variables cannot hold identical words."""
    diffs = []
    for pos, (cell_a, cell_b) in enumerate(zip(first.cells, second.cells)):
        if cell_a == cell_b:
            continue  # Shared cell, can never differ
        v1 = cell_vars[cell_a]
        v2 = cell_vars[cell_b]
        b = model.new_bool_var(f"d_{first.id}_{second.id}_{pos}")
        model.add(v1 != v2).only_enforce_if(b)
        model.add(v1 == v2).only_enforce_if(~b)
        diffs.append(b)
    if diffs:
        model.add_bool_or(diffs)
