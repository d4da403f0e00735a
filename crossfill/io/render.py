"""Rendering and saving solved crosswords."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from ..core.constants import BLOCKED_SYMBOL
from ..core.models import Variable
from ..engine.grid import CrosswordGrid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def letter_grid(grid: CrosswordGrid, assignment: Mapping[Variable, str]) -> List[List[Optional[str]]]:
    """Return a ``height x width`` matrix of placed letters (``None`` if unset)."""
    letters: List[List[Optional[str]]] = [[None] * grid.width for _ in range(grid.height)]
    for variable, word in assignment.items():
        for (r, c), letter in zip(variable.cells, word):
            letters[r][c] = letter
    return letters


def format_solution(grid: CrosswordGrid, assignment: Mapping[Variable, str]) -> str:
    """Blocked cells as ``.``, fillable cells as their letter or a space."""
    letters = letter_grid(grid, assignment)
    lines = []
    for r in range(grid.height):
        row = "".join(
            (letters[r][c] or " ") if grid.is_fillable(r, c) else BLOCKED_SYMBOL
            for c in range(grid.width)
        )
        lines.append(row)
    return "\n".join(lines)


def format_grid(grid: CrosswordGrid, assignment: Mapping[Variable, str]) -> str:
    """Boxed rendering with column and row headers, for terminals."""
    letters = letter_grid(grid, assignment)
    width = grid.width
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(grid.height):
        row_cells = [
            (letters[r][c] or "_") if grid.is_fillable(r, c) else "#" for c in range(width)
        ]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_solution(
    grid: CrosswordGrid,
    assignment: Mapping[Variable, str],
    *,
    label: str | None = None,
    stream=None,
) -> None:
    """Print the filled grid followed by the word list."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid, assignment), file=stream)
    print(file=stream)
    for variable in grid.variables:
        word = assignment.get(variable)
        if word is not None:
            print(f"  {variable.id:<20} {word}", file=stream)


def save_solution(grid: CrosswordGrid, assignment: Mapping[Variable, str], path: Path | str) -> Path:
    destination = Path(path)
    destination.write_text(format_solution(grid, assignment), encoding="utf-8")
    LOGGER.info("Solution saved to %s", destination)
    return destination


def save_steps(lines: Iterable[str], path: Path | str) -> Path:
    destination = Path(path)
    destination.write_text("\n".join(lines), encoding="utf-8")
    LOGGER.info("Solver steps saved to %s", destination)
    return destination
