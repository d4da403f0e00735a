"""Data models supporting the crossword solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, NamedTuple, Tuple

from .constants import Direction


class Overlap(NamedTuple):
    """Shared cell between two variables, as an index into each cell list."""

    first: int
    second: int


@dataclass(frozen=True)
class Variable:
    """A maximal horizontal or vertical run of fillable cells."""

    row: int
    col: int
    direction: Direction
    length: int
    cells: Tuple[Tuple[int, int], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.length < 2:
            raise ValueError(f"Variables need at least two cells, got length {self.length}")
        dr, dc = self.direction.step
        cells = tuple((self.row + dr * k, self.col + dc * k) for k in range(self.length))
        object.__setattr__(self, "cells", cells)

    @property
    def id(self) -> str:
        return f"{self.row}-{self.col}-{self.direction.value.lower()}-{self.length}"

    def __str__(self) -> str:
        return self.id


Assignment = Dict[Variable, str]
