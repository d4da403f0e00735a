"""Grid representation: word-slot variables and their letter overlaps."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import FILLABLE_MARK, Bounds, Direction
from ..core.exceptions import StructureError
from ..core.models import Overlap, Variable
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class CrosswordGrid:
    """Immutable crossword structure with its variables and overlaps.

    ``structure`` is a rectangular grid of booleans where ``True`` marks a
    fillable cell. Variables are discovered once, in row-major order with
    DOWN checked before ACROSS at each cell, and that order is the grid's
    canonical variable order.
    """

    def __init__(self, structure: Sequence[Sequence[bool]]) -> None:
        self.structure: Tuple[Tuple[bool, ...], ...] = self._validate(structure)
        self.bounds = Bounds(rows=len(self.structure), cols=len(self.structure[0]))
        self.variables: Tuple[Variable, ...] = tuple(self._find_variables())
        self._order: Dict[Variable, int] = {v: i for i, v in enumerate(self.variables)}
        self._by_id: Dict[str, Variable] = {v.id: v for v in self.variables}
        self.overlaps: Mapping[Tuple[Variable, Variable], Optional[Overlap]] = MappingProxyType(
            self._compute_overlaps()
        )
        self._neighbors: Dict[Variable, Tuple[Variable, ...]] = {
            v: tuple(
                other
                for other in self.variables
                if other != v and self.overlaps[v, other] is not None
            )
            for v in self.variables
        }
        LOGGER.debug(
            "Grid %dx%d: %d variables, %d overlapping pairs",
            self.bounds.rows,
            self.bounds.cols,
            len(self.variables),
            sum(1 for overlap in self.overlaps.values() if overlap is not None) // 2,
        )

    @classmethod
    def from_strings(cls, rows: Sequence[str], fillable: str = FILLABLE_MARK) -> "CrosswordGrid":
        """Build a grid from text rows where ``fillable`` marks an open cell."""
        return cls([[char == fillable for char in row] for row in rows])

    @property
    def height(self) -> int:
        return self.bounds.rows

    @property
    def width(self) -> int:
        return self.bounds.cols

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _validate(structure: Sequence[Sequence[bool]]) -> Tuple[Tuple[bool, ...], ...]:
        rows = [tuple(bool(cell) for cell in row) for row in structure]
        if not rows:
            raise StructureError("Grid structure has no rows")
        width = len(rows[0])
        if width == 0:
            raise StructureError("Grid structure has no columns")
        for index, row in enumerate(rows):
            if len(row) != width:
                raise StructureError(
                    f"Row {index} has {len(row)} cells, expected {width}"
                )
        return tuple(rows)

    def _find_variables(self) -> List[Variable]:
        variables: List[Variable] = []
        for row in range(self.bounds.rows):
            for col in range(self.bounds.cols):
                if not self.structure[row][col]:
                    continue
                for direction in (Direction.DOWN, Direction.ACROSS):
                    dr, dc = direction.step
                    if self.is_fillable(row - dr, col - dc):
                        continue
                    length = 1
                    while self.is_fillable(row + dr * length, col + dc * length):
                        length += 1
                    if length > 1:
                        variables.append(Variable(row, col, direction, length))
        return variables

    def _compute_overlaps(self) -> Dict[Tuple[Variable, Variable], Optional[Overlap]]:
        positions = {
            v: {cell: index for index, cell in enumerate(v.cells)} for v in self.variables
        }
        overlaps: Dict[Tuple[Variable, Variable], Optional[Overlap]] = {}
        for first in self.variables:
            for second in self.variables:
                if first == second:
                    continue
                overlaps[first, second] = self._find_overlap(first, positions[second])
        return overlaps

    @staticmethod
    def _find_overlap(first: Variable, second_positions: Dict[Tuple[int, int], int]) -> Optional[Overlap]:
        for index, cell in enumerate(first.cells):
            other_index = second_positions.get(cell)
            if other_index is not None:
                return Overlap(index, other_index)
        return None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_fillable(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col) and self.structure[row][col]

    def overlap(self, first: Variable, second: Variable) -> Optional[Overlap]:
        """Return the shared-cell indices of two distinct variables, or ``None``."""
        return self.overlaps[first, second]

    def neighbors(self, variable: Variable) -> Tuple[Variable, ...]:
        return self._neighbors[variable]

    def degree(self, variable: Variable) -> int:
        return len(self._neighbors[variable])

    def order(self, variable: Variable) -> int:
        """Position of ``variable`` in grid scan order."""
        return self._order[variable]

    def variable_by_id(self, variable_id: str) -> Optional[Variable]:
        return self._by_id.get(variable_id)

    def __contains__(self, variable: object) -> bool:
        return variable in self._order

    def __len__(self) -> int:
        return len(self.variables)
