"""Deterministic rule validation for filled crosswords."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Set

from ..core.exceptions import ValidationError
from ..core.models import Variable
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger
from .grid import CrosswordGrid


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class AssignmentValidator:
    """Runs deterministic validation over a complete assignment."""

    def __init__(self, grid: CrosswordGrid, dictionary: Optional[WordDictionary] = None) -> None:
        self.grid = grid
        self.dictionary = dictionary

    def validate(self, assignment: Mapping[Variable, str]) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_complete(assignment)
            self._check_lengths(assignment)
            self._check_no_duplicate_words(assignment)
            self._check_overlaps(assignment)
            self._check_dictionary(assignment)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_complete(self, assignment: Mapping[Variable, str]) -> None:
        for variable in self.grid.variables:
            if variable not in assignment:
                raise ValidationError(f"Variable {variable} has no word")
        for variable in assignment:
            if variable not in self.grid:
                raise ValidationError(f"Variable {variable} is not part of the grid")

    def _check_lengths(self, assignment: Mapping[Variable, str]) -> None:
        for variable, word in assignment.items():
            if len(word) != variable.length:
                raise ValidationError(
                    f"Word '{word}' has length {len(word)} but {variable} needs {variable.length}"
                )

    def _check_no_duplicate_words(self, assignment: Mapping[Variable, str]) -> None:
        seen: Set[str] = set()
        for variable, word in assignment.items():
            if word in seen:
                raise ValidationError(f"Duplicate word '{word}' at {variable}")
            seen.add(word)

    def _check_overlaps(self, assignment: Mapping[Variable, str]) -> None:
        for (first, second), overlap in self.grid.overlaps.items():
            if overlap is None:
                continue
            i, j = overlap
            if assignment[first][i] != assignment[second][j]:
                raise ValidationError(
                    f"{first} and {second} disagree at their shared cell "
                    f"('{assignment[first][i]}' vs '{assignment[second][j]}')"
                )

    def _check_dictionary(self, assignment: Mapping[Variable, str]) -> None:
        if self.dictionary is None:
            return
        for variable, word in assignment.items():
            if not self.dictionary.contains(word):
                raise ValidationError(f"Invalid word '{word}' at {variable}")
