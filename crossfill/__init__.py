"""Constraint-satisfaction crossword filler.

This package exposes the public API surface via:

- ``crossfill.engine.grid.CrosswordGrid``: variables and overlaps of a grid.
- ``crossfill.engine.solver.CrosswordSolver`` / ``solve``: backtracking search.
- ``crossfill.data.dictionary.WordDictionary``: loads candidate words.
"""

from .core.constants import Backend, Direction, PropagationMode
from .core.models import Overlap, Variable
from .data.dictionary import DictionaryConfig, WordDictionary
from .engine.grid import CrosswordGrid
from .engine.solver import CrosswordSolver, SolveResult, SolverConfig, solve

__all__ = [
    "Backend",
    "CrosswordGrid",
    "CrosswordSolver",
    "DictionaryConfig",
    "Direction",
    "Overlap",
    "PropagationMode",
    "SolveResult",
    "SolverConfig",
    "Variable",
    "WordDictionary",
    "solve",
]

__version__ = "0.1.0"
