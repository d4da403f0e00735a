"""Custom exception hierarchy for crossword solving."""


class CrosswordError(Exception):
    """Base exception for solver failures."""


class StructureError(CrosswordError):
    """Raised when a grid structure is not a rectangular grid of cells."""


class StructureLoadError(StructureError):
    """Raised when the structure file cannot be read."""


class DictionaryLoadError(CrosswordError):
    """Raised when the word list cannot be parsed."""


class DomainError(CrosswordError):
    """Raised when a domain update would break the store invariants."""


class SolverError(CrosswordError):
    """Raised when the solver is misconfigured or a backend fails."""


class ValidationError(CrosswordError):
    """Raised when the assignment integrity checks fail."""
