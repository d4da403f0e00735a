"""Per-variable candidate word sets owned by the search engine."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Set

from ..core.exceptions import DomainError
from ..core.models import Variable
from ..data.normalization import normalize_word


class DomainStore:
    """Mutable candidate sets, one per variable.

    Domains start as every distinct dictionary word of the variable's length
    and afterwards only shrink through :meth:`remove`. :meth:`restore` puts
    back values that propagation removed while exploring a failed branch.
    """

    def __init__(self, variables: Iterable[Variable], words: Iterable[str]) -> None:
        by_length: Dict[int, Set[str]] = defaultdict(set)
        for raw in words:
            surface = normalize_word(raw)
            if surface:
                by_length[len(surface)].add(surface)
        self._domains: Dict[Variable, Set[str]] = {
            variable: set(by_length.get(variable.length, ())) for variable in variables
        }

    @classmethod
    def from_domains(cls, domains: Dict[Variable, Iterable[str]]) -> "DomainStore":
        """Build a store from explicit candidate sets, without length filtering."""
        store = cls((), ())
        store._domains = {
            variable: {normalize_word(word) for word in words if word}
            for variable, words in domains.items()
        }
        return store

    def domain(self, variable: Variable) -> FrozenSet[str]:
        return frozenset(self._domains[variable])

    def values(self, variable: Variable) -> List[str]:
        """Domain values in a stable (alphabetical) order."""
        return sorted(self._domains[variable])

    def size(self, variable: Variable) -> int:
        return len(self._domains[variable])

    def is_empty(self, variable: Variable) -> bool:
        return not self._domains[variable]

    def contains(self, variable: Variable, word: str) -> bool:
        return word in self._domains[variable]

    def remove(self, variable: Variable, word: str) -> None:
        self._domains[variable].remove(word)

    def discard_many(self, variable: Variable, words: Iterable[str]) -> List[str]:
        """Remove every present value in ``words``; return the ones removed."""
        domain = self._domains[variable]
        removed = [word for word in words if word in domain]
        for word in removed:
            self.remove(variable, word)
        return removed

    def restore(self, variable: Variable, words: Iterable[str]) -> None:
        domain = self._domains[variable]
        for word in words:
            if len(word) != variable.length:
                raise DomainError(
                    f"Cannot restore '{word}' into {variable}: expected length {variable.length}"
                )
            domain.add(word)

    def snapshot(self) -> Dict[Variable, FrozenSet[str]]:
        return {variable: frozenset(domain) for variable, domain in self._domains.items()}

    def __contains__(self, variable: object) -> bool:
        return variable in self._domains

    def __len__(self) -> int:
        return len(self._domains)
