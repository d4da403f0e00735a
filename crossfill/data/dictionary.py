"""Word list loading and length-indexed candidate retrieval."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Set

from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .normalization import normalize_word


LOGGER = get_logger(__name__)


@dataclass
class DictionaryConfig:
    """Configuration for dictionary loading and filtering."""

    path: Path | str
    min_length: int = 2
    max_length: Optional[int] = None
    encoding: str = "utf-8"


class WordDictionary:
    """Holds the distinct, upper-cased words available to the solver.

    The file format is one word per line. Blank lines and lines starting
    with ``#`` are ignored, and duplicates differing only in case collapse
    to a single entry.
    """

    def __init__(self, config: Optional[DictionaryConfig] = None) -> None:
        self.config = config
        self._surfaces: Set[str] = set()
        self._surfaces_by_length: Dict[int, Set[str]] = defaultdict(set)
        if config is not None:
            self._load()

    @classmethod
    def from_words(
        cls,
        words: Iterable[str],
        min_length: int = 2,
        max_length: Optional[int] = None,
    ) -> "WordDictionary":
        dictionary = cls()
        dictionary._hydrate(words, min_length, max_length)
        return dictionary

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _load(self) -> None:
        assert self.config is not None
        source = Path(self.config.path)
        if not source.exists():
            raise DictionaryLoadError(f"Missing word list: {source}")
        try:
            text = source.read_text(encoding=self.config.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise DictionaryLoadError(f"Cannot read word list {source}: {exc}") from exc

        lines = [line for line in text.splitlines() if not line.strip().startswith("#")]
        self._hydrate(lines, self.config.min_length, self.config.max_length)
        if not self._surfaces:
            raise DictionaryLoadError(f"Word list {source} contains no usable words")
        LOGGER.info("Loaded %d distinct words from %s", len(self._surfaces), source)

    def _hydrate(
        self,
        words: Iterable[str],
        min_length: int,
        max_length: Optional[int],
    ) -> None:
        for raw in words:
            surface = normalize_word(raw)
            if not surface:
                continue
            if len(surface) < min_length:
                continue
            if max_length is not None and len(surface) > max_length:
                continue
            self._surfaces.add(surface)
            self._surfaces_by_length[len(surface)].add(surface)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def contains(self, word: str) -> bool:
        return normalize_word(word) in self._surfaces

    def words_of_length(self, length: int) -> Set[str]:
        """Return a fresh set of all words with exactly ``length`` letters."""
        return set(self._surfaces_by_length.get(length, ()))

    def lengths(self) -> List[int]:
        return sorted(length for length, words in self._surfaces_by_length.items() if words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._surfaces))

    def __len__(self) -> int:
        return len(self._surfaces)
