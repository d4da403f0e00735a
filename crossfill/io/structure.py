"""Structure file parsing.

A structure file holds one text row per grid row. ``?`` marks a fillable
cell; any other character is a blocked cell. Trailing blank lines are
ignored, every other row must have the same width.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..core.constants import FILLABLE_MARK
from ..core.exceptions import StructureLoadError
from ..engine.grid import CrosswordGrid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def parse_structure(text: str, fillable: str = FILLABLE_MARK) -> List[List[bool]]:
    rows = text.splitlines()
    while rows and not rows[-1].strip():
        rows.pop()
    if not rows:
        raise StructureLoadError("Structure is empty")

    width = len(rows[0])
    for index, row in enumerate(rows):
        if len(row) != width:
            raise StructureLoadError(
                f"Structure row {index} has {len(row)} cells, expected {width}"
            )
    return [[char == fillable for char in row] for row in rows]


def load_structure(path: Path | str, encoding: str = "utf-8") -> CrosswordGrid:
    source = Path(path)
    if not source.exists():
        raise StructureLoadError(f"Missing structure file: {source}")
    try:
        text = source.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise StructureLoadError(f"Cannot read structure file {source}: {exc}") from exc
    grid = CrosswordGrid(parse_structure(text))
    LOGGER.info(
        "Loaded %dx%d structure from %s with %d variables",
        grid.height,
        grid.width,
        source,
        len(grid.variables),
    )
    return grid
