"""Turn flat text maps into a populated :class:`SearchContext`."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO, Union

from ..core.cell import (
    BLOCKED_MARKER,
    COST_MARKERS,
    END_MARKER,
    START_MARKER,
    TERRAIN_COSTS,
    Cell,
)
from ..core.context import SearchContext
from ..core.errors import MalformedMapError, MapIOError, TerrainPathError
from ..core.grid import Grid

logger = logging.getLogger(__name__)

_TERMINATOR_RE = re.compile(r"\r\n|\r|\n")


@dataclass
class ParseResult:
    """Context built from a map plus the error that stopped parsing, if any.

    On error the context is still returned, populated up to the point of
    failure, so callers can decide whether a partial grid is usable.
    """

    context: SearchContext
    error: Optional[TerrainPathError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> SearchContext:
        if self.error is not None:
            raise self.error
        return self.context


def count_lines(text: str) -> int:
    """Return the number of lines in ``text``.

    ``\\r\\n``, ``\\r`` and ``\\n`` each end one line; a trailing line
    without a terminator still counts.
    """

    terminators = _TERMINATOR_RE.findall(text)
    count = len(terminators)
    if text and not text.endswith(("\r", "\n")):
        count += 1
    return count


def _terminator_width(text: str) -> int:
    if "\r\n" in text:
        return 2
    if "\r" in text or "\n" in text:
        return 1
    return 2


def _short_row(grid: Grid, row: int, col: int, char: str) -> MalformedMapError:
    return MalformedMapError(
        row, col, char, reason=f"row ends after {col} of {grid.dimension} cells:"
    )


def _populate(context: SearchContext, text: str) -> Optional[MalformedMapError]:
    grid = context.grid
    row = 0
    col = 0
    prev = ""
    for char in text:
        if char == "\r":
            if col != grid.dimension:
                return _short_row(grid, row, col, char)
            row += 1
            col = 0
        elif char == "\n":
            # \r\n was already counted on the \r
            if prev != "\r":
                if col != grid.dimension:
                    return _short_row(grid, row, col, char)
                row += 1
            col = 0
        else:
            if char not in TERRAIN_COSTS:
                return MalformedMapError(row, col, char)
            if not grid.in_bounds(row, col):
                return MalformedMapError(
                    row, col, char, reason=f"cell outside the {grid.dimension}x{grid.dimension} grid:"
                )
            cost = TERRAIN_COSTS[char]
            if cost is not None:
                cell = Cell(row, col, cost)
                if char == START_MARKER:
                    if context.start_set:
                        logger.warning("Start marker repeated at (%d, %d); using the later one.", row, col)
                    context.set_start_cell(row, col)
                    cell.total_cost = 0
                elif char == END_MARKER:
                    if context.end_set:
                        logger.warning("End marker repeated at (%d, %d); using the later one.", row, col)
                    context.set_end_cell(row, col)
                if context.end_set:
                    cell.ensure_heuristic(context.end)
                grid.place(cell)
            col += 1
        prev = char
    if col and col != grid.dimension:
        return _short_row(grid, row, col, "")
    return None


def parse_map(source: Union[str, TextIO]) -> ParseResult:
    """Parse map text (or a text stream) into a :class:`ParseResult`.

    Streams should be opened with ``newline=""`` so that ``\\r\\n``
    terminators reach the parser unchanged.
    """

    text = source if isinstance(source, str) else source.read()
    dimension = count_lines(text)
    logger.info("Terrain square dimension: %d", dimension)

    context = SearchContext(dimension)
    context.terminator_width = _terminator_width(text)
    error = _populate(context, text)
    if error is not None:
        logger.warning("Map parsing stopped early: %s", error)
    return ParseResult(context=context, error=error)


def load_map(path: Union[str, Path], encoding: str = "utf-8") -> ParseResult:
    """Read and parse the map file at ``path``.

    Read failures are logged and returned as :class:`MapIOError` together
    with an empty context.
    """

    path = Path(path)
    try:
        with open(path, "r", encoding=encoding, newline="") as fh:
            result = parse_map(fh)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error reading map %s: %s", path, exc)
        return ParseResult(context=SearchContext(0, source=path), error=MapIOError(path, str(exc)))
    result.context.source = path
    return result


def serialize_map(context: SearchContext, terminator: str = "\r\n") -> str:
    """Render ``context`` back to marker text, one terminated line per row."""

    lines = []
    for r, row in enumerate(context.grid.cells):
        chars = []
        for c, cell in enumerate(row):
            if cell is None:
                chars.append(BLOCKED_MARKER)
            elif context.start_set and (r, c) == context.start:
                chars.append(START_MARKER)
            elif context.end_set and (r, c) == context.end:
                chars.append(END_MARKER)
            else:
                chars.append(COST_MARKERS[cell.movement_cost])
        lines.append("".join(chars) + terminator)
    return "".join(lines)


__all__ = ["ParseResult", "count_lines", "parse_map", "load_map", "serialize_map"]
