"""Per-map state shared by the parser, search engine and annotator."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .cell import Cell, Coord
from .grid import Grid


class SearchContext:
    """Grid plus endpoints for one map.

    Replaces process-wide start/end state: every map gets its own context,
    so independent searches never share anything.
    """

    def __init__(self, dimension: int = 0, source: Optional[Path] = None) -> None:
        self.grid = Grid(dimension)
        self.source = source
        self.terminator_width: int = 2
        self.start: Coord = (0, 0)
        self.end: Coord = (0, 0)
        self.start_set: bool = False
        self.end_set: bool = False

    @property
    def dimension(self) -> int:
        return self.grid.dimension

    @property
    def has_endpoints(self) -> bool:
        return self.start_set and self.end_set

    # ------------------------------------------------------------------
    # Seams used by drivers and tests
    # ------------------------------------------------------------------
    def set_blocked(self, row: int, col: int) -> None:
        self.grid.set_blocked(row, col)

    def set_start_cell(self, row: int, col: int) -> None:
        self.grid.get(row, col)  # bounds check
        self.start = (row, col)
        self.start_set = True

    def set_end_cell(self, row: int, col: int) -> None:
        self.grid.get(row, col)
        if self.end_set and self.end != (row, col):
            # Distances to the old end are stale.
            for cell in self.grid:
                cell.heuristic_cost = None
        self.end = (row, col)
        self.end_set = True

    def start_cell(self) -> Optional[Cell]:
        return self.grid[self.start] if self.start_set else None

    def end_cell(self) -> Optional[Cell]:
        return self.grid[self.end] if self.end_set else None


__all__ = ["SearchContext"]
