"""Walk parent links back from a finalised cell."""

from __future__ import annotations

from typing import List, Optional

from ...core.cell import Coord
from ...core.context import SearchContext
from .astar import SearchResult


def trace_from(context: SearchContext, coord: Coord) -> List[Coord]:
    """Return the coordinates from ``coord`` back to the cell with no parent.

    Raises ``RuntimeError`` if the walk takes more steps than the grid has
    cells, which means the parent links contain a cycle.
    """

    limit = context.dimension * context.dimension
    path: List[Coord] = []
    current: Optional[Coord] = coord
    while current is not None:
        if len(path) >= limit:
            raise RuntimeError(f"Parent links from {coord} do not terminate")
        cell = context.grid[current]
        if cell is None:
            raise RuntimeError(f"Parent link points at blocked cell {current}")
        path.append(current)
        current = cell.parent
    return path


def trace_path(context: SearchContext, result: SearchResult) -> Optional[List[Coord]]:
    """Return the path from the end cell to the start cell, end first.

    ``None`` means the end cell was never closed, i.e. there is no path.
    """

    if not context.has_endpoints or not result.is_closed(*context.end):
        return None
    path = trace_from(context, context.end)
    if path[-1] != context.start:
        raise RuntimeError(f"Path from {context.end} ends at {path[-1]}, not at start {context.start}")
    return path


def path_cost(context: SearchContext, path: List[Coord]) -> int:
    """Sum of movement costs along ``path``, excluding the start cell."""

    total = 0
    for coord in path[:-1]:
        cell = context.grid[coord]
        if cell is not None:
            total += cell.movement_cost
    return total


__all__ = ["trace_from", "trace_path", "path_cost"]
