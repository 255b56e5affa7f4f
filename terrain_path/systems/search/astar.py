"""A* search over the 8-connected terrain grid."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from heapq import heappop, heappush
from typing import Dict, List, Optional, Tuple

from ...core.cell import Cell, Coord
from ...core.context import SearchContext
from ...core.errors import MissingEndpointsError
from ...core.grid import Grid

logger = logging.getLogger(__name__)

FOUND = "found"
NO_PATH = "no_path"
MISSING_ENDPOINTS = "missing_endpoints"


@dataclass
class SearchResult:
    """Outcome of one :func:`run_search` call."""

    status: str  # "found" | "no_path" | "missing_endpoints"
    closed: List[List[bool]] = field(default_factory=list)
    expanded: int = 0
    cost: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.status == FOUND

    def is_closed(self, row: int, col: int) -> bool:
        if not (0 <= row < len(self.closed) and 0 <= col < len(self.closed[row])):
            return False
        return self.closed[row][col]

    def raise_for_status(self) -> "SearchResult":
        if self.status == MISSING_ENDPOINTS:
            raise MissingEndpointsError("start and end cells must be set before searching")
        return self


class SearchState:
    """Open and closed sets for a single search.

    The heap may hold stale entries for cells whose cost was lowered after
    they were pushed; ``queued`` keeps the current priority per coordinate
    and :meth:`pop` drops anything that no longer matches it.
    """

    def __init__(self, dimension: int) -> None:
        self.closed: List[List[bool]] = [[False] * dimension for _ in range(dimension)]
        self.heap: List[Tuple[int, int, Coord]] = []
        self.queued: Dict[Coord, int] = {}

    def admit(self, cell: Cell) -> None:
        self.queued[cell.coord] = cell.total_cost
        heappush(self.heap, (cell.total_cost, cell.path_cost, cell.coord))

    def pop(self) -> Optional[Coord]:
        while self.heap:
            total, _, coord = heappop(self.heap)
            if self.queued.get(coord) != total:
                continue
            del self.queued[coord]
            return coord
        return None

    def is_closed(self, coord: Coord) -> bool:
        return self.closed[coord[0]][coord[1]]

    def close(self, coord: Coord) -> None:
        self.closed[coord[0]][coord[1]] = True


def _estimate(heuristic: int) -> int:
    """Lower bound on the remaining cost for a Manhattan distance.

    A diagonal step reduces the Manhattan distance by up to two while
    costing at least one.
    """

    return (heuristic + 1) // 2


def _relax(state: SearchState, current: Cell, neighbour: Cell, end: Coord) -> None:
    if state.is_closed(neighbour.coord):
        return

    heuristic = neighbour.ensure_heuristic(end)
    path_cost = current.path_cost + neighbour.movement_cost
    total_cost = path_cost + _estimate(heuristic)

    queued = state.queued.get(neighbour.coord)
    if queued is None or total_cost < queued:
        neighbour.relax(current.coord, path_cost, total_cost)
        state.admit(neighbour)


def _expand(grid: Grid, state: SearchState, current: Cell, end: Coord) -> None:
    for neighbour in grid.neighbours(current.row, current.col):
        _relax(state, current, neighbour, end)


def run_search(context: SearchContext, dimension: int | None = None) -> SearchResult:
    """Compute optimal costs and parent links from the start cell.

    Stops as soon as the end cell is finalised or the frontier runs dry.
    Every call works on fresh open/closed sets; only cell costs and parents
    are written back into ``context.grid``.
    """

    if not context.has_endpoints:
        logger.warning("Search skipped: start or end cell has not been set.")
        return SearchResult(status=MISSING_ENDPOINTS)

    size = context.dimension if dimension is None else dimension
    if size != context.dimension:
        raise ValueError(
            f"Search dimension {size} does not match the {context.dimension}x{context.dimension} grid"
        )

    grid = context.grid
    state = SearchState(size)
    start = grid[context.start]
    if start is None or grid[context.end] is None:
        logger.warning("Start %s or end %s lies on impassable terrain.", context.start, context.end)
        return SearchResult(status=NO_PATH, closed=state.closed)

    start.ensure_heuristic(context.end)
    start.relax(None, 0, 0)
    state.admit(start)

    expanded = 0
    while True:
        coord = state.pop()
        if coord is None:
            logger.info("Frontier exhausted after %d expansions; end %s unreachable.", expanded, context.end)
            return SearchResult(status=NO_PATH, closed=state.closed, expanded=expanded)

        state.close(coord)
        expanded += 1
        current = grid[coord]
        logger.debug("Expanding %s (path cost %d, total %d)", current, current.path_cost, current.total_cost)

        if coord == context.end:
            logger.info("Reached end %s with cost %d after %d expansions.", coord, current.path_cost, expanded)
            return SearchResult(
                status=FOUND, closed=state.closed, expanded=expanded, cost=current.path_cost
            )

        _expand(grid, state, current, context.end)


__all__ = [
    "FOUND",
    "NO_PATH",
    "MISSING_ENDPOINTS",
    "SearchResult",
    "SearchState",
    "run_search",
]
