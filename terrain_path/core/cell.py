"""Cell value type and the terrain alphabet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

Coord = Tuple[int, int]  # (row, col)

START_MARKER = "@"
END_MARKER = "X"
BLOCKED_MARKER = "~"

FLATLAND_COST = 1
FOREST_COST = 2
MOUNTAIN_COST = 3

# Marker -> movement cost; ``None`` marks impassable water.
TERRAIN_COSTS: Dict[str, Optional[int]] = {
    BLOCKED_MARKER: None,
    START_MARKER: FLATLAND_COST,
    END_MARKER: FLATLAND_COST,
    ".": FLATLAND_COST,
    "*": FOREST_COST,
    "^": MOUNTAIN_COST,
}

# Inverse mapping used when rendering plain terrain back to text.
COST_MARKERS: Dict[int, str] = {
    FLATLAND_COST: ".",
    FOREST_COST: "*",
    MOUNTAIN_COST: "^",
}


def manhattan(a: Coord, b: Coord) -> int:
    """Return the Manhattan distance between two grid coordinates."""

    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class Cell:
    """One passable grid position.

    ``heuristic_cost`` is ``None`` until the distance to the end cell is
    known. ``parent`` holds the coordinate of the predecessor on the best
    known path rather than a reference to another cell.
    """

    row: int
    col: int
    movement_cost: int
    heuristic_cost: Optional[int] = None
    path_cost: int = 0
    total_cost: int = 0
    parent: Optional[Coord] = None

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    def ensure_heuristic(self, end: Coord) -> int:
        """Compute the heuristic on first use and return it."""

        if self.heuristic_cost is None:
            self.heuristic_cost = manhattan(self.coord, end)
        return self.heuristic_cost

    def relax(self, parent: Optional[Coord], path_cost: int, total_cost: int) -> None:
        """Record a better route to this cell.

        Parent and costs always change together.
        """

        self.parent = parent
        self.path_cost = path_cost
        self.total_cost = total_cost

    def __str__(self) -> str:
        return f"[{self.row}, {self.col}]"


__all__ = [
    "Cell",
    "Coord",
    "TERRAIN_COSTS",
    "COST_MARKERS",
    "START_MARKER",
    "END_MARKER",
    "BLOCKED_MARKER",
    "FLATLAND_COST",
    "FOREST_COST",
    "MOUNTAIN_COST",
    "manhattan",
]
