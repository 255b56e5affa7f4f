"""Square terrain grid holding optional cells."""

from __future__ import annotations

from typing import Iterator, List, Optional

from .cell import Cell, Coord

# Row/column deltas of the eight surrounding cells.
NEIGHBOUR_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class Grid:
    """``dimension`` x ``dimension`` map of cells; ``None`` is impassable."""

    def __init__(self, dimension: int) -> None:
        if dimension < 0:
            raise ValueError(f"Grid dimension must not be negative: {dimension}")
        self.dimension = dimension
        self.cells: List[List[Optional[Cell]]] = [
            [None for _ in range(dimension)] for _ in range(dimension)
        ]

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.dimension and 0 <= col < self.dimension

    def get(self, row: int, col: int) -> Optional[Cell]:
        """Return the cell at ``(row, col)`` or ``None`` when blocked."""

        if not self.in_bounds(row, col):
            raise IndexError(f"({row}, {col}) is outside a {self.dimension}x{self.dimension} grid")
        return self.cells[row][col]

    def __getitem__(self, coord: Coord) -> Optional[Cell]:
        return self.get(*coord)

    def place(self, cell: Cell) -> None:
        self.get(cell.row, cell.col)  # bounds check
        self.cells[cell.row][cell.col] = cell

    def set_blocked(self, row: int, col: int) -> None:
        self.get(row, col)
        self.cells[row][col] = None

    def is_blocked(self, row: int, col: int) -> bool:
        return self.get(row, col) is None

    # ------------------------------------------------------------------
    # Traversal helpers
    # ------------------------------------------------------------------
    def neighbours(self, row: int, col: int) -> Iterator[Cell]:
        """Yield the passable 8-connected neighbours of ``(row, col)``."""

        for dr, dc in NEIGHBOUR_OFFSETS:
            r, c = row + dr, col + dc
            if not self.in_bounds(r, c):
                continue
            cell = self.cells[r][c]
            if cell is not None:
                yield cell

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            for cell in row:
                if cell is not None:
                    yield cell


__all__ = ["Grid", "NEIGHBOUR_OFFSETS"]
