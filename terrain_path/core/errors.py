"""Error types raised or reported while loading, searching and marking maps."""

from __future__ import annotations


class TerrainPathError(Exception):
    """Base class for all terrain_path failures."""


class MapIOError(TerrainPathError):
    """A map file could not be opened, read or written."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class MalformedMapError(TerrainPathError):
    """Parsing stopped at a character outside the terrain alphabet."""

    def __init__(self, row: int, col: int, char: str, reason: str = "unknown terrain marker") -> None:
        super().__init__(f"{reason} {char!r} at row {row}, column {col}")
        self.row = row
        self.col = col
        self.char = char


class MissingEndpointsError(TerrainPathError):
    """A search was requested before both the start and end cells were set."""


__all__ = [
    "TerrainPathError",
    "MapIOError",
    "MalformedMapError",
    "MissingEndpointsError",
]
