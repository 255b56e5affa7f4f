from .cell import Cell, Coord
from .context import SearchContext
from .errors import MalformedMapError, MapIOError, MissingEndpointsError, TerrainPathError
from .grid import Grid

__all__ = [
    "Cell",
    "Coord",
    "Grid",
    "SearchContext",
    "TerrainPathError",
    "MapIOError",
    "MalformedMapError",
    "MissingEndpointsError",
]
