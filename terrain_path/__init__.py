"""Lowest-cost paths across text terrain maps."""

from .core.cell import Cell, Coord
from .core.context import SearchContext
from .core.errors import MalformedMapError, MapIOError, MissingEndpointsError, TerrainPathError
from .core.grid import Grid
from .persistence.map_reader import ParseResult, count_lines, load_map, parse_map, serialize_map
from .persistence.map_writer import (
    annotate_text,
    cell_offset,
    copy_map,
    mark_shortest_path,
    write_annotated_copy,
)
from .systems.search.astar import SearchResult, run_search
from .systems.search.path import trace_path

__all__ = [
    "Cell",
    "Coord",
    "Grid",
    "SearchContext",
    "TerrainPathError",
    "MapIOError",
    "MalformedMapError",
    "MissingEndpointsError",
    "ParseResult",
    "count_lines",
    "parse_map",
    "load_map",
    "serialize_map",
    "SearchResult",
    "run_search",
    "trace_path",
    "cell_offset",
    "copy_map",
    "mark_shortest_path",
    "write_annotated_copy",
    "annotate_text",
]
