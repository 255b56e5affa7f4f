"""Write the resolved path back into a copy of the map file."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from ..core.cell import Coord
from ..core.context import SearchContext
from ..core.errors import MapIOError
from ..systems.search.astar import SearchResult
from ..systems.search.path import trace_path

logger = logging.getLogger(__name__)

PATH_MARKER = "#"
CRLF_WIDTH = 2

# Bytes a path offset must never land on; b"" is past the end of the file.
_NOT_A_CELL = (b"\r", b"\n", b"")


def cell_offset(row: int, col: int, dimension: int, terminator_width: int = CRLF_WIDTH) -> int:
    """Byte offset of ``(row, col)`` in a map whose lines are ``dimension`` wide."""

    return row * (dimension + terminator_width) + col


def path_offsets(
    context: SearchContext, path: Sequence[Coord], mark_end: bool = False
) -> List[int]:
    """Offsets to overwrite for ``path`` (end first, start last).

    The start cell is always included; the end cell only with ``mark_end``.
    """

    if mark_end:
        coords: Iterable[Coord] = path
    else:
        coords = [c for c in path if c != context.end or c == context.start]
    return [
        cell_offset(row, col, context.dimension, context.terminator_width)
        for row, col in coords
    ]


def _marker_byte(marker: str) -> bytes:
    try:
        data = marker.encode("ascii")
    except UnicodeEncodeError:
        data = b""
    if len(data) != 1:
        raise ValueError(f"Path marker must be a single ASCII character, got {marker!r}")
    return data


def copy_map(src: Union[str, Path], dst: Union[str, Path]) -> Path:
    """Copy the map at ``src`` to ``dst`` and return ``dst``."""

    dst = Path(dst)
    try:
        shutil.copyfile(src, dst)
    except OSError as exc:
        logger.error("Error copying map %s to %s: %s", src, dst, exc)
        raise MapIOError(dst, str(exc)) from exc
    return dst


def mark_shortest_path(
    context: SearchContext,
    result: SearchResult,
    target: Union[str, Path, None] = None,
    path: Optional[Sequence[Coord]] = None,
    marker: str = PATH_MARKER,
    mark_end: bool = False,
) -> List[int]:
    """Overwrite the path cells of ``target`` with ``marker`` in place.

    ``target`` defaults to ``context.source``. Returns the offsets written;
    an empty list means there was no path and the file was left untouched.
    """

    if path is None:
        path = trace_path(context, result)
    if path is None:
        logger.info("No possible path from %s to %s.", context.start, context.end)
        return []

    target = Path(target) if target is not None else context.source
    if target is None:
        raise MapIOError("<none>", "no output file to mark")

    data = _marker_byte(marker)
    offsets = path_offsets(context, path, mark_end=mark_end)
    try:
        with open(target, "r+b") as fh:
            # Validate all offsets before the first write.
            for offset in offsets:
                fh.seek(offset)
                if fh.read(1) in _NOT_A_CELL:
                    raise MapIOError(target, f"offset {offset} is not a terrain cell; map layout does not match")
            for offset in offsets:
                fh.seek(offset)
                fh.write(data)
    except OSError as exc:
        logger.error("Error marking path in %s: %s", target, exc)
        raise MapIOError(target, str(exc)) from exc

    logger.info("Marked %d path cells in %s", len(offsets), target)
    return offsets


def write_annotated_copy(
    context: SearchContext,
    result: SearchResult,
    output: Union[str, Path],
    marker: str = PATH_MARKER,
    mark_end: bool = False,
) -> List[int]:
    """Copy ``context.source`` to ``output`` and mark the path in the copy."""

    if context.source is None:
        raise MapIOError(output, "context has no source map to copy")
    _marker_byte(marker)
    copy_map(context.source, output)
    return mark_shortest_path(context, result, target=output, marker=marker, mark_end=mark_end)


def annotate_text(
    text: str,
    context: SearchContext,
    path: Sequence[Coord],
    marker: str = PATH_MARKER,
    mark_end: bool = False,
) -> str:
    """Return ``text`` with the path cells replaced by ``marker``."""

    _marker_byte(marker)
    chars = list(text)
    for offset in path_offsets(context, path, mark_end=mark_end):
        if offset >= len(chars):
            raise ValueError(f"Offset {offset} is past the end of the map text")
        chars[offset] = marker
    return "".join(chars)


__all__ = [
    "PATH_MARKER",
    "cell_offset",
    "path_offsets",
    "copy_map",
    "mark_shortest_path",
    "write_annotated_copy",
    "annotate_text",
]
