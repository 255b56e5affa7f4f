"""ASCII console reports for terrain grids and search results."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO

from ...core.cell import Coord
from ...core.context import SearchContext
from ...systems.search.astar import SearchResult


# Basic ANSI colour codes used by :class:`TerminalView`
_COLOURS = {
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "reset": "\x1b[0m",
}

_TAG_COLOURS = {
    "SO": "green",
    "DE": "red",
    "BL": "blue",
}


class TerminalView:
    """Writes grid, cost and path reports to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None, colour: bool = False) -> None:
        self._stream = stream
        self.colour = colour
        self.enabled: bool = True

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def toggle(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled

    def render_grid(self, context: SearchContext) -> None:
        """Dump the terrain before searching: source, destination and blocks."""

        lines = []
        for r, row in enumerate(context.grid.cells):
            tags = []
            for c, cell in enumerate(row):
                if context.start_set and (r, c) == context.start:
                    tags.append(self._tag("SO"))
                elif context.end_set and (r, c) == context.end:
                    tags.append(self._tag("DE"))
                elif cell is not None:
                    tags.append(f"{0:<3d} ")
                else:
                    tags.append(self._tag("BL"))
            lines.append("".join(tags))
        self._write("Grid:", lines)

    def render_costs(self, context: SearchContext, result: SearchResult) -> None:
        """Dump the finalised path cost of every cell closed by ``result``.

        Passable cells the search never closed print as ``--``.
        """

        lines = []
        for r, row in enumerate(context.grid.cells):
            tags = []
            for c, cell in enumerate(row):
                if cell is None:
                    tags.append(self._tag("BL"))
                elif result.is_closed(r, c):
                    tags.append(f"{cell.path_cost:<3d} ")
                else:
                    tags.append("--  ")
            lines.append("".join(tags))
        self._write("Scores for cells:", lines)

    def render_path(self, path: Optional[Sequence[Coord]]) -> None:
        """Print the path end first, or the no-path message."""

        if path is None:
            self._write("No possible path", [])
            return
        trace = " -> ".join(f"[{r}, {c}]" for r, c in path)
        self._write("Path:", [trace])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _tag(self, tag: str) -> str:
        text = f"{tag}  "
        if not self.colour:
            return text
        return f"{_COLOURS[_TAG_COLOURS[tag]]}{text}{_COLOURS['reset']}"

    def _write(self, title: str, lines: Sequence[str]) -> None:
        if not self.enabled:
            return
        out = self.stream
        out.write(f"\n{title}\n")
        for line in lines:
            out.write(line.rstrip() + "\n")
        out.flush()


_view = TerminalView()


def get_view() -> TerminalView:
    """Return the shared :class:`TerminalView` instance."""

    return _view


__all__ = ["TerminalView", "get_view"]
