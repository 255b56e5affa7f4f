"""Implementations of the interactive shell commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from ...config import Config
from ...core.cell import Coord
from ...core.context import SearchContext
from ...core.errors import TerrainPathError
from ...persistence.map_reader import load_map
from ...persistence.map_writer import write_annotated_copy
from ...systems.search.astar import SearchResult, run_search
from ...systems.search.path import trace_path
from .terminal_view import TerminalView, get_view

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """State the shell carries between commands."""

    config: Config = field(default_factory=Config)
    view: TerminalView = field(default_factory=get_view)
    context: Optional[SearchContext] = None
    result: Optional[SearchResult] = None
    path: Optional[List[Coord]] = None


def default_output_path(source: Path, suffix: str) -> Path:
    """``maps/large.txt`` -> ``maps/large.path.txt`` for suffix ``.path``."""
    return source.with_name(f"{source.stem}{suffix}{source.suffix}")


def _coords(args: List[str]) -> Optional[tuple[int, int]]:
    if len(args) < 2:
        return None
    try:
        return int(args[0]), int(args[1])
    except ValueError:
        return None


def _require_context(session: Session) -> Optional[SearchContext]:
    if session.context is None:
        logger.error("No map loaded. Use /load <path> first.")
    return session.context


def load(session: Session, path: str) -> bool:
    result = load_map(path, encoding=session.config.map.encoding)
    session.context = result.context
    session.result = None
    session.path = None
    if not result.ok:
        logger.error("Map %s loaded with errors: %s", path, result.error)
        return False
    logger.info("Loaded %dx%d map from %s", result.context.dimension, result.context.dimension, path)
    return True


def set_cell(session: Session, kind: str, args: List[str]) -> None:
    context = _require_context(session)
    if context is None:
        return
    coords = _coords(args)
    if coords is None:
        logger.info("Usage: /%s <row> <col>", kind)
        return
    setters = {
        "block": context.set_blocked,
        "start": context.set_start_cell,
        "end": context.set_end_cell,
    }
    try:
        setters[kind](*coords)
    except IndexError as e:
        logger.error("Cannot %s %s: %s", kind, coords, e)
        return
    session.result = None
    session.path = None
    logger.info("%s cell set at %s", kind.capitalize(), coords)


def run(session: Session) -> Optional[SearchResult]:
    context = _require_context(session)
    if context is None:
        return None
    view = session.view
    view.render_grid(context)
    session.result = run_search(context)
    session.path = trace_path(context, session.result)
    if session.result.found:
        view.render_costs(context, session.result)
    view.render_path(session.path)
    return session.result


def mark(session: Session, output: Optional[str] = None) -> List[int]:
    context = _require_context(session)
    if context is None:
        return []
    if session.result is None:
        logger.error("No search results. Use /run first.")
        return []
    if context.source is None:
        logger.error("Map has no source file to copy.")
        return []
    out_path = Path(output) if output else default_output_path(
        context.source, session.config.map.output_suffix
    )
    try:
        offsets = write_annotated_copy(
            context,
            session.result,
            out_path,
            marker=session.config.annotation.marker,
            mark_end=session.config.annotation.mark_end,
        )
    except (TerrainPathError, ValueError) as e:
        logger.error("Error writing annotated map: %s", e)
        return []
    if offsets:
        logger.info("Annotated map written to %s", out_path)
    return offsets


def show(session: Session) -> None:
    context = _require_context(session)
    if context is not None:
        session.view.render_grid(context)


def costs(session: Session) -> None:
    context = _require_context(session)
    if context is None:
        return
    if session.result is None:
        logger.info("No search results yet. Use /run first.")
        return
    session.view.render_costs(context, session.result)


def help_command(state: Dict[str, Any]) -> None:
    help_lines = [
        "\nAvailable commands:",
        "  /help              - Show this help message.",
        "  /load <path>       - Parse a map file.",
        "  /block <row> <col> - Make a cell impassable.",
        "  /start <row> <col> - Move the start cell.",
        "  /end <row> <col>   - Move the end cell.",
        "  /run               - Search for the cheapest path.",
        "  /mark [path]       - Write a copy of the map with the path marked.",
        "  /show              - Print the terrain grid.",
        "  /costs             - Print the cost recorded for each cell.",
        "  /quit              - Exit the shell.\n",
    ]
    for line in help_lines:
        logger.info(line)


def execute(command: str, args: list[str], session: Session, state: Dict[str, Any]) -> Any:
    if "running" not in state: state["running"] = True
    cmd_lower = command.lower()

    return_value: Any = None

    if cmd_lower == "help":
        help_command(state)
    elif cmd_lower == "load":
        if args:
            return_value = load(session, args[0])
        else:
            logger.info("Usage: /load <path>")
    elif cmd_lower in ("block", "start", "end"):
        set_cell(session, cmd_lower, args)
    elif cmd_lower == "run":
        return_value = run(session)
    elif cmd_lower == "mark":
        return_value = mark(session, args[0] if args else None)
    elif cmd_lower == "show":
        show(session)
    elif cmd_lower == "costs":
        costs(session)
    elif cmd_lower == "quit":
        state["running"] = False
        logger.info("Quit command received.")
    else:
        logger.error("Unknown command: /%s. Type /help for available commands.", command)

    return return_value


__all__ = [
    "Session", "default_output_path", "load", "set_cell", "run", "mark",
    "show", "costs", "help_command", "execute",
]
