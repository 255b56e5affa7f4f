"""Command line entry point: load a map, search it and mark the path."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

import yaml
from dotenv import load_dotenv

from .config import Config, LoggingConfig, load_config
from .core.errors import TerrainPathError
from .persistence.map_reader import load_map
from .persistence.map_writer import write_annotated_copy
from .systems.search.astar import MISSING_ENDPOINTS, SearchResult
from .utils.cli import commands
from .utils.cli.command_parser import read_commands
from .utils.cli.terminal_view import TerminalView

logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NO_PATH = 1
EXIT_INPUT_ERROR = 2


def configure_logging(cfg: LoggingConfig) -> None:
    """Apply the global and per-module log levels from ``cfg``."""

    numeric_level = getattr(logging, cfg.global_level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )
    for module_name, level_str in cfg.module_levels.items():
        module_numeric_level = getattr(logging, level_str.upper(), None)
        if module_numeric_level is not None:
            logging.getLogger(module_name).setLevel(module_numeric_level)
        else:
            logger.warning("Invalid log level '%s' for module '%s' in config.", level_str, module_name)


def bootstrap(config_path: str | Path | None = None) -> Config:
    """Load ``.env`` and the configuration, then set up logging."""

    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    cfg = load_config(config_path)
    configure_logging(cfg.logging)
    return cfg


def exit_code(result: Optional[SearchResult]) -> int:
    """Map a search outcome to the process exit code."""

    if result is None or result.status == MISSING_ENDPOINTS:
        return EXIT_INPUT_ERROR
    return EXIT_FOUND if result.found else EXIT_NO_PATH


def solve(
    map_path: str | Path,
    cfg: Config,
    output: str | Path | None = None,
    view: Optional[TerminalView] = None,
    allow_partial: bool = False,
) -> int:
    """Run the whole pipeline for one map and return an exit code."""

    view = view if view is not None else TerminalView(colour=cfg.report.colour)
    view.enabled = cfg.report.enabled

    parsed = load_map(map_path, encoding=cfg.map.encoding)
    context = parsed.context
    if context.dimension == 0:
        logger.error("Map %s is empty or unreadable: %s", map_path, parsed.error or "no lines")
        return EXIT_INPUT_ERROR
    if parsed.error is not None and not allow_partial:
        logger.error("Refusing to search a partially parsed map: %s", parsed.error)
        return EXIT_INPUT_ERROR

    session = commands.Session(config=cfg, view=view, context=context)
    result = commands.run(session)
    code = exit_code(result)
    if code == EXIT_INPUT_ERROR:
        logger.error("Map %s needs both a start '@' and an end 'X' marker.", map_path)
        return code
    if code == EXIT_NO_PATH:
        logger.info("No possible path in %s", map_path)
        return code

    out_path = Path(output) if output else commands.default_output_path(
        Path(map_path), cfg.map.output_suffix
    )
    try:
        write_annotated_copy(
            context,
            result,
            out_path,
            marker=cfg.annotation.marker,
            mark_end=cfg.annotation.mark_end,
        )
    except (TerrainPathError, ValueError) as exc:
        logger.error("Could not write annotated map: %s", exc)
        return EXIT_INPUT_ERROR
    logger.info("Path cost %s; annotated map written to %s", result.cost, out_path)
    return EXIT_FOUND


def interactive(cfg: Config, map_path: str | None = None, stream: TextIO | None = None) -> commands.Session:
    """Read ``/commands`` from ``stream`` until EOF or ``/quit``."""

    session = commands.Session(config=cfg, view=TerminalView(colour=cfg.report.colour))
    session.view.enabled = cfg.report.enabled
    state = {"running": True}
    if map_path:
        commands.load(session, map_path)
    logger.info("Shell ready. Type /help for commands.")
    for cmd in read_commands(stream if stream is not None else sys.stdin):
        commands.execute(cmd.name, cmd.args, session, state)
        if not state["running"]:
            break
    return session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="terrain-path",
        description="Find the cheapest path between '@' and 'X' on a text terrain map.",
    )
    parser.add_argument("map", nargs="?", help="Map file (CRLF-terminated, square)")
    parser.add_argument(
        "--output", "-o",
        metavar="FILE",
        help="Where to write the annotated copy (default: <map>.path<ext>)",
    )
    parser.add_argument("--config", "-c", metavar="FILE", help="YAML configuration file")
    parser.add_argument("--no-report", action="store_true", help="Suppress console grid and path reports")
    parser.add_argument(
        "--allow-partial",
        action="store_true",
        help="Search maps whose parsing stopped at a malformed character or row",
    )
    parser.add_argument("--interactive", "-i", action="store_true", help="Start the /command shell")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = bootstrap(args.config)
    except (ValueError, yaml.YAMLError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_INPUT_ERROR
    if args.no_report:
        cfg.report.enabled = False

    if args.interactive:
        session = interactive(cfg, args.map)
        return exit_code(session.result)
    if not args.map:
        logger.error("A map file is required unless --interactive is given.")
        return EXIT_INPUT_ERROR
    return solve(args.map, cfg, output=args.output, allow_partial=args.allow_partial)


if __name__ == "__main__":
    sys.exit(main())
