"""Simple command parsing utilities for the interactive shell."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, TextIO


@dataclass
class CLICommand:
    """Result of parsing a command string."""
    name: str
    args: List[str]


def parse_command(text: str) -> Optional[CLICommand]:
    """Return a :class:`CLICommand` from ``text`` if it starts with ``/``."""
    text = text.strip()
    if not text.startswith("/"):
        return None
    parts = text[1:].split()
    if not parts:
        return None

    return CLICommand(name=parts[0].lower(), args=parts[1:])


def read_commands(stream: TextIO) -> Iterator[CLICommand]:
    """Yield commands from ``stream`` until EOF, skipping anything else."""
    for line in stream:
        parsed = parse_command(line)
        if parsed:
            yield parsed


__all__ = ["CLICommand", "parse_command", "read_commands"]
