"""Simple configuration loader for terrain_path."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"
CONFIG_ENV_VAR = "TERRAIN_PATH_CONFIG"


@dataclass
class MapConfig:
    """How map files are read and where annotated copies go."""

    encoding: str = "utf-8"
    output_suffix: str = ".path"


@dataclass
class AnnotationConfig:
    """Marker written over path cells."""

    marker: str = "#"
    mark_end: bool = False


@dataclass
class ReportConfig:
    """Console reporting options."""

    enabled: bool = True
    colour: bool = False


@dataclass
class LoggingConfig:
    """Log levels, globally and per module."""

    global_level: str = "INFO"
    module_levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Top level configuration dataclass."""

    map: MapConfig = field(default_factory=MapConfig)
    annotation: AnnotationConfig = field(default_factory=AnnotationConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _parse_config(data: dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`."""

    map_data = data.get("map", {}) or {}
    map_cfg = MapConfig(
        encoding=str(map_data.get("encoding", "utf-8")),
        output_suffix=str(map_data.get("output_suffix", ".path")),
    )

    annotation_data = data.get("annotation", {}) or {}
    annotation = AnnotationConfig(
        marker=str(annotation_data.get("marker", "#")),
        mark_end=bool(annotation_data.get("mark_end", False)),
    )
    if len(annotation.marker) != 1 or not annotation.marker.isascii():
        raise ValueError(f"annotation.marker must be one ASCII character, got {annotation.marker!r}")

    report_data = data.get("report", {}) or {}
    report = ReportConfig(
        enabled=bool(report_data.get("enabled", True)),
        colour=bool(report_data.get("colour", report_data.get("color", False))),
    )

    logging_data = data.get("logging", {}) or {}
    logging_cfg = LoggingConfig(
        global_level=str(logging_data.get("global_level", "INFO")).upper(),
        module_levels={
            str(k): str(v) for k, v in (logging_data.get("module_levels") or {}).items()
        },
    )

    return Config(map=map_cfg, annotation=annotation, report=report, logging=logging_cfg)


def default_config_path() -> Path:
    """Return the config file named by ``TERRAIN_PATH_CONFIG`` or the bundled one."""

    override = os.getenv(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from ``path`` and return a :class:`Config`."""

    path = Path(path) if path is not None else default_config_path()
    if path.is_file():
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        raw = {}
    return _parse_config(raw)


__all__ = [
    "CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "Config",
    "MapConfig",
    "AnnotationConfig",
    "ReportConfig",
    "LoggingConfig",
    "default_config_path",
    "load_config",
]
