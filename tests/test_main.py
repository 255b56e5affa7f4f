import io
import logging
from pathlib import Path

import pytest

from terrain_path import main as main_mod
from terrain_path.config import Config, LoggingConfig
from terrain_path.utils.cli.terminal_view import TerminalView

EXAMPLE = b"@.X\r\n...\r\n...\r\n"
WALLED = b"@~.\r\n~~.\r\n..X\r\n"


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch):
    # bootstrap() looks for .env and the config file relative to the cwd/env
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TERRAIN_PATH_CONFIG", str(tmp_path / "none.yaml"))
    yield
    logging.getLogger().setLevel(logging.WARNING)


def _map(tmp_path: Path, data: bytes, name: str = "map.txt") -> Path:
    path = tmp_path / name
    path.write_bytes(data)
    return path


def test_main_marks_copy(tmp_path: Path, capsys):
    src = _map(tmp_path, EXAMPLE)
    out = tmp_path / "solved.txt"
    assert main_mod.main([str(src), "-o", str(out)]) == main_mod.EXIT_FOUND
    assert out.read_bytes() == b"##X\r\n...\r\n...\r\n"
    assert src.read_bytes() == EXAMPLE
    printed = capsys.readouterr().out
    assert "Grid:" in printed and "Path:" in printed


def test_main_default_output_and_no_report(tmp_path: Path, capsys):
    src = _map(tmp_path, EXAMPLE)
    assert main_mod.main([str(src), "--no-report"]) == main_mod.EXIT_FOUND
    assert (tmp_path / "map.path.txt").exists()
    assert "Grid:" not in capsys.readouterr().out


def test_main_no_path(tmp_path: Path):
    src = _map(tmp_path, WALLED)
    out = tmp_path / "out.txt"
    assert main_mod.main([str(src), "-o", str(out), "--no-report"]) == main_mod.EXIT_NO_PATH
    assert not out.exists()


def test_main_input_errors(tmp_path: Path):
    assert main_mod.main([str(tmp_path / "missing.txt")]) == main_mod.EXIT_INPUT_ERROR
    assert main_mod.main([]) == main_mod.EXIT_INPUT_ERROR
    no_end = _map(tmp_path, b"@..\r\n...\r\n...\r\n", "no_end.txt")
    assert main_mod.main([str(no_end), "--no-report"]) == main_mod.EXIT_INPUT_ERROR


def test_malformed_map_needs_allow_partial(tmp_path: Path):
    src = _map(tmp_path, b"@.X\r\n...\r\n..?\r\n")
    assert main_mod.main([str(src), "--no-report"]) == main_mod.EXIT_INPUT_ERROR
    assert main_mod.main([str(src), "--no-report", "--allow-partial"]) == main_mod.EXIT_FOUND


def test_solve_uses_annotation_config(tmp_path: Path):
    src = _map(tmp_path, EXAMPLE)
    cfg = Config()
    cfg.annotation.marker = "o"
    cfg.annotation.mark_end = True
    out = tmp_path / "out.txt"
    view = TerminalView(stream=io.StringIO())
    assert main_mod.solve(src, cfg, output=out, view=view) == main_mod.EXIT_FOUND
    assert out.read_bytes().startswith(b"ooo\r\n")


def test_configure_logging_module_levels():
    main_mod.configure_logging(
        LoggingConfig(global_level="DEBUG", module_levels={"terrain_path.test": "ERROR", "x": "LOUD"})
    )
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("terrain_path.test").level == logging.ERROR


def test_interactive_shell(tmp_path: Path):
    src = _map(tmp_path, EXAMPLE)
    out = tmp_path / "out.txt"
    stream = io.StringIO(f"/run\n/mark {out}\n/quit\n/block 0 1\n")
    session = main_mod.interactive(Config(), str(src), stream=stream)
    assert session.result.cost == 2
    assert out.exists()
    # Commands after /quit are not executed.
    assert session.context.grid.get(0, 1) is not None


def test_map_with_trailing_blank_line_is_rejected(tmp_path: Path):
    src = _map(tmp_path, b"@.\r\n..\r\n.X\r\n\r\n")
    out = tmp_path / "out.txt"
    assert main_mod.main([str(src), "-o", str(out), "--no-report"]) == main_mod.EXIT_INPUT_ERROR
    assert not out.exists()


def test_non_ascii_marker_in_config(tmp_path: Path):
    src = _map(tmp_path, EXAMPLE)
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("annotation:\n  marker: 'é'\n", encoding="utf-8")
    out = tmp_path / "out.txt"
    assert main_mod.main([str(src), "-o", str(out), "--config", str(cfg)]) == main_mod.EXIT_INPUT_ERROR
    assert not out.exists()


@pytest.mark.parametrize(
    "data, commands_text, expected",
    [
        (EXAMPLE, "/run\n", main_mod.EXIT_FOUND),
        (WALLED, "/run\n", main_mod.EXIT_NO_PATH),
        (EXAMPLE, "/show\n", main_mod.EXIT_INPUT_ERROR),
    ],
)
def test_interactive_exit_code_follows_last_search(tmp_path: Path, monkeypatch, data, commands_text, expected):
    src = _map(tmp_path, data)
    monkeypatch.setattr("sys.stdin", io.StringIO(commands_text))
    assert main_mod.main([str(src), "--interactive", "--no-report"]) == expected
