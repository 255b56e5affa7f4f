import io
from pathlib import Path

from terrain_path.config import Config
from terrain_path.utils.cli import commands
from terrain_path.utils.cli.command_parser import parse_command, read_commands
from terrain_path.utils.cli.terminal_view import TerminalView

EXAMPLE = b"@.X\r\n...\r\n...\r\n"


def _session() -> commands.Session:
    return commands.Session(config=Config(), view=TerminalView(stream=io.StringIO()))


def _map(tmp_path: Path, data: bytes = EXAMPLE) -> Path:
    path = tmp_path / "map.txt"
    path.write_bytes(data)
    return path


def test_parse_command_basic():
    cmd = parse_command("/load maps/large.txt")
    assert cmd is not None
    assert cmd.name == "load"
    assert cmd.args == ["maps/large.txt"]


def test_parse_command_invalid():
    assert parse_command("hello") is None
    assert parse_command("/") is None


def test_read_commands_skips_noise():
    stream = io.StringIO("/run\nnot a command\n\n/START 1 2\n")
    cmds = list(read_commands(stream))
    assert [(c.name, c.args) for c in cmds] == [("run", []), ("start", ["1", "2"])]


def test_default_output_path():
    assert commands.default_output_path(Path("maps/large.txt"), ".path") == Path("maps/large.path.txt")


def test_load_run_mark(tmp_path: Path):
    session = _session()
    state: dict = {}
    assert commands.execute("load", [str(_map(tmp_path))], session, state) is True
    result = commands.execute("run", [], session, state)
    assert result.found and result.cost == 2
    assert session.path[-1] == (0, 0)

    out = tmp_path / "out.txt"
    offsets = commands.execute("mark", [str(out)], session, state)
    assert sorted(offsets) == [0, 1]
    assert out.read_bytes().startswith(b"##X")
    assert state["running"] is True


def test_mark_uses_default_output(tmp_path: Path):
    session = _session()
    commands.load(session, str(_map(tmp_path)))
    commands.run(session)
    commands.mark(session)
    assert (tmp_path / "map.path.txt").exists()


def test_seam_commands_change_the_search(tmp_path: Path):
    session = _session()
    commands.load(session, str(_map(tmp_path, b"...\r\n...\r\n...\r\n")))
    state: dict = {}
    commands.execute("start", ["0", "0"], session, state)
    commands.execute("end", ["2", "2"], session, state)
    commands.execute("block", ["1", "1"], session, state)
    result = commands.execute("run", [], session, state)
    assert result.cost == 3
    assert (1, 1) not in session.path


def test_bad_coordinates_are_ignored(tmp_path: Path):
    session = _session()
    commands.load(session, str(_map(tmp_path)))
    commands.execute("start", ["x", "1"], session, {})
    commands.execute("start", ["9", "9"], session, {})
    assert session.context.start == (0, 0)


def test_commands_need_a_map(caplog):
    session = _session()
    assert commands.execute("run", [], session, {}) is None
    assert commands.execute("mark", [], session, {}) == []
    assert "No map loaded" in caplog.text


def test_mark_before_run(tmp_path: Path, caplog):
    session = _session()
    commands.load(session, str(_map(tmp_path)))
    assert commands.mark(session) == []
    assert "Use /run first" in caplog.text


def test_load_missing_map(tmp_path: Path):
    session = _session()
    assert commands.load(session, str(tmp_path / "missing.txt")) is False
    assert session.context.dimension == 0


def test_quit_and_unknown(caplog):
    state: dict = {}
    commands.execute("bogus", [], _session(), state)
    assert "Unknown command" in caplog.text
    commands.execute("quit", [], _session(), state)
    assert state["running"] is False


def test_load_without_path_prints_usage(caplog):
    caplog.set_level("INFO")
    assert commands.execute("load", [], _session(), {}) is None
    assert "Usage: /load <path>" in caplog.text
    assert "Unknown command" not in caplog.text


def test_mark_with_bad_marker_is_logged(tmp_path: Path, caplog):
    session = _session()
    session.config.annotation.marker = "é"
    commands.load(session, str(_map(tmp_path)))
    commands.run(session)
    assert commands.mark(session, str(tmp_path / "out.txt")) == []
    assert "Error writing annotated map" in caplog.text
    assert not (tmp_path / "out.txt").exists()
