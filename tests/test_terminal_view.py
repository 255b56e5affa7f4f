import io

from terrain_path.persistence.map_reader import parse_map
from terrain_path.systems.search.astar import run_search
from terrain_path.systems.search.path import trace_path
from terrain_path.utils.cli import terminal_view
from terrain_path.utils.cli.terminal_view import TerminalView


def _context():
    return parse_map("@~.\r\n...\r\n..X\r\n").context


def test_render_grid_tags_cells():
    out = io.StringIO()
    TerminalView(stream=out).render_grid(_context())
    lines = out.getvalue().splitlines()
    assert lines[1] == "Grid:"
    assert lines[2].split() == ["SO", "BL", "0"]
    assert lines[4].split() == ["0", "0", "DE"]


def test_render_costs_after_search():
    ctx = _context()
    result = run_search(ctx)
    out = io.StringIO()
    TerminalView(stream=out).render_costs(ctx, result)
    rows = out.getvalue().splitlines()[2:]
    assert rows[0].split()[:2] == ["0", "BL"]
    assert rows[2].split()[2] == "2"


def test_render_costs_hides_cells_never_closed():
    ctx = parse_map("@~.\r\n~~.\r\n..X\r\n").context
    ctx.grid.get(2, 0).path_cost = 7
    result = run_search(ctx)
    out = io.StringIO()
    TerminalView(stream=out).render_costs(ctx, result)
    rows = out.getvalue().splitlines()[2:]
    assert rows[0].split() == ["0", "BL", "--"]
    assert rows[2].split() == ["--", "--", "--"]


def test_render_path_and_no_path():
    ctx = _context()
    path = trace_path(ctx, run_search(ctx))
    out = io.StringIO()
    view = TerminalView(stream=out)
    view.render_path(path)
    view.render_path(None)
    text = out.getvalue()
    assert "Path:" in text
    assert text.index("[2, 2]") < text.index("[0, 0]")
    assert "No possible path" in text


def test_colour_wraps_tags_in_ansi_codes():
    out = io.StringIO()
    TerminalView(stream=out, colour=True).render_grid(_context())
    assert "\x1b[32mSO" in out.getvalue()
    assert "\x1b[0m" in out.getvalue()


def test_disabled_view_prints_nothing():
    out = io.StringIO()
    view = TerminalView(stream=out)
    assert view.toggle() is False
    view.render_grid(_context())
    assert out.getvalue() == ""


def test_default_stream_is_stdout(capsys):
    view = terminal_view.get_view()
    view.enabled = True
    view.render_path(None)
    assert "No possible path" in capsys.readouterr().out
