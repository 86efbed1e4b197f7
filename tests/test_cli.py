# tests/test_cli.py
import io

import pytest

from pathfinder.app.cli import main, render, EXIT_FOUND, EXIT_NO_PATH, EXIT_USAGE
from pathfinder.core.driver import SearchDriver

from conftest import make_grid


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("PATHFINDER_ALGORITHM", "PATHFINDER_ROWS", "PATHFINDER_COLS", "PATHFINDER_SPEED"):
        monkeypatch.delenv(key, raising=False)


def _run(*argv):
    out = io.StringIO()
    code = main(list(argv) + ["--log-level", "WARNING"], out=out)
    return code, out.getvalue()


def test_render_legend():
    grid = make_grid(3, 3, (0, 0), (2, 2), walls=[(1, 1)])
    SearchDriver(grid).run_search("BreadthFirst")
    lines = render(grid).splitlines()
    assert lines[0][0] == "S"
    assert lines[2][2] == "E"
    assert lines[1][1] == "#"
    assert render(grid).count("*") == 3


def test_straight_row_scenario():
    code, out = _run("--algo", "BreadthFirst", "--rows", "5", "--cols", "5",
                     "--start", "2,0", "--end", "2,4")
    assert code == EXIT_FOUND
    lines = out.splitlines()
    assert lines[2] == "S***E"
    assert "path of 5 cells" in lines[-1]


def test_maze_run():
    code, out = _run("--algo", "A*", "--maze", "--seed", "3", "--rows", "11", "--cols", "21")
    assert code == EXIT_FOUND
    grid_lines = out.splitlines()[:11]
    assert grid_lines[0] == "#" * 21
    assert grid_lines[1][1] == "S"
    assert grid_lines[9][19] == "E"


def test_no_path_exit_code():
    code, out = _run("--algo", "GreedyBestFirst", "--rows", "5", "--cols", "5",
                     "--start", "0,0", "--end", "4,4", "--walls", "3,4", "4,3")
    assert code == EXIT_NO_PATH
    assert "No path found." in out


@pytest.mark.parametrize("argv", [
    ["--algo", "bfs"],
    ["--start", "nope"],
    ["--rows", "0"],
    ["--maze", "--rows", "10"],
    ["--rows", "5", "--cols", "5", "--walls", "0,0", "--start", "0,0"],
    ["--rows", "5", "--cols", "5", "--end", "9,9"],
])
def test_bad_arguments(argv):
    code, _ = _run(*argv)
    assert code == EXIT_USAGE
