# tests/test_maze.py
import random

import pytest

from pathfinder.core.grid import Grid
from pathfinder.core.maze import generate_maze, check_maze_dimensions
from pathfinder.core.types import CellKind

from conftest import reachable


def _open_edges(grid: Grid) -> int:
    """Number of adjacent pairs of open cells (each pair counted once)."""
    edges = 0
    for cell in grid:
        if grid.is_wall(cell.coord):
            continue
        r, c = cell.coord
        for n in ((r + 1, c), (r, c + 1)):
            if grid.in_bounds(n) and not grid.is_wall(n):
                edges += 1
    return edges


def _layout(grid: Grid):
    return [[cell.kind for cell in row] for row in grid.cells]


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("rows, cols", [(21, 59), (5, 5), (3, 9), (11, 7)])
def test_maze_is_perfect(rows, cols, seed):
    grid = Grid(rows, cols)
    assert generate_maze(grid, rng=seed) is True

    assert grid.start == (1, 1)
    assert grid.end == (rows - 2, cols - 2)
    assert grid.kind_at(grid.start) is CellKind.START
    assert grid.kind_at(grid.end) is CellKind.END

    open_cells = grid.open_cells()
    # connected: every open cell reachable from start
    assert reachable(grid, grid.start) == set(open_cells)
    # acyclic: a connected graph with V-1 edges is a tree
    assert _open_edges(grid) == len(open_cells) - 1


def test_maze_border_is_solid():
    grid = Grid(11, 15)
    generate_maze(grid, rng=3)
    for r in range(grid.rows):
        assert grid.is_wall((r, 0)) and grid.is_wall((r, grid.cols - 1))
    for c in range(grid.cols):
        assert grid.is_wall((0, c)) and grid.is_wall((grid.rows - 1, c))


def test_every_room_is_carved():
    grid = Grid(9, 13)
    generate_maze(grid, rng=11)
    for r in range(1, grid.rows, 2):
        for c in range(1, grid.cols, 2):
            assert not grid.is_wall((r, c))


def test_same_seed_same_maze():
    a, b = Grid(15, 15), Grid(15, 15)
    generate_maze(a, rng=random.Random(99))
    generate_maze(b, rng=99)
    assert _layout(a) == _layout(b)


def test_regenerating_overwrites_previous_layout():
    grid = Grid(15, 21)
    grid.cell((5, 5)).visited = True
    grid.cell((6, 6)).on_path = True
    generate_maze(grid, rng=1)
    generate_maze(grid, rng=2)
    fresh = Grid(15, 21)
    generate_maze(fresh, rng=2)
    assert _layout(grid) == _layout(fresh)
    assert grid.visited_count() == 0
    assert grid.path_cells() == []


def test_on_carve_reports_every_open_cell():
    grid = Grid(11, 11)
    carved = []
    generate_maze(grid, rng=5, on_carve=carved.append)
    assert len(carved) == len(set(carved))
    assert set(carved) == set(grid.open_cells())


def test_delay_paces_each_step():
    grid = Grid(5, 5)
    waits = []
    generate_maze(grid, rng=0, delay=0.005, sleep=waits.append)
    assert waits and set(waits) == {0.005}


def test_cancelled_generation_reports_false():
    grid = Grid(21, 21)
    carved = []
    done = generate_maze(grid, rng=0, on_carve=carved.append,
                         is_cancelled=lambda: len(carved) >= 5)
    assert done is False
    assert grid.start is None and grid.end is None


@pytest.mark.parametrize("rows, cols", [(20, 59), (21, 58), (2, 9), (1, 1), (3, 3)])
def test_even_or_tiny_dimensions_rejected(rows, cols):
    with pytest.raises(ValueError):
        check_maze_dimensions(rows, cols)


def test_rejected_grid_is_left_untouched():
    grid = Grid(20, 59)
    grid.set_wall((0, 0))
    before = _layout(grid)
    with pytest.raises(ValueError):
        generate_maze(grid)
    assert _layout(grid) == before


def test_single_room_grid_is_rejected_before_carving():
    grid = Grid(3, 3)
    before = _layout(grid)
    with pytest.raises(ValueError):
        generate_maze(grid, rng=0)
    assert _layout(grid) == before
    assert grid.start is not None and grid.end is not None


@pytest.mark.parametrize("rows, cols", [(3, 5), (5, 3)])
def test_smallest_corridor_mazes(rows, cols):
    grid = Grid(rows, cols)
    assert generate_maze(grid, rng=1) is True
    assert grid.start == (1, 1)
    assert grid.end == (rows - 2, cols - 2)
    assert grid.end in reachable(grid, grid.start)
