# tests/test_algorithms.py
import random

import pytest

from pathfinder.core.maze import generate_maze
from pathfinder.core.grid import Grid
from pathfinder.core.registry import ALGORITHMS, get_algorithm, algorithm_names
from pathfinder.core.search_base import manhattan, reconstruct_path
from pathfinder.core.types import (
    UnknownAlgorithmError, FOUND, NOT_FOUND, CANCELLED,
)

from conftest import make_grid, assert_valid_path, reachable

SHORTEST = ["Dijkstra", "A*", "BreadthFirst"]
ALL = ["Dijkstra", "A*", "BreadthFirst", "DepthFirst", "GreedyBestFirst"]


def _run(name, grid, **kwargs):
    return get_algorithm(name).find_path(grid, grid.start, grid.end, **kwargs)


def _random_walls(rows, cols, density, seed):
    rng = random.Random(seed)
    grid = make_grid(rows, cols, (0, 0), (rows - 1, cols - 1))
    for cell in grid:
        if not cell.is_endpoint and rng.random() < density:
            grid.set_wall(cell.coord)
    return grid


def test_registry_names_are_exact():
    assert algorithm_names() == ALL
    assert set(ALGORITHMS) == set(ALL)
    with pytest.raises(UnknownAlgorithmError) as info:
        get_algorithm("dijkstra")
    assert "Dijkstra" in str(info.value)
    with pytest.raises(UnknownAlgorithmError):
        get_algorithm("Breadth First")


def test_bfs_straight_row(open_5x5):
    result = _run("BreadthFirst", open_5x5)
    assert result.status == FOUND
    assert result.path == [(2, 0), (2, 1), (2, 2), (2, 3), (2, 4)]
    assert result.algorithm == "BreadthFirst"


@pytest.mark.parametrize("name", SHORTEST)
def test_center_wall_detour(center_wall_3x3, name):
    result = _run(name, center_wall_3x3)
    assert result.status == FOUND
    assert len(result.path) - 1 == 4
    assert (1, 1) not in result.path
    assert_valid_path(center_wall_3x3, result.path)


@pytest.mark.parametrize("name", ["BreadthFirst", "Dijkstra", "A*"])
@pytest.mark.parametrize("start, end", [((0, 0), (6, 8)), ((3, 2), (0, 7)), ((6, 0), (6, 1))])
def test_open_grid_path_is_manhattan(name, start, end):
    grid = make_grid(7, 9, start, end)
    result = _run(name, grid)
    assert result.status == FOUND
    assert len(result.path) - 1 == manhattan(start, end)
    assert_valid_path(grid, result.path)


@pytest.mark.parametrize("seed", range(6))
def test_astar_matches_dijkstra_length(seed):
    grid = _random_walls(15, 21, 0.3, seed)
    d = _run("Dijkstra", grid)
    a = _run("A*", grid)
    b = _run("BreadthFirst", grid)
    assert d.status == a.status == b.status
    if d.status == FOUND:
        assert len(d.path) == len(a.path) == len(b.path)
        assert_valid_path(grid, a.path)
    else:
        assert grid.end not in reachable(grid, grid.start)


@pytest.mark.parametrize("seed", range(3))
def test_astar_examines_no_more_than_dijkstra_in_maze(seed):
    grid = Grid(21, 31)
    generate_maze(grid, rng=seed)
    d = _run("Dijkstra", grid)
    a = _run("A*", grid)
    assert d.found and a.found
    assert len(a.path) == len(d.path)
    assert a.steps <= d.steps


@pytest.mark.parametrize("name", ["DepthFirst", "GreedyBestFirst"])
@pytest.mark.parametrize("seed", range(4))
def test_non_optimal_strategies_still_return_valid_paths(name, seed):
    grid = _random_walls(12, 12, 0.25, seed)
    result = _run(name, grid)
    shortest = _run("BreadthFirst", grid)
    assert result.status == shortest.status
    if result.found:
        assert_valid_path(grid, result.path)
        assert len(result.path) >= len(shortest.path)


@pytest.mark.parametrize("name", ALL)
def test_unreachable_end_is_not_found(name):
    # end boxed in by walls
    grid = make_grid(5, 5, (0, 0), (4, 4), walls=[(3, 4), (4, 3)])
    result = _run(name, grid)
    assert result.status == NOT_FOUND
    assert result.path == []
    # every reachable cell was examined exactly once
    assert result.steps == len(reachable(grid, grid.start))


@pytest.mark.parametrize("name", ALL)
def test_first_step_is_start_and_last_is_end(name, open_5x5):
    seen = []
    result = _run(name, open_5x5, on_step=seen.append)
    assert seen[0] == open_5x5.start
    assert seen[-1] == open_5x5.end
    assert len(seen) == result.steps
    assert len(set(seen)) == len(seen)


@pytest.mark.parametrize("name", ALL)
def test_step_order_is_deterministic(name):
    grid = _random_walls(10, 10, 0.2, 42)
    first, second = [], []
    _run(name, grid, on_step=first.append)
    _run(name, grid, on_step=second.append)
    assert first == second


@pytest.mark.parametrize("name", ALL)
@pytest.mark.parametrize("after", [0, 1, 5])
def test_cancellation_stops_after_n_steps(name, after):
    grid = make_grid(9, 9, (0, 0), (8, 8))
    seen = []

    def is_cancelled():
        return len(seen) >= after

    result = _run(name, grid, on_step=seen.append, is_cancelled=is_cancelled)
    assert result.status == CANCELLED
    assert len(seen) == after
    assert result.steps == after
    assert result.path == []


@pytest.mark.parametrize("name", ALL)
def test_cancel_during_last_wait_is_not_reported_as_not_found(name):
    # start sealed in: one step, then the frontier is empty
    grid = make_grid(3, 3, (0, 0), (2, 2), walls=[(0, 1), (1, 0)])
    flag = []

    def sleep(_seconds):
        flag.append(True)

    result = _run(name, grid, is_cancelled=lambda: bool(flag), delay=0.01, sleep=sleep)
    assert result.status == CANCELLED


@pytest.mark.parametrize("name", ALL)
def test_delay_is_applied_between_steps(name, open_5x5):
    waits = []
    result = _run(name, open_5x5, delay=0.25, sleep=waits.append)
    # no wait after the step that reaches the end
    assert waits == [0.25] * (result.steps - 1)


@pytest.mark.parametrize("name", ALL)
def test_zero_delay_never_sleeps(name, open_5x5):
    waits = []
    _run(name, open_5x5, sleep=waits.append)
    assert waits == []


def test_search_does_not_touch_grid_marks(open_5x5):
    _run("A*", open_5x5)
    assert open_5x5.visited_count() == 0
    assert open_5x5.path_cells() == []


def test_reconstruct_path_walks_parents():
    parent = {(0, 1): (0, 0), (0, 2): (0, 1), (1, 2): (0, 2)}
    assert reconstruct_path(parent, (0, 0), (1, 2)) == [(0, 0), (0, 1), (0, 2), (1, 2)]
