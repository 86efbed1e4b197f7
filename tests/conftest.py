# tests/conftest.py
from collections import deque
from typing import Iterable, List, Optional, Set

import pytest

from pathfinder.core.grid import Grid
from pathfinder.core.types import Coord


def make_grid(rows: int, cols: int, start: Coord, end: Coord,
              walls: Iterable[Coord] = ()) -> Grid:
    """Grid with the given endpoints and walls, nothing else."""
    grid = Grid(rows, cols)
    grid.reset_all()
    grid.set_endpoints(start, end)
    for w in walls:
        grid.set_wall(w)
    return grid


def reachable(grid: Grid, src: Coord) -> Set[Coord]:
    """Every non-wall cell reachable from src (plain BFS, independent of the strategies)."""
    seen = {src}
    todo = deque([src])
    while todo:
        c = todo.popleft()
        for n in grid.neighbors(c):
            if n not in seen and not grid.is_wall(n):
                seen.add(n)
                todo.append(n)
    return seen


def assert_valid_path(grid: Grid, path: List[Coord], start: Optional[Coord] = None,
                      end: Optional[Coord] = None) -> None:
    assert path, "expected a non-empty path"
    assert path[0] == (start or grid.start)
    assert path[-1] == (end or grid.end)
    assert len(set(path)) == len(path), "path revisits a cell"
    for a, b in zip(path, path[1:]):
        assert abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1, f"{a} -> {b} is not a single step"
    for c in path:
        assert not grid.is_wall(c)


@pytest.fixture
def open_5x5():
    return make_grid(5, 5, (2, 0), (2, 4))


@pytest.fixture
def center_wall_3x3():
    return make_grid(3, 3, (0, 0), (2, 2), walls=[(1, 1)])
