#!/usr/bin/env python3
"""
Maze generation by randomized recursive backtracking (explicit stack).

Cells at odd (row, col) are rooms; the walls between them are knocked out
as the walk advances two cells at a time, so the result is a perfect maze:
every open cell reachable, exactly one simple path between any two of them.
"""

import logging
import random
import time
from typing import Callable, List, Optional, Union

from pathfinder.core.grid import Grid
from pathfinder.core.types import Coord

log = logging.getLogger(__name__)

_OFFSETS2 = ((0, 2), (2, 0), (0, -2), (-2, 0))


def check_maze_dimensions(rows: int, cols: int) -> None:
    if rows < 3 or cols < 3:
        raise ValueError(f"A maze needs at least 3x3 cells, got {rows}x{cols}")
    if rows % 2 == 0 or cols % 2 == 0:
        raise ValueError(f"Maze dimensions must be odd in both axes, got {rows}x{cols}")
    if (rows, cols) == (3, 3):
        # (1,1) is the only room
        raise ValueError("A 3x3 maze has one room and cannot hold both endpoints")


def _interior(grid: Grid, r: int, c: int) -> bool:
    return 0 < r < grid.rows - 1 and 0 < c < grid.cols - 1


def generate_maze(grid: Grid,
                  rng: Union[random.Random, int, None] = None,
                  delay: float = 0.0,
                  on_carve: Optional[Callable[[Coord], None]] = None,
                  is_cancelled: Optional[Callable[[], bool]] = None,
                  sleep: Callable[[float], object] = time.sleep) -> bool:
    """
    Overwrite `grid` with a fresh maze; start ends up at (1, 1) and end at
    (rows-2, cols-2).

    Args:
        rng: a random.Random, or a seed for a new one (None = unseeded)
        delay: seconds to wait after each carve/backtrack step
        on_carve: called with every cell that is opened
        is_cancelled: polled once per step; generation stops early when true

    Returns:
        True when the maze was completed, False when it was cancelled. A
        cancelled maze is left half carved with no endpoints.
    """
    check_maze_dimensions(grid.rows, grid.cols)
    if not isinstance(rng, random.Random):
        rng = random.Random(rng)
    on_carve = on_carve or (lambda _c: None)
    is_cancelled = is_cancelled or (lambda: False)

    grid.reset_all()
    for cell in grid:
        grid.set_wall(cell.coord)

    def carve(c: Coord) -> None:
        grid.reset(c)
        on_carve(c)

    first = (1, 1)
    carve(first)
    stack: List[Coord] = [first]
    carved = 1

    while stack:
        if is_cancelled():
            log.info("Maze generation cancelled after %d cells", carved)
            return False

        row, col = stack[-1]
        candidates: List[Coord] = []
        for dr, dc in _OFFSETS2:
            nr, nc = row + dr, col + dc
            if _interior(grid, nr, nc) and grid.is_wall((nr, nc)):
                candidates.append((nr, nc))

        if candidates:
            nr, nc = rng.choice(candidates)
            carve(((row + nr) // 2, (col + nc) // 2))
            carve((nr, nc))
            stack.append((nr, nc))
            carved += 2
        else:
            stack.pop()

        if delay > 0:
            sleep(delay)

    grid.set_endpoints((1, 1), (grid.rows - 2, grid.cols - 2))
    log.info("Generated %dx%d maze (%d open cells)", grid.rows, grid.cols, carved)
    return True
