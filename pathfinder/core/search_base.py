#!/usr/bin/env python3
"""
Pieces shared by every search strategy.

A strategy is a dataclass whose only field is its display name; all run
state (frontier, parents, costs) lives in local variables of find_path, so
one instance can serve any number of runs.

Each strategy follows the same loop:
  - stop with CANCELLED as soon as is_cancelled() is true
  - pop the next frontier cell and report it through on_step
  - stop with FOUND when the popped cell is the end cell
  - otherwise push the undiscovered, non-wall neighbours
  - wait `delay` seconds before the next iteration
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from pathfinder.core.grid import Grid
from pathfinder.core.types import Coord, PathResult, FOUND, NOT_FOUND, CANCELLED

log = logging.getLogger(__name__)

StepCallback = Callable[[Coord], None]
CancelCheck = Callable[[], bool]
Sleeper = Callable[[float], object]


def _never() -> bool:
    return False


def _ignore(_c: Coord) -> None:
    pass


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def open_neighbors(grid: Grid, c: Coord) -> List[Coord]:
    return [n for n in grid.neighbors(c) if not grid.is_wall(n)]


def reconstruct_path(parent: Dict[Coord, Coord], start: Coord, end: Coord) -> List[Coord]:
    path: List[Coord] = []
    cur = end
    while True:
        path.append(cur)
        if cur == start:
            break
        cur = parent[cur]
    path.reverse()
    return path


@dataclass
class SearchAlgo:
    name: str = "(no algorithm)"

    def find_path(self, grid: Grid, start: Coord, end: Coord,
                  on_step: Optional[StepCallback] = None,
                  is_cancelled: Optional[CancelCheck] = None,
                  delay: float = 0.0,
                  sleep: Sleeper = time.sleep) -> PathResult:
        raise NotImplementedError

    # -------------------- helpers for subclasses --------------------

    @staticmethod
    def _hooks(on_step: Optional[StepCallback], is_cancelled: Optional[CancelCheck]):
        return (on_step or _ignore), (is_cancelled or _never)

    @staticmethod
    def _pause(delay: float, sleep: Sleeper) -> None:
        if delay > 0:
            sleep(delay)

    def _found(self, parent: Dict[Coord, Coord], start: Coord, end: Coord, steps: int) -> PathResult:
        path = reconstruct_path(parent, start, end)
        log.debug("%s reached %s after %d steps (path of %d cells)", self.name, end, steps, len(path))
        return PathResult(status=FOUND, path=path, steps=steps, algorithm=self.name)

    def _exhausted(self, is_cancelled: CancelCheck, steps: int) -> PathResult:
        # a cancel that lands while the frontier drains is still a cancel
        status = CANCELLED if is_cancelled() else NOT_FOUND
        return PathResult(status=status, steps=steps, algorithm=self.name)

    def _cancelled(self, steps: int) -> PathResult:
        log.debug("%s cancelled after %d steps", self.name, steps)
        return PathResult(status=CANCELLED, steps=steps, algorithm=self.name)
