#!/usr/bin/env python3
"""Depth-First Search: LIFO frontier, each cell discovered at most once."""

from dataclasses import dataclass
from typing import Dict, List, Set
import time

from pathfinder.core.grid import Grid
from pathfinder.core.search_base import SearchAlgo, open_neighbors
from pathfinder.core.types import Coord, PathResult


@dataclass
class DepthFirstAlgo(SearchAlgo):
    name: str = "DepthFirst"

    def find_path(self, grid: Grid, start: Coord, end: Coord,
                  on_step=None, is_cancelled=None,
                  delay: float = 0.0, sleep=time.sleep) -> PathResult:
        on_step, is_cancelled = self._hooks(on_step, is_cancelled)

        stack: List[Coord] = [start]
        # marked on push, so a cell's parent is whoever saw it first
        discovered: Set[Coord] = {start}
        parent: Dict[Coord, Coord] = {}
        steps = 0

        while stack:
            if is_cancelled():
                return self._cancelled(steps)

            u = stack.pop()
            steps += 1
            on_step(u)

            if u == end:
                return self._found(parent, start, end, steps)

            for v in open_neighbors(grid, u):
                if v not in discovered:
                    discovered.add(v)
                    parent[v] = u
                    stack.append(v)

            self._pause(delay, sleep)

        return self._exhausted(is_cancelled, steps)
