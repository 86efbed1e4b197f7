#!/usr/bin/env python3
"""Greedy Best-First Search: always expand the cell closest to the end (Manhattan)."""

from dataclasses import dataclass
from typing import Dict, Tuple, List, Set
import heapq
import itertools
import time

from pathfinder.core.grid import Grid
from pathfinder.core.search_base import SearchAlgo, manhattan, open_neighbors
from pathfinder.core.types import Coord, PathResult


@dataclass
class GreedyBestFirstAlgo(SearchAlgo):
    name: str = "GreedyBestFirst"

    def find_path(self, grid: Grid, start: Coord, end: Coord,
                  on_step=None, is_cancelled=None,
                  delay: float = 0.0, sleep=time.sleep) -> PathResult:
        on_step, is_cancelled = self._hooks(on_step, is_cancelled)

        seq = itertools.count()
        open_pq: List[Tuple[int, int, Coord]] = [(manhattan(start, end), next(seq), start)]
        discovered: Set[Coord] = {start}
        parent: Dict[Coord, Coord] = {}
        steps = 0

        while open_pq:
            if is_cancelled():
                return self._cancelled(steps)

            _, _, u = heapq.heappop(open_pq)
            steps += 1
            on_step(u)

            if u == end:
                return self._found(parent, start, end, steps)

            # no relaxation: the first parent to see a cell keeps it
            for v in open_neighbors(grid, u):
                if v not in discovered:
                    discovered.add(v)
                    parent[v] = u
                    heapq.heappush(open_pq, (manhattan(v, end), next(seq), v))

            self._pause(delay, sleep)

        return self._exhausted(is_cancelled, steps)
