#!/usr/bin/env python3
"""
A* search on the 4-connected unit-cost grid.

Heuristic:
- Manhattan distance to the end cell; admissible and consistent here, so
  the first time the end cell is popped its path is a shortest one.
- Stored costs (g) never include the heuristic; it only orders the heap.

Tie-breaking in the PQ:
- (f, h, seq, cell): lower f, then lower h, then FIFO by seq.
"""

from dataclasses import dataclass
from typing import Dict, Tuple, List
import heapq
import itertools
import time
from math import inf

from pathfinder.core.grid import Grid
from pathfinder.core.search_base import SearchAlgo, manhattan, open_neighbors
from pathfinder.core.types import Coord, PathResult

STEP_COST = 1


@dataclass
class AStarAlgo(SearchAlgo):
    name: str = "A*"

    def find_path(self, grid: Grid, start: Coord, end: Coord,
                  on_step=None, is_cancelled=None,
                  delay: float = 0.0, sleep=time.sleep) -> PathResult:
        on_step, is_cancelled = self._hooks(on_step, is_cancelled)

        seq = itertools.count()
        h0 = manhattan(start, end)
        open_pq: List[Tuple[int, int, int, Coord]] = [(h0, h0, next(seq), start)]
        g: Dict[Coord, int] = {start: 0}
        parent: Dict[Coord, Coord] = {}
        steps = 0

        while open_pq:
            if is_cancelled():
                return self._cancelled(steps)

            f_u, h_u, _, u = heapq.heappop(open_pq)
            # ignore stale pops
            if f_u - h_u != g.get(u, inf):
                continue

            steps += 1
            on_step(u)

            if u == end:
                return self._found(parent, start, end, steps)

            for v in open_neighbors(grid, u):
                alt = g[u] + STEP_COST
                if alt < g.get(v, inf):
                    g[v] = alt
                    parent[v] = u
                    h_v = manhattan(v, end)
                    heapq.heappush(open_pq, (alt + h_v, h_v, next(seq), v))

            self._pause(delay, sleep)

        return self._exhausted(is_cancelled, steps)
