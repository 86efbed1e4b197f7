# pathfinder/core/dijkstra.py
#!/usr/bin/env python3

from dataclasses import dataclass
from typing import Dict, Tuple, List
import heapq
import itertools
import time
from math import inf

from pathfinder.core.grid import Grid
from pathfinder.core.search_base import SearchAlgo, open_neighbors
from pathfinder.core.types import Coord, PathResult

STEP_COST = 1


@dataclass
class DijkstraAlgo(SearchAlgo):
    name: str = "Dijkstra"

    def find_path(self, grid: Grid, start: Coord, end: Coord,
                  on_step=None, is_cancelled=None,
                  delay: float = 0.0, sleep=time.sleep) -> PathResult:
        on_step, is_cancelled = self._hooks(on_step, is_cancelled)

        seq = itertools.count()   # FIFO among equal costs
        open_pq: List[Tuple[int, int, Coord]] = [(0, next(seq), start)]   # (g, seq, cell)
        g: Dict[Coord, int] = {start: 0}
        parent: Dict[Coord, Coord] = {}
        steps = 0

        while open_pq:
            if is_cancelled():
                return self._cancelled(steps)

            g_u, _, u = heapq.heappop(open_pq)
            # superseded by a cheaper entry pushed later
            if g_u != g.get(u, inf):
                continue

            steps += 1
            on_step(u)

            if u == end:
                return self._found(parent, start, end, steps)

            for v in open_neighbors(grid, u):
                alt = g_u + STEP_COST
                if alt < g.get(v, inf):
                    g[v] = alt
                    parent[v] = u
                    heapq.heappush(open_pq, (alt, next(seq), v))

            self._pause(delay, sleep)

        return self._exhausted(is_cancelled, steps)
