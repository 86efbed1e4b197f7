#!/usr/bin/env python3
"""
Search driver: owns the run protocol around a Grid.

- run_search() guards the endpoints, wipes stale marks, dispatches to the
  named strategy and paints the outcome back onto the grid.
- start_search() / start_maze() do the same on a daemon worker thread.
  Callbacks fire on that worker; presentation code must hand them over to
  its own loop (the viewer uses a queue.Queue) instead of drawing from them.
- cancel() stops the current run cooperatively; the inter-step wait is an
  Event wait, so a pending delay ends as soon as the flag is set.
"""

import logging
import threading
from typing import Callable, Optional

from pathfinder.core.grid import Grid
from pathfinder.core.maze import generate_maze
from pathfinder.core.registry import get_algorithm
from pathfinder.core.types import (
    Coord, PathResult, FOUND, NOT_FOUND, CANCELLED, MISSING_ENDPOINTS,
)

log = logging.getLogger(__name__)

StepCallback = Callable[[Coord], None]
ResultCallback = Callable[[PathResult], None]


class SearchDriver:
    def __init__(self, grid: Grid):
        self.grid = grid
        self._cancel = threading.Event()
        self._worker: Optional[threading.Thread] = None
        self.last_result: Optional[PathResult] = None

    # -------------------- cancellation --------------------

    def cancel(self) -> None:
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def busy(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def _wait(self, seconds: float) -> None:
        self._cancel.wait(seconds)

    # -------------------- searching --------------------

    def run_search(self, algorithm_name: str, step_delay_ms: int = 0,
                   on_step: Optional[StepCallback] = None,
                   is_cancelled: Optional[Callable[[], bool]] = None,
                   clear_cancel: bool = True) -> PathResult:
        algo = get_algorithm(algorithm_name)
        grid = self.grid

        if grid.start is None or grid.end is None:
            log.warning("Cannot run %s: start or end point is missing", algorithm_name)
            result = PathResult(status=MISSING_ENDPOINTS, algorithm=algo.name)
            self.last_result = result
            return result

        if clear_cancel:
            self._cancel.clear()
        external = is_cancelled or (lambda: False)

        def stop_requested() -> bool:
            return self._cancel.is_set() or external()

        def step(c: Coord) -> None:
            grid.mark_current(c)
            log.debug("%s examining %s", algo.name, c)
            if on_step is not None:
                on_step(c)

        grid.clear_search_marks()
        log.info("Running %s from %s to %s (delay %d ms)",
                 algo.name, grid.start, grid.end, step_delay_ms)

        result = algo.find_path(grid, grid.start, grid.end,
                                on_step=step,
                                is_cancelled=stop_requested,
                                delay=max(0, step_delay_ms) / 1000.0,
                                sleep=self._wait)
        grid.finish_search()

        if result.status == FOUND:
            grid.mark_path(result.path)
            log.info("%s found a path of %d cells in %d steps",
                     algo.name, len(result.path), result.steps)
        elif result.status == NOT_FOUND:
            log.info("No path found by %s after %d steps", algo.name, result.steps)
        elif result.status == CANCELLED:
            log.info("%s cancelled after %d steps", algo.name, result.steps)

        self.last_result = result
        return result

    # -------------------- maze --------------------

    def generate_maze(self, seed=None, delay_ms: int = 0,
                      on_carve: Optional[StepCallback] = None,
                      clear_cancel: bool = True) -> bool:
        if clear_cancel:
            self._cancel.clear()
        return generate_maze(self.grid, rng=seed,
                             delay=max(0, delay_ms) / 1000.0,
                             on_carve=on_carve,
                             is_cancelled=self._cancel.is_set,
                             sleep=self._wait)

    # -------------------- worker threads --------------------

    def _spawn(self, name: str, target: Callable[[], None]) -> threading.Thread:
        if self.busy:
            raise RuntimeError("A search or maze generation is already running on this grid")
        worker = threading.Thread(target=target, name=name, daemon=True)
        self._worker = worker
        # cleared here, not on the worker, so an early cancel() sticks
        self._cancel.clear()
        worker.start()
        return worker

    def start_search(self, algorithm_name: str, step_delay_ms: int = 0,
                     on_step: Optional[StepCallback] = None,
                     on_done: Optional[ResultCallback] = None) -> threading.Thread:
        get_algorithm(algorithm_name)   # unknown names fail here, not on the worker

        def work() -> None:
            result = self.run_search(algorithm_name, step_delay_ms, on_step=on_step,
                                     clear_cancel=False)
            if on_done is not None:
                on_done(result)

        return self._spawn(f"search-{algorithm_name}", work)

    def start_maze(self, seed=None, delay_ms: int = 0,
                   on_carve: Optional[StepCallback] = None,
                   on_done: Optional[Callable[[bool], None]] = None) -> threading.Thread:
        def work() -> None:
            completed = self.generate_maze(seed=seed, delay_ms=delay_ms, on_carve=on_carve,
                                           clear_cancel=False)
            if on_done is not None:
                on_done(completed)

        return self._spawn("maze", work)

    def join(self, timeout: Optional[float] = None) -> None:
        if self._worker is not None:
            self._worker.join(timeout)
