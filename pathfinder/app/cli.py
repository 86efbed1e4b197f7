#!/usr/bin/env python3
"""
Headless runner: build a grid, optionally carve a maze, run one search and
print the result as ASCII.

    pathfinder --algo "A*" --maze --seed 7
    pathfinder --algo BreadthFirst --rows 5 --cols 5 --start 2,0 --end 2,4 --walls 1,1 1,2

Legend: '#' wall, 'S' start, 'E' end, '*' path, '.' visited, ' ' empty.
Exit codes: 0 path found, 1 no path (or cancelled), 2 bad arguments.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from pathfinder.core.config import SPEED_PRESETS, ConfigError, load_settings
from pathfinder.core.driver import SearchDriver
from pathfinder.core.grid import Grid
from pathfinder.core.log import PathfinderLogger
from pathfinder.core.registry import algorithm_names
from pathfinder.core.types import (
    CellKind, Coord, UnknownAlgorithmError, FOUND, MISSING_ENDPOINTS, MOVED,
)

log = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NO_PATH = 1
EXIT_USAGE = 2


def render(grid: Grid) -> str:
    lines: List[str] = []
    for row in grid.cells:
        chars = []
        for cell in row:
            if cell.kind is CellKind.WALL:
                chars.append("#")
            elif cell.kind is CellKind.START:
                chars.append("S")
            elif cell.kind is CellKind.END:
                chars.append("E")
            elif cell.on_path:
                chars.append("*")
            elif cell.visited or cell.frontier:
                chars.append(".")
            else:
                chars.append(" ")
        lines.append("".join(chars).rstrip())
    return "\n".join(lines)


def parse_coord(text: str) -> Coord:
    try:
        r, c = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ROW,COL, got {text!r}") from None
    return (r, c)


def build_parser(defaults) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathfinder",
                                     description="Run one grid search and print the explored grid.")
    parser.add_argument("--algo", default=defaults.algorithm,
                        help=f"one of: {', '.join(algorithm_names())}")
    parser.add_argument("--rows", type=int, default=defaults.rows)
    parser.add_argument("--cols", type=int, default=defaults.cols)
    parser.add_argument("--maze", action="store_true", help="carve a random maze first")
    parser.add_argument("--seed", type=int, default=None, help="maze seed")
    parser.add_argument("--speed", choices=sorted(SPEED_PRESETS), default=None)
    parser.add_argument("--delay", type=int, default=0, help="step delay in ms (default: 0)")
    parser.add_argument("--start", type=parse_coord, default=None, help="ROW,COL")
    parser.add_argument("--end", type=parse_coord, default=None, help="ROW,COL")
    parser.add_argument("--walls", type=parse_coord, nargs="*", default=[], help="ROW,COL ...")
    parser.add_argument("--log-level", default=defaults.log_level)
    return parser


def _place(grid: Grid, args) -> Optional[str]:
    for w in args.walls:
        if not grid.in_bounds(w):
            return f"wall {w} is outside the grid"
        grid.set_wall(w)
    for label, coord, move in (("start", args.start, grid.move_start),
                               ("end", args.end, grid.move_end)):
        if coord is None:
            continue
        if not grid.in_bounds(coord):
            return f"{label} {coord} is outside the grid"
        if move(coord) != MOVED:
            return f"cannot move {label} onto {coord}"
    return None


def main(argv: Optional[Sequence[str]] = None, out=None) -> int:
    out = out or sys.stdout
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        defaults = load_settings(argv=[])
    except (ConfigError, UnknownAlgorithmError) as ex:
        print(f"error: {ex}", file=sys.stderr)
        return EXIT_USAGE

    parser = build_parser(defaults)
    try:
        args = parser.parse_args(argv)
    except SystemExit as ex:
        return EXIT_USAGE if ex.code else EXIT_FOUND

    try:
        PathfinderLogger.setup_logging(args.log_level)
    except ValueError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return EXIT_USAGE

    try:
        grid = Grid(args.rows, args.cols)
    except ValueError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return EXIT_USAGE
    driver = SearchDriver(grid)
    log.debug("Grid %dx%d, algorithm %s, maze=%s seed=%s",
              args.rows, args.cols, args.algo, args.maze, args.seed)

    if args.maze:
        try:
            driver.generate_maze(seed=args.seed)
        except ValueError as ex:
            print(f"error: {ex}", file=sys.stderr)
            return EXIT_USAGE

    problem = _place(grid, args)
    if problem:
        print(f"error: {problem}", file=sys.stderr)
        return EXIT_USAGE

    delay = SPEED_PRESETS[args.speed] if args.speed else args.delay
    try:
        result = driver.run_search(args.algo, delay)
    except UnknownAlgorithmError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return EXIT_USAGE

    print(render(grid), file=out)
    if result.status == FOUND:
        print(f"{result.algorithm}: path of {len(result.path)} cells, "
              f"{result.steps} cells examined", file=out)
        return EXIT_FOUND
    if result.status == MISSING_ENDPOINTS:
        print("Please set a start and end point.", file=out)
        return EXIT_USAGE
    print(f"{result.algorithm}: No path found. ({result.steps} cells examined)", file=out)
    return EXIT_NO_PATH


if __name__ == "__main__":
    sys.exit(main())
