# pathfinder/core/grid.py
#!/usr/bin/env python3
"""
Grid of cells edited by the user and explored by the search strategies.

Cells are addressed by (row, col); neighbours are recomputed from
coordinates on every call, nothing holds references between cells.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from pathfinder.core.types import (
    Cell, CellKind, Coord, MOVED, INVALID_ENDPOINT_MOVE,
)

DEFAULT_ROWS = 21
DEFAULT_COLS = 59

# up, down, left, right
_OFFSETS4 = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class Grid:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    cells: List[List[Cell]] = field(init=False, repr=False)   # [row][col]
    start: Optional[Coord] = field(init=False, default=None)
    end: Optional[Coord] = field(init=False, default=None)
    current: Optional[Coord] = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.rows}x{self.cols}")
        self.cells = [[Cell(r, c) for c in range(self.cols)] for r in range(self.rows)]
        self.place_default_endpoints()

    # -------------------- lookup --------------------

    def in_bounds(self, c: Coord) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def cell(self, c: Coord) -> Cell:
        if not self.in_bounds(c):
            raise IndexError(f"{c} is outside the {self.rows}x{self.cols} grid")
        r, col = c
        return self.cells[r][col]

    def kind_at(self, c: Coord) -> CellKind:
        return self.cell(c).kind

    def is_wall(self, c: Coord) -> bool:
        return self.cell(c).kind is CellKind.WALL

    def neighbors(self, c: Coord) -> List[Coord]:
        """In-bounds axis-aligned neighbours of c, in up/down/left/right order."""
        r, col = c
        out: List[Coord] = []
        for dr, dc in _OFFSETS4:
            n = (r + dr, col + dc)
            if self.in_bounds(n):
                out.append(n)
        return out

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    # -------------------- editing --------------------

    def set_wall(self, c: Coord) -> None:
        cell = self.cell(c)
        if cell.is_endpoint:
            return
        cell.kind = CellKind.WALL

    def reset(self, c: Coord) -> None:
        """Clear kind and marks, even on an endpoint (which is then dropped)."""
        self.cell(c).reset()
        if c == self.start:
            self.start = None
        if c == self.end:
            self.end = None
        if c == self.current:
            self.current = None

    def erase(self, c: Coord) -> None:
        if self.cell(c).is_endpoint:
            return
        self.reset(c)

    def reset_all(self) -> None:
        for cell in self:
            cell.reset()
        self.start = None
        self.end = None
        self.current = None

    def clear(self) -> None:
        self.reset_all()
        self.place_default_endpoints()

    def place_default_endpoints(self) -> None:
        mid = self.rows // 2
        start = (mid, self.cols // 4)
        end = (mid, 3 * self.cols // 4)
        if start == end:
            # single-column grids
            start, end = (0, 0), (self.rows - 1, self.cols - 1)
        if start == end:
            raise ValueError("A grid needs at least two cells to hold both endpoints")
        self.set_endpoints(start, end)

    def set_endpoints(self, start: Coord, end: Coord) -> None:
        """Force both endpoints, overwriting whatever kind the target cells had."""
        if start == end:
            raise ValueError("start and end must be different cells")
        for old in (self.start, self.end):
            if old is not None:
                self.cell(old).kind = CellKind.EMPTY
        self.cell(start).reset()
        self.cell(end).reset()
        self.cell(start).kind = CellKind.START
        self.cell(end).kind = CellKind.END
        self.start = start
        self.end = end

    def move_start(self, to: Coord) -> str:
        return self._move_endpoint(to, CellKind.START)

    def move_end(self, to: Coord) -> str:
        return self._move_endpoint(to, CellKind.END)

    def _move_endpoint(self, to: Coord, kind: CellKind) -> str:
        target = self.cell(to)
        other = self.end if kind is CellKind.START else self.start
        if target.kind is CellKind.WALL or to == other:
            return INVALID_ENDPOINT_MOVE

        old = self.start if kind is CellKind.START else self.end
        if old is not None and old != to:
            self.cell(old).reset()
        target.kind = kind
        if kind is CellKind.START:
            self.start = to
        else:
            self.end = to
        return MOVED

    # -------------------- search marks --------------------

    def clear_search_marks(self) -> None:
        """Erase visited/frontier/path marks left by a previous run; walls stay."""
        for cell in self:
            cell.clear_marks()
        self.current = None

    def mark_current(self, c: Coord) -> None:
        """Step transition: the previous current cell becomes visited, then c becomes frontier."""
        prev = self.current
        if prev is not None:
            p = self.cell(prev)
            if not p.is_endpoint:
                p.frontier = False
                p.visited = True
        self.current = c
        cell = self.cell(c)
        if not cell.is_endpoint:
            cell.visited = False
            cell.frontier = True

    def finish_search(self) -> None:
        """Flush the last examined cell into the visited set."""
        if self.current is not None:
            cell = self.cell(self.current)
            if not cell.is_endpoint:
                cell.frontier = False
                cell.visited = True
        self.current = None

    def mark_path(self, path: Iterable[Coord]) -> None:
        for c in path:
            cell = self.cell(c)
            if not cell.is_endpoint:
                cell.on_path = True

    # -------------------- summaries --------------------

    def path_cells(self) -> List[Coord]:
        return [cell.coord for cell in self if cell.on_path]

    def visited_count(self) -> int:
        return sum(1 for cell in self if cell.visited)

    def wall_count(self) -> int:
        return sum(1 for cell in self if cell.kind is CellKind.WALL)

    def open_cells(self) -> List[Coord]:
        return [cell.coord for cell in self if cell.kind is not CellKind.WALL]
