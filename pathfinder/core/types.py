# pathfinder/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional

Coord = Tuple[int, int]  # (row, col)

# PathResult.status values
FOUND = "found"
NOT_FOUND = "not_found"
CANCELLED = "cancelled"
MISSING_ENDPOINTS = "missing_endpoints"

# Grid.move_start / Grid.move_end return values
MOVED = "moved"
INVALID_ENDPOINT_MOVE = "invalid_endpoint_move"


class CellKind(Enum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    END = "end"


class UnknownAlgorithmError(ValueError):
    """Raised when a search is requested by a name no strategy answers to."""

    def __init__(self, name: str, known: List[str]):
        self.name = name
        self.known = list(known)
        super().__init__(
            f"Unknown algorithm {name!r}; expected one of: {', '.join(self.known)}"
        )


class ConfigError(ValueError):
    """Raised for malformed settings in the environment or on the command line."""


@dataclass
class Cell:
    row: int
    col: int
    kind: CellKind = CellKind.EMPTY
    visited: bool = False
    frontier: bool = False   # currently being examined
    on_path: bool = False

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    @property
    def is_endpoint(self) -> bool:
        return self.kind in (CellKind.START, CellKind.END)

    def clear_marks(self) -> None:
        self.visited = False
        self.frontier = False
        self.on_path = False

    def reset(self) -> None:
        self.kind = CellKind.EMPTY
        self.clear_marks()


@dataclass
class PathResult:
    status: str                   # FOUND | NOT_FOUND | CANCELLED | MISSING_ENDPOINTS
    path: List[Coord] = field(default_factory=list)
    steps: int = 0
    algorithm: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == FOUND
