# robopath/core/types.py
#!/usr/bin/env python3
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Tuple, Dict, Any

Cell = Tuple[int, int]  # (x, y) == (col, row)

DIAGONAL_COST = math.sqrt(2)

# N, E, S, W, NE, SE, SW, NW; the order fixes tie-breaking between equal nodes
MOVES_4: Tuple[Cell, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))
MOVES_8: Tuple[Cell, ...] = MOVES_4 + ((1, -1), (1, 1), (-1, 1), (-1, -1))


class OutOfBoundsError(ValueError):
    """A cell or grid size that breaks the 0 <= coordinate < size contract."""


class NoFreeCellError(RuntimeError):
    """Every cell of the grid is occupied."""


def step_cost(dx: int, dy: int) -> float:
    """Cost of a single move by (dx, dy): 1 orthogonal, sqrt(2) diagonal."""
    if (dx, dy) not in MOVES_8:
        raise ValueError(f"not a single grid step: {(dx, dy)}")
    return DIAGONAL_COST if dx and dy else 1.0


def check_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise OutOfBoundsError(f"grid size must be a positive integer, got {size!r}")
    return size


@dataclass(frozen=True)
class Grid:
    size: int
    walls: FrozenSet[Cell] = field(default_factory=frozenset)

    @classmethod
    def build(cls, size: int, walls: Iterable[Cell] = ()) -> "Grid":
        """Snapshot `walls` into a Grid, failing fast on anything out of bounds."""
        check_size(size)
        grid = cls(size, frozenset((int(x), int(y)) for x, y in walls))
        for w in grid.walls:
            grid.validate(w, "obstacle")
        return grid

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.size and 0 <= y < self.size

    def is_block(self, c: Cell) -> bool:
        return c in self.walls

    def passable(self, c: Cell) -> bool:
        return self.in_bounds(c) and c not in self.walls

    def validate(self, c: Cell, what: str = "cell") -> Cell:
        if not self.in_bounds(c):
            raise OutOfBoundsError(f"{what} {c} outside a {self.size}x{self.size} grid")
        return c

    def neighbors(self, c: Cell) -> List[Tuple[Cell, float]]:
        """Passable 8-connected neighbors of c with their step cost."""
        x, y = c
        out: List[Tuple[Cell, float]] = []
        for dx, dy in MOVES_8:
            n = (x + dx, y + dy)
            if self.passable(n):
                out.append((n, DIAGONAL_COST if dx and dy else 1.0))
        return out

    def free_cells(self, excluded: Optional[Cell] = None) -> List[Cell]:
        return [(x, y) for y in range(self.size) for x in range(self.size)
                if (x, y) not in self.walls and (x, y) != excluded]


@dataclass(frozen=True)
class Node:
    """Search record. A better g produces a new Node; old ones are never edited."""
    cell: Cell
    g: float
    h: float
    parent: Optional["Node"] = None

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass
class PathResult:
    status: str                   # "done" | "no_path" | "budget"
    path: List[Cell] = field(default_factory=list)
    cost: Optional[float] = None
    popped: int = 0
    open_size: int = 0
    closed_count: int = 0
    algo: str = ""
    heuristic: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == "done"

    def metrics(self) -> Dict[str, Any]:
        return {
            "algo": self.algo,
            "heuristic": self.heuristic,
            "status": self.status,
            "popped": self.popped,
            "open_size": self.open_size,
            "closed_count": self.closed_count,
            "path_len": len(self.path),
            "total_cost": self.cost,
        }


def path_cost(path: List[Cell]) -> float:
    """Sum of step costs along `path`; raises ValueError on a non-adjacent pair."""
    total = 0.0
    for a, b in zip(path, path[1:]):
        total += step_cost(b[0] - a[0], b[1] - a[1])
    return total
