# robopath/core/heuristics.py
#!/usr/bin/env python3
"""
Distance estimates from a cell to the goal.

- manhattan: |dx| + |dy|. Overestimates diagonal moves on an 8-connected grid,
  so A* with it returns valid but not always shortest paths.
- euclidean: straight-line distance, admissible.
- octile: exact cost on an empty 8-connected grid, admissible and tightest.
"""

import math
from typing import Callable, Dict, Tuple

from robopath.core.types import Cell, DIAGONAL_COST

Heuristic = Callable[[Cell, Cell], float]


def manhattan(a: Cell, b: Cell) -> float:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def euclidean(a: Cell, b: Cell) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return math.sqrt(dx * dx + dy * dy)


def octile(a: Cell, b: Cell) -> float:
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return max(dx, dy) + (DIAGONAL_COST - 1) * min(dx, dy)


HEURISTICS: Dict[str, Heuristic] = {
    "manhattan": manhattan,
    "euclidean": euclidean,
    "octile": octile,
}
HEURISTIC_KINDS: Tuple[str, ...] = tuple(HEURISTICS)

ADMISSIBLE = frozenset({"euclidean", "octile"})


def get_heuristic(kind: str) -> Heuristic:
    try:
        return HEURISTICS[kind]
    except KeyError:
        raise ValueError(
            f"unknown heuristic {kind!r}; expected one of {', '.join(HEURISTIC_KINDS)}"
        ) from None


def heuristic(a: Cell, b: Cell, kind: str = "euclidean") -> float:
    return get_heuristic(kind)(a, b)
