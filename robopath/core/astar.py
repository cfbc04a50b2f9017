# robopath/core/astar.py
#!/usr/bin/env python3
"""
A* over an 8-connected square grid.

Cost model:
- orthogonal step = 1, diagonal step = sqrt(2).

Tie-breaking in the PQ:
- (f, h, -g, seq, node): lower f, then lower h, then deeper g, then FIFO by seq.
  Neighbors are pushed in the fixed MOVES_8 order, so identical inputs always
  expand identical nodes and return the identical path.

Every call owns its heap, node map and closed set; nothing is kept between calls.
"""

import heapq
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from robopath.core.heuristics import get_heuristic
from robopath.core.types import Cell, Grid, Node, PathResult

logger = logging.getLogger(__name__)


@dataclass
class AStarPlanner:
    heuristic: str = "euclidean"
    max_expansions: Optional[int] = None  # None = unbounded
    name: str = "A*"

    def __post_init__(self) -> None:
        get_heuristic(self.heuristic)
        if self.max_expansions is not None and self.max_expansions <= 0:
            raise ValueError(f"max_expansions must be positive, got {self.max_expansions}")

    def plan(self, start: Cell, goal: Cell, obstacles: Iterable[Cell], grid_size: int) -> PathResult:
        grid = Grid.build(grid_size, obstacles)
        start = grid.validate(tuple(start), "start")
        goal = grid.validate(tuple(goal), "goal")
        h_fn = get_heuristic(self.heuristic)

        if grid.is_block(start) or grid.is_block(goal):
            logger.debug("%s: start %s or goal %s is a wall", self.name, start, goal)
            return self._result("no_path")

        open_pq: List[Tuple[float, float, float, int, Node]] = []
        nodes: Dict[Cell, Node] = {}
        closed: Set[Cell] = set()
        seq = 0

        root = Node(start, 0.0, h_fn(start, goal))
        nodes[start] = root
        heapq.heappush(open_pq, (root.f, root.h, -root.g, seq, root))

        while open_pq:
            _, _, _, _, cur = heapq.heappop(open_pq)

            # Ignore stale pops
            if cur.cell in closed or nodes[cur.cell] is not cur:
                continue

            if cur.cell == goal:
                path = _reconstruct_path(cur)
                res = self._result("done", path, cur.g, len(closed) + 1, len(open_pq), len(closed) + 1)
                logger.debug("%s: %s -> %s cost %.3f, %d expanded", self.name, start, goal, cur.g, res.popped)
                return res

            if self.max_expansions is not None and len(closed) >= self.max_expansions:
                logger.debug("%s: gave up after %d expansions", self.name, len(closed))
                return self._result("budget", popped=len(closed), open_size=len(open_pq),
                                    closed_count=len(closed))
            closed.add(cur.cell)

            for v, step in grid.neighbors(cur.cell):
                if v in closed:
                    continue
                alt = cur.g + step
                known = nodes.get(v)
                if known is None or alt < known.g:
                    node = Node(v, alt, h_fn(v, goal), cur)
                    nodes[v] = node
                    seq += 1
                    heapq.heappush(open_pq, (node.f, node.h, -node.g, seq, node))

        logger.debug("%s: no path %s -> %s (%d expanded)", self.name, start, goal, len(closed))
        return self._result("no_path", popped=len(closed), closed_count=len(closed))

    def _result(self, status: str, path: Optional[List[Cell]] = None, cost: Optional[float] = None,
                popped: int = 0, open_size: int = 0, closed_count: int = 0) -> PathResult:
        return PathResult(
            status=status,
            path=path or [],
            cost=cost,
            popped=popped,
            open_size=open_size,
            closed_count=closed_count,
            algo=self.name,
            heuristic=self.heuristic,
        )


def _reconstruct_path(end: Node) -> List[Cell]:
    path: List[Cell] = []
    node: Optional[Node] = end
    while node is not None:
        path.append(node.cell)
        node = node.parent
    path.reverse()
    return path


def search(
    start: Cell,
    goal: Cell,
    obstacles: Iterable[Cell],
    grid_size: int,
    heuristic: str = "euclidean",
    max_expansions: Optional[int] = None,
) -> List[Cell]:
    """
    Shortest path from start to goal, both inclusive, or [] when none exists.

    Callers decide "solved" by checking path[-1] == goal. Out-of-bounds input
    raises OutOfBoundsError; an unreachable goal is not an error.
    """
    planner = AStarPlanner(heuristic=heuristic, max_expansions=max_expansions)
    return planner.plan(start, goal, obstacles, grid_size).path
