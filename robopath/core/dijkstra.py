# robopath/core/dijkstra.py
#!/usr/bin/env python3
"""
Uniform-cost search on the same 8-connected graph as A*, without a heuristic.
Slower, but it makes no assumption about admissibility, so it doubles as the
reference the A* costs are checked against.
"""

import heapq
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Set, Tuple

from robopath.core.types import Cell, Grid, PathResult

logger = logging.getLogger(__name__)


@dataclass
class DijkstraPlanner:
    name: str = "Dijkstra"

    def plan(self, start: Cell, goal: Cell, obstacles: Iterable[Cell], grid_size: int) -> PathResult:
        grid = Grid.build(grid_size, obstacles)
        start = grid.validate(tuple(start), "start")
        goal = grid.validate(tuple(goal), "goal")

        if grid.is_block(start) or grid.is_block(goal):
            logger.debug("%s: start %s or goal %s is a wall", self.name, start, goal)
            return PathResult(status="no_path", algo=self.name)

        open_pq: List[Tuple[float, int, Cell]] = [(0.0, 0, start)]   # (g, seq, cell)
        g: Dict[Cell, float] = {start: 0.0}
        parent: Dict[Cell, Cell] = {}
        closed: Set[Cell] = set()
        seq = 0

        while open_pq:
            g_u, _, u = heapq.heappop(open_pq)
            if u in closed or g_u != g[u]:
                continue
            closed.add(u)

            if u == goal:
                path = self._reconstruct_path(parent, start, goal)
                logger.debug("%s: %s -> %s cost %.3f, %d expanded", self.name, start, goal, g_u, len(closed))
                return PathResult(status="done", path=path, cost=g_u, popped=len(closed),
                                  open_size=len(open_pq), closed_count=len(closed), algo=self.name)

            for v, step in grid.neighbors(u):
                if v in closed:
                    continue
                alt = g_u + step
                if alt < g.get(v, float("inf")):
                    g[v] = alt
                    parent[v] = u
                    seq += 1
                    heapq.heappush(open_pq, (alt, seq, v))

        logger.debug("%s: no path %s -> %s", self.name, start, goal)
        return PathResult(status="no_path", popped=len(closed), closed_count=len(closed), algo=self.name)

    @staticmethod
    def _reconstruct_path(parent: Dict[Cell, Cell], start: Cell, end: Cell) -> List[Cell]:
        path: List[Cell] = []
        cur = end
        while True:
            path.append(cur)
            if cur == start:
                break
            cur = parent[cur]
        path.reverse()
        return path
