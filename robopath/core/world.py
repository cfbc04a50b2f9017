# robopath/core/world.py
#!/usr/bin/env python3
"""
Mutable demo state: robot, goal, walls and the overlays derived from them.

The planner never sees this object. Every transition below runs to completion
before the next one, so a search always works on a settled wall set.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from robopath.core.astar import AStarPlanner
from robopath.core.dijkstra import DijkstraPlanner
from robopath.core.heuristics import get_heuristic
from robopath.core.maps import MapSpec
from robopath.core.sampler import sample_goal
from robopath.core.types import Cell, Grid, MOVES_4, MOVES_8, OutOfBoundsError, PathResult

logger = logging.getLogger(__name__)

ALGORITHMS = ("A*", "Dijkstra")


@dataclass
class WorldState:
    size: int
    start: Cell
    goal: Cell
    walls: Set[Cell] = field(default_factory=set)
    robot: Optional[Cell] = None
    heuristic: str = "euclidean"
    algo: str = "A*"
    diagonal_moves: bool = False
    max_expansions: Optional[int] = None
    rng: random.Random = field(default_factory=random.Random, repr=False)

    path: List[Cell] = field(default_factory=list)            # static overlay
    animated_path: List[Cell] = field(default_factory=list)
    hint: Optional[Cell] = None
    edit_mode: bool = False
    goals_reached: int = 0
    last_result: Optional[PathResult] = None
    _pending: List[Cell] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.walls = set(Grid.build(self.size, self.walls).walls)
        get_heuristic(self.heuristic)
        self.set_algo(self.algo)
        if self.robot is None:
            self.robot = self.start
        for what, c in (("start", self.start), ("goal", self.goal), ("robot", self.robot)):
            if not self.in_bounds(c):
                raise OutOfBoundsError(f"{what} {c} outside a {self.size}x{self.size} grid")
            if c in self.walls:
                raise ValueError(f"{what} {c} is a wall")

    @classmethod
    def from_map(cls, spec: MapSpec, **kwargs) -> "WorldState":
        return cls(size=spec.size, start=spec.start, goal=spec.goal, walls=set(spec.walls), **kwargs)

    # -------------------- queries --------------------

    @property
    def animating(self) -> bool:
        return bool(self._pending)

    @property
    def last_status(self) -> Optional[str]:
        return self.last_result.status if self.last_result else None

    def in_bounds(self, c: Cell) -> bool:
        return 0 <= c[0] < self.size and 0 <= c[1] < self.size

    def stats(self) -> Dict[str, Any]:
        dx = self.goal[0] - self.robot[0]
        dy = self.goal[1] - self.robot[1]
        return {
            "robot": self.robot,
            "goal": self.goal,
            "distance": round(math.sqrt(dx * dx + dy * dy), 1),
            "path_len": len(self.path) + len(self.animated_path),
            "walls": len(self.walls),
            "goals_reached": self.goals_reached,
            "heuristic": self.heuristic,
        }

    # -------------------- transitions --------------------

    def move(self, dx: int, dy: int) -> bool:
        """Step the robot once. Blocked or off-grid moves leave it where it is."""
        allowed = MOVES_8 if self.diagonal_moves else MOVES_4
        if (dx, dy) not in allowed:
            raise ValueError(f"move {(dx, dy)} not allowed")
        if self.animating:
            return False

        target = (self.robot[0] + dx, self.robot[1] + dy)
        if not self.in_bounds(target) or target in self.walls:
            logger.debug("move to %s blocked", target)
            return False

        self.robot = target
        if target == self.goal:
            self._goal_reached()
        return True

    def toggle_wall(self, cell: Cell) -> bool:
        if not self.edit_mode or not self.in_bounds(cell):
            return False
        if cell in (self.robot, self.goal, self.start):
            return False
        if cell in self.walls:
            self.walls.remove(cell)
        else:
            self.walls.add(cell)
        logger.debug("wall %s %s", "added" if cell in self.walls else "removed", cell)
        self.path = []
        self.hint = None
        return True

    def set_edit_mode(self, enabled: bool) -> None:
        self.edit_mode = bool(enabled)

    def set_heuristic(self, kind: str) -> None:
        get_heuristic(kind)
        self.heuristic = kind

    def set_algo(self, label: str) -> None:
        if label not in ALGORITHMS:
            raise ValueError(f"unknown algorithm {label!r}; expected one of {', '.join(ALGORITHMS)}")
        self.algo = label

    def plan(self) -> PathResult:
        if self.algo == "Dijkstra":
            planner = DijkstraPlanner()
        else:
            planner = AStarPlanner(heuristic=self.heuristic, max_expansions=self.max_expansions)
        self.last_result = planner.plan(self.robot, self.goal, self.walls, self.size)
        return self.last_result

    def solve(self) -> List[Cell]:
        """Plan from the robot to the goal and start replaying the path."""
        if self.animating:
            return []
        res = self.plan()
        if not res.path:
            logger.info("no path from %s to %s (%s)", self.robot, self.goal, res.status)
            return []
        logger.info("solved %s -> %s: %d cells, cost %.3f", self.robot, self.goal, len(res.path), res.cost)
        self.path = []
        self.hint = None
        self.animated_path = [res.path[0]]
        self._pending = list(res.path[1:])
        if not self._pending:
            self._finish_animation(res.path)
        return list(res.path)

    def advance(self) -> bool:
        """One animation tick. Returns True while more ticks are needed."""
        if not self._pending:
            return False
        self.animated_path.append(self._pending.pop(0))
        if self._pending:
            return True
        self._finish_animation(self.animated_path)
        return False

    def request_hint(self) -> Optional[Cell]:
        if self.animating:
            return None
        path = self.plan().path
        if len(path) < 2:
            return None
        self.path = []
        self.animated_path = []
        self.hint = path[1]
        return self.hint

    def reset(self) -> None:
        self._pending = []
        self.robot = self.start
        self.goal = sample_goal(self.walls, self.size, self.start, rng=self.rng)
        self._clear_overlays()
        logger.info("reset: robot %s, goal %s", self.robot, self.goal)

    # -------------------- helpers --------------------

    def _finish_animation(self, path: List[Cell]) -> None:
        final = path[-1]
        self.robot = final
        self._pending = []
        if final == self.goal:
            self._goal_reached()
        else:
            self.animated_path = []
            self.path = list(path)

    def _goal_reached(self) -> None:
        self.goals_reached += 1
        self.goal = sample_goal(self.walls, self.size, self.robot, rng=self.rng)
        self._clear_overlays()
        logger.info("goal reached (%d so far), next goal %s", self.goals_reached, self.goal)

    def _clear_overlays(self) -> None:
        self.path = []
        self.animated_path = []
        self.hint = None
