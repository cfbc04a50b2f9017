"""Grid robot path planning: 8-connected A*, goal sampling and a pygame demo."""

from robopath.core.astar import AStarPlanner, search
from robopath.core.dijkstra import DijkstraPlanner
from robopath.core.heuristics import HEURISTIC_KINDS, heuristic
from robopath.core.sampler import sample_goal
from robopath.core.types import Cell, Grid, NoFreeCellError, OutOfBoundsError, PathResult, path_cost
from robopath.core.world import WorldState

__version__ = "0.1.0"

__all__ = [
    "AStarPlanner",
    "Cell",
    "DijkstraPlanner",
    "Grid",
    "HEURISTIC_KINDS",
    "NoFreeCellError",
    "OutOfBoundsError",
    "PathResult",
    "WorldState",
    "heuristic",
    "path_cost",
    "sample_goal",
    "search",
]
