import random

import pytest

from robopath.core.types import MOVES_8


# 5x5, vertical wall at x=2 with a single gap at (2, 4)
WALL_GAP = {
    "size": 5,
    "walls": {(2, 0), (2, 1), (2, 2), (2, 3)},
    "start": (0, 2),
    "goal": (4, 2),
}


@pytest.fixture
def wall_gap():
    return dict(WALL_GAP, walls=set(WALL_GAP["walls"]))


@pytest.fixture
def check_path():
    def _check(path, start, goal, walls, size):
        assert path, "expected a non-empty path"
        assert path[0] == start
        assert path[-1] == goal
        for x, y in path:
            assert 0 <= x < size and 0 <= y < size
            assert (x, y) not in walls
        for (ax, ay), (bx, by) in zip(path, path[1:]):
            assert (bx - ax, by - ay) in MOVES_8
    return _check


def random_world(seed: int, size: int = 8, density: float = 0.3):
    """Seeded random walls plus a start and goal on free cells."""
    rng = random.Random(seed)
    cells = [(x, y) for y in range(size) for x in range(size)]
    rng.shuffle(cells)
    n_walls = int(len(cells) * density)
    walls = set(cells[:n_walls])
    start, goal = cells[n_walls], cells[n_walls + 1]
    return walls, start, goal


@pytest.fixture
def make_random_world():
    return random_world
