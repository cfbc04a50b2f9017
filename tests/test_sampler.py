import random

import pytest

from robopath.core.sampler import sample_goal
from robopath.core.types import NoFreeCellError, OutOfBoundsError


@pytest.mark.parametrize("density", [0.0, 0.3, 0.6, 0.9, 0.97])
def test_never_returns_wall_or_excluded(density):
    size = 8
    rng = random.Random(1234)
    cells = [(x, y) for y in range(size) for x in range(size)]
    for _ in range(25):
        rng.shuffle(cells)
        n = min(int(len(cells) * density), len(cells) - 2)
        walls = set(cells[:n])
        excluded = cells[n]
        for _ in range(10):
            c = sample_goal(walls, size, excluded, rng=rng)
            assert c not in walls
            assert c != excluded
            assert 0 <= c[0] < size and 0 <= c[1] < size


def test_full_grid_raises():
    size = 3
    walls = {(x, y) for y in range(size) for x in range(size)} - {(1, 1)}
    with pytest.raises(NoFreeCellError):
        sample_goal(walls, size, (1, 1))
    with pytest.raises(NoFreeCellError):
        sample_goal(walls | {(1, 1)}, size, (0, 0))


def test_single_free_cell_is_found():
    size = 4
    free = (3, 2)
    walls = {(x, y) for y in range(size) for x in range(size)} - {free, (0, 0)}
    assert sample_goal(walls, size, (0, 0), rng=random.Random(0)) == free


def test_fallback_when_attempts_run_out():
    c = sample_goal(set(), 4, (0, 0), rng=random.Random(3), max_attempts=0)
    assert c != (0, 0)


def test_seeded_rng_is_reproducible():
    walls = {(1, 1), (2, 2)}
    rng_a, rng_b = random.Random(7), random.Random(7)
    a = [sample_goal(walls, 6, (0, 0), rng=rng_a) for _ in range(5)]
    b = [sample_goal(walls, 6, (0, 0), rng=rng_b) for _ in range(5)]
    assert a == b


def test_covers_every_free_cell():
    rng = random.Random(5)
    walls = {(0, 1)}
    seen = {sample_goal(walls, 2, (0, 0), rng=rng) for _ in range(200)}
    assert seen == {(1, 0), (1, 1)}


def test_out_of_bounds_excluded_rejected():
    with pytest.raises(OutOfBoundsError):
        sample_goal(set(), 4, (4, 0))
