# robopath/core/sampler.py
#!/usr/bin/env python3
import logging
import random
from typing import Iterable, Optional

from robopath.core.types import Cell, Grid, NoFreeCellError

logger = logging.getLogger(__name__)

# below this share of free cells, enumerate instead of rejection-sampling
SPARSE_FREE_RATIO = 0.25


def sample_goal(
    obstacles: Iterable[Cell],
    grid_size: int,
    excluded: Cell,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = None,
) -> Cell:
    """
    Uniformly random cell that is neither a wall nor `excluded`.

    Raises NoFreeCellError when no such cell exists instead of looping forever.
    """
    rng = rng if rng is not None else random
    grid = Grid.build(grid_size, obstacles)
    excluded = grid.validate(tuple(excluded), "excluded cell")

    total = grid_size * grid_size
    taken = len(grid.walls) + (0 if excluded in grid.walls else 1)
    free = total - taken
    if free <= 0:
        raise NoFreeCellError(f"no free cell left on the {grid_size}x{grid_size} grid")

    if free / total >= SPARSE_FREE_RATIO:
        attempts = max_attempts if max_attempts is not None else 4 * total
        for _ in range(attempts):
            c = (rng.randrange(grid_size), rng.randrange(grid_size))
            if c != excluded and c not in grid.walls:
                return c
        logger.debug("sampler: %d rejections, enumerating free cells", attempts)

    return rng.choice(grid.free_cells(excluded))
