import math

import pytest

from robopath.core.dijkstra import DijkstraPlanner
from robopath.core.heuristics import ADMISSIBLE, HEURISTIC_KINDS, euclidean, heuristic, manhattan, octile


def test_values():
    assert manhattan((0, 0), (3, 4)) == 7
    assert euclidean((0, 0), (3, 4)) == pytest.approx(5.0)
    assert octile((0, 0), (3, 4)) == pytest.approx(4 + 3 * (math.sqrt(2) - 1))
    assert heuristic((1, 1), (1, 1), "manhattan") == 0


def test_symmetric_and_non_negative():
    for kind in HEURISTIC_KINDS:
        assert heuristic((2, 7), (5, 1), kind) == heuristic((5, 1), (2, 7), kind)
        assert heuristic((2, 7), (5, 1), kind) >= 0


def test_unknown_kind_rejected():
    with pytest.raises(ValueError, match="unknown heuristic"):
        heuristic((0, 0), (1, 1), "chebyshev")


def test_manhattan_overestimates_a_diagonal_step():
    assert manhattan((0, 0), (1, 1)) > math.sqrt(2)
    assert "manhattan" not in ADMISSIBLE


def test_admissible_kinds_never_exceed_true_cost_on_empty_grid():
    size = 6
    planner = DijkstraPlanner()
    for goal in [(0, 0), (5, 5), (2, 4)]:
        for y in range(size):
            for x in range(size):
                true_cost = planner.plan((x, y), goal, set(), size).cost
                assert euclidean((x, y), goal) <= true_cost + 1e-9
                assert octile((x, y), goal) == pytest.approx(true_cost)
