import logging
import math

import pytest

from robopath.core.dijkstra import DijkstraPlanner


def test_gap_scenario(wall_gap):
    w = wall_gap
    res = DijkstraPlanner().plan(w["start"], w["goal"], w["walls"], w["size"])
    assert res.success
    assert res.cost == pytest.approx(4 * math.sqrt(2))
    assert (2, 4) in res.path


def test_full_wall_row_blocks():
    walls = {(x, 2) for x in range(5)}
    res = DijkstraPlanner().plan((0, 0), (0, 4), walls, 5)
    assert res.status == "no_path"
    assert res.path == []


def test_trivial():
    res = DijkstraPlanner().plan((1, 1), (1, 1), set(), 3)
    assert res.path == [(1, 1)]
    assert res.cost == 0


def test_logs_each_search(caplog):
    with caplog.at_level(logging.DEBUG, logger="robopath.core.dijkstra"):
        DijkstraPlanner().plan((0, 0), (2, 2), set(), 3)
        DijkstraPlanner().plan((0, 0), (2, 2), {(2, 2)}, 3)
    messages = [r.getMessage() for r in caplog.records if r.name == "robopath.core.dijkstra"]
    assert len(messages) == 2
    assert "cost" in messages[0]
    assert "wall" in messages[1]
