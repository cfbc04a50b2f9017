import random

import pytest

from robopath.core.astar import search
from robopath.core.maps import bundled_maps, load_map
from robopath.core.types import OutOfBoundsError
from robopath.core.world import WorldState


@pytest.fixture
def world():
    return WorldState(size=5, start=(0, 0), goal=(4, 4), walls={(1, 0)}, rng=random.Random(0))


def test_robot_starts_at_start(world):
    assert world.robot == (0, 0)
    assert not world.animating


def test_move_into_wall_is_noop(world):
    assert world.move(1, 0) is False
    assert world.robot == (0, 0)


def test_move_off_grid_is_noop(world):
    assert world.move(-1, 0) is False
    assert world.move(0, -1) is False
    assert world.robot == (0, 0)


def test_move(world):
    assert world.move(0, 1) is True
    assert world.robot == (0, 1)


def test_diagonal_moves_need_flag(world):
    with pytest.raises(ValueError):
        world.move(1, 1)
    world.diagonal_moves = True
    assert world.move(1, 1) is True
    assert world.robot == (1, 1)


def test_reaching_goal_samples_new_one():
    w = WorldState(size=5, start=(0, 0), goal=(0, 1), rng=random.Random(1))
    assert w.move(0, 1)
    assert w.goals_reached == 1
    assert w.goal != w.robot
    assert w.goal not in w.walls


def test_toggle_wall_needs_edit_mode(world):
    assert world.toggle_wall((2, 2)) is False
    world.set_edit_mode(True)
    assert world.toggle_wall((2, 2)) is True
    assert (2, 2) in world.walls
    assert world.toggle_wall((2, 2)) is True
    assert (2, 2) not in world.walls


def test_toggle_wall_refuses_occupied_and_outside(world):
    world.set_edit_mode(True)
    assert world.toggle_wall(world.robot) is False
    assert world.toggle_wall(world.goal) is False
    assert world.toggle_wall((5, 0)) is False
    assert world.robot not in world.walls


def test_solve_animates_to_goal(world):
    old_goal = world.goal
    path = world.solve()
    assert path[0] == (0, 0) and path[-1] == old_goal
    assert world.animating
    assert world.move(0, 1) is False

    ticks = 0
    while world.advance():
        ticks += 1
        assert world.animated_path == path[:ticks + 1]
    assert ticks == len(path) - 2
    assert world.robot == old_goal
    assert world.goals_reached == 1
    assert world.animated_path == [] and world.path == []
    assert world.goal != world.robot


def test_solve_without_path_leaves_state(world):
    world.walls |= {(3, 3), (3, 4), (4, 3)}
    assert world.solve() == []
    assert world.last_status == "no_path"
    assert world.robot == (0, 0)
    assert not world.animating


def test_hint_is_next_step(world):
    hint = world.request_hint()
    assert hint == search((0, 0), (4, 4), {(1, 0)}, 5)[1]
    assert world.hint == hint


def test_hint_needs_a_path(world):
    world.walls |= {(3, 3), (3, 4), (4, 3)}
    assert world.request_hint() is None


def test_reset(world):
    world.move(0, 1)
    world.solve()
    world.reset()
    assert world.robot == world.start
    assert world.goal != world.start
    assert not world.animating
    assert world.path == [] and world.animated_path == [] and world.hint is None


def test_stats(world):
    st = world.stats()
    assert st["distance"] == 5.7
    assert st["walls"] == 1
    assert st["path_len"] == 0


def test_heuristic_and_algo_switch(world):
    world.set_heuristic("octile")
    assert world.plan().heuristic == "octile"
    world.set_algo("Dijkstra")
    res = world.plan()
    assert res.algo == "Dijkstra"
    assert res.success
    with pytest.raises(ValueError):
        world.set_heuristic("nope")
    with pytest.raises(ValueError):
        world.set_algo("BFS")


def test_rejects_out_of_bounds_start():
    with pytest.raises(OutOfBoundsError):
        WorldState(size=3, start=(3, 0), goal=(0, 0))


def test_rejects_out_of_bounds_wall():
    with pytest.raises(OutOfBoundsError):
        WorldState(size=3, start=(0, 0), goal=(2, 2), walls={(9, 9)})


@pytest.mark.parametrize("kwargs", [
    dict(start=(0, 0), goal=(2, 2), walls={(0, 0)}),
    dict(start=(0, 0), goal=(2, 2), walls={(2, 2)}),
    dict(start=(0, 0), goal=(2, 2), walls={(1, 1)}, robot=(1, 1)),
])
def test_rejects_endpoint_on_wall(kwargs):
    with pytest.raises(ValueError, match="is a wall"):
        WorldState(size=3, **kwargs)


def test_from_bundled_map():
    spec = load_map(bundled_maps()["01_default"])
    w = WorldState.from_map(spec, heuristic="manhattan")
    assert w.robot == (2, 2)
    assert w.goal == (12, 12)
    assert len(w.walls) == 9
    assert w.solve()[-1] == (12, 12)
