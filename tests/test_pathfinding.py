import pytest

from fiveballs.events.bus import EventBus, EVENT_PATH_REQUEST, EVENT_PATH_RESULT, EVENT_TICK
from fiveballs.systems.pathfinding_system import PathfindingSystem, find_path
from tests.helpers import capture


OPEN_3X3 = [[0, 0, 0], [0, 0, 0], [0, 0, 0]]


def test_straight_path_includes_both_ends():
    walkable = [[1, 0, 0], [0, 0, 0], [0, 0, 0]]
    assert find_path(walkable, (0, 0), (2, 0)) == [(0, 0), (1, 0), (2, 0)]


def test_path_is_shortest_and_four_connected():
    walkable = [
        [1, 0, 0, 0],
        [1, 1, 1, 0],
        [0, 0, 0, 0],
    ]
    path = find_path(walkable, (0, 2), (1, 0))
    assert path[0] == (0, 2) and path[-1] == (1, 0)
    assert len(path) == 8
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        assert abs(ax - bx) + abs(ay - by) == 1
        assert walkable[by][bx] == 0


def test_enclosed_start_has_no_path():
    walkable = [
        [0, 1, 0],
        [1, 1, 0],
        [0, 0, 0],
    ]
    assert find_path(walkable, (0, 0), (2, 2)) is None


@pytest.mark.parametrize("end", [(1, 1), (3, 0), (0, -1)])
def test_blocked_or_outside_target_has_no_path(end):
    walkable = [[0, 0, 0], [0, 1, 0], [0, 0, 0]]
    assert find_path(walkable, (0, 0), end) is None


def test_system_answers_each_request_once():
    bus = EventBus()
    PathfindingSystem(bus)
    results = capture(bus, EVENT_PATH_RESULT)
    bus.emit(EVENT_PATH_REQUEST, request_id=4, start=(0, 0), end=(2, 2), walkable=OPEN_3X3)
    assert len(results) == 1
    assert results[0]['request_id'] == 4
    assert results[0]['path'][-1] == (2, 2)


def test_deferred_system_answers_on_tick():
    bus = EventBus()
    pathfinder = PathfindingSystem(bus, deferred=True)
    results = capture(bus, EVENT_PATH_RESULT)
    bus.emit(EVENT_PATH_REQUEST, request_id=1, start=(0, 0), end=(0, 2), walkable=OPEN_3X3)
    bus.emit(EVENT_PATH_REQUEST, request_id=2, start=(0, 0), end=(2, 0), walkable=OPEN_3X3)
    assert results == []
    assert pathfinder.pending_count == 2
    bus.emit(EVENT_TICK, dt=0.016)
    assert [r['request_id'] for r in results] == [1, 2]
    assert pathfinder.pending_count == 0
