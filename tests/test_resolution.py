from fiveballs.components.game_state import GameMode
from fiveballs.events.bus import (
    EVENT_CELL_CLICK,
    EVENT_GAME_MODE_CHANGED,
    EVENT_GRID_FULL,
    EVENT_TURN_RESOLVED,
    EVENT_UPCOMING_CHANGED,
)
from fiveballs.systems import grid_ops
from fiveballs.systems.game_flow_system import GameFlowSystem
from fiveballs.systems.pathfinding_system import PathfindingSystem
from fiveballs.systems.score import ScoreKeeper
from fiveballs.systems.turn_system import TurnSystem
from fiveballs.systems.upcoming import get_upcoming_queue, peek_upcoming
from fiveballs.utils.game_state import get_game_mode
from tests.helpers import ScriptedRandom, capture, make_session, place_balls


def build(size=9, rng=None):
    bus, world = make_session(size=size, rng=rng)
    PathfindingSystem(bus)
    GameFlowSystem(world, bus)
    keeper = ScoreKeeper(bus)
    turns = TurnSystem(world, bus, score_sink=keeper)
    scans = []
    original_scan = turns.line_solver.scan

    def counting_scan():
        result = original_scan()
        scans.append(result)
        return result

    turns.line_solver.scan = counting_scan
    return bus, world, turns, keeper, scans


def move(bus, src, dst):
    bus.emit(EVENT_CELL_CLICK, x=src[0], y=src[1])
    bus.emit(EVENT_CELL_CLICK, x=dst[0], y=dst[1])


def test_move_that_forms_line_skips_spawn():
    bus, world, turns, keeper, scans = build()
    place_balls(world, [(x, 0) for x in range(4)], color='red')
    place_balls(world, [(4, 5)], color='red')
    get_upcoming_queue(world).colors = ['blue', 'green', 'yellow']
    upcoming_events = capture(bus, EVENT_UPCOMING_CHANGED)
    move(bus, (4, 5), (4, 0))
    resolution = turns.last_resolution
    assert resolution.score_delta == 5
    assert resolution.spawned is False
    assert resolution.placed == []
    assert len(scans) == 1
    assert grid_ops.ball_map(world) == {}
    assert peek_upcoming(world) == ['blue', 'green', 'yellow']
    assert upcoming_events == []
    assert keeper.total == 5


def test_move_without_line_spawns_previewed_colors():
    bus, world, turns, keeper, scans = build()
    place_balls(world, [(0, 0)], color='brown')
    get_upcoming_queue(world).colors = ['blue', 'green', 'yellow']
    resolved = capture(bus, EVENT_TURN_RESOLVED)
    upcoming_events = capture(bus, EVENT_UPCOMING_CHANGED)
    move(bus, (0, 0), (8, 8))
    resolution = turns.last_resolution
    assert resolution.spawned is True
    assert [ball.color for ball in resolution.placed] == ['blue', 'green', 'yellow']
    assert len(grid_ops.ball_map(world)) == 4
    assert len(scans) == 2
    assert resolution.score_delta == 0
    assert len(upcoming_events) == 1
    assert upcoming_events[0]['colors'] == peek_upcoming(world) == resolution.upcoming
    assert resolved[0]['spawned'] is True
    assert keeper.total == 0


def test_spawned_ball_can_complete_a_line():
    # Coordinate draws are (row, column) pairs: the first red lands on (4, 0).
    rng = ScriptedRandom(7).with_script(0, 4, 8, 0, 8, 1)
    bus, world, turns, keeper, scans = build(rng=rng)
    place_balls(world, [(x, 0) for x in range(4)], color='red')
    place_balls(world, [(8, 8)], color='blue')
    get_upcoming_queue(world).colors = ['red', 'red', 'red']
    move(bus, (8, 8), (8, 7))
    resolution = turns.last_resolution
    assert len(scans) == 2
    assert not scans[0]
    assert sorted(resolution.cleared_cells) == [(x, 0) for x in range(5)]
    assert resolution.score_delta == 5
    assert keeper.total == 5
    assert set(grid_ops.ball_map(world)) == {(8, 7), (0, 8), (1, 8)}


def test_filling_the_grid_ends_the_game():
    bus, world, turns, keeper, scans = build(size=3)
    cells = [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1), (0, 2)]
    for index, cell in enumerate(cells):
        place_balls(world, [cell], color=['red', 'blue', 'green'][index % 3])
    grid_full = capture(bus, EVENT_GRID_FULL)
    modes = capture(bus, EVENT_GAME_MODE_CHANGED)
    move(bus, (2, 1), (2, 2))
    resolution = turns.last_resolution
    assert resolution.grid_full is True
    assert len(resolution.placed) <= 2
    assert grid_full
    assert get_game_mode(world) == GameMode.GAME_OVER
    assert modes == [{'previous_mode': GameMode.PLAYING, 'new_mode': GameMode.GAME_OVER}]


def test_turn_resolved_payload_mirrors_resolution():
    bus, world, turns, keeper, scans = build()
    place_balls(world, [(x, 2) for x in range(4)], color='green')
    place_balls(world, [(4, 6)], color='green')
    resolved = capture(bus, EVENT_TURN_RESOLVED)
    move(bus, (4, 6), (4, 2))
    payload = resolved[0]
    assert payload['score_delta'] == 5
    assert payload['spawned'] is False
    assert payload['grid_full'] is False
    assert sorted(payload['cleared_cells']) == [(x, 2) for x in range(5)]
