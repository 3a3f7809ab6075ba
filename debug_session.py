import sys, os
import logging
import random
ROOT = os.path.dirname(__file__)
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
from fiveballs.events.bus import EventBus
from fiveballs.events.bus import EVENT_CELL_CLICK, EVENT_LINE_CLEARED, EVENT_NO_PATH_FOUND, EVENT_GRID_FULL, EVENT_TURN_RESOLVED
from fiveballs.systems import grid_ops
from fiveballs.systems.game_flow_system import GameFlowSystem
from fiveballs.systems.pathfinding_system import PathfindingSystem
from fiveballs.systems.score import ScoreKeeper
from fiveballs.systems.turn_system import TurnSystem
from fiveballs.world import create_world

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

seed = int(sys.argv[1]) if len(sys.argv) > 1 else 7
turns_to_play = int(sys.argv[2]) if len(sys.argv) > 2 else 20

bus = EventBus()
world = create_world(bus, rng=random.Random(seed))
PathfindingSystem(bus)
flow = GameFlowSystem(world, bus)
score = ScoreKeeper(bus)
turns = TurnSystem(world, bus, score_sink=score)

received = []
for ev in [EVENT_LINE_CLEARED, EVENT_NO_PATH_FOUND, EVENT_GRID_FULL, EVENT_TURN_RESOLVED]:
    bus.subscribe(ev, lambda s, _ev=ev, **k: received.append(_ev))

# random self-play: pick any ball and any empty cell, let the pathfinder decide
picker = random.Random(seed + 1)
print(grid_ops.format_grid(world))
for turn in range(turns_to_play):
    if flow.game_over:
        break
    balls = sorted(grid_ops.ball_map(world))
    empty = grid_ops.empty_cells(world)
    if not balls or not empty:
        break
    src = picker.choice(balls)
    dst = picker.choice(empty)
    bus.emit(EVENT_CELL_CLICK, x=src[0], y=src[1])
    bus.emit(EVENT_CELL_CLICK, x=dst[0], y=dst[1])
    print(f'turn {turn}: {src} -> {dst} events {received} score {score.total}')
    received.clear()
print(grid_ops.format_grid(world))
print('final score', score.total, 'game over', flow.game_over)
