import random
from typing import Dict, Tuple

from esper import World

from fiveballs.components.ball_palette import BallPalette, BallPaletteRegistry
from fiveballs.components.game_state import GameMode, GameState
from fiveballs.components.selection_state import SelectionState
from fiveballs.components.upcoming_queue import UpcomingQueue
from fiveballs.constants import GRID_SIZE, PALETTE, START_BALL_COUNT
from fiveballs.events.bus import EventBus
from fiveballs.systems.board import BoardSystem
from fiveballs.systems.grid_ops import create_board
from fiveballs.systems.upcoming import regenerate_upcoming


def create_world(
    event_bus: EventBus,
    *,
    grid_size: int = GRID_SIZE,
    palette: Dict[str, Tuple[int, int, int]] | None = None,
    start_balls: int = START_BALL_COUNT,
    rng: random.Random | None = None,
) -> World:
    """Build a fresh session: empty grid, palette, selection, queue and opening balls."""
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(GameState(mode=GameMode.PLAYING))
    world.create_entity(SelectionState())

    # Single registry entity with the canonical palette
    world.create_entity(
        BallPaletteRegistry(),
        BallPalette(colors=dict(palette or PALETTE)),
    )

    create_board(world, grid_size)
    world.create_entity(UpcomingQueue())

    if start_balls:
        BoardSystem(world, event_bus).place_random_balls(start_balls)
    regenerate_upcoming(world)
    return world
