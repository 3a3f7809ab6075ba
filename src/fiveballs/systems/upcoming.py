from __future__ import annotations

import random
from typing import List, Sequence

from esper import World

from fiveballs.components.upcoming_queue import UpcomingQueue
from fiveballs.constants import LOOKAHEAD
from fiveballs.systems.grid_ops import get_palette, world_rng


def draw_colors(rng: random.Random, palette: Sequence[str], count: int = LOOKAHEAD) -> List[str]:
    """Draw count colors uniformly and independently (repeats allowed)."""
    return [rng.choice(palette) for _ in range(count)]


def get_upcoming_queue(world: World) -> UpcomingQueue:
    for _, queue in world.get_component(UpcomingQueue):
        return queue
    raise RuntimeError("UpcomingQueue not found")


def regenerate_upcoming(world: World, *, rng: random.Random | None = None) -> List[str]:
    queue = get_upcoming_queue(world)
    queue.colors = draw_colors(world_rng(world, rng), get_palette(world).color_names())
    return list(queue.colors)


def peek_upcoming(world: World) -> List[str]:
    return list(get_upcoming_queue(world).colors)


def commit_and_regenerate(world: World, *, rng: random.Random | None = None) -> List[str]:
    """Return the previewed colors for placement and refill the queue with fresh ones."""
    committed = peek_upcoming(world)
    regenerate_upcoming(world, rng=rng)
    return committed
