from __future__ import annotations

import random
from typing import Iterable, List, Tuple

from esper import World

from fiveballs.events.bus import EventBus
from fiveballs.systems import grid_ops
from fiveballs.world import create_world


class ScriptedRandom(random.Random):
    """Random source whose randrange answers come from a script until it runs out.

    choice() goes through _randbelow and is left untouched, so palette draws stay
    seeded while coordinate draws are pinned.
    """

    script: List[int]

    def with_script(self, *values: int) -> "ScriptedRandom":
        self.script = list(values)
        return self

    def randrange(self, start, stop=None, step=1):
        script = getattr(self, "script", None)
        if script:
            return script.pop(0)
        return super().randrange(start, stop, step)


def make_session(
    size: int = 9,
    *,
    start_balls: int = 0,
    rng: random.Random | None = None,
) -> Tuple[EventBus, World]:
    """Fresh bus + world with an empty grid unless start_balls says otherwise."""

    bus = EventBus()
    world = create_world(bus, grid_size=size, start_balls=start_balls, rng=rng or random.Random(1234))
    return bus, world


def place_balls(world: World, cells: Iterable[Tuple[int, int]], color: str = "red") -> list:
    return [grid_ops.place_ball_at(world, x, y, color) for x, y in cells]


def capture(bus: EventBus, name: str) -> list[dict]:
    events: list[dict] = []
    bus.subscribe(name, lambda sender, **payload: events.append(payload))
    return events
