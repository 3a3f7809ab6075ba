import random
from typing import Iterable, List, Optional, Sequence, Tuple

from esper import World

from fiveballs.components.ball import Ball
from fiveballs.events.bus import (
    EventBus,
    EVENT_BALL_MOVED,
    EVENT_BALL_PLACED,
    EVENT_BALL_REMOVED,
)
from fiveballs.systems import grid_ops

Position = Tuple[int, int]


class BoardSystem:
    """Event-emitting facade over the grid.

    Every mutation made through this system is announced on the bus so the
    presentation layer can mirror the grid without reading it back. Reads
    delegate straight to grid_ops.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    @property
    def size(self) -> int:
        return grid_ops.get_board(self.world).size

    @property
    def ball_count(self) -> int:
        return grid_ops.get_board(self.world).ball_count

    def cell_at(self, x: int, y: int) -> Optional[Ball]:
        return grid_ops.cell_at(self.world, x, y)

    def is_empty(self, x: int, y: int) -> bool:
        return grid_ops.is_empty(self.world, x, y)

    def is_full(self) -> bool:
        return grid_ops.is_full(self.world)

    def snapshot(self) -> grid_ops.Snapshot:
        return grid_ops.snapshot(self.world)

    def place_ball_at(self, x: int, y: int, color: str) -> Ball:
        ball = grid_ops.place_ball_at(self.world, x, y, color)
        self.event_bus.emit(EVENT_BALL_PLACED, ball=ball, x=x, y=y)
        return ball

    def place_ball_random(self, color: str, *, rng: random.Random | None = None) -> Optional[Ball]:
        placement = grid_ops.place_ball_random(self.world, color, rng=rng)
        if placement is None:
            return None
        ball, (x, y) = placement
        self.event_bus.emit(EVENT_BALL_PLACED, ball=ball, x=x, y=y)
        return ball

    def place_random_balls(
        self,
        count: int,
        *,
        colors: Sequence[str] | None = None,
        rng: random.Random | None = None,
    ) -> List[Ball]:
        placed = grid_ops.place_random_balls(self.world, count, colors=colors, rng=rng)
        for ball, (x, y) in placed:
            self.event_bus.emit(EVENT_BALL_PLACED, ball=ball, x=x, y=y)
        return [ball for ball, _ in placed]

    def move_ball(self, src: Position, dst: Position, path: Sequence[Position] | None = None) -> Ball:
        ball = grid_ops.move_ball(self.world, src[0], src[1], dst[0], dst[1])
        self.event_bus.emit(
            EVENT_BALL_MOVED,
            ball=ball,
            src=src,
            dst=dst,
            path=list(path) if path else [src, dst],
        )
        return ball

    def clear_cells(self, coords: Iterable[Position]) -> List[Position]:
        cleared = grid_ops.clear_cells(self.world, coords)
        for x, y in cleared:
            self.event_bus.emit(EVENT_BALL_REMOVED, x=x, y=y)
        return cleared
