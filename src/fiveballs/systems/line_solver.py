"""Line detection and clearing.

A scan runs four passes in a fixed order (rows, columns, down-right
diagonals, down-left diagonals). Each pass sees the grid as the previous
pass left it, so a ball cleared by a row cannot also count towards a
column in the same scan. Within one line only the single longest run is
cleared, and only when it reaches the threshold; ties keep the run found
first.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from esper import World

from fiveballs.components.ball import Ball
from fiveballs.constants import LINE_THRESHOLD
from fiveballs.events.bus import EventBus, EVENT_LINE_CLEARED
from fiveballs.systems import grid_ops
from fiveballs.systems.board import BoardSystem
from fiveballs.systems.score import ScoreSink

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Step = Tuple[int, int]
LineStart = Tuple[Position, Step]


@dataclass(slots=True)
class BallSequence:
    """Run of same-colored balls starting at (start_x, start_y)."""
    start_x: int
    start_y: int
    length: int = 0

    def update_if_longer(self, other: "BallSequence") -> None:
        if other.length > self.length:
            self.start_x = other.start_x
            self.start_y = other.start_y
            self.length = other.length

    def cells(self, step: Step) -> List[Position]:
        dx, dy = step
        return [(self.start_x + i * dx, self.start_y + i * dy) for i in range(self.length)]


@dataclass(slots=True)
class ClearedLine:
    direction: str
    sequence: BallSequence
    cells: List[Position]
    color: str

    @property
    def length(self) -> int:
        return self.sequence.length


@dataclass(slots=True)
class LineScan:
    """Outcome of one full scan. Truthy when at least one line was cleared."""
    lines: List[ClearedLine] = field(default_factory=list)

    @property
    def score_delta(self) -> int:
        return sum(line.length for line in self.lines)

    @property
    def cleared_cells(self) -> List[Position]:
        return [pos for line in self.lines for pos in line.cells]

    def __bool__(self) -> bool:
        return bool(self.lines)


def horizontal_lines(size: int, threshold: int) -> Iterator[LineStart]:
    for y in range(size):
        yield (0, y), (1, 0)


def vertical_lines(size: int, threshold: int) -> Iterator[LineStart]:
    for x in range(size):
        yield (x, 0), (0, 1)


def diagonal_down_right_lines(size: int, threshold: int) -> Iterator[LineStart]:
    for start_x in range(0, size - threshold + 1):
        yield (start_x, 0), (1, 1)
    for start_y in range(1, size - threshold + 1):
        yield (0, start_y), (1, 1)


def diagonal_down_left_lines(size: int, threshold: int) -> Iterator[LineStart]:
    for start_x in range(size - 1, threshold - 2, -1):
        yield (start_x, 0), (-1, 1)
    for start_y in range(1, size - threshold + 1):
        yield (size - 1, start_y), (-1, 1)


# Pass order matters: each pass observes the clears of the ones before it.
SCAN_PASSES: Tuple[Tuple[str, Callable[[int, int], Iterator[LineStart]]], ...] = (
    ("horizontal", horizontal_lines),
    ("vertical", vertical_lines),
    ("diagonal_down_right", diagonal_down_right_lines),
    ("diagonal_down_left", diagonal_down_left_lines),
)


def walk_line(start: Position, step: Step, size: int) -> Iterator[Position]:
    x, y = start
    dx, dy = step
    while 0 <= x < size and 0 <= y < size:
        yield x, y
        x += dx
        y += dy


def find_longest_run(balls: Dict[Position, Ball], start: Position, step: Step, size: int) -> BallSequence:
    """Return the first strictly-longest run of equal-colored balls on one line."""
    current = BallSequence(start[0], start[1], 0)
    best = BallSequence(start[0], start[1], 0)
    previous: Optional[Ball] = None
    for x, y in walk_line(start, step, size):
        ball = balls.get((x, y))
        if ball is None:
            best.update_if_longer(current)
            current = BallSequence(x, y, 0)
        elif current.length and ball.same_color(previous):
            current.length += 1
        else:
            best.update_if_longer(current)
            current = BallSequence(x, y, 1)
        previous = ball
    best.update_if_longer(current)
    return best


class LineSolver:
    """Detects qualifying runs, clears them and reports the score delta."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        board: BoardSystem | None = None,
        score_sink: ScoreSink | None = None,
        threshold: int = LINE_THRESHOLD,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.board = board or BoardSystem(world, event_bus)
        self.score_sink = score_sink
        self.threshold = threshold

    def scan_lines(self) -> bool:
        return bool(self.scan())

    def scan(self) -> LineScan:
        size = grid_ops.get_board(self.world).size
        balls = grid_ops.ball_map(self.world)
        result = LineScan()
        for direction, lines in SCAN_PASSES:
            for start, step in lines(size, self.threshold):
                best = find_longest_run(balls, start, step, size)
                if best.length < self.threshold:
                    continue
                cells = best.cells(step)
                color = balls[cells[0]].color
                self.board.clear_cells(cells)
                for pos in cells:
                    balls.pop(pos, None)
                result.lines.append(ClearedLine(direction=direction, sequence=best, cells=cells, color=color))
                logger.debug("Cleared %s %s line of %d from (%d, %d)", direction, color, best.length, best.start_x, best.start_y)
        if result:
            cells = result.cleared_cells
            self.event_bus.emit(EVENT_LINE_CLEARED, cells=cells, total_count=len(cells))
            if self.score_sink is not None:
                self.score_sink.increase(result.score_delta)
        return result
