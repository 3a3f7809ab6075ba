from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from esper import World

from fiveballs.components.ball import Ball
from fiveballs.components.game_state import GameMode
from fiveballs.components.selection_state import SelectionState
from fiveballs.events.bus import (
    EventBus,
    EVENT_CELL_CLICK,
    EVENT_CLICK_OUTSIDE,
    EVENT_GRID_FULL,
    EVENT_NO_PATH_FOUND,
    EVENT_PATH_REQUEST,
    EVENT_PATH_RESULT,
    EVENT_SELECTION_CHANGED,
    EVENT_TURN_RESOLVED,
    EVENT_UPCOMING_CHANGED,
)
from fiveballs.systems import grid_ops
from fiveballs.systems.board import BoardSystem
from fiveballs.systems.line_solver import LineSolver
from fiveballs.systems.score import ScoreSink
from fiveballs.systems.selection_utils import get_or_create_selection_state
from fiveballs.systems.upcoming import commit_and_regenerate, peek_upcoming
from fiveballs.utils.game_state import get_game_mode

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(slots=True)
class TurnResolution:
    score_delta: int = 0
    spawned: bool = False
    cleared_cells: List[Position] = field(default_factory=list)
    upcoming: List[str] = field(default_factory=list)
    grid_full: bool = False
    placed: List[Ball] = field(default_factory=list)


class TurnSystem:
    """Selection state machine and turn resolution.

    Flow:
      - Idle + occupied cell -> Selected(origin). Empty cells are ignored.
      - Selected + occupied cell (the origin included) -> Idle.
      - Selected + empty cell -> path_request; the grid is left untouched until
        the matching path_result arrives. Results for superseded or abandoned
        requests are dropped.
      - A delivered path moves the ball and runs resolution: scan for lines and,
        only when nothing cleared, spawn the upcoming colors and scan again.
    """
    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        board: BoardSystem | None = None,
        line_solver: LineSolver | None = None,
        score_sink: ScoreSink | None = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self.board = board or BoardSystem(world, event_bus)
        self.line_solver = line_solver or LineSolver(world, event_bus, board=self.board, score_sink=score_sink)
        self.last_resolution: Optional[TurnResolution] = None
        self._request_ids = itertools.count(1)
        self.event_bus.subscribe(EVENT_CELL_CLICK, self.on_cell_click)
        self.event_bus.subscribe(EVENT_CLICK_OUTSIDE, self.on_click_outside)
        self.event_bus.subscribe(EVENT_PATH_RESULT, self.on_path_result)
        get_or_create_selection_state(self.world)

    @property
    def selection(self) -> SelectionState:
        return get_or_create_selection_state(self.world)

    @property
    def selected(self) -> Optional[Position]:
        state = self.selection
        return state.origin if state.is_selected else None

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_cell_click(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        self.select_cell(x, y)

    def on_click_outside(self, sender, **kwargs):
        state = self.selection
        was_selected = state.is_selected
        state.reset()
        if was_selected:
            self.event_bus.emit(EVENT_SELECTION_CHANGED, x=None, y=None)

    def on_path_result(self, sender, **kwargs):
        request_id = kwargs.get('request_id')
        path: Optional[Sequence[Position]] = kwargs.get('path')
        state = self.selection
        if not state.is_selected or request_id is None or request_id != state.pending_request_id:
            logger.warning("Discarding stale path result for request %s", request_id)
            return
        origin = state.origin
        target = state.pending_target
        if origin is None or target is None:
            return
        self._deselect(state)
        if not path:
            logger.debug("No path from %s to %s", origin, target)
            self.event_bus.emit(EVENT_NO_PATH_FOUND, start=origin, end=target)
            return
        if self.board.is_empty(*origin) or not self.board.is_empty(*target):
            logger.warning("Grid changed while path %s -> %s was pending; move dropped", origin, target)
            return
        self.board.move_ball(origin, target, [tuple(step) for step in path])
        self.resolve_turn()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_cell(self, x: int, y: int) -> None:
        if get_game_mode(self.world) != GameMode.PLAYING:
            return
        if not grid_ops.get_board(self.world).in_bounds(x, y):
            return
        state = self.selection
        occupied = not self.board.is_empty(x, y)
        if not state.is_selected:
            if occupied:
                state.select((x, y))
                self.event_bus.emit(EVENT_SELECTION_CHANGED, x=x, y=y)
            return
        if occupied:
            self._deselect(state)
            return
        self._request_path(state, (x, y))

    def _deselect(self, state: SelectionState) -> None:
        state.reset()
        self.event_bus.emit(EVENT_SELECTION_CHANGED, x=None, y=None)

    def _request_path(self, state: SelectionState, target: Position) -> None:
        request_id = next(self._request_ids)
        state.pending_target = target
        state.pending_request_id = request_id
        logger.debug("Requesting path %d from %s to %s", request_id, state.origin, target)
        self.event_bus.emit(
            EVENT_PATH_REQUEST,
            request_id=request_id,
            start=state.origin,
            end=target,
            walkable=grid_ops.walkable_map(self.world),
        )

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_turn(self) -> TurnResolution:
        first = self.line_solver.scan()
        resolution = TurnResolution(
            score_delta=first.score_delta,
            cleared_cells=list(first.cleared_cells),
        )
        if not first:
            self._spawn_upcoming(resolution)
            second = self.line_solver.scan()
            resolution.score_delta += second.score_delta
            resolution.cleared_cells.extend(second.cleared_cells)
            if not resolution.grid_full and grid_ops.is_full(self.world):
                resolution.grid_full = True
                self.event_bus.emit(EVENT_GRID_FULL, color=None)
        resolution.upcoming = peek_upcoming(self.world)
        self.last_resolution = resolution
        logger.info(
            "Turn resolved: +%d, spawned=%s, grid_full=%s",
            resolution.score_delta,
            resolution.spawned,
            resolution.grid_full,
        )
        self.event_bus.emit(
            EVENT_TURN_RESOLVED,
            score_delta=resolution.score_delta,
            spawned=resolution.spawned,
            cleared_cells=list(resolution.cleared_cells),
            upcoming=list(resolution.upcoming),
            grid_full=resolution.grid_full,
            placed=list(resolution.placed),
        )
        return resolution

    def _spawn_upcoming(self, resolution: TurnResolution) -> None:
        colors = commit_and_regenerate(self.world)
        for color in colors:
            ball = self.board.place_ball_random(color)
            if ball is None:
                resolution.grid_full = True
                self.event_bus.emit(EVENT_GRID_FULL, color=color)
                break
            resolution.placed.append(ball)
        resolution.spawned = bool(resolution.placed)
        self.event_bus.emit(EVENT_UPCOMING_CHANGED, colors=peek_upcoming(self.world))
