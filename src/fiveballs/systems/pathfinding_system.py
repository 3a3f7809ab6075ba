"""Reference responder for the pathfinding port.

Answers every path_request with exactly one path_result. In deferred mode
results are held back until the next tick, which mirrors an asynchronous
pathfinder and lets the turn controller's stale-result guard be exercised.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence, Tuple

from fiveballs.events.bus import EventBus, EVENT_PATH_REQUEST, EVENT_PATH_RESULT, EVENT_TICK

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

NEIGHBOUR_STEPS: Tuple[Position, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


def find_path(walkable: Sequence[Sequence[int]], start: Position, end: Position) -> Optional[List[Position]]:
    """Shortest 4-neighbour path from start to end over cells marked 0.

    The start cell holds the moving ball, so only the cells after it must be
    traversable. Returns the path including both ends, or None.
    """
    height = len(walkable)
    width = len(walkable[0]) if height else 0
    ex, ey = end
    if not (0 <= ex < width and 0 <= ey < height) or walkable[ey][ex] != 0:
        return None
    came_from: Dict[Position, Optional[Position]] = {start: None}
    queue: Deque[Position] = deque([start])
    while queue:
        current = queue.popleft()
        if current == end:
            path: List[Position] = []
            node: Optional[Position] = current
            while node is not None:
                path.append(node)
                node = came_from[node]
            path.reverse()
            return path
        cx, cy = current
        for dx, dy in NEIGHBOUR_STEPS:
            nx, ny = cx + dx, cy + dy
            if not (0 <= nx < width and 0 <= ny < height):
                continue
            if (nx, ny) in came_from or walkable[ny][nx] != 0:
                continue
            came_from[(nx, ny)] = current
            queue.append((nx, ny))
    return None


class PathfindingSystem:
    def __init__(self, event_bus: EventBus, *, deferred: bool = False):
        self.event_bus = event_bus
        self.deferred = deferred
        self._pending: List[Tuple[int, Optional[List[Position]]]] = []
        self.event_bus.subscribe(EVENT_PATH_REQUEST, self.on_path_request)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_path_request(self, sender, **kwargs):
        request_id = kwargs.get('request_id')
        start = kwargs.get('start')
        end = kwargs.get('end')
        walkable = kwargs.get('walkable')
        if request_id is None or start is None or end is None or walkable is None:
            return
        path = find_path(walkable, tuple(start), tuple(end))
        logger.debug("Path request %s %s -> %s: %s", request_id, start, end, "found" if path else "none")
        if self.deferred:
            self._pending.append((request_id, path))
            return
        self.event_bus.emit(EVENT_PATH_RESULT, request_id=request_id, path=path)

    def on_tick(self, sender, **kwargs):
        if not self._pending:
            return
        pending = self._pending
        self._pending = []
        for request_id, path in pending:
            self.event_bus.emit(EVENT_PATH_RESULT, request_id=request_id, path=path)

    @property
    def pending_count(self) -> int:
        return len(self._pending)
