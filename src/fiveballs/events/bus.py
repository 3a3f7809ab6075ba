from blinker import Signal
from typing import Dict

class EventBus:
    """Named blinker signals; handlers receive (sender, **payload)."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong refs: systems are often created without being stored.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_CELL_CLICK = "cell_click"                    # payload: x, y
EVENT_CLICK_OUTSIDE = "click_outside"              # payload: None
EVENT_SELECTION_CHANGED = "selection_changed"      # payload: x=int|None, y=int|None


# ============================================================================
# PATHFINDING PORT
# ============================================================================
EVENT_PATH_REQUEST = "path_request"                # payload: request_id=int, start=(x,y), end=(x,y), walkable=list[list[int]]
EVENT_PATH_RESULT = "path_result"                  # payload: request_id=int, path=list[(x,y)]|None
EVENT_NO_PATH_FOUND = "no_path_found"              # payload: start=(x,y), end=(x,y)


# ============================================================================
# GRID & LINES
# ============================================================================
EVENT_BALL_PLACED = "ball_placed"                  # payload: ball=Ball, x, y
EVENT_BALL_REMOVED = "ball_removed"                # payload: x, y
EVENT_BALL_MOVED = "ball_moved"                    # payload: ball=Ball, src=(x,y), dst=(x,y), path=list[(x,y)]
EVENT_LINE_CLEARED = "line_cleared"                # payload: cells=list[(x,y)], total_count=int
EVENT_GRID_FULL = "grid_full"                      # payload: color=str|None


# ============================================================================
# TURN, SCORE & SESSION
# ============================================================================
EVENT_UPCOMING_CHANGED = "upcoming_changed"        # payload: colors=list[str]
EVENT_TURN_RESOLVED = "turn_resolved"              # payload: score_delta=int, spawned=bool, cleared_cells=list[(x,y)], upcoming=list[str], grid_full=bool, placed=list[Ball]
EVENT_SCORE_CHANGED = "score_changed"              # payload: total=int, delta=int
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
