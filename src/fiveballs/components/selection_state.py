from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple


class SelectionMode(Enum):
    IDLE = auto()
    SELECTED = auto()


@dataclass(slots=True)
class SelectionState:
    """Turn controller state.

    Fields:
      mode: IDLE or SELECTED.
      origin: cell of the selected ball while SELECTED.
      pending_target: empty cell a path was requested for, if any.
      pending_request_id: id of the outstanding path request, if any.
    """
    mode: SelectionMode = SelectionMode.IDLE
    origin: Optional[Tuple[int, int]] = None
    pending_target: Optional[Tuple[int, int]] = None
    pending_request_id: Optional[int] = None

    def reset(self) -> None:
        self.mode = SelectionMode.IDLE
        self.origin = None
        self.pending_target = None
        self.pending_request_id = None

    def select(self, origin: Tuple[int, int]) -> None:
        self.mode = SelectionMode.SELECTED
        self.origin = origin
        self.pending_target = None
        self.pending_request_id = None

    @property
    def is_selected(self) -> bool:
        return self.mode == SelectionMode.SELECTED
