from dataclasses import dataclass, field
from typing import Dict, Tuple

@dataclass(slots=True)
class Board:
    """Square grid definition.

    size: number of rows and columns, fixed for the session.
    ball_count: cumulative balls ever placed; drives id allocation, not occupancy.
    cells: (x, y) -> cell entity index, filled when the cell entities are created.
    """
    size: int
    ball_count: int = 0
    cells: Dict[Tuple[int, int], int] = field(default_factory=dict)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def next_ball_id(self) -> int:
        self.ball_count += 1
        return self.ball_count
