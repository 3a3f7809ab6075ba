from dataclasses import dataclass, field
from typing import List

@dataclass(slots=True)
class UpcomingQueue:
    """Colors previewed to the player and spawned on the next non-scoring move."""
    colors: List[str] = field(default_factory=list)
