"""Game state resource describing the session mode."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """Session modes gating player input."""
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the current session mode."""
    mode: GameMode = GameMode.PLAYING
