"""Session mode transitions."""
from __future__ import annotations

import logging

from esper import World

from fiveballs.components.game_state import GameMode
from fiveballs.events.bus import EVENT_GRID_FULL, EventBus
from fiveballs.utils.game_state import get_game_mode, set_game_mode

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Ends the session once the grid cannot take the next spawned ball."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_GRID_FULL, self._on_grid_full)

    @property
    def game_over(self) -> bool:
        return get_game_mode(self.world) == GameMode.GAME_OVER

    def _on_grid_full(self, sender, **payload) -> None:
        if self.game_over:
            return
        logger.info("Grid full, game over")
        set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
