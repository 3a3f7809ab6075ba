from __future__ import annotations

import logging
from typing import Protocol

from fiveballs.events.bus import EventBus, EVENT_SCORE_CHANGED

logger = logging.getLogger(__name__)


class ScoreSink(Protocol):
    def increase(self, amount: int) -> None:
        ...


class ScoreKeeper:
    """Default score sink: keeps the session total and announces every change."""

    def __init__(self, event_bus: EventBus | None = None) -> None:
        self.event_bus = event_bus
        self.total = 0

    def increase(self, amount: int) -> None:
        if amount <= 0:
            return
        self.total += amount
        logger.debug("Score +%d -> %d", amount, self.total)
        if self.event_bus is not None:
            self.event_bus.emit(EVENT_SCORE_CHANGED, total=self.total, delta=amount)
