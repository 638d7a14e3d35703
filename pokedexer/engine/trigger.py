"""Level-based growth trigger wiring a viewport position to the collector."""

from __future__ import annotations

from ..config import CollectorConfig
from .collector import IncrementalCollector, PassSummary


class ScrollProximityTrigger:
    """Request growth whenever the visible window sits near the end of the content.

    The trigger never checks whether the collector is busy; every qualifying
    observation forwards a growth request and the collector drops it if a pass
    is already running.
    """

    def __init__(self, collector: IncrementalCollector, step: int = 20, threshold: int = 100) -> None:
        if step < 1:
            raise ValueError("step must be >= 1")
        if threshold < 0:
            raise ValueError("threshold must be >= 0")
        self.collector = collector
        self.step = step
        self.threshold = threshold

    @classmethod
    def from_config(cls, collector: IncrementalCollector, config: CollectorConfig) -> "ScrollProximityTrigger":
        return cls(collector, step=config.growth_step, threshold=config.proximity_threshold)

    def is_near_end(self, viewport_height: float, scroll_top: float, document_height: float) -> bool:
        return viewport_height + scroll_top >= document_height - self.threshold

    async def observe(
        self, viewport_height: float, scroll_top: float, document_height: float
    ) -> PassSummary | None:
        if not self.is_near_end(viewport_height, scroll_top, document_height):
            return None
        return await self.fire()

    async def fire(self) -> PassSummary | None:
        return await self.collector.request_growth(self.step)


__all__ = ["ScrollProximityTrigger"]
