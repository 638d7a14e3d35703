"""Deterministic record-of-the-day selection."""

from __future__ import annotations

from datetime import date
from typing import Callable

import structlog

from ..config import DEFAULT_CATALOG_MAX_ID
from ..logging_conf import component_logger
from .service import Record, RecordFetchError, RecordSource


def compute_daily_seed(day: date) -> int:
    # Month is zero-based (January == 0) to keep ids stable across implementations
    return day.day * 10000 + (day.month - 1) * 100 + day.year


def compute_daily_id(day: date, catalog_max_id: int = DEFAULT_CATALOG_MAX_ID) -> int:
    """Return the id selected for ``day``, always within ``1..catalog_max_id``."""

    if catalog_max_id < 1:
        raise ValueError("catalog_max_id must be >= 1")
    return compute_daily_seed(day) % catalog_max_id + 1


class DailySelector:
    """Fetch exactly one record per activation, chosen by the current date."""

    def __init__(
        self,
        service: RecordSource,
        clock: Callable[[], date] = date.today,
        catalog_max_id: int = DEFAULT_CATALOG_MAX_ID,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.service = service
        self.clock = clock
        self.catalog_max_id = catalog_max_id
        self.logger = logger or component_logger("daily")
        self.current: Record | None = None
        self.selected_id: int | None = None

    async def activate(self) -> Record | None:
        today = self.clock()
        self.selected_id = compute_daily_id(today, self.catalog_max_id)
        try:
            record = await self.service.fetch_by_id(self.selected_id)
        except RecordFetchError as exc:
            self.logger.error(
                "daily_fetch_failed",
                id=self.selected_id,
                day=today.isoformat(),
                error=exc.reason,
            )
            return self.current
        self.current = record
        self.logger.info("daily_selected", id=record.id, name=record.name, day=today.isoformat())
        return self.current


__all__ = ["DailySelector", "compute_daily_id", "compute_daily_seed"]
