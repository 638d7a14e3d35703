"""Incremental, deduplicated accumulation of catalog records.

The collector owns an ordered collection of records covering ids
``1..target_count`` and extends it when a growth trigger asks for more. A
fetch pass walks the ids between the last attempted id and the new target
strictly one at a time, awaiting each fetch before issuing the next, so at
most one request is outstanding per collector.

While a pass is in flight the collector is *busy*: growth requests arriving
in that window are dropped rather than queued. Triggers are expected to be
level-based and fire again once the collector is idle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import structlog

from ..config import DEFAULT_CATALOG_MAX_ID, CollectorConfig
from ..logging_conf import component_logger
from .dedup import RecordIndex
from .service import Record, RecordFetchError, RecordSource


class PassReporter(Protocol):
    def start(self, total: int) -> None: ...

    def advance(
        self,
        success: bool = False,
        failed: bool = False,
        skipped: bool = False,
        current_url: str | None = None,
    ) -> None: ...

    def close(self) -> None: ...


@dataclass
class PassSummary:
    """Outcome of one fetch pass over ``start_id..end_id``."""

    start_id: int
    end_id: int
    appended: int = 0
    failed: int = 0
    skipped: int = 0
    failed_ids: list[int] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return max(0, self.end_id - self.start_id + 1)


class IncrementalCollector:
    """Grow an id-ordered record collection on demand without overlapping passes."""

    def __init__(
        self,
        service: RecordSource,
        *,
        initial_target: int = 40,
        catalog_max_id: int = DEFAULT_CATALOG_MAX_ID,
        progress: PassReporter | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        if initial_target < 0:
            raise ValueError("initial_target must be >= 0")
        if catalog_max_id < 1:
            raise ValueError("catalog_max_id must be >= 1")
        self.service = service
        self.initial_target = initial_target
        self.catalog_max_id = catalog_max_id
        self.progress = progress
        self.logger = logger or component_logger("collector")
        self._index = RecordIndex()
        self.target_count = 0
        self.last_attempted_id = 0
        self.busy = False

    @classmethod
    def from_config(
        cls,
        service: RecordSource,
        config: CollectorConfig,
        catalog_max_id: int = DEFAULT_CATALOG_MAX_ID,
        **kwargs,
    ) -> "IncrementalCollector":
        return cls(
            service,
            initial_target=config.initial_target,
            catalog_max_id=catalog_max_id,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Read-only state for display surfaces
    # ------------------------------------------------------------------
    @property
    def records(self) -> tuple[Record, ...]:
        return self._index.snapshot()

    @property
    def exhausted(self) -> bool:
        return self.last_attempted_id >= self.catalog_max_id

    def __len__(self) -> int:
        return len(self._index)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def initialize(self) -> PassSummary | None:
        if self.busy:
            self.logger.info("initialize_ignored_busy")
            return None
        self._index.reset()
        self.last_attempted_id = 0
        self.target_count = self.initial_target
        return await self.on_target_changed(self.target_count)

    async def request_growth(self, delta: int) -> PassSummary | None:
        if delta < 0:
            raise ValueError("Growth delta must be >= 0")
        if self.busy:
            self.logger.debug("growth_ignored_busy", delta=delta, target=self.target_count)
            return None
        self.target_count += delta
        self.logger.info("growth_requested", delta=delta, target=self.target_count)
        return await self.on_target_changed(self.target_count)

    async def on_target_changed(self, new_target: int) -> PassSummary | None:
        if self.busy:
            return None
        self.target_count = max(self.target_count, new_target)
        return await self._run_fetch_pass(new_target)

    async def _run_fetch_pass(self, new_target: int) -> PassSummary:
        # busy must be set before the first await so no second pass can start
        # the cursor advances only for fetches that resolved or failed
        self.busy = True
        start_id = self.last_attempted_id + 1
        end_id = min(new_target, self.catalog_max_id)
        summary = PassSummary(start_id=start_id, end_id=end_id)
        if summary.attempted == 0:
            self.busy = False
            if new_target >= self.catalog_max_id:
                self.logger.debug("catalog_exhausted", target=new_target)
            return summary

        self.logger.info("fetch_pass_started", start_id=start_id, end_id=end_id)
        if self.progress is not None:
            self.progress.start(summary.attempted)
        try:
            for record_id in range(start_id, end_id + 1):
                try:
                    record = await self.service.fetch_by_id(record_id)
                except RecordFetchError as exc:
                    summary.failed += 1
                    summary.failed_ids.append(record_id)
                    self.logger.warning("record_fetch_failed", id=record_id, error=exc.reason)
                    self.last_attempted_id = record_id
                    self._advance(failed=True, record_id=record_id)
                else:
                    self.last_attempted_id = record_id
                    if self._index.check_and_store(record).duplicate:
                        summary.skipped += 1
                        self.logger.debug("record_duplicate_skipped", id=record.id)
                        self._advance(skipped=True, record_id=record_id)
                    else:
                        summary.appended += 1
                        self._advance(success=True, record_id=record_id)
        finally:
            self.busy = False
            if self.progress is not None:
                self.progress.close()
        self.logger.info(
            "fetch_pass_finished",
            start_id=start_id,
            end_id=end_id,
            appended=summary.appended,
            failed=summary.failed,
            skipped=summary.skipped,
            total=len(self._index),
        )
        return summary

    def _advance(self, *, record_id: int, **outcome: bool) -> None:
        if self.progress is not None:
            self.progress.advance(current_url=f"#{record_id}", **outcome)


__all__ = ["IncrementalCollector", "PassReporter", "PassSummary"]
