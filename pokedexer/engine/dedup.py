"""In-memory deduplication of fetched records keyed by id."""

from __future__ import annotations

from dataclasses import dataclass

from .service import Record


@dataclass
class DeduplicationResult:
    record_id: int
    duplicate: bool

    @property
    def stored(self) -> bool:
        return not self.duplicate


class RecordIndex:
    """Insertion-ordered record collection with an id set for membership checks."""

    def __init__(self) -> None:
        self._records: list[Record] = []
        self._ids: set[int] = set()

    def check_and_store(self, record: Record) -> DeduplicationResult:
        if record.id in self._ids:
            return DeduplicationResult(record.id, duplicate=True)
        self._ids.add(record.id)
        self._records.append(record)
        return DeduplicationResult(record.id, duplicate=False)

    def has_id(self, record_id: int) -> bool:
        return record_id in self._ids

    def snapshot(self) -> tuple[Record, ...]:
        return tuple(self._records)

    def reset(self) -> None:
        self._records.clear()
        self._ids.clear()

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["DeduplicationResult", "RecordIndex"]
