"""Engine components: fetch → dedup → accumulate, plus the daily pick."""

from .collector import IncrementalCollector, PassSummary
from .daily import DailySelector, compute_daily_id
from .dedup import DeduplicationResult, RecordIndex
from .service import Record, RecordFetchError, RecordService
from .trigger import ScrollProximityTrigger

__all__ = [
    "DailySelector",
    "DeduplicationResult",
    "IncrementalCollector",
    "PassSummary",
    "Record",
    "RecordFetchError",
    "RecordIndex",
    "RecordService",
    "ScrollProximityTrigger",
    "compute_daily_id",
]
