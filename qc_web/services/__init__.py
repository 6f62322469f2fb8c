from .check_aggregator import CheckAggregator, build_summary
from .entry_sync import EntrySync
from .highlighter import highlight_errors
from .quality_check_service import QualityCheckService

__all__ = [
    "CheckAggregator",
    "EntrySync",
    "QualityCheckService",
    "build_summary",
    "highlight_errors",
]
