"""Domain model and enum types."""

from .alert_request import AlertAction, AlertRequest
from .category import Category
from .fetch_outcome import FetchFailure, FetchOutcome, FetchSuccess
from .summary_item import SummaryItem, ensure_utc

__all__ = [
    "AlertAction",
    "AlertRequest",
    "Category",
    "FetchFailure",
    "FetchOutcome",
    "FetchSuccess",
    "SummaryItem",
    "ensure_utc",
]
