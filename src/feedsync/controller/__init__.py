from .feed_sync_controller import FeedSyncController
from .item_projection import SummaryListProjection, project_items
from .loading_tracker import LoadingTracker
from .summary_cell import SummaryCellViewModel

__all__ = [
    "FeedSyncController",
    "LoadingTracker",
    "SummaryCellViewModel",
    "SummaryListProjection",
    "project_items",
]
