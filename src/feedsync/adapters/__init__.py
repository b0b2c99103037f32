from .file_summary_source import FileSummarySource
from .static_preference_store import StaticPreferenceStore

__all__ = [
    "FileSummarySource",
    "StaticPreferenceStore",
]
