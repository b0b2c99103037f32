"""Summary item model produced by the fetch layer."""

from dataclasses import dataclass
from datetime import UTC, datetime

from .category import Category


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as a timezone-aware datetime.

    Naive datetimes are taken to be UTC; aware ones are returned unchanged.
    """
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=UTC)
    return value


@dataclass(frozen=True)
class SummaryItem:
    """Represent a single summarized video in the feed.

    Instances are immutable once produced by a fetch port; the controller
    only ever derives filtered and sorted views of them.

    Attributes:
        id: Unique summary identifier.
        main_category: Category the summary is filed under.
        created_at: When the summary was created.
        title: Display title.
        summary: Summary body, if already generated.
        thumbnail_url: Optional thumbnail URL.
        video_code: Optional source video identifier.
    """

    id: int
    main_category: Category
    created_at: datetime
    title: str = ""
    summary: str | None = None
    thumbnail_url: str | None = None
    video_code: str | None = None
