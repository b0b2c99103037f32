"""Collaborator protocols consumed by the feed controller.

This module defines the interfaces the controller depends on. Concrete
implementations (network clients, local stores, the file adapters in
``feedsync.adapters``) are injected through the controller constructor.
"""

from typing import Protocol

from .types import Category, FetchOutcome, SummaryItem


class SummaryFetchPort(Protocol):
    """Protocol for the summary data source.

    Both operations are single-shot: each call resolves exactly once with
    a ``FetchOutcome``. Expected failures are reported as ``FetchFailure``
    values rather than raised.
    """

    async def fetch_all(self) -> FetchOutcome[list[SummaryItem]]:
        """Retrieve the entire summary item collection.

        Returns:
            FetchSuccess with every known summary item, or FetchFailure.
        """
        ...

    async def check_for_new(self) -> FetchOutcome[None]:
        """Check whether newer summaries are available.

        Returns:
            FetchSuccess(None) when the check completed, or FetchFailure.
        """
        ...


class PreferenceStore(Protocol):
    """Protocol for reading the user's preferred categories."""

    def get_preferred_categories(self) -> list[Category] | None:
        """Return the configured categories, or None when none are set."""
        ...
