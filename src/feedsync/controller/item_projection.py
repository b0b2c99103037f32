"""Filtered and sorted projection of the summary list.

``SummaryListProjection`` is the reconciler behind the controller's
``items`` output. It remembers the last item set and the last category
selection and pushes ``project_items(items, category)`` to its sink on
every update, but only once both inputs have been provided.
"""

from collections.abc import Callable, Iterable, Sequence
import logging

from ..types import Category, SummaryItem, ensure_utc

logger = logging.getLogger(__name__)


def project_items(
    items: Iterable[SummaryItem], category: Category
) -> list[SummaryItem]:
    """Filter items by category and sort them newest first.

    Items with equal ``created_at`` keep their source order. Naive
    timestamps are ordered as UTC.

    Args:
        items: The full item set.
        category: Selected category; ``Category.ALL`` keeps every item.

    Returns:
        A new list with the matching items, most recent first.
    """
    if category is Category.ALL:
        filtered = list(items)
    else:
        filtered = [item for item in items if item.main_category == category]

    return sorted(
        filtered, key=lambda item: ensure_utc(item.created_at), reverse=True
    )


class SummaryListProjection:
    """Combine the latest item set with the latest category selection.

    Attributes:
        _sink: Receives each recomputed projection.
        _items: Last known item set, None until the first update.
        _category: Last selected category, None until the first selection.
    """

    def __init__(self, sink: Callable[[list[SummaryItem]], None]):
        self._sink = sink
        self._items: tuple[SummaryItem, ...] | None = None
        self._category: Category | None = None

    @property
    def category(self) -> Category | None:
        """The last selected category, if any."""
        return self._category

    @property
    def ready(self) -> bool:
        """Whether both inputs have produced a value."""
        return self._items is not None and self._category is not None

    def update_items(self, items: Sequence[SummaryItem]) -> None:
        """Replace the known item set and recompute.

        If the projection cannot be computed, the previous item set is
        kept and the error is re-raised.

        Args:
            items: The new full item set.
        """
        previous = self._items
        self._items = tuple(items)
        try:
            self._recompute()
        except Exception:
            self._items = previous
            raise

    def select_category(self, category: Category) -> None:
        """Replace the selected category and recompute.

        Args:
            category: The new filter selection.
        """
        self._category = category
        self._recompute()

    def _recompute(self) -> None:
        if self._items is None or self._category is None:
            return

        projected = project_items(self._items, self._category)
        logger.debug(
            "Summary list projection updated.",
            extra={
                "category": str(self._category),
                "total_count": len(self._items),
                "visible_count": len(projected),
            },
        )
        self._sink(projected)
