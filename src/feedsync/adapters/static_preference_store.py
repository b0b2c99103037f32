"""In-memory preference store."""

from collections.abc import Iterable

from ..types import Category


class StaticPreferenceStore:
    """PreferenceStore over a fixed list of categories.

    An empty list is reported as "not configured".
    """

    def __init__(self, categories: Iterable[Category] = ()):
        self._categories = list(categories)

    def get_preferred_categories(self) -> list[Category] | None:
        """Return a copy of the configured categories, or None if empty."""
        if not self._categories:
            return None
        return list(self._categories)
