"""Summary category values."""

from enum import Enum


class Category(str, Enum):
    """Represent the main category of a summary item.

    ``ALL`` is a sentinel used only as a filter selection; it means the
    filter passes every item. Summary items never carry it themselves.
    """

    ALL = "all"
    POLITICS = "politics"
    ECONOMY = "economy"
    SOCIETY = "society"
    TECHNOLOGY = "technology"
    SCIENCE = "science"
    HEALTH = "health"
    ENTERTAINMENT = "entertainment"
    SPORTS = "sports"
    CULTURE = "culture"
    LIFESTYLE = "lifestyle"

    def __str__(self) -> str:
        return self.value
