"""Per-item view model handed to list cells."""

from collections.abc import Callable
import logging

logger = logging.getLogger(__name__)


class SummaryCellViewModel:
    """View model bound to one summary item.

    Attributes:
        item_id: The summary item this cell shows.
        present_detail_page: Optional navigation handler receiving the item id.
    """

    def __init__(
        self,
        item_id: int,
        present_detail_page: Callable[[int], None] | None = None,
    ):
        self.item_id = item_id
        self.present_detail_page = present_detail_page

    def select(self) -> None:
        """Open the detail page for this item, if a handler is registered."""
        if self.present_detail_page is None:
            logger.debug(
                "No detail page handler registered; ignoring selection.",
                extra={"item_id": self.item_id},
            )
            return
        self.present_detail_page(self.item_id)
