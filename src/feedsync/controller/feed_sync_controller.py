"""Feed synchronization controller for the summary list screen.

This module defines the FeedSyncController class, which keeps the visible
summary list consistent with the summary fetch port, applies the selected
category filter, coordinates refresh triggers, and translates fetch
failures into alert requests for the presentation layer.
"""

import asyncio
from collections.abc import Awaitable, Callable, Coroutine
import contextvars
import logging
import sys
from types import TracebackType
from typing import Any, Self
import uuid

from ..config import AlertTexts
from ..exceptions import ControllerClosedError
from ..logging_config import set_context_id
from ..ports import PreferenceStore, SummaryFetchPort
from ..signals import ReplaySignal, Signal, SubscriptionBag
from ..trigger_source import TriggerSource
from ..types import (
    AlertRequest,
    Category,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    SummaryItem,
)
from .item_projection import SummaryListProjection
from .loading_tracker import LoadingTracker
from .summary_cell import SummaryCellViewModel

logger = logging.getLogger(__name__)


def _exit_application() -> None:
    sys.exit(0)


def _describe_error(e: BaseException) -> str:
    return str(e) or type(e).__name__


def _unexpected_outcome_message(operation: str, outcome: object) -> str:
    return f"{operation} returned an unexpected result: {type(outcome).__name__}"


class FeedSyncController:
    """Orchestrate loading, filtering and refreshing of the summary list.

    On construction the controller dispatches one full fetch. A successful
    full fetch replaces the item set behind ``items`` and requests an
    incremental check; every app-resumed event requests another. A failed
    full fetch emits a blocking alert offering close and retry; a failed
    check emits an acknowledge-only alert.

    Concurrency policy: at most one full fetch is in flight, and further
    requests join it. Incremental checks may overlap. ``loading`` reflects
    whether any request is in flight, so it strictly alternates.

    The controller must be created inside a running event loop. ``close``
    (or leaving ``async with``) releases every subscription and cancels
    pending requests; nothing is emitted afterwards.

    Attributes:
        session_id: Identifier stamped on logs from this controller's requests.
        items: Filtered, sorted summary list; replays the latest value.
        loading: Whether a request is in flight; replays the latest value.
        alert: Alert requests raised by failed fetches.
        present_search_page: Optional handler called by ``click_search``.
        show_summary_detail_page: Optional handler forwarded to cell view models.
    """

    def __init__(
        self,
        fetch_port: SummaryFetchPort,
        preference_store: PreferenceStore,
        trigger_source: TriggerSource,
        alert_texts: AlertTexts | None = None,
        terminate: Callable[[], None] | None = None,
        session_id: str | None = None,
    ):
        self._fetch_port = fetch_port
        self._preference_store = preference_store
        self._alert_texts = alert_texts or AlertTexts()
        self._terminate = terminate or _exit_application
        self.session_id = session_id or f"summaries-{uuid.uuid4().hex[:8]}"

        self.present_search_page: Callable[[], None] | None = None
        self.show_summary_detail_page: Callable[[int], None] | None = None

        self.items: ReplaySignal[list[SummaryItem]] = ReplaySignal("items")
        self.loading: ReplaySignal[bool] = ReplaySignal("loading")
        self.alert: Signal[AlertRequest] = Signal("alert")

        self._projection = SummaryListProjection(self._emit_items)
        self._loading = LoadingTracker(self._emit_loading)
        self._full_fetch_succeeded: Signal[list[SummaryItem]] = Signal(
            "full_fetch_succeeded"
        )
        self._full_fetch_task: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._subscriptions = SubscriptionBag()
        self._closed = False

        self._log_context = contextvars.copy_context()
        self._log_context.run(set_context_id, self.session_id)

        # Each full-fetch success and each resume requests its own check.
        self._subscriptions.add(
            self._full_fetch_succeeded.subscribe(lambda _: self._request_summary())
        )
        self._subscriptions.add(
            trigger_source.app_resumed.subscribe(lambda _: self._request_summary())
        )

        logger.debug(
            "FeedSyncController initialized.", extra={"session_id": self.session_id}
        )

        self._request_all_summary_items()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    @property
    def closed(self) -> bool:
        """Whether the controller has been torn down."""
        return self._closed

    @property
    def selected_category(self) -> Category | None:
        """The active category filter, or None before the first selection."""
        return self._projection.category

    # --- Inputs ---

    def select_category(self, category: Category) -> None:
        """Set the active category filter.

        Args:
            category: The category to show; ``Category.ALL`` disables filtering.

        Raises:
            ControllerClosedError: If the controller has been closed.
        """
        self._ensure_open("select_category")
        logger.debug("Category selected.", extra={"category": str(category)})
        self._projection.select_category(category)

    def click_search(self) -> None:
        """Forward a search button press to the navigation handler, if any."""
        self._ensure_open("click_search")
        if self.present_search_page is None:
            logger.debug("No search page handler registered; ignoring click.")
            return
        self.present_search_page()

    def reload(self) -> asyncio.Task[None]:
        """Fire a request pulse for the full summary list.

        Returns:
            The task performing the full fetch. If one is already in flight,
            that task is returned and no new fetch is started.

        Raises:
            ControllerClosedError: If the controller has been closed.
        """
        self._ensure_open("reload")
        return self._request_all_summary_items()

    def request_preferred_categories(self) -> list[Category] | None:
        """Return the user's preferred categories, or None if none are set."""
        return self._preference_store.get_preferred_categories()

    def create_cell_view_model(self, item_id: int) -> SummaryCellViewModel:
        """Create the view model for a list cell showing ``item_id``.

        Args:
            item_id: Identifier of the summary item.

        Returns:
            A cell view model wired to the detail page handler, if registered.
        """
        return SummaryCellViewModel(
            item_id, present_detail_page=self.show_summary_detail_page
        )

    # --- Lifecycle ---

    def close(self) -> None:
        """Release every subscription and cancel pending requests.

        Idempotent. Cancelled requests emit nothing.
        """
        if self._closed:
            return
        self._closed = True
        self._subscriptions.dispose()

        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        self._full_fetch_task = None

        logger.debug(
            "FeedSyncController closed.",
            extra={"session_id": self.session_id, "cancelled_count": len(pending)},
        )

    async def aclose(self) -> None:
        """Close the controller and wait for cancelled requests to unwind."""
        tasks = list(self._tasks)
        self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def wait_until_idle(self) -> None:
        """Wait until no request started by this controller is pending.

        Requests chained from a finishing request (such as the check that
        follows a successful full fetch) are waited for as well.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # --- Request handling ---

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise ControllerClosedError(
                "Controller has been closed.", operation=operation
            )

    def _spawn(
        self, coro_fn: Callable[[], Coroutine[Any, Any, None]], name: str
    ) -> asyncio.Task[None]:
        loop = asyncio.get_running_loop()
        task = loop.create_task(
            coro_fn(),
            name=f"{self.session_id}:{name}",
            context=self._log_context.copy(),
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _request_all_summary_items(self) -> asyncio.Task[None]:
        if self._full_fetch_task is not None:
            logger.debug("Full fetch already in flight; joining it.")
            return self._full_fetch_task

        self._full_fetch_task = self._spawn(self._run_full_fetch, "fetch_all")
        self._loading.begin()
        return self._full_fetch_task

    def _request_summary(self) -> None:
        if self._closed:
            return
        self._spawn(self._run_summary_check, "check_for_new")
        self._loading.begin()

    async def _call_port[T](
        self,
        operation: Callable[[], Awaitable[FetchOutcome[T]]],
        operation_name: str,
    ) -> FetchOutcome[T]:
        """Await a port operation, turning a raised exception into a failure."""
        try:
            return await operation()
        except Exception as e:
            logger.error(
                "Summary port raised instead of returning an outcome.",
                extra={"operation": operation_name},
                exc_info=e,
            )
            return FetchFailure(message=_describe_error(e))

    async def _run_full_fetch(self) -> None:
        logger.debug("Requesting full summary list.")
        outcome = await self._call_port(self._fetch_port.fetch_all, "fetch_all")

        # Cleared before dispatch so a retry chosen synchronously starts anew.
        self._full_fetch_task = None
        self._loading.end()

        try:
            self._handle_full_fetch_outcome(outcome)
        except Exception as e:
            logger.error(
                "Unexpected error while applying the summary list.",
                extra={"operation": "fetch_all"},
                exc_info=e,
            )
            self._emit_alert(
                self._build_full_fetch_failure_alert(_describe_error(e))
            )

    def _handle_full_fetch_outcome(
        self, outcome: FetchOutcome[list[SummaryItem]]
    ) -> None:
        match outcome:
            case FetchSuccess(value=items):
                logger.info(
                    "Summary list loaded.", extra={"item_count": len(items)}
                )
                self._projection.update_items(items)
                self._full_fetch_succeeded.emit(items)
            case FetchFailure(message=message):
                logger.warning(
                    "Summary list failed to load.",
                    extra={"failure_message": message},
                )
                self._emit_alert(self._build_full_fetch_failure_alert(message))
            case _:
                raise TypeError(_unexpected_outcome_message("fetch_all", outcome))

    async def _run_summary_check(self) -> None:
        logger.debug("Checking for new summaries.")
        outcome = await self._call_port(
            self._fetch_port.check_for_new, "check_for_new"
        )
        self._loading.end()

        try:
            self._handle_summary_check_outcome(outcome)
        except Exception as e:
            logger.error(
                "Unexpected error while handling the summary check.",
                extra={"operation": "check_for_new"},
                exc_info=e,
            )
            self._emit_alert(self._build_check_failure_alert(_describe_error(e)))

    def _handle_summary_check_outcome(self, outcome: FetchOutcome[None]) -> None:
        match outcome:
            case FetchFailure(message=message):
                logger.warning(
                    "Summary check failed.", extra={"failure_message": message}
                )
                self._emit_alert(self._build_check_failure_alert(message))
            case FetchSuccess():
                logger.debug("Summary check completed.")
            case _:
                raise TypeError(
                    _unexpected_outcome_message("check_for_new", outcome)
                )

    def _build_check_failure_alert(self, message: str) -> AlertRequest:
        return AlertRequest(
            title=self._alert_texts.check_failure_title,
            message=message,
            actions={self._alert_texts.acknowledge_label: lambda: None},
        )

    def _build_full_fetch_failure_alert(self, message: str) -> AlertRequest:
        texts = self._alert_texts
        return AlertRequest(
            title=texts.full_fetch_failure_title,
            message=message,
            actions={
                texts.close_label: self._terminate,
                texts.retry_label: self._retry_full_fetch,
            },
        )

    def _retry_full_fetch(self) -> None:
        if self._closed:
            logger.debug("Retry chosen after close; ignoring.")
            return
        logger.info("Retrying full summary fetch.")
        self._request_all_summary_items()

    # --- Output guards ---

    def _emit_items(self, items: list[SummaryItem]) -> None:
        if not self._closed:
            self.items.emit(items)

    def _emit_loading(self, loading: bool) -> None:
        if not self._closed:
            self.loading.emit(loading)

    def _emit_alert(self, alert: AlertRequest) -> None:
        if not self._closed:
            self.alert.emit(alert)
