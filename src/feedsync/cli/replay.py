"""Replay mode: drive a controller from a local summary file.

This module wires a FeedSyncController to a FileSummarySource, lets the
initial load and its follow-up check settle, and logs the resulting list,
loading transitions and alerts. It is the quickest way to see how the
controller reacts to a given data set or a broken file.
"""

import logging

from ..adapters import FileSummarySource, StaticPreferenceStore
from ..config import AppSettings
from ..controller import FeedSyncController
from ..trigger_source import TriggerSource
from ..types import AlertRequest, SummaryItem

logger = logging.getLogger(__name__)


async def run_replay_mode(settings: AppSettings) -> int:
    """Load the configured summary file through a controller and report.

    Alerts are acknowledged automatically: the acknowledge action is
    chosen for check failures, and nothing is chosen for load failures,
    so the close action never terminates the replay.

    Args:
        settings: Application settings naming the summary file and category.

    Returns:
        Process exit code: 0 on a clean load, 1 if any alert was raised,
        2 if no summary file is configured.
    """
    if settings.summaries_file is None:
        logger.error(
            "No summary file configured; set SUMMARIES_FILE or summaries_file."
        )
        return 2

    alerts: list[AlertRequest] = []
    visible: list[SummaryItem] = []

    def on_alert(alert: AlertRequest) -> None:
        alerts.append(alert)
        logger.warning(
            "Alert raised.",
            extra={
                "alert_title": alert.title,
                "alert_message": alert.message,
                "actions": alert.action_labels,
            },
        )
        if alert.action_labels == [settings.alerts.acknowledge_label]:
            alert.choose(settings.alerts.acknowledge_label)

    def on_items(items: list[SummaryItem]) -> None:
        visible[:] = items

    def on_loading(loading: bool) -> None:
        logger.debug("Loading state changed.", extra={"loading": loading})

    source = FileSummarySource(settings.summaries_file)
    trigger_source = TriggerSource()

    async with FeedSyncController(
        fetch_port=source,
        preference_store=StaticPreferenceStore(settings.preferred_categories),
        trigger_source=trigger_source,
        alert_texts=settings.alerts,
    ) as controller:
        controller.alert.subscribe(on_alert)
        controller.items.subscribe(on_items)
        controller.loading.subscribe(on_loading)
        controller.select_category(settings.category)

        await controller.wait_until_idle()

        logger.info(
            "Replay finished.",
            extra={
                "summaries_file": str(settings.summaries_file),
                "category": str(settings.category),
                "preferred_categories": [
                    str(c) for c in controller.request_preferred_categories() or []
                ],
                "visible_count": len(visible),
                "alert_count": len(alerts),
            },
        )
        for item in visible:
            logger.info(
                "Summary.",
                extra={
                    "item_id": item.id,
                    "main_category": str(item.main_category),
                    "created_at": item.created_at.isoformat(),
                    "title": item.title,
                },
            )

    return 1 if alerts else 0
