"""Host lifecycle events that prompt a feed refresh."""

import logging

from .signals import Signal

logger = logging.getLogger(__name__)


class TriggerSource:
    """Expose host platform lifecycle notifications as signals.

    The host calls ``notify_app_resumed`` whenever the application becomes
    active again; controllers subscribe to ``app_resumed``.

    Attributes:
        app_resumed: Unit-valued signal fired on each resume.
    """

    def __init__(self) -> None:
        self.app_resumed: Signal[None] = Signal("app_resumed")

    def notify_app_resumed(self) -> None:
        """Broadcast an application-resumed event."""
        logger.debug(
            "Application resumed.",
            extra={"subscriber_count": self.app_resumed.subscriber_count},
        )
        self.app_resumed.emit(None)
