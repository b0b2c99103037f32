"""One-directional reactive channels with explicit subscription handles.

A ``Signal`` delivers each emitted value synchronously to its current
subscribers, in subscription order. A ``ReplaySignal`` additionally keeps
the latest value and hands it to late subscribers. Every ``subscribe``
returns a ``Subscription`` whose ``dispose`` detaches the callback; a
``SubscriptionBag`` collects handles so an owner can release them all at
once during teardown.
"""

from collections.abc import Callable
import logging

logger = logging.getLogger(__name__)


class Subscription:
    """Handle for a single subscriber attached to a signal."""

    def __init__(self, detach: Callable[[], None]):
        self._detach: Callable[[], None] | None = detach

    @property
    def disposed(self) -> bool:
        """Whether the subscriber has been detached."""
        return self._detach is None

    def dispose(self) -> None:
        """Detach the subscriber. Safe to call more than once."""
        if self._detach is None:
            return
        detach, self._detach = self._detach, None
        detach()


class SubscriptionBag:
    """Collect subscriptions and dispose them together."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []
        self._disposed = False

    def __len__(self) -> int:
        return len(self._subscriptions)

    @property
    def disposed(self) -> bool:
        """Whether the bag has been disposed."""
        return self._disposed

    def add(self, subscription: Subscription) -> Subscription:
        """Track a subscription; disposes it immediately if the bag is spent.

        Args:
            subscription: The handle to track.

        Returns:
            The same handle, for chaining.
        """
        if self._disposed:
            subscription.dispose()
        else:
            self._subscriptions.append(subscription)
        return subscription

    def dispose(self) -> None:
        """Dispose every tracked subscription synchronously."""
        self._disposed = True
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.dispose()


class Signal[T]:
    """Hot, synchronous broadcast channel.

    Attributes:
        name: Label used in log messages.
    """

    def __init__(self, name: str = "signal"):
        self.name = name
        self._subscribers: dict[int, Callable[[T], None]] = {}
        self._next_token = 0

    @property
    def subscriber_count(self) -> int:
        """Number of attached subscribers."""
        return len(self._subscribers)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """Attach a callback that receives every future emission.

        Args:
            callback: Called with each emitted value.

        Returns:
            Subscription handle that detaches the callback.
        """
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = callback
        return Subscription(lambda: self._subscribers.pop(token, None))

    def emit(self, value: T) -> None:
        """Deliver a value to every current subscriber.

        A subscriber that raises is logged and skipped; delivery to the
        remaining subscribers continues. Subscribers detached during
        delivery do not receive the value.

        Args:
            value: The value to broadcast.
        """
        for token, callback in list(self._subscribers.items()):
            if token not in self._subscribers:
                continue
            self._deliver(callback, value)

    def _deliver(self, callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception as e:
            logger.error(
                "Signal subscriber raised.",
                extra={"signal": self.name},
                exc_info=e,
            )


class ReplaySignal[T](Signal[T]):
    """Signal that replays its latest value to new subscribers."""

    def __init__(self, name: str = "signal"):
        super().__init__(name)
        self._has_value = False
        self._latest: T | None = None

    @property
    def has_value(self) -> bool:
        """Whether anything has been emitted yet."""
        return self._has_value

    @property
    def latest(self) -> T | None:
        """The most recent emission, or None before the first one."""
        return self._latest

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """Attach a callback, delivering the latest value first if one exists.

        A callback that raises during the replay is logged and stays attached.
        """
        subscription = super().subscribe(callback)
        if self._has_value:
            self._deliver(callback, self._latest)  # type: ignore[arg-type]
        return subscription

    def emit(self, value: T) -> None:
        """Record the value as latest, then broadcast it."""
        self._latest = value
        self._has_value = True
        super().emit(value)
