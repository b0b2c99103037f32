"""Loading indicator projection over in-flight requests."""

from collections.abc import Callable
import logging

logger = logging.getLogger(__name__)


class LoadingTracker:
    """Project a count of in-flight requests onto a boolean signal.

    The sink receives ``True`` when the count leaves zero and ``False``
    when it returns to zero, so emissions strictly alternate starting from
    an implicit ``False`` no matter how requests overlap.
    """

    def __init__(self, sink: Callable[[bool], None]):
        self._sink = sink
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        """Number of requests currently in flight."""
        return self._in_flight

    @property
    def loading(self) -> bool:
        """Whether any request is in flight."""
        return self._in_flight > 0

    def begin(self) -> None:
        """Record a dispatched request."""
        self._in_flight += 1
        if self._in_flight == 1:
            self._sink(True)

    def end(self) -> None:
        """Record a resolved request.

        Raises:
            RuntimeError: If no request is in flight.
        """
        if self._in_flight == 0:
            raise RuntimeError("LoadingTracker.end() called with no request in flight.")
        self._in_flight -= 1
        if self._in_flight == 0:
            self._sink(False)
