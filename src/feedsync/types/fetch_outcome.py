"""Tagged result of a summary fetch port operation.

Port operations never raise to signal an expected failure. They resolve
to either a ``FetchSuccess`` carrying the value or a ``FetchFailure``
carrying a human-readable message, which the controller passes through
verbatim.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FetchSuccess[T]:
    """Successful port result.

    Attributes:
        value: The fetched value.
    """

    value: T


@dataclass(frozen=True)
class FetchFailure:
    """Failed port result.

    Attributes:
        message: Human-readable failure description.
    """

    message: str


type FetchOutcome[T] = FetchSuccess[T] | FetchFailure
