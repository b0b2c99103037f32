"""Custom exceptions for the feedsync application.

This module defines all custom exception classes used throughout the
application, organized by functional area and providing structured
error information for better debugging and error handling.

Failures reported by a summary fetch port never surface as exceptions at
the controller boundary; they travel as ``FetchFailure`` values. The
classes here cover configuration, adapters, alerts and controller misuse.
"""


class FeedSyncError(Exception):
    """Base class for application-specific errors."""


class ConfigLoadError(FeedSyncError):
    """Raised when a configuration file fails to load.

    Attributes:
        config_file: Path to the configuration file that failed to load.
    """

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
    ):
        super().__init__(message)
        self.config_file = config_file


class SummarySourceError(FeedSyncError):
    """Raised when a summary source cannot read or parse its data.

    Attributes:
        path: The path of the source file, if any.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
    ):
        super().__init__(message)
        self.path = path


class AlertError(FeedSyncError):
    """Base class for errors raised while resolving an alert."""


class AlertAlreadyResolvedError(AlertError):
    """Raised when an action is chosen on an alert that was already resolved.

    Attributes:
        title: Title of the alert.
    """

    def __init__(
        self,
        message: str,
        title: str | None = None,
    ):
        super().__init__(message)
        self.title = title


class AlertActionNotFoundError(AlertError):
    """Raised when the chosen label is not one of the alert's actions.

    Attributes:
        label: The requested action label.
        title: Title of the alert.
    """

    def __init__(
        self,
        message: str,
        label: str | None = None,
        title: str | None = None,
    ):
        super().__init__(message)
        self.label = label
        self.title = title


class ControllerClosedError(FeedSyncError):
    """Raised when an input is sent to a controller after teardown.

    Attributes:
        operation: Name of the rejected operation.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.operation = operation
