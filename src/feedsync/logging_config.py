"""Logging configuration and custom formatters for feedsync.

This module provides the formatters, filters, and ``dictConfig`` setup for
the application, supporting both human-readable and JSON output. Each
controller stamps its records with a session id so interleaved refresh
cycles from different screens can be told apart.
"""

from collections.abc import Mapping
from contextvars import ContextVar
import json
import logging
from logging.config import dictConfig
import sys
from typing import Any, Literal

_original_log_record_factory = logging.getLogRecordFactory()


def custom_record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
    """Create a log record carrying the attributes of its exception chain.

    Public attributes of every exception in the chain (for example
    ``config_file`` on ``ConfigLoadError``) are collected into
    ``exc_custom_attrs`` and the chain's messages into ``semantic_trace``.

    Args:
        *args: Arguments passed to the original log record factory.
        **kwargs: Keyword arguments passed to the original log record factory.

    Returns:
        LogRecord with the additional exception information.
    """
    record = _original_log_record_factory(*args, **kwargs)

    if record.exc_info and record.exc_info[1]:
        collected_attrs: dict[str, Any] = {}
        semantic_chain_messages: list[str] = []

        current_exc: BaseException | None = record.exc_info[1]
        while current_exc:
            for name, val in vars(current_exc).items():
                if not name.startswith("_") and name not in collected_attrs:
                    collected_attrs[name] = val
            semantic_chain_messages.append(str(current_exc))
            current_exc = current_exc.__cause__ or current_exc.__context__

        if collected_attrs:
            record.exc_custom_attrs = collected_attrs
        if semantic_chain_messages:
            record.semantic_trace = semantic_chain_messages

    return record


_context_id_var: ContextVar[str | None] = ContextVar("context_id", default=None)


def set_context_id(context_id: str) -> None:
    """Set the context ID for the current async context.

    Tasks created afterwards inherit the value, so every record logged
    while serving that context carries it via ``ContextIdFilter``.

    Args:
        context_id: The context identifier to set (e.g., "summaries-3f2a").
    """
    _context_id_var.set(context_id)


def get_context_id() -> str | None:
    """Return the context ID of the current async context, if any."""
    return _context_id_var.get()


class ContextIdFilter(logging.Filter):
    """A logging filter that injects the current context_id into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject the current context_id into the log record.

        Args:
            record: The log record to modify.

        Returns:
            Always True to allow the record to be processed.
        """
        context_id = get_context_id()
        if context_id is not None:
            record.context_id = context_id
        return True


_should_include_stacktrace: bool = False

_STANDARD_RECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "context_id",
        "taskName",
        "exc_custom_attrs",
        "semantic_trace",
    }
)


class HumanReadableExtrasFormatter(logging.Formatter):
    """A formatter for human-readable logs that appends ``extra`` fields.

    Output looks like ``<time> <LEVEL> [<logger>] CtxID:<id> key:value - message``.
    When stack traces are disabled, exceptions are rendered as their
    semantic chain ("Error: ..." followed by "Caused by: ..." lines).
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: Literal["%", "{", "$"] = "%",
        validate: bool = True,
        *,
        defaults: Mapping[str, Any] | None = None,
    ):
        super().__init__(fmt, datefmt, style, validate, defaults=defaults)

    @staticmethod
    def _format_extra_value(value: Any) -> str:
        if isinstance(value, dict | list | tuple):
            return json.dumps(value, sort_keys=True, separators=(", ", ":"), default=str)
        return str(value)

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with human-readable output and extra fields.

        Args:
            record: The log record to format.

        Returns:
            Formatted log message string.
        """
        prefix_parts = [
            self.formatTime(record, self.datefmt),
            record.levelname,
            f"[{record.name}]",
        ]
        ctx_id = getattr(record, "context_id", None)
        if ctx_id is not None:
            prefix_parts.append(f"CtxID:{ctx_id}")

        combined_extras: dict[str, Any] = {}
        exc_custom_attributes = getattr(record, "exc_custom_attrs", None)
        if isinstance(exc_custom_attributes, dict):
            combined_extras.update(exc_custom_attributes)  # type: ignore
        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                combined_extras[key] = value

        log_string_parts = [" ".join(prefix_parts)]
        if combined_extras:
            log_string_parts.append(
                " ".join(
                    f"{key}:{self._format_extra_value(value)}"
                    for key, value in combined_extras.items()
                )
            )
        main_message = record.getMessage()
        log_string_parts.append(f"- {main_message}" if main_message else "-")

        final_log_string = " ".join(log_string_parts)

        if record.exc_info:
            if _should_include_stacktrace:
                if not record.exc_text:
                    record.exc_text = self.formatException(record.exc_info)
                if record.exc_text:
                    final_log_string += "\n" + record.exc_text
            else:
                semantic_trace_list: list[str] | None = getattr(
                    record, "semantic_trace", None
                )
                for i, msg in enumerate(semantic_trace_list or []):
                    if i == 0:
                        final_log_string += f"\nError: {msg}"
                    else:
                        final_log_string += f"\n  Caused by: {msg}"

        if record.stack_info:
            final_log_string += "\n" + self.formatStack(record.stack_info)

        return final_log_string


LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "context_id_filter": {
            "()": ContextIdFilter,
        },
    },
    "formatters": {
        "human_readable_formatter": {
            "()": HumanReadableExtrasFormatter,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "json_formatter": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console_handler": {
            "class": "logging.StreamHandler",
            "formatter": "human_readable_formatter",
            "stream": "ext://sys.stdout",
            "filters": ["context_id_filter"],
        },
    },
    "loggers": {
        "feedsync": {
            "handlers": ["console_handler"],
            "level": "INFO",
            "propagate": False,
        },
    },
    "root": {
        "handlers": ["console_handler"],
        "level": "WARNING",
    },
}


def setup_logging(
    log_format_type: Literal["human", "json"],
    app_log_level_name: str,
    include_stacktrace: bool,
) -> None:
    """Configure logging for the application based on provided settings.

    Args:
        log_format_type: Format for logs ('human' or 'json').
        app_log_level_name: Logging level name (e.g., 'INFO', 'DEBUG').
        include_stacktrace: Whether to include full stack traces in error logs.
    """
    global _should_include_stacktrace
    _should_include_stacktrace = include_stacktrace

    logging.setLogRecordFactory(custom_record_factory)

    log_level_upper = app_log_level_name.upper()
    if not isinstance(getattr(logging, log_level_upper, None), int):
        print(
            f"Warning: Invalid LOG_LEVEL '{app_log_level_name}'. Defaulting to INFO.",
            file=sys.stderr,
        )
        log_level_upper = "INFO"
    LOGGING_CONFIG["loggers"]["feedsync"]["level"] = log_level_upper

    match log_format_type.lower():
        case "json":
            LOGGING_CONFIG["handlers"]["console_handler"]["formatter"] = (
                "json_formatter"
            )
        case _:
            LOGGING_CONFIG["handlers"]["console_handler"]["formatter"] = (
                "human_readable_formatter"
            )

    dictConfig(LOGGING_CONFIG)
