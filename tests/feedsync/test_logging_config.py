"""Tests for the human-readable formatter and context id filter."""

import asyncio
import logging

import pytest

from feedsync.exceptions import SummarySourceError
from feedsync.logging_config import (
    ContextIdFilter,
    HumanReadableExtrasFormatter,
    custom_record_factory,
    get_context_id,
    set_context_id,
)


def make_record(
    msg: str,
    extra: dict[str, object] | None = None,
    exc: BaseException | None = None,
) -> logging.LogRecord:
    """Build a record through the custom factory, as the logger would."""
    exc_info = (type(exc), exc, exc.__traceback__) if exc is not None else None
    record = custom_record_factory(
        "feedsync.test", logging.WARNING, __file__, 10, msg, (), exc_info
    )
    for key, value in (extra or {}).items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
def test_formatter_appends_extras_and_message():
    """Extra fields appear as key:value pairs before the message."""
    formatter = HumanReadableExtrasFormatter(datefmt="%Y")
    record = make_record(
        "Summary list loaded.", extra={"item_count": 3, "ids": [1, 2]}
    )

    output = formatter.format(record)

    assert "WARNING [feedsync.test]" in output
    assert "item_count:3" in output
    assert "ids:[1, 2]" in output
    assert output.endswith("- Summary list loaded.")


@pytest.mark.unit
def test_formatter_renders_semantic_exception_chain():
    """Without stack traces, the exception chain and its attributes are shown."""
    try:
        try:
            raise FileNotFoundError("no such file")
        except FileNotFoundError as e:
            raise SummarySourceError(
                "Failed to read summary file.", path="/tmp/s.yaml"
            ) from e
    except SummarySourceError as e:
        record = make_record("Failed to load summary file.", exc=e)

    output = HumanReadableExtrasFormatter().format(record)

    assert "path:/tmp/s.yaml" in output
    assert "Error: Failed to read summary file." in output
    assert "Caused by: no such file" in output


@pytest.mark.unit
@pytest.mark.asyncio
async def test_context_id_filter_uses_task_context():
    """The context id set inside a task is stamped on that task's records."""

    async def in_session() -> logging.LogRecord:
        set_context_id("summaries-1234")
        record = make_record("inside")
        ContextIdFilter().filter(record)
        return record

    record = await asyncio.create_task(in_session())

    assert getattr(record, "context_id", None) == "summaries-1234"
    assert get_context_id() is None
    assert "CtxID:summaries-1234" in HumanReadableExtrasFormatter().format(record)
