"""File-backed summary fetch port.

This module provides FileSummarySource, a SummaryFetchPort that reads the
summary list from a local YAML or JSON document. It backs the replay CLI
and is handy for exercising a controller without a remote service.

Accepted document shapes::

    summaries:
      - id: 1
        main_category: economy
        created_at: 2024-08-22T09:30:00Z
        title: Rates held steady

or a bare top-level list of the same entries. Timestamps without an offset
are read as UTC.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os
from pydantic import TypeAdapter, ValidationError
import yaml

from ..exceptions import SummarySourceError
from ..types import (
    Category,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    SummaryItem,
    ensure_utc,
)

logger = logging.getLogger(__name__)

_ITEMS_ADAPTER = TypeAdapter(list[SummaryItem])


class FileSummarySource:
    """Serve summary items from a YAML or JSON file.

    ``check_for_new`` compares the file's modification time with the one
    seen by the last successful ``fetch_all``. The comparison is diagnostic
    only: it is logged, and the outcome is a success whenever the file can
    be inspected.

    Attributes:
        _path: Location of the summary document.
        _encoding: Text encoding of the document.
        _last_loaded_mtime_ns: Modification time at the last successful load.
    """

    def __init__(self, path: Path, encoding: str = "utf-8"):
        self._path = path
        self._encoding = encoding
        self._last_loaded_mtime_ns: int | None = None
        logger.debug("FileSummarySource initialized.", extra={"path": str(path)})

    @property
    def path(self) -> Path:
        """Location of the summary document."""
        return self._path

    async def _read_document(self) -> Any:
        try:
            async with aiofiles.open(self._path, encoding=self._encoding) as f:
                content = await f.read()
        except OSError as e:
            raise SummarySourceError(
                "Failed to read summary file.", path=str(self._path)
            ) from e

        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SummarySourceError(
                "Summary file is not valid YAML or JSON.", path=str(self._path)
            ) from e

    def _parse_items(self, document: Any) -> list[SummaryItem]:
        match document:
            case None:
                raw_items: Any = []
            case {"summaries": entries}:
                raw_items = entries if entries is not None else []
            case list():
                raw_items = document
            case _:
                raise SummarySourceError(
                    f"Expected a list or a 'summaries' mapping, got {type(document).__name__}.",
                    path=str(self._path),
                )

        try:
            items = _ITEMS_ADAPTER.validate_python(raw_items)
        except ValidationError as e:
            raise SummarySourceError(
                "Summary file contains invalid entries.", path=str(self._path)
            ) from e

        for item in items:
            if item.main_category is Category.ALL:
                raise SummarySourceError(
                    f"Summary {item.id} uses the reserved category 'all'.",
                    path=str(self._path),
                )
        return [
            dataclasses.replace(item, created_at=ensure_utc(item.created_at))
            for item in items
        ]

    async def fetch_all(self) -> FetchOutcome[list[SummaryItem]]:
        """Load every summary item from the file.

        Returns:
            FetchSuccess with the parsed items, or FetchFailure describing
            why the file could not be read or parsed.
        """
        try:
            stat = await aiofiles.os.stat(self._path)
            items = self._parse_items(await self._read_document())
        except (SummarySourceError, OSError) as e:
            logger.warning(
                "Failed to load summary file.",
                extra={"path": str(self._path)},
                exc_info=e,
            )
            return FetchFailure(message=str(e))

        self._last_loaded_mtime_ns = stat.st_mtime_ns
        logger.debug(
            "Summary file loaded.",
            extra={"path": str(self._path), "item_count": len(items)},
        )
        return FetchSuccess(items)

    async def check_for_new(self) -> FetchOutcome[None]:
        """Check whether the file changed since the last successful load.

        Returns:
            FetchSuccess(None) if the file could be inspected, else FetchFailure.
        """
        try:
            stat = await aiofiles.os.stat(self._path)
        except OSError as e:
            logger.warning(
                "Failed to inspect summary file.",
                extra={"path": str(self._path)},
                exc_info=e,
            )
            return FetchFailure(message=f"Summary file is unavailable: {self._path}")

        has_new = (
            self._last_loaded_mtime_ns is None
            or stat.st_mtime_ns != self._last_loaded_mtime_ns
        )
        logger.info(
            "Checked summary file for changes.",
            extra={"path": str(self._path), "has_new_summaries": has_new},
        )
        return FetchSuccess(None)
