"""Tests for the replay CLI mode.

Runs that read a real summary file are marked as integration tests.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from feedsync.cli.replay import run_replay_mode
from feedsync.config import AppSettings
from feedsync.types import FetchFailure

SUMMARIES = [
    {
        "id": 1,
        "main_category": "economy",
        "created_at": "2024-08-22T09:30:00+00:00",
        "title": "Rates held steady",
    },
    {
        "id": 2,
        "main_category": "sports",
        "created_at": "2024-08-22T21:00:00+00:00",
        "title": "Late winner",
    },
]


@pytest.fixture
def summaries_file(tmp_path: Path) -> Path:
    """Creates a summary file for the replay run."""
    path = tmp_path / "summaries.yaml"
    path.write_text(yaml.safe_dump({"summaries": SUMMARIES}), encoding="utf-8")
    return path


@pytest.mark.integration
@pytest.mark.asyncio
async def test_replay_clean_load_returns_zero(summaries_file: Path):
    """A readable file loads without alerts."""
    settings = AppSettings(summaries_file=summaries_file, category="economy")

    assert await run_replay_mode(settings) == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_replay_missing_file_reports_alert(tmp_path: Path):
    """An unreadable file surfaces as an alert and a non-zero exit code."""
    settings = AppSettings(summaries_file=tmp_path / "missing.yaml")

    assert await run_replay_mode(settings) == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_replay_acknowledges_check_failure(summaries_file: Path):
    """Check failures are acknowledged and counted."""
    settings = AppSettings(summaries_file=summaries_file)

    with patch(
        "feedsync.adapters.file_summary_source.FileSummarySource.check_for_new",
        return_value=FetchFailure("busy"),
    ) as mock_check:
        assert await run_replay_mode(settings) == 1

    mock_check.assert_awaited_once_with()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_replay_without_summaries_file_returns_two():
    """Replay refuses to run without a summary file."""
    assert await run_replay_mode(AppSettings()) == 2
