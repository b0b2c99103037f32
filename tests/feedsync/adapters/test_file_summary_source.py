"""Tests for the file-backed summary fetch port and static preference store."""

from datetime import UTC, datetime
import json
import os
from pathlib import Path

import pytest
import yaml

from feedsync.adapters import FileSummarySource, StaticPreferenceStore
from feedsync.types import Category, FetchFailure, FetchSuccess

SAMPLE_SUMMARIES = {
    "summaries": [
        {
            "id": 1,
            "main_category": "economy",
            "created_at": datetime(2024, 8, 22, 9, 30, tzinfo=UTC),
            "title": "Rates held steady",
        },
        {
            "id": 2,
            "main_category": "sports",
            "created_at": datetime(2024, 8, 22, 21, 0, tzinfo=UTC),
            "title": "Late winner",
            "summary": "A stoppage-time goal decided the match.",
            "video_code": "abc123",
        },
    ]
}


@pytest.fixture
def summaries_file(tmp_path: Path) -> Path:
    """Creates a YAML summary file in a temporary directory."""
    path = tmp_path / "summaries.yaml"
    with Path.open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(SAMPLE_SUMMARIES, f)
    return path


# --- Tests for fetch_all ---


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_all_parses_yaml(summaries_file: Path):
    """Entries under 'summaries' are parsed into SummaryItem objects."""
    source = FileSummarySource(summaries_file)

    outcome = await source.fetch_all()

    assert isinstance(outcome, FetchSuccess)
    assert [item.id for item in outcome.value] == [1, 2]
    assert outcome.value[0].main_category is Category.ECONOMY
    assert outcome.value[1].created_at == datetime(2024, 8, 22, 21, 0, tzinfo=UTC)
    assert outcome.value[1].video_code == "abc123"
    assert outcome.value[0].summary is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_all_accepts_json_list(tmp_path: Path):
    """A bare JSON list of entries is accepted."""
    path = tmp_path / "summaries.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": 7,
                    "main_category": "science",
                    "created_at": "2024-08-22T12:00:00+00:00",
                }
            ]
        ),
        encoding="utf-8",
    )

    outcome = await FileSummarySource(path).fetch_all()

    assert isinstance(outcome, FetchSuccess)
    assert outcome.value[0].id == 7
    assert outcome.value[0].main_category is Category.SCIENCE


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_all_reads_naive_timestamps_as_utc(tmp_path: Path):
    """Entries with and without an offset load as comparable aware datetimes."""
    path = tmp_path / "mixed.yaml"
    path.write_text(
        "summaries:\n"
        "  - id: 1\n"
        "    main_category: economy\n"
        "    created_at: 2024-08-22T09:30:00Z\n"
        "  - id: 2\n"
        "    main_category: economy\n"
        "    created_at: '2024-08-23T09:30:00'\n",
        encoding="utf-8",
    )

    outcome = await FileSummarySource(path).fetch_all()

    assert isinstance(outcome, FetchSuccess)
    assert [item.created_at for item in outcome.value] == [
        datetime(2024, 8, 22, 9, 30, tzinfo=UTC),
        datetime(2024, 8, 23, 9, 30, tzinfo=UTC),
    ]
    assert max(outcome.value, key=lambda item: item.created_at).id == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_all_empty_file_yields_no_items(tmp_path: Path):
    """An empty document is an empty summary list."""
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    outcome = await FileSummarySource(path).fetch_all()

    assert outcome == FetchSuccess([])


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_all_missing_file_is_failure(tmp_path: Path):
    """A missing file is reported as a failure, not raised."""
    outcome = await FileSummarySource(tmp_path / "missing.yaml").fetch_all()

    assert isinstance(outcome, FetchFailure)


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("content", "expected_message"),
    [
        ("summaries: [\n", "not valid YAML or JSON"),
        ("just a string\n", "Expected a list"),
        ("- id: one\n  main_category: economy\n  created_at: 2024-08-22\n", "invalid entries"),
        ("- id: 1\n  main_category: weather\n  created_at: 2024-08-22T00:00:00Z\n", "invalid entries"),
        ("- id: 1\n  main_category: all\n  created_at: 2024-08-22T00:00:00Z\n", "reserved category"),
    ],
)
async def test_fetch_all_malformed_content_is_failure(
    tmp_path: Path, content: str, expected_message: str
):
    """Malformed documents become failures carrying a readable message."""
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")

    outcome = await FileSummarySource(path).fetch_all()

    assert isinstance(outcome, FetchFailure)
    assert expected_message in outcome.message


# --- Tests for check_for_new ---


@pytest.mark.unit
@pytest.mark.asyncio
async def test_check_for_new_succeeds_for_existing_file(summaries_file: Path):
    """Checking an existing file succeeds before and after a load."""
    source = FileSummarySource(summaries_file)

    assert await source.check_for_new() == FetchSuccess(None)
    await source.fetch_all()
    stat = summaries_file.stat()
    os.utime(summaries_file, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))
    assert await source.check_for_new() == FetchSuccess(None)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_check_for_new_missing_file_is_failure(summaries_file: Path):
    """A file that disappeared after loading is reported as a failure."""
    source = FileSummarySource(summaries_file)
    await source.fetch_all()
    summaries_file.unlink()

    outcome = await source.check_for_new()

    assert isinstance(outcome, FetchFailure)
    assert str(summaries_file) in outcome.message


# --- Tests for StaticPreferenceStore ---


@pytest.mark.unit
def test_static_preference_store_returns_copy():
    """Configured categories are returned as a fresh list."""
    store = StaticPreferenceStore([Category.ECONOMY, Category.SCIENCE])

    categories = store.get_preferred_categories()
    assert categories == [Category.ECONOMY, Category.SCIENCE]

    assert categories is not None
    categories.clear()
    assert store.get_preferred_categories() == [Category.ECONOMY, Category.SCIENCE]


@pytest.mark.unit
def test_static_preference_store_empty_is_none():
    """No configured categories reads as None."""
    assert StaticPreferenceStore().get_preferred_categories() is None
