"""Pytest configuration and fixtures for test suite."""

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from bookrecon.config import CorrectionTables, ReconcileConfig  # noqa: E402
from bookrecon.models import BookRecord, ConsolidatedRecord  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def make_record() -> Callable[..., BookRecord]:
    """Factory for test records with minimal boilerplate.

    Only the title is required in spirit; every other field defaults to
    absent so tests state exactly what they rely on.
    """

    def _factory(
        rid: str = "rid_001",
        title: str = "Venture Deals",
        *,
        authors: list[str] | None = None,
        isbn: str | None = None,
        binding: str | None = None,
        print_type: str | None = None,
        subtitle: str | None = None,
        publisher: str | None = None,
        language: str | None = None,
        year: int | None = None,
        date_published: str | None = None,
        published_date: str | None = None,
        description: str | None = None,
        page_count: int | None = None,
        edition: str | None = None,
        content_version: str | None = None,
        image: str | None = None,
    ) -> BookRecord:
        return BookRecord(
            rid=rid,
            title=title,
            authors=list(authors or []),
            isbn=isbn,
            binding=binding,
            print_type=print_type,
            subtitle=subtitle,
            publisher=publisher,
            language=language,
            year=year,
            date_published=date_published,
            published_date=published_date,
            description=description,
            page_count=page_count,
            edition=edition,
            content_version=content_version,
            image=image,
        )

    return _factory


@pytest.fixture
def make_consolidated(
    make_record: Callable[..., BookRecord],
) -> Callable[..., ConsolidatedRecord]:
    """Factory for single-member consolidated records."""

    def _factory(
        rid: str = "rid_001",
        title: str = "Venture Deals",
        **kwargs: Any,
    ) -> ConsolidatedRecord:
        record = make_record(rid, title, **kwargs)
        return ConsolidatedRecord(record=record, members=[record])

    return _factory


@pytest.fixture
def empty_tables() -> CorrectionTables:
    """Correction tables with no entries."""
    return CorrectionTables()


@pytest.fixture
def config() -> ReconcileConfig:
    """Default configuration pinned to a fixed reference year."""
    return ReconcileConfig(current_year=2025)


@pytest.fixture
def load_fixture() -> Callable[[str], list[dict[str, Any]]]:
    """Load a raw record dataset from tests/fixtures."""

    def _load(name: str) -> list[dict[str, Any]]:
        with (FIXTURES_DIR / name).open(encoding="utf-8") as f:
            return json.load(f)

    return _load
