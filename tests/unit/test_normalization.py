"""Tests for record normalization: authors, titles, years and the normalizer."""

from collections.abc import Callable

import pytest

from bookrecon.config import CorrectionTables
from bookrecon.models import BookRecord
from bookrecon.normalize import extract_publication_year, normalize
from bookrecon.normalize._fields import (
    comparison_title,
    deep_normalize_title,
    main_title_words,
    normalize_author_name,
    parse_authors,
    work_title,
)

# ========== Authors ==========


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  Brad   Feld ", "Brad Feld"),
        ("Martin Luther King Jr.", "Martin Luther King"),
        ("John Smith III", "John Smith"),
        ("Sean Wise", "Sean Wise"),
    ],
)
def test_normalize_author_name(raw: str, expected: str) -> None:
    """Test whitespace collapse and suffix stripping."""
    assert normalize_author_name(raw) == expected


@pytest.mark.unit
def test_parse_authors_comma_separated(empty_tables: CorrectionTables) -> None:
    """Test comma-separated fields are split."""
    assert parse_authors(["Brad Feld, Jason Mendelson"], empty_tables) == [
        "Brad Feld",
        "Jason Mendelson",
    ]


@pytest.mark.unit
def test_parse_authors_known_concatenations() -> None:
    """Test run-together literals from the correction table."""
    tables = CorrectionTables(
        concatenated_authors={"Amy Batchelor Brad Feld": ["Amy Batchelor", "Brad Feld"]}
    )

    assert parse_authors(["Amy Batchelor Brad Feld"], tables) == ["Amy Batchelor", "Brad Feld"]


@pytest.mark.unit
def test_parse_authors_four_capitalized_words(empty_tables: CorrectionTables) -> None:
    """Test 'First Last First Last' splits into two names."""
    assert parse_authors(["Jason Mendelson Brad Feld"], empty_tables) == [
        "Jason Mendelson",
        "Brad Feld",
    ]


@pytest.mark.unit
def test_parse_authors_four_words_not_capitalized(empty_tables: CorrectionTables) -> None:
    """Test four-word names that do not look like two names stay whole."""
    assert parse_authors(["Ludwig van der Rohe"], empty_tables) == ["Ludwig van der Rohe"]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Sean Wise Brad", ["Sean Wise", "Brad"]),
        ("Brad Sean Wise", ["Brad", "Sean Wise"]),
        ("Mary Ann Smith", ["Mary Ann Smith"]),
    ],
)
def test_parse_authors_three_words_with_split_marker(raw: str, expected: list[str]) -> None:
    """Test three-word strings split around a known lone given name."""
    tables = CorrectionTables(split_given_names=frozenset({"brad"}))

    assert parse_authors([raw], tables) == expected


@pytest.mark.unit
def test_parse_authors_dedupes_and_drops_short(empty_tables: CorrectionTables) -> None:
    """Test case-insensitive dedupe keeps first spelling and drops initials."""
    result = parse_authors(["Brad Feld", "brad feld", "J.", "", "BRAD FELD, Jr"], empty_tables)

    assert result == ["Brad Feld"]


@pytest.mark.unit
def test_parse_authors_default_tables() -> None:
    """Test the bundled corrections split the known concatenations."""
    from bookrecon.config import load_default_corrections

    tables = load_default_corrections()

    assert parse_authors(["Brad Feld Sean Wise"], tables) == ["Brad Feld", "Sean Wise"]


# ========== Titles ==========


@pytest.mark.unit
@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Startup Life: Surviving and Thriving", "startup life"),
        ("Venture Deals - Fourth Edition", "venture deals"),
        ("The Startup Owner's Manual", "the startup owners manual"),
        (None, ""),
    ],
)
def test_comparison_title(title: str | None, expected: str) -> None:
    """Test subtitle and punctuation removal for duplicate detection."""
    assert comparison_title(title) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("title", "expected"),
    [
        (
            "Venture Deals: Be Smarter Than Your Lawyer and Venture Capitalist, 4th Edition",
            "venture deals be smarter than your lawyer and venture capitalist",
        ),
        ("Venture Deals (4th Edition)", "venture deals"),
        ("Venture Deals Third Edition", "venture deals"),
        ("The Startup Owner's Manual", "startup owner s manual"),
        (
            "Startup Life: Surviving and Thriving",
            "startup life surviving and thriving",
        ),
        ("", ""),
    ],
)
def test_work_title(title: str, expected: str) -> None:
    """Test edition markers and parentheticals are removed, subtitle kept."""
    assert work_title(title) == expected


@pytest.mark.unit
def test_deep_normalize_title_strips_markers() -> None:
    """Test binding, edition, year and article markers are removed."""
    title = "The Venture Deals (Hardcover) 2nd Ed. [2012 Edition]"

    assert deep_normalize_title(title) == "venture deals"


@pytest.mark.unit
def test_main_title_words() -> None:
    """Test only the text before the colon contributes."""
    assert main_title_words("Do More Faster: Techstars Lessons") == {"more", "faster"}
    assert main_title_words("Startup Opportunities: Know When") == {
        "startup",
        "opportunities",
    }


# ========== Publication year ==========


@pytest.mark.unit
def test_year_field_wins(make_record: Callable[..., BookRecord]) -> None:
    """Test the integer year is preferred over dates."""
    record = make_record(year=2011, published_date="2013-01-01")

    assert extract_publication_year(record, 2025) == 2011


@pytest.mark.unit
def test_year_falls_back_through_sources(make_record: Callable[..., BookRecord]) -> None:
    """Test implausible sources are skipped in order."""
    record = make_record(
        title="Venture Deals (2016)",
        year=3000,
        date_published="n.d.",
        published_date="1750-01-01",
    )

    assert extract_publication_year(record, 2025) == 2016


@pytest.mark.unit
def test_year_none_when_no_source(make_record: Callable[..., BookRecord]) -> None:
    """Test records without any year source yield None."""
    assert extract_publication_year(make_record(), 2025) is None


@pytest.mark.unit
def test_year_validity_window(make_record: Callable[..., BookRecord]) -> None:
    """Test years up to current + 5 are accepted and later ones rejected."""
    assert extract_publication_year(make_record(year=2030), 2025) == 2030
    assert extract_publication_year(make_record(year=2031), 2025) is None


# ========== Normalizer ==========


@pytest.mark.unit
def test_normalize_record(make_record: Callable[..., BookRecord]) -> None:
    """Test authors, title and binding are normalized into a new record."""
    raw = make_record(
        title="  Venture   Deals ",
        authors=["Brad Feld, Jason Mendelson"],
        binding="Kindle Edition",
    )

    result = normalize(raw, CorrectionTables())

    assert result.title == "Venture Deals"
    assert result.authors == ["Brad Feld", "Jason Mendelson"]
    assert result.binding == "ebook"
    assert raw.binding == "Kindle Edition"


@pytest.mark.unit
def test_normalize_binding_falls_back_to_print_type(
    make_record: Callable[..., BookRecord],
) -> None:
    """Test print_type is used when binding is missing."""
    result = normalize(make_record(print_type="Paperback"), CorrectionTables())

    assert result.binding == "paperback"


@pytest.mark.unit
def test_normalize_isbn_binding_override(make_record: Callable[..., BookRecord]) -> None:
    """Test ISBN binding corrections replace binding and print_type first."""
    tables = CorrectionTables(binding_by_isbn={"9781118516850": "ebook"})
    raw = make_record(isbn="9781118516850", binding="Hardcover", print_type="BOOK")

    result = normalize(raw, tables)

    assert result.binding == "ebook"
    assert result.print_type == "ebook"


@pytest.mark.unit
def test_normalize_is_idempotent(make_record: Callable[..., BookRecord]) -> None:
    """Test normalizing twice gives the same record."""
    tables = CorrectionTables(split_given_names=frozenset({"brad"}))
    raw = make_record(
        title="Startup  Life",
        authors=["Amy Batchelor Brad Feld", "Sean Wise Brad"],
        binding="Electronic resource (unabridged)",
    )

    once = normalize(raw, tables)

    assert normalize(once, tables) == once
