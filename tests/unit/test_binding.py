"""Tests for binding normalization."""

import pytest

from bookrecon.normalize._fields import is_audiobook_format, normalize_binding
from bookrecon.normalize._fields.binding import detect_electronic_resource_type


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Hardcover", "hardcover"),
        ("Hardback", "hardcover"),
        ("Cloth", "hardcover"),
        ("Library Binding", "library binding"),
        ("Mass Market Paperback", "paperback"),
        ("Kindle Edition", "ebook"),
        ("EPUB", "ebook"),
        ("MP3 CD", "audiobook"),
        ("Audible Audio", "audiobook"),
        ("Board book", "board book"),
        ("Ring-bound", "hardcover"),
        ("Spiral-bound", "hardcover"),
        ("Plastic Comb", "plastic comb"),
    ],
)
def test_normalize_binding_table(raw: str, expected: str) -> None:
    """Test exact and substring matches in table order."""
    assert normalize_binding(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize("raw", [None, "", "   "])
def test_normalize_binding_blank_is_unknown(raw: str | None) -> None:
    """Test missing or blank bindings map to unknown."""
    assert normalize_binding(raw) == "unknown"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Electronic resource", "ebook"),
        ("electronic resource (unabridged)", "audiobook"),
        ("Electronic Resource - MP3", "audiobook"),
        ("electronic resource, read by narrator", "audiobook"),
    ],
)
def test_electronic_resource_context(raw: str, expected: str) -> None:
    """Test 'electronic resource' resolves by audio hints."""
    assert normalize_binding(raw) == expected
    assert detect_electronic_resource_type(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("audiobook", True),
        ("MP3 CD", True),
        ("Audio CD", True),
        ("audio_book", True),
        ("hardcover", False),
        (None, False),
    ],
)
def test_is_audiobook_format(raw: str | None, expected: bool) -> None:
    """Test audio format detection by substring."""
    assert is_audiobook_format(raw) is expected


@pytest.mark.unit
def test_normalize_binding_idempotent() -> None:
    """Test canonical values map to themselves."""
    for value in ("hardcover", "paperback", "ebook", "audiobook", "board book", "spiral bound"):
        assert normalize_binding(value) == value
    assert normalize_binding("unknown") == "unknown"
