"""Tests for the file-facing API."""

import json
from pathlib import Path

import pytest

from bookrecon import RecordValidationError, load_records, write_editions
from bookrecon.api import load_record_schema
from bookrecon.models import ConsolidatedRecord, EditionGroup

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.mark.unit
def test_load_json_array() -> None:
    """Test loading a JSON array of provider records."""
    records = load_records(FIXTURES_DIR / "venture_deals.json")

    assert len(records) == 25
    assert records[0].rid == "1"
    assert records[0].isbn == "9780470929827"
    assert records[0].edition == "1"


@pytest.mark.unit
def test_load_jsonl(tmp_path: Path) -> None:
    """Test JSONL input with blank lines and provider aliases."""
    path = tmp_path / "records.jsonl"
    path.write_text(
        '{"id": 7, "title": "Venture Deals", "pages": "240", "authors": "Brad Feld"}\n'
        "\n"
        '{"title": "Startup Life", "isbn13": "9781118443644", "thumbnail": "c.jpg"}\n'
    )

    records = load_records(path)

    assert [r.title for r in records] == ["Venture Deals", "Startup Life"]
    assert records[0].rid == "7"
    assert records[0].page_count == 240
    assert records[0].authors == ["Brad Feld"]
    assert records[1].isbn == "9781118443644"
    assert records[1].image == "c.jpg"


@pytest.mark.unit
def test_missing_ids_are_deterministic(tmp_path: Path) -> None:
    """Test records without ids get stable, position-dependent identifiers."""
    path = tmp_path / "records.json"
    path.write_text(json.dumps([{"title": "Venture Deals"}, {"title": "Venture Deals"}]))

    first = load_records(path)
    second = load_records(path)

    assert [r.rid for r in first] == [r.rid for r in second]
    assert first[0].rid != first[1].rid


@pytest.mark.unit
def test_empty_file(tmp_path: Path) -> None:
    """Test an empty file yields no records."""
    path = tmp_path / "empty.jsonl"
    path.write_text("")

    assert load_records(path) == []


@pytest.mark.unit
def test_missing_file(tmp_path: Path) -> None:
    """Test a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_records(tmp_path / "missing.json")


@pytest.mark.unit
def test_invalid_json(tmp_path: Path) -> None:
    """Test malformed JSON reports the file."""
    path = tmp_path / "bad.jsonl"
    path.write_text('{"title": "ok"}\n{broken\n')

    with pytest.raises(RecordValidationError, match="line 2") as exc_info:
        load_records(path)

    assert exc_info.value.file == str(path)


@pytest.mark.unit
def test_schema_violation_strict(tmp_path: Path) -> None:
    """Test strict mode raises on the first invalid record."""
    path = tmp_path / "records.json"
    path.write_text(json.dumps([{"title": "ok"}, {"title": 42}]))

    with pytest.raises(RecordValidationError) as exc_info:
        load_records(path)

    assert exc_info.value.index == 1
    assert "title" in str(exc_info.value)


@pytest.mark.unit
def test_schema_violation_lenient(tmp_path: Path) -> None:
    """Test lenient mode skips invalid records."""
    path = tmp_path / "records.json"
    path.write_text(json.dumps([{"id": "a", "title": "ok"}, "not a record", {"authors": 5}]))

    records = load_records(path, strict=False)

    assert [r.rid for r in records] == ["a"]


@pytest.mark.unit
def test_record_schema_is_loadable() -> None:
    """Test the bundled record schema is a JSON Schema object."""
    schema = load_record_schema()

    assert schema["type"] == "object"
    assert "title" in schema["properties"]


@pytest.mark.unit
def test_write_editions(tmp_path: Path) -> None:
    """Test editions are written in the storage shape."""
    from bookrecon.models import BookRecord

    record = BookRecord(rid="a", title="Venture Deals", isbn="111", binding="hardcover")
    group = EditionGroup(
        edition_number=1,
        edition_type="First Edition",
        publication_year=2011,
        records=[ConsolidatedRecord(record=record, members=[record])],
    )
    output = tmp_path / "out" / "editions.json"

    write_editions([group], output, primary_book_id="work-1")

    data = json.loads(output.read_text(encoding="utf-8"))
    assert len(data) == 1
    assert data[0]["primary_book_id"] == "work-1"
    assert data[0]["edition_number"] == 1
    assert data[0]["bindings"][0]["isbn"] == "111"
    assert data[0]["bindings"][0]["binding_type"] == "hardcover"
