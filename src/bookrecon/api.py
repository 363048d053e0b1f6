"""Public API for loading provider records and writing editions.

This module provides the file-facing surface of bookrecon:
- Loading raw book records from JSON or JSONL files
- Writing reconciled editions in the storage shape
"""

import json
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

from bookrecon.editions import convert_to_book_editions
from bookrecon.models import BookRecord, EditionGroup, calculate_record_digest, calculate_rid

__all__ = [
    "RecordValidationError",
    "load_record_schema",
    "load_records",
    "write_editions",
]


class RecordValidationError(Exception):
    """Raised when an input record does not match the record schema."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
        index: int | None = None,
    ) -> None:
        """Initialize validation error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where the invalid record was found.
        index : int | None, optional
            Zero-based position of the invalid record.
        """
        super().__init__(message)
        self.file = file
        self.index = index


def load_record_schema() -> dict[str, Any]:
    """Load the bundled JSON Schema for raw book records."""
    text = (
        resources.files("bookrecon.schemas")
        .joinpath("book_record.schema.json")
        .read_text("utf-8")
    )
    return json.loads(text)


def _read_items(file_path: Path) -> list[Any]:
    text = file_path.read_text(encoding="utf-8")
    stripped = text.lstrip()
    if not stripped:
        return []

    if stripped.startswith("["):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise RecordValidationError(
                f"Invalid JSON in {file_path.name}: {e}", file=str(file_path)
            ) from e
        return list(data)

    items = []
    for line_no, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            items.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise RecordValidationError(
                f"Invalid JSON on line {line_no} of {file_path.name}: {e}",
                file=str(file_path),
            ) from e
    return items


def load_records(
    path: str | Path,
    *,
    strict: bool = True,
) -> list[BookRecord]:
    """Load raw book records from a JSON array or JSONL file.

    Every record is validated against the bundled record schema.

    Parameters
    ----------
    path : str | Path
        Path to a ``.json`` file holding an array of records, or a JSONL
        file with one record per line.
    strict : bool, optional
        If True, raise on the first invalid record. If False, skip invalid
        records, by default True.

    Returns
    -------
    list[BookRecord]
        Records in file order. Records without an identifier get a
        deterministic UUIDv5 ``rid``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    RecordValidationError
        If the file is not valid JSON, or a record is invalid and
        ``strict`` is True.

    Examples
    --------
        >>> from bookrecon import load_records
        >>> records = load_records("venture_deals.json")
        >>> records[0].title
        'Venture Deals'
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    validator = jsonschema.Draft202012Validator(load_record_schema())

    records: list[BookRecord] = []
    for index, item in enumerate(_read_items(file_path)):
        error = best_match(validator.iter_errors(item))
        if error is not None:
            if strict:
                location = "/".join(str(p) for p in error.absolute_path) or "<record>"
                raise RecordValidationError(
                    f"Invalid record {index} in {file_path.name} at {location}: {error.message}",
                    file=str(file_path),
                    index=index,
                )
            continue
        default_rid = calculate_rid(calculate_record_digest(item), index)
        records.append(BookRecord.from_dict(item, default_rid=default_rid))

    return records


def write_editions(
    groups: list[EditionGroup],
    path: str | Path,
    *,
    primary_book_id: str = "",
) -> None:
    """Write edition groups to a JSON file in the storage shape.

    Output is deterministic apart from ``created_at`` timestamps, with
    sorted keys and UTF-8 encoding.

    Parameters
    ----------
    groups : list[EditionGroup]
        Ranked edition groups.
    path : str | Path
        Output file path.
    primary_book_id : str, optional
        Identifier of the owning work, by default empty.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    editions = [e.to_dict() for e in convert_to_book_editions(groups, primary_book_id)]
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(editions, f, indent=2, sort_keys=True, ensure_ascii=False)
        f.write("\n")
