"""Edition number and edition label extraction."""

import re

from bookrecon.config import CorrectionTables
from bookrecon.models import BookRecord

ORDINAL_WORDS = {
    "first": 1,
    "second": 2,
    "third": 3,
    "fourth": 4,
    "fifth": 5,
    "sixth": 6,
    "seventh": 7,
    "eighth": 8,
    "ninth": 9,
    "tenth": 10,
}

# Tried in order; the first pattern yielding a valid number wins
EDITION_PATTERNS = (
    re.compile(r"(\d+)(?:st|nd|rd|th)\s+edition", re.IGNORECASE),
    re.compile(r"edition\s+(\d+)", re.IGNORECASE),
    re.compile(rf"({'|'.join(ORDINAL_WORDS)})\s+edition", re.IGNORECASE),
    re.compile(r"^(\d+)$"),
    re.compile(r"(?:unabridged|revised|updated)\s+(\d+)", re.IGNORECASE),
)

# (title fragments, label), checked in order
TITLE_EDITION_LABELS = (
    (("fourth edition", "4th edition"), "Fourth Edition"),
    (("third edition", "3rd edition"), "Third Edition"),
    (("second edition", "2nd edition"), "Second Edition"),
    (("first edition", "1st edition"), "First Edition"),
    (("revised",), "Revised Edition"),
    (("updated",), "Updated Edition"),
    (("expanded",), "Expanded Edition"),
)

ORDINAL_LABELS = {
    1: "First Edition",
    2: "Second Edition",
    3: "Third Edition",
    4: "Fourth Edition",
    5: "Fifth Edition",
}


def ordinal_suffix(number: int) -> str:
    """English ordinal suffix: 1 -> 'st', 12 -> 'th', 22 -> 'nd'."""
    if number % 10 == 1 and number % 100 != 11:
        return "st"
    if number % 10 == 2 and number % 100 != 12:
        return "nd"
    if number % 10 == 3 and number % 100 != 13:
        return "rd"
    return "th"


def ordinal_label(number: int) -> str:
    """Default label for an edition number."""
    return ORDINAL_LABELS.get(number, f"{number}{ordinal_suffix(number)} Edition")


def extract_edition_number(text: str | None, max_number: int = 99) -> int | None:
    """Parse an edition number out of free text.

    Parameters
    ----------
    text : str | None
        Edition field, content version or title.
    max_number : int, optional
        Largest plausible edition; larger captures (usually years) are
        rejected and the next pattern is tried.

    Returns
    -------
    int | None
        Edition number, or None if no pattern yields a value in
        ``[1, max_number]``.

    Examples
    --------
        >>> extract_edition_number("Venture Deals, 4th Edition")
        4
        >>> extract_edition_number("Second Edition")
        2
        >>> extract_edition_number("2019") is None
        True
    """
    if not text:
        return None

    lowered = text.lower()
    for pattern in EDITION_PATTERNS:
        match = pattern.search(lowered)
        if not match:
            continue
        captured = match.group(1)
        number = int(captured) if captured.isdigit() else ORDINAL_WORDS[captured]
        if 1 <= number <= max_number:
            return number

    return None


def parse_explicit_edition(
    record: BookRecord,
    tables: CorrectionTables,
    max_number: int = 99,
) -> int | None:
    """Determine a record's explicit edition number.

    The ISBN correction table is consulted first, then the ``edition``
    field (or ``content_version`` when ``edition`` is empty), then the title.

    Parameters
    ----------
    record : BookRecord
        Consolidated record.
    tables : CorrectionTables
        Supplies ``edition_by_isbn``.
    max_number : int, optional
        Largest plausible edition number.

    Returns
    -------
    int | None
        Edition number, or None when nothing states one.
    """
    if record.isbn and record.isbn in tables.edition_by_isbn:
        return tables.edition_by_isbn[record.isbn]

    metadata = record.edition or record.content_version
    number = extract_edition_number(metadata, max_number)
    if number is not None:
        return number

    return extract_edition_number(record.title, max_number)


def detect_edition_type(record: BookRecord | None, edition_number: int) -> str:
    """Label an edition from its authoritative record.

    Explicit wording in the title wins, then an unabridged content version,
    then the ordinal label for ``edition_number``.
    """
    if record is not None:
        title = (record.title or "").lower()
        for fragments, label in TITLE_EDITION_LABELS:
            if any(f in title for f in fragments):
                return label
        if "unabridged" in (record.content_version or "").lower():
            return "Unabridged"

    return ordinal_label(edition_number)
