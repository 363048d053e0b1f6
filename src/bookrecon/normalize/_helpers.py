"""Helper functions and compiled regex patterns for normalization.

Punctuation patterns use ``re.ASCII`` so that word characters are the ASCII
set; accented letters count as punctuation when titles are reduced to
comparison keys.
"""

import re

from bookrecon.models import BookRecord

# Pre-compiled regex patterns
WHITESPACE_RE = re.compile(r"\s+")
NON_WORD_RE = re.compile(r"[^\w\s]", re.ASCII)
TITLE_YEAR_RE = re.compile(r"\((\d{4})\)")
SUFFIX_RE = re.compile(r"\b(Jr|Sr|III|IV)\b\.?$", re.IGNORECASE)
CAPITALIZED_NAME_RE = re.compile(r"^[A-Z][a-z]+\s+[A-Z][a-z]+$")

# Words ignored when comparing title tokens
STOP_WORDS = frozenset(
    {"a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by"}
)

# Lowest year considered a real publication year
YEAR_FLOOR = 1800


# ---------------------------------------------------------------------------
# Text normalization functions
# ---------------------------------------------------------------------------


def collapse_whitespace(text: str) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    return WHITESPACE_RE.sub(" ", text.strip())


def punctuation_to_space(text: str) -> str:
    """Replace every non-word, non-space character with a space."""
    return NON_WORD_RE.sub(" ", text)


def significant_words(title: str) -> set[str]:
    """Words longer than two characters that are not stop words.

    Parameters
    ----------
    title : str
        Normalized (lowercase, space-separated) title.

    Returns
    -------
    set[str]
        Significant words.
    """
    return {w for w in title.split(" ") if len(w) > 2 and w not in STOP_WORDS}


# ---------------------------------------------------------------------------
# Year inference
# ---------------------------------------------------------------------------


def _leading_year(value: object) -> int | None:
    """Parse the first four characters of a date-like value as a year."""
    text = str(value)[:4]
    return int(text) if text.isascii() and text.isdigit() else None


def extract_publication_year(
    record: BookRecord,
    current_year: int,
    validity_ahead: int = 5,
) -> int | None:
    """Infer a record's publication year.

    Sources are tried in order: ``year``, ``date_published``,
    ``published_date``, then a ``(YYYY)`` group in the title. A candidate is
    accepted only when ``1800 < year <= current_year + validity_ahead``;
    otherwise the next source is tried.

    Parameters
    ----------
    record : BookRecord
        Record to inspect.
    current_year : int
        Reference year.
    validity_ahead : int, optional
        Years beyond ``current_year`` still accepted, by default 5.

    Returns
    -------
    int | None
        Publication year, or None if no source yields a plausible year.
    """
    ceiling = current_year + validity_ahead

    def plausible(year: int | None) -> bool:
        return year is not None and YEAR_FLOOR < year <= ceiling

    if plausible(record.year):
        return record.year

    for value in (record.date_published, record.published_date):
        if value:
            year = _leading_year(value)
            if plausible(year):
                return year

    match = TITLE_YEAR_RE.search(record.title or "")
    if match:
        year = int(match.group(1))
        if plausible(year):
            return year

    return None
