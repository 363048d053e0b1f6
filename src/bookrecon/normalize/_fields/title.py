"""Title normalization and comparison keys.

Three reductions are used at different stages:

- ``comparison_title`` (consolidation): drops the subtitle and punctuation.
- ``work_title`` (clustering): drops edition markers and parentheticals but
  keeps the subtitle, so "Startup Life: Surviving..." and
  "Startup Life Surviving..." reduce to the same key.
- ``deep_normalize_title`` (similarity scoring): additionally drops binding
  and revision parentheticals, bracketed years, ISBN markers and leading
  articles.
"""

import re

from .._helpers import collapse_whitespace, punctuation_to_space, significant_words

_ORDINALS = r"first|second|third|fourth|fifth|1st|2nd|3rd|4th|5th|\d+(?:st|nd|rd|th)?"

SUBTITLE_RE = re.compile(r"[:\-–—].+$")
NON_WORD_RE = re.compile(r"[^\w\s]", re.ASCII)

# work_title
_WORK_EDITION_RE = re.compile(rf",?\s*({_ORDINALS})\s+edition", re.IGNORECASE)
_EDITION_NUMBER_RE = re.compile(r"\s*edition\s*\d*", re.IGNORECASE)
_NUMBERED_EDITION_RE = re.compile(r",?\s*\d+(?:st|nd|rd|th)?\s*edition", re.IGNORECASE)
_PARENTHETICAL_RE = re.compile(r"\([^)]*\)")
_BY_AUTHOR_TAIL_RE = re.compile(r"\s*--by\s+.*$", re.IGNORECASE)
_LEADING_THE_RE = re.compile(r"^\s*the\s+", re.IGNORECASE)

# deep_normalize_title
_BY_AUTHOR_RE = re.compile(r"\s*--by\s+[^\[\]()]+", re.IGNORECASE)
_BINDING_PAREN_RE = re.compile(
    r"\s*\((?:hardcover|paperback|ebook|kindle|audiobook)[^)]*\)", re.IGNORECASE
)
_DEEP_EDITION_RE = re.compile(rf",?\s*(?:{_ORDINALS})\s+(?:edition|ed\.?)", re.IGNORECASE)
_BRACKET_YEAR_RE = re.compile(r"\s*\[\s*\d{4}\s*(?:edition)?\s*\]", re.IGNORECASE)
_ISBN_MARKER_RE = re.compile(r"\s*isbn:\s*\d+", re.IGNORECASE)
_REVISION_PAREN_RE = re.compile(r"\s*\((?:revised|updated|expanded|new)[^)]*\)", re.IGNORECASE)
_ANY_PAREN_RE = re.compile(r"\s*\([^)]*\)")
_ANY_BRACKET_RE = re.compile(r"\s*\[[^\]]*\]")
_LEADING_ARTICLE_RE = re.compile(r"^(?:a|an|the)\s+", re.IGNORECASE)


def normalize_title(title: str | None) -> str:
    """Trim and collapse internal whitespace."""
    return collapse_whitespace(title or "")


def comparison_title(title: str | None) -> str:
    """Reduce a title for duplicate detection.

    Lowercases, removes everything after the first ``:``/``-``/dash,
    deletes punctuation and collapses whitespace.
    """
    text = (title or "").lower()
    text = SUBTITLE_RE.sub("", text)
    text = NON_WORD_RE.sub("", text)
    return collapse_whitespace(text)


def work_title(title: str | None) -> str:
    """Reduce a title to the key used for work clustering.

    Parameters
    ----------
    title : str | None
        Record title.

    Returns
    -------
    str
        Lowercase, edition-free, parenthetical-free, punctuation-free title.
    """
    if not title:
        return ""

    text = title.lower()
    text = _WORK_EDITION_RE.sub("", text)
    text = _EDITION_NUMBER_RE.sub("", text)
    text = _NUMBERED_EDITION_RE.sub("", text)
    text = _PARENTHETICAL_RE.sub("", text)
    text = _BY_AUTHOR_TAIL_RE.sub("", text)
    text = _LEADING_THE_RE.sub("", text)
    text = punctuation_to_space(text)
    return collapse_whitespace(text)


def deep_normalize_title(title: str | None) -> str:
    """Aggressively reduce a title before similarity scoring.

    Parameters
    ----------
    title : str | None
        Title (raw or already reduced).

    Returns
    -------
    str
        Normalized title.
    """
    if not title:
        return ""

    text = title.lower()
    text = _BY_AUTHOR_RE.sub("", text)
    text = _BINDING_PAREN_RE.sub("", text)
    text = _DEEP_EDITION_RE.sub("", text)
    text = _EDITION_NUMBER_RE.sub("", text)
    text = _BRACKET_YEAR_RE.sub("", text)
    text = _ISBN_MARKER_RE.sub("", text)
    text = _REVISION_PAREN_RE.sub("", text)
    text = _ANY_PAREN_RE.sub(" ", text)
    text = _ANY_BRACKET_RE.sub(" ", text)
    text = _LEADING_ARTICLE_RE.sub("", text)
    text = punctuation_to_space(text)
    return collapse_whitespace(text)


def main_title_words(title: str | None) -> set[str]:
    """Significant words of the main title (text before the first colon)."""
    main = (title or "").split(":", 1)[0]
    return significant_words(work_title(main))
