"""Author normalization."""

from bookrecon.config import CorrectionTables

from .._helpers import CAPITALIZED_NAME_RE, SUFFIX_RE, collapse_whitespace


def normalize_author_name(name: str) -> str:
    """Collapse whitespace and strip a trailing generational suffix.

    Parameters
    ----------
    name : str
        Single author name.

    Returns
    -------
    str
        Cleaned name (may be empty if the input was only a suffix).
    """
    return SUFFIX_RE.sub("", collapse_whitespace(name)).strip()


def _split_run_together(text: str, tables: CorrectionTables) -> list[str] | None:
    """Split an author string holding two names without punctuation.

    Returns None when the string looks like a single author.
    """
    if text in tables.concatenated_authors:
        return list(tables.concatenated_authors[text])

    words = text.split()

    # "First Last First Last"
    if len(words) == 4:
        first = f"{words[0]} {words[1]}"
        second = f"{words[2]} {words[3]}"
        if CAPITALIZED_NAME_RE.match(first) and CAPITALIZED_NAME_RE.match(second):
            return [first, second]

    # "First Last Given" or "Given First Last"
    if len(words) == 3:
        if words[2].lower() in tables.split_given_names:
            return [f"{words[0]} {words[1]}", words[2]]
        if words[0].lower() in tables.split_given_names:
            return [words[0], f"{words[1]} {words[2]}"]

    return None


def parse_authors(authors: list[str], tables: CorrectionTables) -> list[str]:
    """Split author fields into individual canonical names.

    Comma-separated fields are split on commas; otherwise known run-together
    patterns are split. Names are de-duplicated case-insensitively (first
    spelling wins), stripped of Jr/Sr/III/IV suffixes, and anything of two
    characters or fewer is dropped as a stray initial.

    Parameters
    ----------
    authors : list[str]
        Author fields as reported by the provider.
    tables : CorrectionTables
        Known run-together literals and split markers.

    Returns
    -------
    list[str]
        Canonical author names in first-seen order.
    """
    candidates: list[str] = []

    for author_field in authors:
        if not author_field or not isinstance(author_field, str):
            continue

        if "," in author_field:
            candidates.extend(part.strip() for part in author_field.split(","))
            continue

        text = author_field.strip()
        split = _split_run_together(text, tables)
        candidates.extend(split if split is not None else [text])

    seen: set[str] = set()
    names: list[str] = []
    for candidate in candidates:
        name = normalize_author_name(candidate)
        key = name.lower()
        if len(name) <= 2 or key in seen:
            continue
        seen.add(key)
        names.append(name)

    return names
