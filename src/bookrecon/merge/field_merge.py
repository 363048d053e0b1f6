"""Field-level merge rules for duplicate sets."""

from dataclasses import replace

from bookrecon.merge.survivor import select_base_record
from bookrecon.models import BookRecord, ConsolidatedRecord, DuplicateSet
from bookrecon.normalize._fields import normalize_author_name


def _longest(values: list[str | None]) -> str | None:
    best: str | None = None
    for value in values:
        if value and (best is None or len(value) > len(best)):
            best = value
    return best


def merge_authors(records: list[BookRecord], primary_authors: tuple[str, ...] = ()) -> list[str]:
    """Union of distinct author names across records.

    Names are suffix-stripped and de-duplicated ignoring case (the first
    spelling wins); the result is sorted case-insensitively, with any name
    containing a primary author first (in ``primary_authors`` order).

    Parameters
    ----------
    records : list[BookRecord]
        Duplicate records.
    primary_authors : tuple[str, ...], optional
        Lowercase primary author names.

    Returns
    -------
    list[str]
        Merged author list.
    """
    names: list[str] = []
    seen: set[str] = set()
    for record in records:
        for author in record.authors:
            if not author or not author.strip():
                continue
            name = normalize_author_name(author)
            if name.lower() not in seen:
                seen.add(name.lower())
                names.append(name)

    def sort_key(name: str) -> tuple[int, str]:
        lowered = name.lower()
        rank = next(
            (i for i, primary in enumerate(primary_authors) if primary in lowered),
            len(primary_authors),
        )
        return rank, lowered

    return sorted(names, key=sort_key)


def earliest_date(records: list[BookRecord]) -> str | None:
    """Earliest ``published_date`` by lexicographic order (ISO dates)."""
    dates = sorted((r.published_date for r in records if r.published_date), key=str)
    return dates[0] if dates else None


def merge_duplicate_set(
    duplicate_set: DuplicateSet,
    primary_authors: tuple[str, ...] = (),
) -> ConsolidatedRecord:
    """Reduce a duplicate set to one authoritative record.

    The most complete member supplies every field except: the longest title,
    the first non-empty subtitle, the longest description, the union of
    authors and the earliest publication date. Single-member sets pass
    through unchanged.

    Parameters
    ----------
    duplicate_set : DuplicateSet
        Set to reduce.
    primary_authors : tuple[str, ...], optional
        Lowercase names sorted first in the merged author list.

    Returns
    -------
    ConsolidatedRecord
        Merged record plus its members.
    """
    members = list(duplicate_set.members)
    if len(members) == 1:
        return ConsolidatedRecord(record=members[0], members=members)

    base = select_base_record(members)
    subtitle = next((m.subtitle for m in members if m.subtitle and m.subtitle.strip()), None)

    merged = replace(
        base,
        title=_longest([m.title for m in members]) or base.title,
        subtitle=subtitle,
        description=_longest([m.description for m in members]),
        authors=merge_authors(members, primary_authors),
        published_date=earliest_date(members),
    )
    return ConsolidatedRecord(record=merged, members=members)
