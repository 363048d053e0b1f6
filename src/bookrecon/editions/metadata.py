"""Edition-level metadata selection, ranking and display."""

from typing import Any

from bookrecon.editions.parsing import ordinal_suffix
from bookrecon.models import BookRecord, EditionGroup
from bookrecon.normalize._fields import normalize_binding

# Bindings consulted in order for edition-level metadata
METADATA_BINDING_PRIORITY = ("hardcover", "paperback", "ebook", "audiobook")


def metadata_score(record: BookRecord) -> int:
    """Score a record's usefulness as the metadata source of an edition.

    +3 publication date (or year), +2 page count, +1 publisher,
    +1 description, +1 image.
    """
    score = 0
    if record.published_date or record.year:
        score += 3
    if record.page_count:
        score += 2
    if record.publisher:
        score += 1
    if record.description:
        score += 1
    if record.image:
        score += 1
    return score


def _best(records: list[BookRecord]) -> BookRecord:
    best = records[0]
    for record in records[1:]:
        if metadata_score(record) > metadata_score(best):
            best = record
    return best


def _partial(record: BookRecord) -> dict[str, Any]:
    published = record.published_date or (str(record.year) if record.year else None)
    return {
        "published_date": published,
        "page_count": record.page_count,
        "publisher": record.publisher,
        "description": record.description,
        "image": record.image,
        "language": record.language,
    }


def best_metadata(records: list[BookRecord]) -> dict[str, Any]:
    """Pick edition-level metadata from its bindings.

    Bindings are tried hardcover, paperback, ebook, audiobook; the first
    tier whose best record scores above zero supplies the metadata.
    Otherwise the best record overall does.

    Parameters
    ----------
    records : list[BookRecord]
        Records of one edition.

    Returns
    -------
    dict[str, Any]
        ``published_date``, ``page_count``, ``publisher``, ``description``,
        ``image`` and ``language``; empty for empty input.
    """
    if not records:
        return {}

    tiers: dict[str, list[BookRecord]] = {}
    for record in records:
        tiers.setdefault(normalize_binding(record.raw_binding), []).append(record)

    for binding in METADATA_BINDING_PRIORITY:
        tier = tiers.get(binding)
        if tier:
            best = _best(tier)
            if metadata_score(best) > 0:
                return _partial(best)

    return _partial(_best(records))


def rank_groups(groups: list[EditionGroup]) -> list[EditionGroup]:
    """Sort groups newest edition first; equal numbers keep their order."""
    return sorted(groups, key=lambda g: g.edition_number or 0, reverse=True)


def edition_display_name(group: EditionGroup) -> str:
    """Human-readable edition name, e.g. 'Fourth Edition (2019)'."""
    if group.edition_type:
        display = group.edition_type
    elif group.edition_number > 1:
        display = f"{group.edition_number}{ordinal_suffix(group.edition_number)} Edition"
    else:
        display = "First Edition"

    if group.publication_year:
        display += f" ({group.publication_year})"
    return display
