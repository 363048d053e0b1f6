"""Duplicate detection: group records describing the same physical item."""

from bookrecon.config import ReconcileConfig
from bookrecon.models import BookRecord, DuplicateSet
from bookrecon.normalize._fields import comparison_title, normalize_binding
from bookrecon.normalize._fields.binding import UNKNOWN
from bookrecon.normalize._helpers import extract_publication_year
from bookrecon.scoring import title_similarity


def _authors_compatible(record1: BookRecord, record2: BookRecord) -> bool:
    authors1 = {a.lower() for a in record1.authors}
    authors2 = {a.lower() for a in record2.authors}
    return bool(authors1 & authors2) or authors1 <= authors2 or authors2 <= authors1


def are_likely_same_item(
    record1: BookRecord,
    record2: BookRecord,
    config: ReconcileConfig,
) -> bool:
    """Similarity test for two records that may be the same physical item.

    Parameters
    ----------
    record1 : BookRecord
        Normalized record.
    record2 : BookRecord
        Normalized record.
    config : ReconcileConfig
        Supplies the isolation list, title threshold and year window.

    Returns
    -------
    bool
        True only if ISBNs do not differ, neither ISBN is isolated, the
        comparison titles are similar enough, the authors overlap, the
        bindings do not conflict and the years are close.
    """
    if record1.isbn and record2.isbn and record1.isbn != record2.isbn:
        return False

    isolated = config.tables.isolated_isbns
    if record1.isbn in isolated or record2.isbn in isolated:
        return False

    similarity = title_similarity(comparison_title(record1.title), comparison_title(record2.title))
    if similarity < config.consolidation_title_threshold:
        return False

    if not _authors_compatible(record1, record2):
        return False

    binding1 = normalize_binding(record1.raw_binding)
    binding2 = normalize_binding(record2.raw_binding)
    if binding1 != binding2 and UNKNOWN not in (binding1, binding2):
        return False

    year1 = extract_publication_year(record1, config.year, config.year_validity_ahead)
    year2 = extract_publication_year(record2, config.year, config.year_validity_ahead)
    if year1 and year2 and abs(year1 - year2) > config.consolidation_year_window:
        return False

    return True


def _can_join(duplicate_set: DuplicateSet, candidate: BookRecord, config: ReconcileConfig) -> bool:
    if duplicate_set.isbn and candidate.isbn:
        return duplicate_set.isbn == candidate.isbn
    return are_likely_same_item(duplicate_set.seed, candidate, config)


def group_duplicates(records: list[BookRecord], config: ReconcileConfig) -> list[DuplicateSet]:
    """Partition records into duplicate sets with a single seed pass.

    Each record not yet placed seeds a new set; every later unplaced record
    joins it when its ISBN equals the set ISBN, or, when at most one side
    carries an ISBN, when it passes the similarity test against the seed.
    A set never holds two distinct ISBNs.

    Parameters
    ----------
    records : list[BookRecord]
        Normalized records in input order.
    config : ReconcileConfig
        Reconciliation configuration.

    Returns
    -------
    list[DuplicateSet]
        Sets in seed order; every record appears in exactly one set.
    """
    placed = [False] * len(records)
    sets: list[DuplicateSet] = []

    for i, seed in enumerate(records):
        if placed[i]:
            continue
        placed[i] = True
        duplicate_set = DuplicateSet(members=[seed], isbn=seed.isbn)

        for j in range(i + 1, len(records)):
            if placed[j]:
                continue
            if _can_join(duplicate_set, records[j], config):
                duplicate_set.add(records[j])
                placed[j] = True

        sets.append(duplicate_set)

    return sets
