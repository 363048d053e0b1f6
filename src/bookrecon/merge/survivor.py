"""Base record selection for duplicate consolidation."""

from bookrecon.models import BookRecord


def compute_completeness_score(record: BookRecord) -> int:
    """Compute metadata completeness score.

    +2 title, +1 subtitle, +1 per author, +2 description, +1 publisher,
    +1 publication date, +1 page count.

    Parameters
    ----------
    record : BookRecord
        Record to score.

    Returns
    -------
    int
        Completeness score.
    """
    score = 0
    if record.title:
        score += 2
    if record.subtitle:
        score += 1
    score += len(record.authors)
    if record.description:
        score += 2
    if record.publisher:
        score += 1
    if record.published_date:
        score += 1
    if record.page_count:
        score += 1
    return score


def select_base_record(records: list[BookRecord]) -> BookRecord:
    """Select the most complete record; ties keep the earliest one.

    Raises
    ------
    ValueError
        If records list is empty.
    """
    if not records:
        raise ValueError("Cannot select base record from empty records list")

    best = records[0]
    best_score = compute_completeness_score(best)
    for record in records[1:]:
        score = compute_completeness_score(record)
        if score > best_score:
            best, best_score = record, score
    return best
