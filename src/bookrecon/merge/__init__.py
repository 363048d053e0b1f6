"""Duplicate consolidation.

Records describing the same physical item (same ISBN, or indistinguishable
title, authors, binding and year) are grouped and reduced to one
authoritative record each.
"""

from bookrecon.audit.logger import AuditLogger
from bookrecon.config import ReconcileConfig
from bookrecon.merge.field_merge import earliest_date, merge_authors, merge_duplicate_set
from bookrecon.merge.grouping import are_likely_same_item, group_duplicates
from bookrecon.merge.survivor import compute_completeness_score, select_base_record
from bookrecon.models import BookRecord, ConsolidatedRecord


def consolidate(
    records: list[BookRecord],
    config: ReconcileConfig | None = None,
    logger: AuditLogger | None = None,
) -> list[ConsolidatedRecord]:
    """Group duplicates and merge each group.

    Parameters
    ----------
    records : list[BookRecord]
        Normalized records in input order.
    config : ReconcileConfig | None, optional
        Configuration. If None, uses defaults.
    logger : AuditLogger | None, optional
        Receives one ``duplicates_merged`` event per multi-member set.

    Returns
    -------
    list[ConsolidatedRecord]
        One record per duplicate set, in seed order.
    """
    if not records:
        return []

    if config is None:
        config = ReconcileConfig()

    consolidated: list[ConsolidatedRecord] = []
    for duplicate_set in group_duplicates(records, config):
        merged = merge_duplicate_set(duplicate_set, config.tables.primary_authors)
        if logger and len(duplicate_set.members) > 1:
            logger.duplicates_merged(merged.rid, merged.member_rids, duplicate_set.isbn)
        consolidated.append(merged)

    return consolidated


__all__ = [
    "are_likely_same_item",
    "compute_completeness_score",
    "consolidate",
    "earliest_date",
    "group_duplicates",
    "merge_authors",
    "merge_duplicate_set",
    "select_base_record",
]
