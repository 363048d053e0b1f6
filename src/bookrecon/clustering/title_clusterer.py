"""Group consolidated records into works by title similarity.

Clustering is a single greedy pass: each record joins the first existing
cluster (in creation order) that accepts it, otherwise it starts a new one.
Membership is never revisited, so the result depends on input order.
"""

from bookrecon.audit.logger import AuditLogger
from bookrecon.config import ReconcileConfig
from bookrecon.models import ConsolidatedRecord, WorkCluster
from bookrecon.normalize._fields import main_title_words, work_title
from bookrecon.scoring import (
    are_core_titles_related,
    are_publishers_consistent,
    has_problematic_title_pattern,
    title_similarity,
)


def _main_titles_disjoint(record: ConsolidatedRecord, cluster: WorkCluster) -> bool:
    words1 = main_title_words(record.record.title)
    words2 = main_title_words(cluster.representative.record.title)
    return bool(words1) and bool(words2) and not (words1 & words2)


def should_join(
    record: ConsolidatedRecord,
    cluster: WorkCluster,
    config: ReconcileConfig,
) -> bool:
    """Decide whether a record belongs to an existing work cluster.

    Parameters
    ----------
    record : ConsolidatedRecord
        Candidate record.
    cluster : WorkCluster
        Existing cluster; compared through its key and representative.
    config : ReconcileConfig
        Supplies the similarity thresholds.

    Returns
    -------
    bool
        True when any grouping rule accepts the pair.
    """
    if config.main_title_veto and _main_titles_disjoint(record, cluster):
        return False

    title = work_title(record.record.title)
    key = cluster.key

    similarity = title_similarity(title, key)
    if similarity > config.cluster_high_similarity:
        return True

    is_subset = title in key or key in title
    if is_subset and similarity > config.cluster_subset_similarity:
        return True

    same_core = are_core_titles_related(title, key, config.core_overlap_ratio)
    publisher_consistent = any(
        are_publishers_consistent(record.record.publisher, member.record.publisher)
        for member in cluster.records
    )

    if (
        same_core
        and publisher_consistent
        and similarity > config.cluster_core_publisher_similarity
    ):
        return True
    if similarity > config.cluster_publisher_similarity and publisher_consistent:
        return True
    if same_core and similarity > config.cluster_core_similarity:
        return True

    return has_problematic_title_pattern(record.record.title, cluster.representative.record.title)


def cluster(
    records: list[ConsolidatedRecord],
    config: ReconcileConfig | None = None,
    logger: AuditLogger | None = None,
) -> list[WorkCluster]:
    """Partition consolidated records into work clusters.

    Parameters
    ----------
    records : list[ConsolidatedRecord]
        Consolidated records in order.
    config : ReconcileConfig | None, optional
        Configuration. If None, uses defaults.
    logger : AuditLogger | None, optional
        Receives one ``cluster_created`` event per new cluster.

    Returns
    -------
    list[WorkCluster]
        Disjoint clusters in creation order covering every record.
    """
    if not records:
        return []

    if config is None:
        config = ReconcileConfig()

    clusters: list[WorkCluster] = []
    for record in records:
        target = next((c for c in clusters if should_join(record, c, config)), None)
        if target is not None:
            target.records.append(record)
            continue

        new_cluster = WorkCluster(key=work_title(record.record.title), records=[record])
        clusters.append(new_cluster)
        if logger:
            logger.cluster_created(record.rid, new_cluster.key)

    return clusters
