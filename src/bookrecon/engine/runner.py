"""End-to-end edition reconciliation runner.

This module chains the reconciliation stages into a single deterministic,
auditable call.

Architecture Flow:
    Stage 1: Cleaning
    Stage 2: Normalization
    Stage 3: Duplicate Consolidation
    Stage 4: Work Clustering
    Stage 5: Edition Assembly
    Stage 6: Ranking

The runner performs no I/O of its own; the optional audit logger is the
only side channel.
"""

import time
import traceback
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from bookrecon.audit.logger import AuditLogger
from bookrecon.audit.models import Stage
from bookrecon.clustering import cluster
from bookrecon.config import ReconcileConfig, ReconcileResult
from bookrecon.editions import partition_editions, rank_groups
from bookrecon.merge import consolidate
from bookrecon.models import (
    BookRecord,
    ConsolidatedRecord,
    EditionGroup,
    WorkCluster,
    calculate_record_digest,
    calculate_rid,
)
from bookrecon.normalize import clean, normalize_all

T = TypeVar("T")


def _coerce_records(records: Iterable[BookRecord | dict[str, Any]]) -> list[BookRecord]:
    coerced = []
    for index, record in enumerate(records):
        if isinstance(record, BookRecord):
            coerced.append(record)
        else:
            default_rid = calculate_rid(calculate_record_digest(record), index)
            coerced.append(BookRecord.from_dict(record, default_rid=default_rid))
    return coerced


def _run_stage(
    name: Stage,
    func: Callable[[], T],
    logger: AuditLogger | None,
    expected_records: int,
    counters: Callable[[T], dict[str, int]],
) -> T:
    """Run one stage, bracketing it with stage events when logging."""
    if logger:
        logger.stage_started(name, expected_records=expected_records)

    start = time.perf_counter()
    result = func()

    if logger:
        logger.stage_finished(
            name,
            duration_seconds=time.perf_counter() - start,
            counters=counters(result),
        )
    return result


def _assemble_all(
    clusters: list[WorkCluster],
    config: ReconcileConfig,
    logger: AuditLogger | None,
) -> tuple[list[EditionGroup], list[ConsolidatedRecord]]:
    groups: list[EditionGroup] = []
    unassigned: list[ConsolidatedRecord] = []
    for work in clusters:
        work_groups, work_unassigned = partition_editions(work, config)
        groups.extend(work_groups)
        for record, reason in work_unassigned:
            unassigned.append(record)
            if logger:
                logger.record_unassigned(record.rid, reason, stage=Stage.ASSEMBLE)
    return groups, unassigned


def _run_stages(
    records: list[BookRecord],
    config: ReconcileConfig,
    logger: AuditLogger | None,
) -> ReconcileResult:
    counters: dict[str, int] = {"records_in": len(records)}

    cleaned = _run_stage(
        Stage.CLEAN,
        lambda: clean(records, config, logger),
        logger,
        len(records),
        lambda out: {"records_kept": len(out), "records_dropped": len(records) - len(out)},
    )
    counters["records_clean"] = len(cleaned)
    counters["records_dropped"] = len(records) - len(cleaned)

    normalized = _run_stage(
        Stage.NORMALIZE,
        lambda: normalize_all(cleaned, config),
        logger,
        len(cleaned),
        lambda out: {"records_normalized": len(out)},
    )

    consolidated = _run_stage(
        Stage.CONSOLIDATE,
        lambda: consolidate(normalized, config, logger),
        logger,
        len(normalized),
        lambda out: {"records_consolidated": len(out)},
    )
    counters["records_consolidated"] = len(consolidated)

    clusters = _run_stage(
        Stage.CLUSTER,
        lambda: cluster(consolidated, config, logger),
        logger,
        len(consolidated),
        lambda out: {"clusters": len(out)},
    )
    counters["clusters"] = len(clusters)

    groups, unassigned = _run_stage(
        Stage.ASSEMBLE,
        lambda: _assemble_all(clusters, config, logger),
        logger,
        len(consolidated),
        lambda out: {"groups": len(out[0]), "records_unassigned": len(out[1])},
    )
    counters["records_unassigned"] = len(unassigned)

    ranked = _run_stage(
        Stage.RANK,
        lambda: rank_groups(groups),
        logger,
        len(groups),
        lambda out: {"groups": len(out)},
    )
    counters["groups"] = len(ranked)

    return ReconcileResult(
        groups=ranked,
        clusters=clusters,
        unassigned=unassigned,
        counters=counters,
    )


def reconcile(
    records: Iterable[BookRecord | dict[str, Any]] | None,
    config: ReconcileConfig | None = None,
    logger: AuditLogger | None = None,
) -> ReconcileResult:
    """Reconcile raw book records of one work into edition groups.

    Parameters
    ----------
    records : Iterable[BookRecord | dict[str, Any]] | None
        Raw records in provider order. Dictionaries are converted with
        ``BookRecord.from_dict``; those without an id get a deterministic
        UUIDv5 derived from their content and position.
    config : ReconcileConfig | None, optional
        Reconciliation configuration. If None, uses defaults.
    logger : AuditLogger | None, optional
        Audit logger for tracking. If None, no logging.

    Returns
    -------
    ReconcileResult
        Ranked edition groups, work clusters, unassigned records and
        per-stage counters. Empty or None input yields an empty result.

    Examples
    --------
        >>> from bookrecon.engine import reconcile
        >>> result = reconcile([{"id": "a", "title": "Venture Deals", "year": 2011}])
        >>> [g.edition_number for g in result.groups]
        [1]
    """
    if config is None:
        config = ReconcileConfig()

    raw = _coerce_records(records or [])

    if logger:
        logger.run_started(records_in=len(raw), parameters=config.to_dict())

    start = time.perf_counter()
    try:
        result = _run_stages(raw, config, logger) if raw else ReconcileResult()
    except Exception as e:
        if logger:
            logger.pipeline_error(e, traceback.format_exc())
            logger.run_finished("failed", time.perf_counter() - start, groups=0)
        raise

    if logger:
        logger.run_finished("success", time.perf_counter() - start, groups=len(result.groups))

    return result


def group_by_edition(
    records: Iterable[BookRecord | dict[str, Any]] | None,
    config: ReconcileConfig | None = None,
) -> list[EditionGroup]:
    """Convenience entry point returning only the ranked edition groups."""
    return reconcile(records, config).groups
