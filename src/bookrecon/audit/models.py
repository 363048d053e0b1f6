"""Event vocabulary of the reconciliation audit trail."""

import json
from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

__all__ = ["DropReason", "EventType", "LogEvent", "Stage", "UnassignedReason"]


class Stage(StrEnum):
    """Pipeline stages, in execution order."""

    CLEAN = "clean"
    NORMALIZE = "normalize"
    CONSOLIDATE = "consolidate"
    CLUSTER = "cluster"
    ASSEMBLE = "assemble"
    RANK = "rank"


class EventType(StrEnum):
    """Events written by the engine."""

    RUN_STARTED = "run_started"
    RUN_FINISHED = "run_finished"
    STAGE_STARTED = "stage_started"
    STAGE_FINISHED = "stage_finished"
    RECORD_DROPPED = "record_dropped"
    DUPLICATES_MERGED = "duplicates_merged"
    CLUSTER_CREATED = "cluster_created"
    RECORD_UNASSIGNED = "record_unassigned"
    PIPELINE_ERROR = "pipeline_error"


class DropReason(StrEnum):
    """Reason codes for records removed before reconciliation."""

    TITLE_MISSING = "title_missing"
    NON_ENGLISH_LANGUAGE = "non_english_language"
    MALFORMED_TITLE = "malformed_title"
    YEAR_OUT_OF_RANGE = "year_out_of_range"
    NON_ENGLISH_TITLE = "non_english_title"


class UnassignedReason(StrEnum):
    """Reason codes for records no edition could claim."""

    NO_PUBLICATION_YEAR = "no_publication_year"
    BEFORE_FIRST_EDITION = "before_first_edition"


@dataclass(frozen=True)
class LogEvent:
    """One line of the audit trail.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp (UTC).
    run_id : str
        Reconciliation run the event belongs to.
    level : str
        "DEBUG", "INFO", "WARN" or "ERROR".
    event : str
        Event name, normally an :class:`EventType` value.
    data : dict[str, Any]
        Event payload.
    stage : str | None
        Stage active when the event was written.
    rid : str | None
        Record the event is about, if any.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any] = field(default_factory=dict)
    stage: str | None = None
    rid: str | None = None

    def to_json(self) -> str:
        """Serialize to one compact JSON line (no trailing newline)."""
        return json.dumps(asdict(self), ensure_ascii=False, separators=(",", ":"))
