"""Audit trail of a reconciliation run.

The engine performs no I/O of its own. Callers that want to know why a
record was dropped, merged or left without an edition pass an
:class:`AuditLogger` into :func:`bookrecon.engine.reconcile`; every decision
point then appends one JSON line to the trail.
"""

from pathlib import Path
from typing import Any

from bookrecon.audit.models import EventType, LogEvent, UnassignedReason
from bookrecon.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """Append-only JSONL sink for reconciliation events.

    Each event is flushed as soon as it is written, so a trail survives a
    crash in a later stage.

    Attributes
    ----------
    run_id : str
        Identifier stamped on every event.
    log_path : Path
        Trail file; parent directories are created and existing content is
        kept.
    active_stage : str | None
        Stage stamped on events that do not name one.
    """

    def __init__(self, run_id: str, log_path: Path | str) -> None:
        self.run_id = run_id
        self.log_path = Path(log_path)
        self.active_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._sink = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the trail; later calls are no-ops."""
        if not self._sink.closed:
            self._sink.close()

    def event(
        self,
        name: str,
        data: dict[str, Any] | None = None,
        *,
        level: str = "INFO",
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Append one event.

        Parameters
        ----------
        name : str
            Event name, normally an :class:`EventType`.
        data : dict[str, Any] | None, optional
            Payload; must be JSON-serializable.
        level : str, optional
            "DEBUG", "INFO", "WARN" or "ERROR".
        stage : str | None, optional
            Stage to stamp; defaults to :attr:`active_stage`.
        rid : str | None, optional
            Record the event concerns.
        """
        entry = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=str(name),
            data=data or {},
            stage=str(stage) if stage is not None else self.active_stage,
            rid=rid,
        )
        self._sink.write(entry.to_json() + "\n")
        self._sink.flush()

    # Run lifecycle

    def run_started(self, records_in: int, parameters: dict[str, Any]) -> None:
        """Record the input size and the effective configuration."""
        self.event(
            EventType.RUN_STARTED,
            {"records_in": records_in, "parameters": parameters},
        )

    def run_finished(self, status: str, duration_seconds: float, groups: int) -> None:
        """Close the run with its status ("success" or "failed")."""
        self.active_stage = None
        self.event(
            EventType.RUN_FINISHED,
            {"status": status, "duration_seconds": duration_seconds, "groups": groups},
        )

    def pipeline_error(self, error: BaseException, traceback_text: str) -> None:
        """Record the exception that aborted the active stage."""
        self.event(
            EventType.PIPELINE_ERROR,
            {"error": f"{type(error).__name__}: {error}", "traceback": traceback_text},
            level="ERROR",
        )

    def stage_started(self, stage: str, expected_records: int | None = None) -> None:
        """Enter ``stage``; later events are stamped with it."""
        self.active_stage = str(stage)
        data = {} if expected_records is None else {"expected_records": expected_records}
        self.event(EventType.STAGE_STARTED, data)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Record a stage's duration and output counters."""
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters
        self.event(EventType.STAGE_FINISHED, data, stage=stage)

    # Record decisions

    def record_dropped(self, rid: str, reason_code: str, stage: str | None = None) -> None:
        """A record was removed by the cleaner."""
        self.event(
            EventType.RECORD_DROPPED,
            {"reason_code": str(reason_code)},
            level="WARN",
            stage=stage,
            rid=rid,
        )

    def duplicates_merged(self, rid: str, member_rids: list[str], isbn: str | None) -> None:
        """Several records were reduced to the consolidated record ``rid``."""
        self.event(EventType.DUPLICATES_MERGED, {"member_rids": member_rids, "isbn": isbn}, rid=rid)

    def cluster_created(self, rid: str, key: str) -> None:
        """Record ``rid`` started a new work cluster keyed by ``key``."""
        self.event(EventType.CLUSTER_CREATED, {"key": key}, rid=rid)

    def record_unassigned(
        self,
        rid: str,
        reason_code: str = UnassignedReason.NO_PUBLICATION_YEAR,
        stage: str | None = None,
    ) -> None:
        """No edition could claim the record."""
        self.event(
            EventType.RECORD_UNASSIGNED,
            {"reason_code": str(reason_code)},
            level="WARN",
            stage=stage,
            rid=rid,
        )
