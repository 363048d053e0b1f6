"""Audit logging subsystem for bookrecon.

Main Components
---------------
- AuditLogger: JSONL event logger
- DropReason: reason codes for records removed by the cleaner
- UnassignedReason: reason codes for records left outside every edition
"""

from bookrecon.audit.helpers import generate_run_id, get_package_version
from bookrecon.audit.logger import AuditLogger
from bookrecon.audit.models import DropReason, EventType, LogEvent, Stage, UnassignedReason
from bookrecon.utils import get_iso_timestamp

__all__ = [
    "AuditLogger",
    "DropReason",
    "EventType",
    "LogEvent",
    "Stage",
    "UnassignedReason",
    "generate_run_id",
    "get_iso_timestamp",
    "get_package_version",
]
