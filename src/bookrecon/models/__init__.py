"""Shared data types for bookrecon.

This package contains the record and grouping dataclasses consumed across
the reconciliation pipeline, plus the storage shapes of its output.
"""

from bookrecon.models.identifiers import (
    BOOKRECON_NAMESPACE,
    calculate_record_digest,
    calculate_rid,
)
from bookrecon.models.records import (
    SCHEMA_VERSION,
    BookRecord,
    ConsolidatedRecord,
    DuplicateSet,
    EditionGroup,
    WorkCluster,
)
from bookrecon.models.storage import BindingRecord, EditionRecord

__all__ = [
    # Schema version
    "SCHEMA_VERSION",
    # Record models
    "BookRecord",
    "DuplicateSet",
    "ConsolidatedRecord",
    "WorkCluster",
    "EditionGroup",
    # Storage models
    "EditionRecord",
    "BindingRecord",
    # Identifiers
    "BOOKRECON_NAMESPACE",
    "calculate_record_digest",
    "calculate_rid",
]
