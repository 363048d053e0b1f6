"""Edition reconciliation for noisy multi-provider book metadata.

This package provides:
- Data models (bookrecon.models): record, cluster and edition types
- Normalization (bookrecon.normalize): cleaning and field normalization
- Scoring (bookrecon.scoring): title and publisher similarity
- Merge (bookrecon.merge): duplicate consolidation
- Clustering (bookrecon.clustering): work clustering by title
- Editions (bookrecon.editions): edition assembly, metadata and ranking
- Engine (bookrecon.engine): pipeline orchestration
- Audit (bookrecon.audit): JSONL audit logging
- CLI (bookrecon.cli): command-line interface
- Public API (bookrecon.api): file loading and writing
"""

__version__ = "0.1.0"
__license__ = "MIT"

from bookrecon.api import RecordValidationError, load_records, write_editions
from bookrecon.config import ConfigError, CorrectionTables, ReconcileConfig, ReconcileResult
from bookrecon.editions import (
    best_metadata,
    convert_to_book_editions,
    edition_display_name,
    rank_groups,
)
from bookrecon.engine import group_by_edition, reconcile
from bookrecon.models import BookRecord, EditionGroup
from bookrecon.normalize import normalize
from bookrecon.normalize._fields import normalize_binding

__all__ = [
    "__version__",
    "__license__",
    "BookRecord",
    "ConfigError",
    "CorrectionTables",
    "EditionGroup",
    "ReconcileConfig",
    "ReconcileResult",
    "RecordValidationError",
    "best_metadata",
    "convert_to_book_editions",
    "edition_display_name",
    "group_by_edition",
    "load_records",
    "normalize",
    "normalize_binding",
    "rank_groups",
    "reconcile",
    "write_editions",
]
