"""Reconciliation orchestration engine.

This package provides the main entry point for running the complete
reconciliation pipeline, plus re-exports of its configuration and result
types.
"""

from bookrecon.config import ConfigError, CorrectionTables, ReconcileConfig, ReconcileResult
from bookrecon.engine.runner import group_by_edition, reconcile

__all__ = [
    "ConfigError",
    "CorrectionTables",
    "ReconcileConfig",
    "ReconcileResult",
    "group_by_edition",
    "reconcile",
]
