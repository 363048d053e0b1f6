"""Deterministic normalization of provider book records.

This module orchestrates the field normalizers. All functions are pure and
idempotent: normalizing an already normalized record returns an equal record.
"""

from dataclasses import replace

from bookrecon.config import CorrectionTables, ReconcileConfig
from bookrecon.models import BookRecord

from ._fields import normalize_binding, normalize_title, parse_authors


def _resolve_tables(corrections: CorrectionTables | ReconcileConfig | None) -> CorrectionTables:
    if corrections is None:
        return ReconcileConfig().tables
    if isinstance(corrections, ReconcileConfig):
        return corrections.tables
    return corrections


def normalize(
    record: BookRecord,
    corrections: CorrectionTables | ReconcileConfig | None = None,
) -> BookRecord:
    """Return a normalized copy of a record.

    ISBN binding corrections are applied first and replace both ``binding``
    and ``print_type``. Then authors are split into canonical names, the
    title is whitespace-collapsed and the binding is mapped onto the
    canonical vocabulary.

    Parameters
    ----------
    record : BookRecord
        Raw record.
    corrections : CorrectionTables | ReconcileConfig | None, optional
        Correction tables, or a config carrying them. If None, the bundled
        defaults are used.

    Returns
    -------
    BookRecord
        New normalized record; the input is not modified.
    """
    tables = _resolve_tables(corrections)

    binding = record.binding
    print_type = record.print_type
    if record.isbn and record.isbn in tables.binding_by_isbn:
        binding = print_type = tables.binding_by_isbn[record.isbn]

    return replace(
        record,
        title=normalize_title(record.title),
        authors=parse_authors(record.authors, tables),
        binding=normalize_binding(binding or print_type),
        print_type=print_type,
    )


def normalize_all(
    records: list[BookRecord],
    corrections: CorrectionTables | ReconcileConfig | None = None,
) -> list[BookRecord]:
    """Normalize every record, preserving order."""
    tables = _resolve_tables(corrections)
    return [normalize(r, tables) for r in records]
