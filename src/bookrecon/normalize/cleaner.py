"""Record cleaning: drop records that cannot be reconciled reliably.

Cleaning is a pure filter. Records are never modified; each dropped record
is reported to the audit logger (when given) with a reason code.
"""

from bookrecon.audit.logger import AuditLogger
from bookrecon.audit.models import DropReason, Stage
from bookrecon.config import ReconcileConfig
from bookrecon.models import BookRecord

from ._helpers import extract_publication_year

MALFORMED_TITLE_MARKERS = ("--by", "[")


def drop_reason(record: BookRecord, config: ReconcileConfig) -> DropReason | None:
    """Return why a record should be dropped, or None to keep it.

    Checks run in order: blank title, non-English language code, malformed
    title shape, publication year outside the accepted range, then
    non-English title fragments.

    Parameters
    ----------
    record : BookRecord
        Raw record.
    config : ReconcileConfig
        Supplies the accepted languages, year range and title denylist.

    Returns
    -------
    DropReason | None
        First failing check.
    """
    title = record.title or ""
    if not title.strip():
        return DropReason.TITLE_MISSING

    if record.language and record.language.lower() not in config.english_languages:
        return DropReason.NON_ENGLISH_LANGUAGE

    if any(marker in title for marker in MALFORMED_TITLE_MARKERS):
        return DropReason.MALFORMED_TITLE

    year = extract_publication_year(record, config.year, config.year_validity_ahead)
    if year is not None and not (
        config.min_publication_year <= year <= config.year + config.max_years_ahead
    ):
        return DropReason.YEAR_OUT_OF_RANGE

    lowered = title.lower()
    if any(fragment in lowered for fragment in config.non_english_title_fragments):
        return DropReason.NON_ENGLISH_TITLE

    return None


def clean(
    records: list[BookRecord] | None,
    config: ReconcileConfig | None = None,
    logger: AuditLogger | None = None,
) -> list[BookRecord]:
    """Filter out records unsuitable for reconciliation.

    Parameters
    ----------
    records : list[BookRecord] | None
        Raw records in input order.
    config : ReconcileConfig | None, optional
        Configuration. If None, uses defaults.
    logger : AuditLogger | None, optional
        Receives one ``record_dropped`` event per removed record.

    Returns
    -------
    list[BookRecord]
        Surviving records, input order preserved.
    """
    if not records:
        return []

    if config is None:
        config = ReconcileConfig()

    kept: list[BookRecord] = []
    for record in records:
        reason = drop_reason(record, config)
        if reason is None:
            kept.append(record)
        elif logger:
            logger.record_dropped(record.rid, reason, stage=Stage.CLEAN)

    return kept
