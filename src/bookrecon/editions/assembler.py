"""Split a work cluster into edition groups.

Records stating an edition number seed buckets; a first edition is
synthesized from the earliest unnumbered records when none is stated;
audiobooks attach to the bucket closest in year; everything else is placed
on a timeline built from each bucket's authoritative record.
"""

from dataclasses import dataclass

from bookrecon.audit.models import UnassignedReason
from bookrecon.config import ReconcileConfig
from bookrecon.editions.parsing import detect_edition_type, parse_explicit_edition
from bookrecon.models import ConsolidatedRecord, EditionGroup, WorkCluster
from bookrecon.normalize._fields import is_audiobook_format, normalize_binding
from bookrecon.normalize._helpers import extract_publication_year

# Lower index wins when choosing a bucket's authoritative record
BINDING_PRIORITY = ("hardcover", "paperback", "ebook", "kindle", "audiobook", "unknown")


@dataclass(frozen=True)
class _Entry:
    record: ConsolidatedRecord
    edition_number: int | None
    binding: str
    year: int | None


@dataclass(frozen=True)
class TimelineEntry:
    """Start of one edition's date interval."""

    edition: int
    year: int
    binding: str


def _binding_rank(binding: str) -> int:
    if binding in BINDING_PRIORITY:
        return BINDING_PRIORITY.index(binding)
    return len(BINDING_PRIORITY)


def _authoritative(entries: list[_Entry]) -> _Entry:
    """Best-bound entry; ties prefer the earliest year, yearless first."""
    return min(entries, key=lambda e: (_binding_rank(e.binding), e.year or 0))


def build_timeline(buckets: dict[int, list[_Entry]]) -> list[TimelineEntry]:
    """Chronological edition starts from each bucket's authoritative record."""
    timeline = []
    for number, entries in buckets.items():
        best = _authoritative(entries)
        if best.year:
            timeline.append(TimelineEntry(edition=number, year=best.year, binding=best.binding))
    return sorted(timeline, key=lambda t: t.year)


def _edition_for_year(year: int, timeline: list[TimelineEntry]) -> int | None:
    for i, start in enumerate(timeline):
        following = timeline[i + 1] if i + 1 < len(timeline) else None
        if year >= start.year and (following is None or year < following.year):
            return start.edition
    return None


def _synthesize_first_edition(
    buckets: dict[int, list[_Entry]],
    unbucketed: list[_Entry],
    window: int,
) -> list[_Entry]:
    """Move the earliest unnumbered records into edition 1; return the rest."""
    years = [e.year for e in unbucketed if e.year]
    if years:
        earliest = min(years)
        first = [e for e in unbucketed if not e.year or abs(e.year - earliest) <= window]
    else:
        first = list(unbucketed)

    buckets[1] = first
    taken = {id(e) for e in first}
    return [e for e in unbucketed if id(e) not in taken]


def _attach_audiobooks(
    buckets: dict[int, list[_Entry]],
    unbucketed: list[_Entry],
    window: int,
) -> list[_Entry]:
    """Place dated audiobooks in the bucket nearest in year; return the rest."""
    others = [e for e in unbucketed if not is_audiobook_format(e.record.record.raw_binding)]
    audiobooks = [e for e in unbucketed if is_audiobook_format(e.record.record.raw_binding)]

    for entry in audiobooks:
        target: int | None = None
        if entry.year:
            closest = window + 1
            for number, entries in buckets.items():
                anchor = entries[0].year if entries else None
                if not anchor:
                    continue
                gap = abs(entry.year - anchor)
                if gap <= window and gap < closest:
                    target, closest = number, gap

        if target is None:
            others.append(entry)
        else:
            buckets[target].append(entry)

    return others


def partition_editions(
    work: WorkCluster,
    config: ReconcileConfig | None = None,
) -> tuple[list[EditionGroup], list[tuple[ConsolidatedRecord, UnassignedReason]]]:
    """Split a work cluster into edition groups.

    Parameters
    ----------
    work : WorkCluster
        Records of one work.
    config : ReconcileConfig | None, optional
        Configuration. If None, uses defaults.

    Returns
    -------
    tuple[list[EditionGroup], list[tuple[ConsolidatedRecord, UnassignedReason]]]
        Edition groups in bucket creation order, and the records no edition
        could claim paired with the reason: no year, or a year before the
        first edition.
    """
    if config is None:
        config = ReconcileConfig()

    entries = [
        _Entry(
            record=record,
            edition_number=parse_explicit_edition(
                record.record, config.tables, config.max_edition_number
            ),
            binding=normalize_binding(record.record.raw_binding),
            year=extract_publication_year(
                record.record, config.year, config.year_validity_ahead
            ),
        )
        for record in work.records
    ]

    buckets: dict[int, list[_Entry]] = {}
    unbucketed: list[_Entry] = []
    for entry in entries:
        if entry.edition_number is None:
            unbucketed.append(entry)
        else:
            buckets.setdefault(entry.edition_number, []).append(entry)

    if 1 not in buckets and unbucketed:
        unbucketed = _synthesize_first_edition(
            buckets, unbucketed, config.edition_one_year_window
        )

    remaining = _attach_audiobooks(buckets, unbucketed, config.audiobook_year_window)

    timeline = build_timeline(buckets)
    unassigned: list[tuple[ConsolidatedRecord, UnassignedReason]] = []
    for entry in remaining:
        if not entry.year:
            unassigned.append((entry.record, UnassignedReason.NO_PUBLICATION_YEAR))
            continue
        edition = _edition_for_year(entry.year, timeline)
        if edition is None:
            unassigned.append((entry.record, UnassignedReason.BEFORE_FIRST_EDITION))
        else:
            buckets[edition].append(entry)

    groups = []
    for number, bucket in buckets.items():
        best = _authoritative(bucket)
        groups.append(
            EditionGroup(
                edition_number=number,
                edition_type=detect_edition_type(best.record.record, number),
                publication_year=best.year,
                records=[e.record for e in bucket],
            )
        )

    return groups, unassigned


def assemble(work: WorkCluster, config: ReconcileConfig | None = None) -> list[EditionGroup]:
    """Edition groups of a work cluster (unassigned records are dropped)."""
    groups, _ = partition_editions(work, config)
    return groups
