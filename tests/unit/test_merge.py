"""Tests for duplicate consolidation."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from bookrecon.audit import AuditLogger
from bookrecon.config import CorrectionTables, ReconcileConfig
from bookrecon.merge import (
    are_likely_same_item,
    compute_completeness_score,
    consolidate,
    earliest_date,
    group_duplicates,
    merge_authors,
    merge_duplicate_set,
    select_base_record,
)
from bookrecon.models import BookRecord, DuplicateSet

# ========== Similarity test ==========


@pytest.mark.unit
def test_same_item_passes(
    make_record: Callable[..., BookRecord],
    config: ReconcileConfig,
) -> None:
    """Test near-identical records are judged the same item."""
    r1 = make_record("a", "Venture Deals: Be Smarter", authors=["Brad Feld"], binding="hardcover")
    r2 = make_record("b", "Venture Deals", authors=["brad feld"], binding="unknown")

    assert are_likely_same_item(r1, r2, config)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("kwargs1", "kwargs2"),
    [
        ({"isbn": "111"}, {"isbn": "222"}),
        ({"binding": "hardcover"}, {"binding": "paperback"}),
        ({"authors": ["Brad Feld"]}, {"authors": ["Jason Mendelson"]}),
        ({"year": 2011}, {"year": 2019}),
        ({"title": "Venture Deals"}, {"title": "Startup Life"}),
        ({"isbn": "9788126572069"}, {}),
    ],
)
def test_same_item_rejections(
    make_record: Callable[..., BookRecord],
    config: ReconcileConfig,
    kwargs1: dict,
    kwargs2: dict,
) -> None:
    """Test each rule that keeps two records apart."""
    r1 = make_record("a", **kwargs1)
    r2 = make_record("b", **kwargs2)

    assert not are_likely_same_item(r1, r2, config)


@pytest.mark.unit
def test_author_subset_is_compatible(
    make_record: Callable[..., BookRecord],
    config: ReconcileConfig,
) -> None:
    """Test an empty author list is a subset of any other."""
    r1 = make_record("a", authors=[])
    r2 = make_record("b", authors=["Brad Feld"])

    assert are_likely_same_item(r1, r2, config)


# ========== Grouping ==========


@pytest.mark.unit
def test_group_same_isbn_regardless_of_binding(
    make_record: Callable[..., BookRecord],
    config: ReconcileConfig,
) -> None:
    """Test records sharing an ISBN always join."""
    records = [
        make_record("1", isbn="9780470929827", binding="hardcover"),
        make_record("2", isbn="9780470929827", binding="audiobook"),
    ]

    sets = group_duplicates(records, config)

    assert len(sets) == 1
    assert sets[0].isbn == "9780470929827"


@pytest.mark.unit
def test_group_never_mixes_isbns(
    make_record: Callable[..., BookRecord],
    config: ReconcileConfig,
) -> None:
    """Test an ISBN-less seed adopts one ISBN and rejects a second."""
    records = [
        make_record("seed"),
        make_record("x", isbn="111"),
        make_record("y", isbn="222"),
        make_record("z"),
    ]

    sets = group_duplicates(records, config)

    isbns_per_set = [{m.isbn for m in s.members if m.isbn} for s in sets]
    assert all(len(isbns) <= 1 for isbns in isbns_per_set)
    assert [m.rid for m in sets[0].members] == ["seed", "x", "z"]
    assert [m.rid for m in sets[1].members] == ["y"]


@pytest.mark.unit
def test_group_isbn_less_candidate_needs_similarity(
    make_record: Callable[..., BookRecord],
    config: ReconcileConfig,
) -> None:
    """Test an ISBN set absorbs ISBN-less records only when similar."""
    records = [
        make_record("1", isbn="111", binding="hardcover"),
        make_record("2", binding="hardcover"),
        make_record("3", binding="paperback"),
    ]

    sets = group_duplicates(records, config)

    assert [[m.rid for m in s.members] for s in sets] == [["1", "2"], ["3"]]


@pytest.mark.unit
def test_group_partitions_input(
    make_record: Callable[..., BookRecord],
    config: ReconcileConfig,
) -> None:
    """Test every record lands in exactly one set."""
    records = [make_record(str(i), isbn=str(i % 3) if i % 2 else None) for i in range(10)]

    sets = group_duplicates(records, config)

    rids = [m.rid for s in sets for m in s.members]
    assert sorted(rids) == sorted(r.rid for r in records)


# ========== Field merge ==========


@pytest.mark.unit
def test_completeness_score(make_record: Callable[..., BookRecord]) -> None:
    """Test completeness weights."""
    record = make_record(
        subtitle="s",
        authors=["A One", "B Two"],
        description="d",
        publisher="p",
        published_date="2011",
        page_count=100,
    )

    assert compute_completeness_score(record) == 2 + 1 + 2 + 2 + 1 + 1 + 1
    assert compute_completeness_score(make_record()) == 2


@pytest.mark.unit
def test_select_base_record_ties_keep_first(make_record: Callable[..., BookRecord]) -> None:
    """Test the earliest member wins ties."""
    records = [make_record("a"), make_record("b"), make_record("c", publisher="Wiley")]

    assert select_base_record(records).rid == "c"
    assert select_base_record(records[:2]).rid == "a"

    with pytest.raises(ValueError):
        select_base_record([])


@pytest.mark.unit
def test_merge_authors_primary_first(make_record: Callable[..., BookRecord]) -> None:
    """Test authors are unioned, sorted, with primary authors first."""
    records = [
        make_record("a", authors=["Jason Mendelson", "Brad Feld"]),
        make_record("b", authors=["Amy Batchelor", "Brad Feld Jr."]),
    ]

    assert merge_authors(records, ("brad feld",)) == [
        "Brad Feld",
        "Amy Batchelor",
        "Jason Mendelson",
    ]
    assert merge_authors(records) == ["Amy Batchelor", "Brad Feld", "Jason Mendelson"]


@pytest.mark.unit
def test_merge_authors_ignores_case(make_record: Callable[..., BookRecord]) -> None:
    """Test names differing only in case collapse to the first spelling."""
    records = [
        make_record("a", authors=["Brad Feld"]),
        make_record("b", authors=["brad feld", "JASON MENDELSON"]),
        make_record("c", authors=["Jason Mendelson"]),
    ]

    assert merge_authors(records) == ["Brad Feld", "JASON MENDELSON"]


@pytest.mark.unit
def test_earliest_date(make_record: Callable[..., BookRecord]) -> None:
    """Test lexicographic minimum of ISO dates."""
    records = [
        make_record("a", published_date="2012-07-01"),
        make_record("b"),
        make_record("c", published_date="2011-06-15"),
    ]

    assert earliest_date(records) == "2011-06-15"
    assert earliest_date([make_record()]) is None


@pytest.mark.unit
def test_merge_duplicate_set(make_record: Callable[..., BookRecord]) -> None:
    """Test field-level merge rules."""
    base = make_record(
        "base",
        "Venture Deals",
        authors=["Brad Feld"],
        publisher="Wiley",
        description="short",
        page_count=240,
        published_date="2012-01-01",
    )
    other = make_record(
        "other",
        "Venture Deals: Be Smarter Than Your Lawyer",
        authors=["Jason Mendelson"],
        subtitle="Be Smarter",
        description="a much longer description",
        published_date="2011-08-02",
    )
    duplicate_set = DuplicateSet(members=[other, base])

    merged = merge_duplicate_set(duplicate_set, ("brad feld",))

    assert merged.rid == "base"
    assert merged.record.title == "Venture Deals: Be Smarter Than Your Lawyer"
    assert merged.record.subtitle == "Be Smarter"
    assert merged.record.description == "a much longer description"
    assert merged.record.authors == ["Brad Feld", "Jason Mendelson"]
    assert merged.record.published_date == "2011-08-02"
    assert merged.record.publisher == "Wiley"
    assert merged.member_rids == ["other", "base"]


@pytest.mark.unit
def test_single_member_passes_through(make_record: Callable[..., BookRecord]) -> None:
    """Test a singleton set is returned unchanged."""
    record = make_record(authors=["Zed Alpha", "Brad Feld"])

    merged = merge_duplicate_set(DuplicateSet(members=[record]), ("brad feld",))

    assert merged.record is record


# ========== consolidate ==========


@pytest.mark.unit
def test_consolidate_empty() -> None:
    """Test empty input."""
    assert consolidate([]) == []


@pytest.mark.unit
def test_consolidate_logs_merges(
    make_record: Callable[..., BookRecord],
    tmp_path: Path,
) -> None:
    """Test multi-member sets are reported to the audit log."""
    config = ReconcileConfig(corrections=CorrectionTables(), current_year=2025)
    records = [make_record("1", isbn="111"), make_record("2", isbn="111"), make_record("3", "X")]

    with AuditLogger("run", tmp_path / "events.jsonl") as logger:
        result = consolidate(records, config, logger)

    assert [c.member_rids for c in result] == [["1", "2"], ["3"]]
    events = [json.loads(line) for line in (tmp_path / "events.jsonl").read_text().splitlines()]
    assert [e["event"] for e in events] == ["duplicates_merged"]
    assert events[0]["data"]["member_rids"] == ["1", "2"]
