"""Book record data models for bookrecon.

This module defines the internal schema for provider book records and the
intermediate entities produced by each reconciliation stage. All stages
consume and produce these types; none of them persist across calls.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any

# Schema version constant
SCHEMA_VERSION = "1.0.0"

# Free-text provider fields; numbers and other scalars are stringified
_TEXT_FIELDS = (
    "binding",
    "print_type",
    "subtitle",
    "publisher",
    "language",
    "date_published",
    "published_date",
    "description",
    "content_version",
)


@dataclass(frozen=True)
class BookRecord:
    """A single book record as reported by a metadata provider.

    Raw and normalized records share this shape; normalization returns a
    new instance rather than mutating the input.

    Attributes
    ----------
    rid : str
        Opaque record identifier, unique within one call.
    title : str
        Title as reported (whitespace-collapsed once normalized).
    authors : list[str]
        Author strings (split into individual names once normalized).
    isbn : str | None
        ISBN-10/13 if known.
    binding : str | None
        Binding string (canonical vocabulary once normalized).
    print_type : str | None
        Alternate binding/print-type field used when binding is absent.
    subtitle : str | None
        Subtitle.
    publisher : str | None
        Publisher name.
    language : str | None
        Language code (e.g. 'en').
    year : int | None
        Publication year field.
    date_published : str | None
        Publication date (ISO-like, year first).
    published_date : str | None
        Alternate publication date field.
    description : str | None
        Synopsis / description.
    page_count : int | None
        Page count.
    edition : str | None
        Provider edition field (e.g. '2', '2nd').
    content_version : str | None
        Provider content version (e.g. 'unabridged').
    image : str | None
        Cover image reference.
    """

    rid: str
    title: str
    authors: list[str] = field(default_factory=list)
    isbn: str | None = None
    binding: str | None = None
    print_type: str | None = None
    subtitle: str | None = None
    publisher: str | None = None
    language: str | None = None
    year: int | None = None
    date_published: str | None = None
    published_date: str | None = None
    description: str | None = None
    page_count: int | None = None
    edition: str | None = None
    content_version: str | None = None
    image: str | None = None

    @property
    def raw_binding(self) -> str | None:
        """Binding string with print_type fallback."""
        return self.binding or self.print_type

    def to_dict(self) -> dict[str, Any]:
        """Convert record to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_rid: str = "") -> "BookRecord":
        """Build a record from a provider dictionary.

        Unknown keys are ignored. ``id`` is accepted as an alias for ``rid``,
        ``pages`` for ``page_count`` and ``thumbnail`` for ``image``. Text
        fields sent as numbers (a bare year in ``published_date``, a numeric
        title) are converted to strings.

        Parameters
        ----------
        data : dict[str, Any]
            Provider record.
        default_rid : str, optional
            Identifier used when the record carries none.

        Returns
        -------
        BookRecord
            Reconstructed record.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}

        kwargs["rid"] = str(data.get("rid") or data.get("id") or default_rid)
        for name in _TEXT_FIELDS:
            if name in kwargs:
                kwargs[name] = _coerce_text(kwargs[name])
        kwargs["title"] = _coerce_text(data.get("title")) or ""
        kwargs["authors"] = _coerce_authors(data.get("authors"))
        kwargs["isbn"] = _blank_to_none(data.get("isbn") or data.get("isbn13"))
        kwargs["page_count"] = _coerce_int(data.get("page_count") or data.get("pages"))
        kwargs["year"] = _coerce_int(data.get("year"))
        kwargs["image"] = _coerce_text(data.get("image") or data.get("thumbnail"))
        kwargs["edition"] = _coerce_text(kwargs.get("edition"))

        return cls(**kwargs)


def _coerce_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def _blank_to_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _coerce_authors(value: Any) -> list[str]:
    if not value:
        return []
    if not isinstance(value, list | tuple):
        return [str(value)]
    return [str(v) for v in value if v]


@dataclass
class DuplicateSet:
    """Records judged to be the same physical item.

    Attributes
    ----------
    members : list[BookRecord]
        Members in the order they were absorbed; the first is the seed.
    isbn : str | None
        The single ISBN carried by the set, if any member has one.
    """

    members: list[BookRecord]
    isbn: str | None = None

    @property
    def seed(self) -> BookRecord:
        """The record that started this set."""
        return self.members[0]

    def add(self, record: BookRecord) -> None:
        """Absorb a record, adopting its ISBN if the set has none."""
        self.members.append(record)
        if self.isbn is None and record.isbn:
            self.isbn = record.isbn


@dataclass(frozen=True)
class ConsolidatedRecord:
    """One authoritative record synthesized from a DuplicateSet.

    Attributes
    ----------
    record : BookRecord
        Merged record.
    members : list[BookRecord]
        Normalized records the merge was built from.
    """

    record: BookRecord
    members: list[BookRecord]

    @property
    def rid(self) -> str:
        """Identifier of the merged record."""
        return self.record.rid

    @property
    def member_rids(self) -> list[str]:
        """Identifiers of every underlying normalized record."""
        return [m.rid for m in self.members]


@dataclass
class WorkCluster:
    """Records believed to represent the same literary work.

    Attributes
    ----------
    key : str
        Normalized title of the representative (first-inserted) record.
    records : list[ConsolidatedRecord]
        Members in insertion order.
    """

    key: str
    records: list[ConsolidatedRecord]

    @property
    def representative(self) -> ConsolidatedRecord:
        """First-inserted member."""
        return self.records[0]


@dataclass
class EditionGroup:
    """One edition of a work with all of its bindings.

    Attributes
    ----------
    edition_number : int
        Positive edition number.
    edition_type : str | None
        Label such as 'Second Edition' or 'Revised Edition'.
    publication_year : int | None
        Year of the authoritative record.
    records : list[ConsolidatedRecord]
        Member records, one per binding or distinct item.
    """

    edition_number: int
    edition_type: str | None = None
    publication_year: int | None = None
    records: list[ConsolidatedRecord] = field(default_factory=list)

    @property
    def books(self) -> list[BookRecord]:
        """Merged records of every member."""
        return [c.record for c in self.records]

    def to_dict(self) -> dict[str, Any]:
        """Convert group to a JSON-friendly dictionary."""
        return {
            "edition_number": self.edition_number,
            "edition_type": self.edition_type,
            "publication_year": self.publication_year,
            "records": [
                {**c.record.to_dict(), "member_rids": c.member_rids} for c in self.records
            ],
        }
