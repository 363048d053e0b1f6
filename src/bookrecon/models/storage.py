"""Storage shapes handed to the persistence collaborator.

An edition row carries edition-level fields; each of its bindings is one
purchasable item (ISBN, format, publisher, ...). Identifiers are left empty
for the database to assign.
"""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class BindingRecord:
    """One binding of an edition.

    Attributes
    ----------
    id : str
        Database id (empty until persisted).
    book_edition_id : str
        Parent edition id (empty until persisted).
    isbn : str | None
        ISBN of this binding.
    binding_type : str
        Canonical binding.
    publisher : str | None
        Publisher name.
    cover_image_url : str | None
        Cover image reference.
    description : str | None
        Description.
    pages : int | None
        Page count.
    language : str
        Language code, 'en' when unknown.
    created_at : str
        ISO8601 creation timestamp.
    """

    id: str
    book_edition_id: str
    isbn: str | None
    binding_type: str
    publisher: str | None
    cover_image_url: str | None
    description: str | None
    pages: int | None
    language: str
    created_at: str


@dataclass(frozen=True)
class EditionRecord:
    """One edition row with its bindings.

    Attributes
    ----------
    id : str
        Database id (empty until persisted).
    primary_book_id : str
        Owning work id.
    edition_number : int
        Edition number.
    edition_type : str | None
        Edition label.
    publication_year : int | None
        Publication year.
    created_at : str
        ISO8601 creation timestamp.
    bindings : list[BindingRecord]
        Bindings of this edition.
    """

    id: str
    primary_book_id: str
    edition_number: int
    edition_type: str | None
    publication_year: int | None
    created_at: str
    bindings: list[BindingRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
