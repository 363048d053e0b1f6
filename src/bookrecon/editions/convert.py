"""Conversion of edition groups to the storage shape."""

from bookrecon.models import BindingRecord, BookRecord, EditionGroup, EditionRecord
from bookrecon.normalize._fields import normalize_binding
from bookrecon.utils import get_iso_timestamp

DEFAULT_LANGUAGE = "en"


def _binding_record(record: BookRecord, edition_id: str, created_at: str) -> BindingRecord:
    return BindingRecord(
        id="",
        book_edition_id=edition_id,
        isbn=record.isbn,
        binding_type=normalize_binding(record.raw_binding),
        publisher=record.publisher,
        cover_image_url=record.image,
        description=record.description,
        pages=record.page_count,
        language=record.language or DEFAULT_LANGUAGE,
        created_at=created_at,
    )


def convert_to_book_editions(
    groups: list[EditionGroup],
    primary_book_id: str,
) -> list[EditionRecord]:
    """Map edition groups to edition rows with their bindings.

    Database identifiers are left empty for the persistence layer to assign.

    Parameters
    ----------
    groups : list[EditionGroup]
        Ranked edition groups.
    primary_book_id : str
        Identifier of the owning work.

    Returns
    -------
    list[EditionRecord]
        One row per group, same order.
    """
    created_at = get_iso_timestamp()
    return [
        EditionRecord(
            id="",
            primary_book_id=primary_book_id,
            edition_number=group.edition_number,
            edition_type=group.edition_type,
            publication_year=group.publication_year,
            created_at=created_at,
            bindings=[_binding_record(book, "", created_at) for book in group.books],
        )
        for group in groups
    ]
