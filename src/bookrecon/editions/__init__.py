"""Edition assembly, metadata selection and ranking.

Main Components
---------------
- assemble / partition_editions: split a work cluster into edition groups
- best_metadata: pick edition-level metadata from its bindings
- rank_groups: order groups newest edition first
- convert_to_book_editions: storage shape for the persistence layer
"""

from bookrecon.editions.assembler import (
    BINDING_PRIORITY,
    TimelineEntry,
    assemble,
    build_timeline,
    partition_editions,
)
from bookrecon.editions.convert import convert_to_book_editions
from bookrecon.editions.metadata import (
    best_metadata,
    edition_display_name,
    metadata_score,
    rank_groups,
)
from bookrecon.editions.parsing import (
    detect_edition_type,
    extract_edition_number,
    ordinal_label,
    ordinal_suffix,
    parse_explicit_edition,
)

__all__ = [
    "BINDING_PRIORITY",
    "TimelineEntry",
    "assemble",
    "best_metadata",
    "build_timeline",
    "convert_to_book_editions",
    "detect_edition_type",
    "edition_display_name",
    "extract_edition_number",
    "metadata_score",
    "ordinal_label",
    "ordinal_suffix",
    "parse_explicit_edition",
    "partition_editions",
    "rank_groups",
]
