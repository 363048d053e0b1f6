"""Field normalization functions.

Individual field normalizers for provider book records. Each function is
pure and deterministic.
"""

from .authors import normalize_author_name, parse_authors
from .binding import is_audiobook_format, normalize_binding
from .title import (
    comparison_title,
    deep_normalize_title,
    main_title_words,
    normalize_title,
    work_title,
)

__all__ = [
    "comparison_title",
    "deep_normalize_title",
    "is_audiobook_format",
    "main_title_words",
    "normalize_author_name",
    "normalize_binding",
    "normalize_title",
    "parse_authors",
    "work_title",
]
