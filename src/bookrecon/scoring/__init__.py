"""Similarity scoring between book titles and publishers."""

from bookrecon.scoring.comparators import (
    are_core_titles_related,
    are_publishers_consistent,
    char_jaccard,
    has_problematic_title_pattern,
    levenshtein_distance,
    levenshtein_similarity,
    title_similarity,
    token_similarity,
)

__all__ = [
    "are_core_titles_related",
    "are_publishers_consistent",
    "char_jaccard",
    "has_problematic_title_pattern",
    "levenshtein_distance",
    "levenshtein_similarity",
    "title_similarity",
    "token_similarity",
]
