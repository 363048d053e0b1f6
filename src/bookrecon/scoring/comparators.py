"""Title and publisher comparison functions.

All comparators are pure functions of their inputs. Similarities are in
[0, 1]; the title similarity takes the maximum of three metrics so that
reordered, truncated and reformatted titles all score high.
"""

import re

from bookrecon.normalize._fields.title import deep_normalize_title
from bookrecon.normalize._helpers import (
    NON_WORD_RE,
    STOP_WORDS,
    collapse_whitespace,
    punctuation_to_space,
    significant_words,
)

# Known spellings of the same publishing house
PUBLISHER_FAMILIES: tuple[tuple[str, ...], ...] = (
    ("wiley", "john wiley", "wiley sons"),
    ("penguin", "penguin random house", "penguin books"),
    ("harpercollins", "harper collins", "harper"),
    ("macmillan", "st martins", "st martins press"),
)

# Raw title shapes produced by scraped provider listings
PROBLEMATIC_TITLE_PATTERNS = (
    re.compile(r"--by\s+[^\[\]()]+.*\[.*\d{4}.*edition.*\].*isbn", re.IGNORECASE),
    re.compile(r"\((?:hardcover|paperback|ebook|kindle|audiobook)\)", re.IGNORECASE),
    re.compile(r",?\s*\d+(?:st|nd|rd|th)?\s+ed\.\s*\[.*\d{4}", re.IGNORECASE),
)


def levenshtein_distance(s1: str, s2: str) -> int:
    """Compute Levenshtein edit distance between two strings.

    Parameters
    ----------
    s1 : str
        First string.
    s2 : str
        Second string.

    Returns
    -------
    int
        Minimum number of single-character edits (insertions, deletions,
        substitutions) to transform s1 into s2.
    """
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    if not s2:
        return len(s1)

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, 1):
        current = [i]
        for j, c2 in enumerate(s2, 1):
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + (c1 != c2),  # substitution
                )
            )
        previous = current

    return previous[-1]


def levenshtein_similarity(s1: str, s2: str) -> float:
    """Edit-distance similarity normalized by the longer length.

    Two empty strings are identical (1.0).
    """
    longest = max(len(s1), len(s2))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(s1, s2)) / longest


def _tokens(text: str) -> set[str]:
    return {t for t in text.split() if len(t) > 2 and t.lower() not in STOP_WORDS}


def token_similarity(s1: str, s2: str) -> float:
    """Jaccard similarity of significant word tokens.

    Tokens of two characters or fewer and stop words are ignored. When
    neither string has a token left the strings are considered identical.
    """
    tokens1 = _tokens(s1)
    tokens2 = _tokens(s2)

    if not tokens1 and not tokens2:
        return 1.0
    if not tokens1 or not tokens2:
        return 0.0

    return len(tokens1 & tokens2) / len(tokens1 | tokens2)


def char_jaccard(s1: str, s2: str) -> float:
    """Jaccard similarity of the character sets of two strings."""
    chars1 = set(s1)
    chars2 = set(s2)
    union = chars1 | chars2
    if not union:
        return 0.0
    return len(chars1 & chars2) / len(union)


def title_similarity(title1: str | None, title2: str | None) -> float:
    """Score how alike two titles are.

    Parameters
    ----------
    title1 : str | None
        First title.
    title2 : str | None
        Second title.

    Returns
    -------
    float
        0.0 if either title is empty, 1.0 if they are equal before or after
        deep normalization, otherwise the maximum of Levenshtein, token and
        character-set similarity of the deep-normalized titles.

    Examples
    --------
        >>> title_similarity("The Startup Owner's Manual", "Startup Owner's Manual")
        1.0
    """
    if not title1 or not title2:
        return 0.0
    if title1 == title2:
        return 1.0

    norm1 = deep_normalize_title(title1)
    norm2 = deep_normalize_title(title2)
    if norm1 == norm2:
        return 1.0

    return max(
        levenshtein_similarity(norm1, norm2),
        token_similarity(norm1, norm2),
        char_jaccard(norm1, norm2),
    )


def _core(title: str) -> str:
    words = [w for w in title.split(" ") if len(w) > 2]
    return " ".join(words[:3])


def are_core_titles_related(title1: str, title2: str, overlap_ratio: float = 0.7) -> bool:
    """Decide whether two work titles share the same core.

    Parameters
    ----------
    title1 : str
        First work-normalized title.
    title2 : str
        Second work-normalized title.
    overlap_ratio : float, optional
        Share of the smaller significant-word set that must overlap,
        by default 0.7.

    Returns
    -------
    bool
        True if the first three words longer than two characters match (and
        are longer than 5 characters together), or if the significant-word
        overlap reaches ``overlap_ratio``.
    """
    if not title1 or not title2:
        return False

    core1 = _core(title1)
    if core1 == _core(title2) and len(core1) > 5:
        return True

    words1 = significant_words(title1)
    words2 = significant_words(title2)
    if not words1 or not words2:
        return False

    return len(words1 & words2) / min(len(words1), len(words2)) >= overlap_ratio


def _publisher_key(publisher: str) -> str:
    return NON_WORD_RE.sub("", publisher.lower()).strip()


def are_publishers_consistent(publisher1: str | None, publisher2: str | None) -> bool:
    """Return True unless two known publishers clearly differ.

    Missing publishers never conflict. Publishers match when equal after
    punctuation removal or when both contain a spelling from the same
    publishing family.
    """
    if not publisher1 or not publisher2:
        return True

    pub1 = _publisher_key(publisher1)
    pub2 = _publisher_key(publisher2)
    if pub1 == pub2:
        return True

    for family in PUBLISHER_FAMILIES:
        if any(v in pub1 for v in family) and any(v in pub2 for v in family):
            return True

    return False


def _is_problematic(title: str) -> bool:
    return any(p.search(title) for p in PROBLEMATIC_TITLE_PATTERNS)


def _raw_core_words(title: str) -> set[str]:
    text = collapse_whitespace(punctuation_to_space(title.lower()))
    words = [w for w in text.split(" ") if len(w) > 2]
    return set(words[:3])


def has_problematic_title_pattern(title1: str | None, title2: str | None) -> bool:
    """Fallback match for malformed raw titles.

    When either raw title has a scraped-listing shape (embedded author,
    binding or year markers), the titles match if their first three words
    longer than two characters share at least two words.
    """
    if not title1 or not title2:
        return False

    if not (_is_problematic(title1) or _is_problematic(title2)):
        return False

    return len(_raw_core_words(title1) & _raw_core_words(title2)) >= 2
