"""Record cleaning and normalization."""

from bookrecon.normalize._helpers import extract_publication_year
from bookrecon.normalize.cleaner import clean, drop_reason
from bookrecon.normalize.normalizer import normalize, normalize_all

__all__ = [
    "clean",
    "drop_reason",
    "extract_publication_year",
    "normalize",
    "normalize_all",
]
