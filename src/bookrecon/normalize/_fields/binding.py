"""Binding normalization.

Provider binding strings are mapped onto a fixed vocabulary. The lookup
order is: exact table match, contextual handling of "electronic resource",
substring match in table order, then the lowercased input unchanged.
"""

HARDCOVER = "hardcover"
PAPERBACK = "paperback"
EBOOK = "ebook"
AUDIOBOOK = "audiobook"
BOARD_BOOK = "board book"
SPIRAL_BOUND = "spiral bound"
UNKNOWN = "unknown"

CANONICAL_BINDINGS = frozenset(
    {HARDCOVER, PAPERBACK, EBOOK, AUDIOBOOK, BOARD_BOOK, SPIRAL_BOUND, UNKNOWN}
)

# Insertion order is the substring-match order
BINDING_MAP: dict[str, str] = {
    # Hardcover variations
    "hardcover": HARDCOVER,
    "hardback": HARDCOVER,
    "hard cover": HARDCOVER,
    "cloth": HARDCOVER,
    "bound": HARDCOVER,
    # Paperback variations
    "paperback": PAPERBACK,
    "softcover": PAPERBACK,
    "soft cover": PAPERBACK,
    "mass market": PAPERBACK,
    "mass market paperback": PAPERBACK,
    "trade paperback": PAPERBACK,
    "paper": PAPERBACK,
    # Digital variations
    "ebook": EBOOK,
    "e-book": EBOOK,
    "kindle edition": EBOOK,
    "kindle": EBOOK,
    "epub": EBOOK,
    "pdf": EBOOK,
    # Audio variations
    "audiobook": AUDIOBOOK,
    "audio book": AUDIOBOOK,
    "mp3 cd": AUDIOBOOK,
    "audio cd": AUDIOBOOK,
    "compact disc": AUDIOBOOK,
    "cd": AUDIOBOOK,
    "audible": AUDIOBOOK,
    "unabridged": AUDIOBOOK,
    # Special formats
    "board book": BOARD_BOOK,
    "spiral": SPIRAL_BOUND,
    "spiral bound": SPIRAL_BOUND,
    "ring bound": SPIRAL_BOUND,
}

ELECTRONIC_RESOURCE = "electronic resource"
AUDIO_HINTS = ("audio", "mp3", "unabridged", "narrator")

AUDIO_FORMATS = (
    "mp3 cd",
    "mp3_cd",
    "audio cd",
    "audio_cd",
    "audiobook",
    "audible",
    "audio book",
    "audio_book",
    "audio",
    "cd",
)


def detect_electronic_resource_type(binding: str) -> str:
    """Classify an "electronic resource" as audiobook or ebook.

    Parameters
    ----------
    binding : str
        Binding string mentioning "electronic resource".

    Returns
    -------
    str
        'audiobook' if the string mentions audio/mp3/unabridged/narrator,
        otherwise 'ebook'.
    """
    text = binding.lower()
    if any(hint in text for hint in AUDIO_HINTS):
        return AUDIOBOOK
    return EBOOK


def normalize_binding(binding: str | None) -> str:
    """Map a free-text binding string to the canonical vocabulary.

    Parameters
    ----------
    binding : str | None
        Provider binding or print-type string.

    Returns
    -------
    str
        Canonical binding, 'unknown' for missing input, or the lowercased
        input when nothing matches.

    Examples
    --------
        >>> normalize_binding("Kindle Edition")
        'ebook'
        >>> normalize_binding("Electronic resource (unabridged)")
        'audiobook'
    """
    if not binding:
        return UNKNOWN

    text = binding.lower().strip()
    if not text:
        return UNKNOWN

    if text in BINDING_MAP:
        return BINDING_MAP[text]

    if ELECTRONIC_RESOURCE in text:
        return detect_electronic_resource_type(binding)

    for key, value in BINDING_MAP.items():
        if key in text or text in key:
            return value

    return text


def is_audiobook_format(binding: str | None) -> bool:
    """Return True if the binding string names an audio format."""
    if not binding:
        return False
    text = binding.lower().strip()
    return any(fmt in text for fmt in AUDIO_FORMATS)
