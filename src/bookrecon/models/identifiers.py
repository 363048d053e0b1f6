"""Stable identifiers for provider records.

Provider payloads do not always carry an id. Records without one get a
deterministic UUIDv5 derived from their content and position so that the
same input always yields the same identifiers.
"""

import hashlib
import json
import uuid
from typing import Any

# Project-fixed namespace UUID for deterministic UUIDv5 generation
BOOKRECON_NAMESPACE = uuid.UUID("1b4e28ba-2fa1-11d2-883f-0016d3cca427")


def calculate_record_digest(data: dict[str, Any]) -> str:
    """Calculate a deterministic content fingerprint of a provider record.

    Parameters
    ----------
    data : dict[str, Any]
        Provider record as a plain dictionary.

    Returns
    -------
    str
        SHA-256 digest in format "sha256:<hex>".
    """
    json_bytes = json.dumps(
        data,
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        default=str,
    ).encode("utf-8")
    return f"sha256:{hashlib.sha256(json_bytes).hexdigest()}"


def calculate_rid(record_digest: str, index: int) -> str:
    """Calculate deterministic UUIDv5 record identifier.

    Parameters
    ----------
    record_digest : str
        Content digest from :func:`calculate_record_digest`.
    index : int
        0-based position of the record in its input list. Two identical
        payloads at different positions get different identifiers.

    Returns
    -------
    str
        UUIDv5 string in standard format.
    """
    return str(uuid.uuid5(BOOKRECON_NAMESPACE, f"{record_digest}:{index}"))
