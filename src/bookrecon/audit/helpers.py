"""Run identifiers and version lookup for audit trails."""

import importlib.metadata
import secrets

from bookrecon.utils import get_iso_timestamp

__all__ = ["generate_run_id", "get_package_version"]


def generate_run_id() -> str:
    """New run identifier: ``<UTC timestamp>__<8 hex chars>``.

    Sorting run ids sorts runs by start time; the suffix keeps runs started
    in the same microsecond apart.
    """
    return f"{get_iso_timestamp()}__{secrets.token_hex(4)}"


def get_package_version() -> str:
    """Installed bookrecon version, or '0.0.0+dev' for a source checkout."""
    try:
        return importlib.metadata.version("bookrecon")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0+dev"
