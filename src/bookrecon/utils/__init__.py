"""Common utility functions for bookrecon."""

from bookrecon.utils.timestamps import get_iso_timestamp

__all__ = ["get_iso_timestamp"]
