"""Bundled reference data (correction tables)."""
