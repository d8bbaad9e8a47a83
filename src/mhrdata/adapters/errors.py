"""Adapter error definitions."""

from __future__ import annotations


class SourceFetchError(RuntimeError):
    """Raised when a scrape source cannot be fetched; aborts the whole run."""
