"""Domain exception hierarchy.

Every error here is a startup-time failure: ``main`` reports it and exits
with a non-zero status.  Adapters translate library exceptions into these;
nothing below the entry point prints or exits on its own.
"""

from __future__ import annotations


class RehostError(Exception):
    """Base exception for the entire application."""


# ── Configuration ───────────────────────────────────────────────────────────


class ConfigError(RehostError):
    """The configuration file is unreadable or does not have the expected shape."""


# ── Source resolution ───────────────────────────────────────────────────────


class IoError(RehostError):
    """A local file is missing, unreadable, not text, or has no file name."""


class FetchError(RehostError):
    """A remote file could not be fetched or decoded, or its URL is unusable."""


# ── Serving ─────────────────────────────────────────────────────────────────


class BindError(RehostError):
    """The listen address is invalid or already in use."""
