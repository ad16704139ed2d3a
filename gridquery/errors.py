"""Exception types raised by gridquery.

Only configuration problems are raised by the package itself. Unknown client
columns and out-of-range order indexes are skipped, and failures reported by
SQLAlchemy while executing a statement propagate unchanged.
"""
from __future__ import annotations

__all__ = ["GridQueryError", "ConfigurationMissingError", "PlaceholderMismatchError"]


class GridQueryError(Exception):
    """Base class for gridquery errors."""


class ConfigurationMissingError(GridQueryError, ValueError):
    """A bundle field required by the selected backend is absent."""


class PlaceholderMismatchError(GridQueryError, ValueError):
    """A placeholder does not occur exactly once where it is expected."""
