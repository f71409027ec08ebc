"""Error types raised by the core and its adapters."""

from __future__ import annotations


class ConfigError(ValueError):
    """Invalid topic or bot configuration. Fatal at startup."""


class StorageError(RuntimeError):
    """Base class for counter storage failures."""


class StorageReadError(StorageError):
    """The persisted record is missing or unreadable.

    Stores recover from this locally by reporting the record as absent.
    """


class StorageWriteError(StorageError):
    """A new record could not be durably written."""
