"""Exception types raised by the storage layer.

The host boundary in :mod:`docdoctor.store` folds these into sentinel values.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for every problem-store failure."""


class NotInitializedError(StoreError):
    """An operation was attempted without an open connection."""

    def __init__(self, operation: str = "") -> None:
        msg = "database not initialized"
        if operation:
            msg = f"{operation}: {msg}"
        super().__init__(msg)


class OpenError(StoreError):
    """The database file could not be opened or its schema created."""


class MalformedDocumentError(StoreError):
    """An input document could not be parsed at all."""


class WriteError(StoreError):
    """The storage engine rejected a write."""


class NotFoundError(WriteError):
    """An update matched zero rows."""


class ReadError(StoreError):
    """Rows could not be read back or serialized."""
