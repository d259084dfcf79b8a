"""Custom exception hierarchy for pysmarthelp."""

from __future__ import annotations


class SmartHelpError(Exception):
    """Base exception for all pysmarthelp errors."""


class SmartHelpConfigError(SmartHelpError):
    """Invalid or missing configuration."""


class SnapshotError(SmartHelpError):
    """A snapshot could not be read or replaced."""

    def __init__(self, message: str, *, collection: str = "") -> None:
        self.collection = collection
        super().__init__(message)


class UnknownCollectionError(SnapshotError):
    """The collection name is not tracked by the store."""


class SnapshotValidationError(SnapshotError):
    """A replacement value did not validate against the collection's model.

    The stored snapshot is left untouched when this is raised.
    """


class StorageError(SmartHelpError):
    """Persistence backend failure."""

    def __init__(self, message: str, *, collection: str = "") -> None:
        self.collection = collection
        super().__init__(message)


class StorageReadError(StorageError):
    """A persisted collection could not be loaded or decoded."""


class StorageWriteError(StorageError):
    """A collection could not be written (disk full, permissions, ...).

    The in-memory snapshot stays authoritative for the session; the store
    reports the failure once and never retries.
    """

    def __init__(self, message: str, *, collection: str = "", storage_full: bool = False) -> None:
        self.storage_full = storage_full
        super().__init__(message, collection=collection)
