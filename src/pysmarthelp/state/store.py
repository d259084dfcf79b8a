"""In-memory snapshot store.

Holds the current value of every tracked collection.  Collections are only
ever replaced as a whole; each replace produces a new immutable snapshot and
notifies subscribers.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import TypeAdapter, ValidationError

from pysmarthelp.config import EngineConfig
from pysmarthelp.exceptions import (
    SnapshotValidationError,
    StorageError,
    StorageWriteError,
    UnknownCollectionError,
)
from pysmarthelp.models import (
    Category,
    SmartHelpBaseModel,
    StaffRequest,
    SubDepartment,
    Task,
    Ticket,
    User,
    Vehicle,
    Violation,
    ViolationRule,
)
from pysmarthelp.state.events import CollectionName, SnapshotReplaced
from pysmarthelp.state.storage import JsonFileBackend, StorageBackend

_logger = logging.getLogger(__name__)

COLLECTION_MODELS: dict[CollectionName, type[SmartHelpBaseModel]] = {
    CollectionName.USERS: User,
    CollectionName.CATEGORIES: Category,
    CollectionName.SUB_DEPARTMENTS: SubDepartment,
    CollectionName.TICKETS: Ticket,
    CollectionName.TASKS: Task,
    CollectionName.STAFF_REQUESTS: StaffRequest,
    CollectionName.VEHICLES: Vehicle,
    CollectionName.VIOLATIONS: Violation,
    CollectionName.VIOLATION_RULES: ViolationRule,
}

_ADAPTERS: dict[CollectionName, TypeAdapter[Any]] = {
    name: TypeAdapter(list[model]) for name, model in COLLECTION_MODELS.items()  # type: ignore[valid-type]
}

SnapshotListener = Callable[[SnapshotReplaced], None]
WriteErrorHandler = Callable[[CollectionName, StorageError], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _collection(name: CollectionName | str) -> CollectionName:
    try:
        return CollectionName(name)
    except ValueError as exc:
        raise UnknownCollectionError(f"Unknown collection: {name!r}", collection=str(name)) from exc


class SnapshotStore:
    """Whole-collection key/value store for the tracked collections.

    Usage::

        store = SnapshotStore(backend=JsonFileBackend("data"))
        store.load()
        store.replace("tickets", [*store.read("tickets"), new_ticket])
    """

    def __init__(
        self,
        *,
        backend: StorageBackend | None = None,
        initial: Mapping[CollectionName | str, Iterable[Any]] | None = None,
        clock: Callable[[], datetime] = _utcnow,
        on_write_error: WriteErrorHandler | None = None,
    ) -> None:
        self._backend = backend
        self._clock = clock
        self._on_write_error = on_write_error
        self._collections: dict[CollectionName, tuple[Any, ...]] = {name: () for name in CollectionName}
        self._listeners: list[SnapshotListener] = []
        self._lock = threading.RLock()
        if initial:
            for name, value in initial.items():
                key = _collection(name)
                self._collections[key] = self._validate(key, value)

    @classmethod
    def from_config(
        cls,
        config: EngineConfig,
        *,
        initial: Mapping[CollectionName | str, Iterable[Any]] | None = None,
    ) -> SnapshotStore:
        """Build a store persisting to ``config.storage_dir`` (if set) and load it."""
        backend = JsonFileBackend(config.storage_dir) if config.storage_dir else None
        store = cls(backend=backend, initial=initial)
        store.load()
        return store

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read(self, name: CollectionName | str) -> tuple[Any, ...]:
        """Return the current snapshot of a collection."""
        return self._collections[_collection(name)]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def replace(self, name: CollectionName | str, value: Iterable[Any]) -> tuple[Any, ...]:
        """Replace a collection as a whole and notify subscribers.

        *value* may contain model instances or raw record dicts.  A storage
        write failure is reported through ``on_write_error`` but does not roll
        back the in-memory snapshot.

        Concurrent replaces are serialised.  Listeners run on the replacing
        thread while the store lock is held, so they see replaces in the
        order they were stored.

        Raises
        ------
        SnapshotValidationError
            If *value* does not validate; the stored snapshot is unchanged.
        """
        key = _collection(name)
        snapshot = self._validate(key, value)
        with self._lock:
            self._collections[key] = snapshot
            persisted = self._persist(key, snapshot)
            event = SnapshotReplaced(
                collection=key,
                value=snapshot,
                observed_at=self._clock(),
                persisted=persisted,
            )
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    _logger.warning("Snapshot listener failed for %s", key, exc_info=True)
        return snapshot

    def update(self, name: CollectionName | str, fn: Callable[[tuple[Any, ...]], Iterable[Any]]) -> tuple[Any, ...]:
        """Replace a collection with ``fn(current)``."""
        with self._lock:
            return self.replace(name, fn(self.read(name)))

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def set_write_error_handler(self, handler: WriteErrorHandler | None) -> None:
        self._on_write_error = handler

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Load every collection from the backend.

        Collections that are missing or unreadable keep their current value.
        Subscribers are not notified.
        """
        if self._backend is None:
            return
        for key in CollectionName:
            try:
                records = self._backend.load(key.value)
            except StorageError:
                _logger.warning("Could not load collection %s; keeping initial value", key, exc_info=True)
                continue
            if records is None:
                continue
            try:
                self._collections[key] = self._validate(key, records)
            except SnapshotValidationError:
                _logger.warning("Stored collection %s is invalid; keeping initial value", key, exc_info=True)

    def _persist(self, key: CollectionName, snapshot: tuple[Any, ...]) -> bool:
        if self._backend is None:
            return True
        try:
            self._backend.save(key.value, [item.to_record() for item in snapshot])
        except StorageWriteError as exc:
            _logger.warning("Storage write failed for %s: %s", key, exc)
            if self._on_write_error is not None:
                self._on_write_error(key, exc)
            return False
        return True

    @staticmethod
    def _validate(key: CollectionName, value: Iterable[Any]) -> tuple[Any, ...]:
        items = list(value)
        model = COLLECTION_MODELS[key]
        # Instances of the right model are already validated and frozen.
        if all(isinstance(item, model) for item in items):
            return tuple(items)
        try:
            validated = _ADAPTERS[key].validate_python(
                [item.model_dump(by_alias=True) if isinstance(item, SmartHelpBaseModel) else item for item in items]
            )
        except ValidationError as exc:
            raise SnapshotValidationError(f"Invalid {key} snapshot: {exc}", collection=key.value) from exc
        return tuple(validated)
