"""Previous-snapshot tracker.

Retains, per collection, the snapshot as it stood at the end of the prior
evaluation pass.  Only the dispatcher writes to it.
"""

from __future__ import annotations

from typing import Any, Protocol

from pysmarthelp.state.events import CollectionName


class _Readable(Protocol):
    def read(self, name: CollectionName) -> tuple[Any, ...]: ...


class PreviousSnapshotTracker:
    def __init__(self) -> None:
        self._previous: dict[CollectionName, tuple[Any, ...]] = {}

    def get(self, name: CollectionName) -> tuple[Any, ...] | None:
        """Return the remembered snapshot, or ``None`` if none was recorded yet."""
        return self._previous.get(name)

    def remember(self, name: CollectionName, value: tuple[Any, ...]) -> None:
        self._previous[name] = tuple(value)

    def prime(self, store: _Readable, names: tuple[CollectionName, ...] | None = None) -> None:
        """Seed the tracker with the store's current snapshots."""
        for name in names if names is not None else tuple(CollectionName):
            self.remember(name, store.read(name))

    def __contains__(self, name: object) -> bool:
        return name in self._previous
