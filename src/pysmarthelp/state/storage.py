"""Persistence backends for the snapshot store."""

from __future__ import annotations

import copy
import errno
import json
import logging
from pathlib import Path
from typing import Any, Protocol

from pysmarthelp.exceptions import StorageReadError, StorageWriteError

_logger = logging.getLogger(__name__)

_FULL_ERRNOS = frozenset({errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)})


class StorageBackend(Protocol):
    """Whole-collection key/value persistence."""

    def load(self, name: str) -> list[dict[str, Any]] | None:
        """Return the persisted records, or ``None`` when nothing is stored."""
        ...

    def save(self, name: str, records: list[dict[str, Any]]) -> None:
        """Persist *records*, raising :class:`StorageWriteError` on failure."""
        ...


class MemoryBackend:
    """Backend that keeps deep copies of saved records in a dict."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._data: dict[str, list[dict[str, Any]]] = copy.deepcopy(initial) if initial else {}

    def load(self, name: str) -> list[dict[str, Any]] | None:
        records = self._data.get(name)
        return copy.deepcopy(records) if records is not None else None

    def save(self, name: str, records: list[dict[str, Any]]) -> None:
        self._data[name] = copy.deepcopy(records)


class JsonFileBackend:
    """One ``<collection>.json`` file per collection inside *directory*."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def _path(self, name: str) -> Path:
        return self._directory / f"{name}.json"

    def load(self, name: str) -> list[dict[str, Any]] | None:
        path = self._path(name)
        if not path.exists():
            return None
        try:
            decoded = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageReadError(f"Could not read {path}: {exc}", collection=name) from exc
        if not isinstance(decoded, list):
            raise StorageReadError(f"Expected a JSON list in {path}", collection=name)
        return [item for item in decoded if isinstance(item, dict)]

    def save(self, name: str, records: list[dict[str, Any]]) -> None:
        path = self._path(name)
        tmp = path.with_suffix(".json.tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            raise StorageWriteError(
                f"Could not write {path}: {exc}",
                collection=name,
                storage_full=exc.errno in _FULL_ERRNOS,
            ) from exc
        _logger.debug("Persisted %d record(s) to %s", len(records), path)
