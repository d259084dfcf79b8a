"""Snapshot-pair diffing.

Compares two plain snapshots of one collection and reports which elements
were added and which changed.  Pure functions: no tracker, no store.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

KeyFunc = Callable[[Any], Hashable]
EqualityFunc = Callable[[Any, Any], bool]


@dataclass(frozen=True, slots=True)
class Added(Generic[T]):
    """An element whose identity is new in the current snapshot."""

    item: T


@dataclass(frozen=True, slots=True)
class Changed(Generic[T]):
    """An element present in both snapshots whose tracked fields differ."""

    old: T
    new: T


@dataclass(frozen=True, slots=True)
class SnapshotDiff(Generic[T]):
    added: list[T] = field(default_factory=list)
    changed: list[tuple[T, T]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.changed

    def transitions(self) -> list[Added[T] | Changed[T]]:
        """Added transitions first, then changed, each in current-snapshot order."""
        result: list[Added[T] | Changed[T]] = [Added(item) for item in self.added]
        result.extend(Changed(old, new) for old, new in self.changed)
        return result


def key_by_id(item: Any) -> Hashable:
    if isinstance(item, dict):
        return item.get("id")
    return getattr(item, "id")


def _field_value(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _deep_value(item: Any) -> Any:
    if isinstance(item, BaseModel):
        return item.model_dump()
    return item


def fields_equal(fields: Sequence[str]) -> EqualityFunc:
    """Equality check that only looks at the named fields."""
    names = tuple(fields)

    def _equal(old: Any, new: Any) -> bool:
        return all(_field_value(old, name) == _field_value(new, name) for name in names)

    return _equal


def deep_equal(old: Any, new: Any) -> bool:
    """Full value comparison (the default)."""
    return _deep_value(old) == _deep_value(new)


def diff(
    previous: Iterable[T] | None,
    current: Iterable[T],
    *,
    key: KeyFunc = key_by_id,
    fields: Sequence[str] | None = None,
    equal: EqualityFunc | None = None,
    treat_missing_as_empty: bool = False,
) -> SnapshotDiff[T]:
    """Compute added and changed elements between two snapshots.

    Parameters
    ----------
    previous
        The earlier snapshot, or ``None`` when no earlier snapshot exists.
        ``None`` yields an empty diff unless *treat_missing_as_empty* is set,
        in which case every current element is reported as added.
    key
        Stable identity of an element.  Defaults to the ``id`` attribute.
    fields
        Only these fields are compared for ``changed``.  Ignored when
        *equal* is given.
    equal
        Custom equality check; defaults to deep value comparison.

    Elements removed from *current* are not reported.  When an identity
    appears more than once in a snapshot the first occurrence wins.
    """
    current_items = list(current)
    if previous is None:
        if not treat_missing_as_empty:
            return SnapshotDiff()
        previous = ()

    if equal is None:
        equal = fields_equal(fields) if fields is not None else deep_equal

    previous_by_key: dict[Hashable, T] = {}
    for item in previous:
        previous_by_key.setdefault(key(item), item)

    added: list[T] = []
    changed: list[tuple[T, T]] = []
    seen: set[Hashable] = set()
    for item in current_items:
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        old = previous_by_key.get(item_key)
        if old is None and item_key not in previous_by_key:
            added.append(item)
        elif not equal(old, item):
            changed.append((old, item))  # type: ignore[arg-type]
    return SnapshotDiff(added=added, changed=changed)
