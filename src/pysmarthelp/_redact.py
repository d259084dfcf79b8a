"""Trace-log sanitising for snapshot payloads.

User records carry credentials and tickets may embed attachments as
``data:`` URLs.  :func:`redact_for_log` turns a snapshot (models, dicts or
lists of either) into plain JSON-like data with those values masked and
oversized strings and lists shortened.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

_CREDENTIAL_KEYS: frozenset[str] = frozenset({"password", "token", "authorization", "cookie"})

_MAX_DEPTH = 12


def _is_inline_attachment(text: str) -> bool:
    return text.startswith("data:") and ";base64," in text[:100]


def _clip(text: str, max_string: int) -> str:
    if _is_inline_attachment(text):
        return f"<attachment:{len(text)} chars>"
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text


def _redact_record(record: Mapping[Any, Any], max_string: int, max_items: int, depth: int) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for raw_key, item in record.items():
        key = str(raw_key)
        if key.lower() in _CREDENTIAL_KEYS:
            result[key] = "<redacted>"
        else:
            result[key] = _redact(item, max_string, max_items, depth + 1)
    return result


def _redact(value: Any, max_string: int, max_items: int, depth: int) -> Any:
    if depth > _MAX_DEPTH:
        return "<max-depth>"
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _clip(value, max_string)
    if isinstance(value, Mapping):
        return _redact_record(value, max_string, max_items, depth)
    if isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
        shown = [_redact(item, max_string, max_items, depth + 1) for item in items[:max_items]]
        if len(items) > max_items:
            shown.append(f"<+{len(items) - max_items} more>")
        return shown
    return repr(value)


def redact_for_log(value: Any, *, max_string: int = 512, max_items: int = 50) -> Any:
    """Return a copy of *value* that is safe to write to DEBUG logs."""
    return _redact(value, max_string, max_items, 0)
