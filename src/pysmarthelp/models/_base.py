"""Base model and enum for persisted SmartHelp records.

Every record model inherits from :class:`SmartHelpBaseModel` which
provides:

* ``alias_generator=to_camel`` so the camelCase keys of the persisted
  JSON map automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops "absent" values
  (``None``, ``""``) so the field default is used.  An empty
  ``assignedEmployeeId`` therefore means "unassigned".

Status enums inherit from :class:`SmartHelpEnum` which adds an
``UNKNOWN`` member and a ``_missing_`` hook that returns ``UNKNOWN``
for any value without a mapped member.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from pysmarthelp.ingestion.normalize import parse_timestamp, safe_str, safe_str_list


def _require_id(value: Any) -> str:
    text = safe_str(value)
    if text is None:
        raise ValueError("identity must be non-empty")
    return text


EntityId = Annotated[str, BeforeValidator(_require_id)]
"""Stable identity, coerced to ``str`` (numeric ids are accepted)."""

OptionalId = Annotated[str | None, BeforeValidator(safe_str)]
"""Optional foreign key; empty values collapse to ``None``."""

IdList = Annotated[list[str], BeforeValidator(safe_str_list)]
"""List of foreign keys, coerced to strings."""

Timestamp = Annotated[datetime | None, BeforeValidator(parse_timestamp)]
"""ISO-8601 string or epoch number, normalized to an aware UTC datetime."""


class SmartHelpEnum(enum.StrEnum):
    """Base for status enums.

    Every subclass **must** define ``UNKNOWN``.
    Persisted values without a mapped member resolve to ``UNKNOWN``
    instead of raising ``ValueError``.
    """

    @classmethod
    def _missing_(cls, value: object) -> SmartHelpEnum:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        if hasattr(cls, "UNKNOWN"):
            unknown: SmartHelpEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))


class SmartHelpBaseModel(BaseModel):
    """Base for persisted record models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_absent_values(cls, values: Any) -> Any:
        """Strip ``None`` and empty-string values so field defaults apply."""
        if not isinstance(values, dict):
            return values
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            cleaned[key] = value
        return cleaned

    def to_record(self) -> dict[str, Any]:
        """Dump to the camelCase JSON shape used by the persistence layer."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
