"""Violation rule and violation record models."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pysmarthelp.ingestion.normalize import safe_bool, safe_float
from pysmarthelp.models._base import EntityId, OptionalId, SmartHelpBaseModel, SmartHelpEnum, Timestamp


class ViolationKind(SmartHelpEnum):
    SPEEDING = "speeding"
    MISSED_MAINTENANCE = "missed_maintenance"
    UNKNOWN = "unknown"


class ViolationStatus(SmartHelpEnum):
    PENDING = "pending"
    PAID = "paid"
    UNKNOWN = "unknown"


class ViolationRule(SmartHelpBaseModel):
    """Configuration for one automatically detected violation kind.

    ``description`` is a message template; ``{speed}``, ``{threshold}`` and
    ``{date}`` placeholders are substituted when a violation is recorded.
    """

    id: EntityId
    kind: ViolationKind = Field(default=ViolationKind.UNKNOWN, alias="type")
    is_enabled: bool = False
    threshold: float = 0.0
    fine_amount: float = 0.0
    description: str = ""

    @field_validator("is_enabled", mode="before")
    @classmethod
    def _coerce_enabled(cls, value: Any) -> bool:
        return safe_bool(value)

    @field_validator("threshold", "fine_amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        parsed = safe_float(value)
        return 0.0 if parsed is None else parsed


class Violation(SmartHelpBaseModel):
    """A recorded fine against a driver."""

    id: EntityId
    driver_id: OptionalId = None
    vehicle_id: OptionalId = None
    date: Timestamp = None
    description: str = ""
    amount: float = 0.0
    status: ViolationStatus = ViolationStatus.PENDING
    trigger_event_id: str | None = None
    """Idempotence key for conditions that persist across cycles."""

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        parsed = safe_float(value)
        return 0.0 if parsed is None else parsed
