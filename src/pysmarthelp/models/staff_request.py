"""Staff-account request model."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from pysmarthelp.ingestion.normalize import safe_bool
from pysmarthelp.models._base import EntityId, OptionalId, SmartHelpBaseModel, SmartHelpEnum


class StaffRequestStatus(SmartHelpEnum):
    """``PENDING`` moves once to ``APPROVED`` or ``REJECTED`` and stays there."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


class StaffRequest(SmartHelpBaseModel):
    """A supervisor's request for a new employee account."""

    id: EntityId
    requested_by_supervisor_id: OptionalId = None
    new_employee_username: str = ""
    status: StaffRequestStatus = StaffRequestStatus.PENDING
    acknowledged_by_supervisor: bool = False

    @field_validator("acknowledged_by_supervisor", mode="before")
    @classmethod
    def _coerce_ack(cls, value: Any) -> bool:
        return safe_bool(value)
