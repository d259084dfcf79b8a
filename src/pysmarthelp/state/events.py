"""Collection names and snapshot-replace events."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CollectionName(StrEnum):
    USERS = "users"
    CATEGORIES = "categories"
    SUB_DEPARTMENTS = "subDepartments"
    TICKETS = "tickets"
    TASKS = "tasks"
    STAFF_REQUESTS = "employeeRequests"
    VEHICLES = "vehicles"
    VIOLATIONS = "violations"
    VIOLATION_RULES = "violationRules"


class SnapshotReplaced(BaseModel):
    """Emitted after a collection has been replaced as a whole."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    collection: CollectionName
    value: tuple[Any, ...] = Field(default_factory=tuple, description="The new snapshot")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    persisted: bool = Field(default=True, description="False when the storage write failed")
