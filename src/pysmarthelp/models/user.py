"""User and actor models."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pysmarthelp.ingestion.normalize import safe_float
from pysmarthelp.models._base import EntityId, IdList, OptionalId, SmartHelpBaseModel, SmartHelpEnum


class UserRole(SmartHelpEnum):
    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    EMPLOYEE = "employee"
    DRIVER = "driver"
    UNKNOWN = "unknown"


class User(SmartHelpBaseModel):
    """A staff or driver account as stored in the ``users`` collection."""

    id: EntityId
    username: str = ""
    role: UserRole = UserRole.UNKNOWN
    password: str | None = Field(default=None, repr=False)
    """Stored credential. Never copied onto an :class:`Actor`."""
    permissions: IdList = Field(default_factory=list)
    """Employee-level permissions (e.g. ``"handle_tickets"``)."""
    admin_permissions: IdList = Field(default_factory=list)
    """Admin-style capabilities delegated to a supervisor."""
    assigned_category_ids: IdList = Field(default_factory=list)
    assigned_sub_department_ids: IdList = Field(default_factory=list)
    supervisor_id: OptionalId = None
    """The supervisor this user reports to."""
    current_speed: float | None = None
    """Last reported driving speed (drivers only)."""

    @field_validator("current_speed", mode="before")
    @classmethod
    def _coerce_speed(cls, value: Any) -> float | None:
        return safe_float(value)


class Actor(SmartHelpBaseModel):
    """The currently authenticated viewer.

    Immutable for the duration of one evaluation pass.
    """

    id: EntityId
    username: str = ""
    role: UserRole = UserRole.UNKNOWN
    permissions: frozenset[str] = frozenset()
    admin_permissions: frozenset[str] = frozenset()
    assigned_category_ids: frozenset[str] = frozenset()
    assigned_sub_department_ids: frozenset[str] = frozenset()
    supervisor_id: OptionalId = None

    @field_validator(
        "permissions",
        "admin_permissions",
        "assigned_category_ids",
        "assigned_sub_department_ids",
        mode="before",
    )
    @classmethod
    def _coerce_id_set(cls, value: Any) -> frozenset[str]:
        if value is None:
            return frozenset()
        if isinstance(value, (str, int)):
            value = [value]
        return frozenset(str(item) for item in value if item not in (None, ""))

    @classmethod
    def from_user(cls, user: User) -> Actor:
        """Build the viewer from a stored account, dropping its credential."""
        return cls(
            id=user.id,
            username=user.username,
            role=user.role,
            permissions=user.permissions,
            admin_permissions=user.admin_permissions,
            assigned_category_ids=user.assigned_category_ids,
            assigned_sub_department_ids=user.assigned_sub_department_ids,
            supervisor_id=user.supervisor_id,
        )
