"""Notification and toast payloads (ephemeral, never persisted)."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class NotificationCategory(StrEnum):
    TICKET = "ticket"
    TASK = "task"
    EMPLOYEE_APPROVAL = "employee_approval"


class ToastSeverity(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class Notification(BaseModel):
    """An alert presented to the viewer one at a time.

    ``id`` is assigned when the notification is enqueued.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int | None = None
    item_id: str = Field(..., alias="itemId")
    """Identity of the ticket/task/request (or summary key) that caused it."""
    type: NotificationCategory
    title: str
    message: str
    navigate_to: str = Field(..., alias="navigateTo")
    """Opaque navigation target token."""


class Toast(BaseModel):
    """A short-lived (text, severity) message for the generic toast channel."""

    model_config = ConfigDict(frozen=True)

    message: str
    severity: ToastSeverity = ToastSeverity.INFO
