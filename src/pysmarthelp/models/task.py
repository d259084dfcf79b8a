"""Work task model."""

from __future__ import annotations

from pysmarthelp.models._base import EntityId, OptionalId, SmartHelpBaseModel, SmartHelpEnum


class TaskStatus(SmartHelpEnum):
    """Task lifecycle.

    ``TO_DO -> SEEN -> {PENDING_SUPERVISOR_REVIEW | PENDING_REVIEW} -> COMPLETED``
    with rejection moving a reviewed task back to ``TO_DO``.  ``SEEN`` is a
    read acknowledgement of ``TO_DO``.
    """

    TO_DO = "ToDo"
    SEEN = "Seen"
    PENDING_SUPERVISOR_REVIEW = "PendingSupervisorReview"
    PENDING_REVIEW = "PendingReview"
    COMPLETED = "Completed"
    UNKNOWN = "Unknown"

    @property
    def is_open(self) -> bool:
        return self in (TaskStatus.TO_DO, TaskStatus.SEEN)


class Task(SmartHelpBaseModel):
    id: EntityId
    title: str = ""
    status: TaskStatus = TaskStatus.TO_DO
    assigned_category_id: OptionalId = None
    assigned_sub_department_id: OptionalId = None
    assigned_employee_id: OptionalId = None
    performed_by_user_id: OptionalId = None
    completed_by_user_id: OptionalId = None
    admin_feedback: str | None = None
