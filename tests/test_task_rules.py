from __future__ import annotations

import pytest

from pysmarthelp.diff import Added, Changed
from pysmarthelp.models import Actor, Task, TaskStatus
from pysmarthelp.rules.context import LookupContext
from pysmarthelp.rules.tasks import (
    new_task,
    task_approved,
    task_rejected,
    task_submitted_to_admin,
    task_submitted_to_supervisor,
)

STATUS_RULES = (task_submitted_to_supervisor, task_submitted_to_admin, task_approved, task_rejected)


def _changed(old_status: TaskStatus, new_status: TaskStatus, **kwargs: object) -> Changed[Task]:
    old = Task(id="k1", title="Audit", status=old_status, **kwargs)
    return Changed(old, old.model_copy(update={"status": new_status}))


def test_new_task_for_employee(actors: dict[str, Actor], ctx: LookupContext) -> None:
    task = Task(id="k1", title="Audit", assigned_employee_id="emp-1")
    notification = new_task(actors["emp-1"], Added(task), ctx)
    assert notification is not None
    assert notification.navigate_to == "tasks"
    assert new_task(actors["emp-2"], Added(task), ctx) is None


def test_new_task_for_team_reaches_every_member(actors: dict[str, Actor], ctx: LookupContext) -> None:
    task = Task(id="k1", title="Audit", assigned_sub_department_id="sd-1")
    assert new_task(actors["emp-1"], Added(task), ctx) is not None
    assert new_task(actors["emp-2"], Added(task), ctx) is not None


def test_new_task_for_category_reaches_supervisor(actors: dict[str, Actor], ctx: LookupContext) -> None:
    task = Task(id="k1", title="Audit", assigned_category_id="billing")
    notification = new_task(actors["sup-1"], Added(task), ctx)
    assert notification is not None
    assert "Billing" in notification.message
    assert new_task(actors["emp-1"], Added(task), ctx) is None


def test_submission_to_supervisor(actors: dict[str, Actor], ctx: LookupContext) -> None:
    transition = _changed(TaskStatus.SEEN, TaskStatus.PENDING_SUPERVISOR_REVIEW, performed_by_user_id="emp-1")
    supervisor = task_submitted_to_supervisor(actors["sup-1"], transition, ctx)
    assert supervisor is not None and supervisor.title == "Task Submitted for Review"
    admin = task_submitted_to_supervisor(actors["admin-1"], transition, ctx)
    assert admin is not None and admin.title == "Task Submitted to Supervisor"
    assert task_submitted_to_supervisor(actors["emp-1"], transition, ctx) is None


def test_submission_by_unknown_performer_uses_fallback_label(actors: dict[str, Actor], ctx: LookupContext) -> None:
    transition = _changed(TaskStatus.TO_DO, TaskStatus.PENDING_SUPERVISOR_REVIEW, performed_by_user_id="ghost")
    notification = task_submitted_to_supervisor(actors["admin-1"], transition, ctx)
    assert notification is not None
    assert "An employee" in notification.message


def test_submission_to_admin(actors: dict[str, Actor], ctx: LookupContext) -> None:
    transition = _changed(
        TaskStatus.TO_DO,
        TaskStatus.PENDING_REVIEW,
        performed_by_user_id="sup-1",
        assigned_category_id="billing",
    )
    notification = task_submitted_to_admin(actors["admin-1"], transition, ctx)
    assert notification is not None
    assert '"sam"' in notification.message and '"Billing"' in notification.message
    assert task_submitted_to_admin(actors["sup-1"], transition, ctx) is None


def test_approval(actors: dict[str, Actor], ctx: LookupContext) -> None:
    transition = _changed(
        TaskStatus.PENDING_SUPERVISOR_REVIEW,
        TaskStatus.COMPLETED,
        assigned_employee_id="emp-1",
        completed_by_user_id="sup-1",
    )
    employee = task_approved(actors["emp-1"], transition, ctx)
    assert employee is not None and employee.title == "Task Approved!"
    admin = task_approved(actors["admin-1"], transition, ctx)
    assert admin is not None
    assert admin.message == 'sam approved task "Audit" for eve.'


def test_rejection_carries_feedback(actors: dict[str, Actor], ctx: LookupContext) -> None:
    old = Task(
        id="k1",
        title="Audit",
        status=TaskStatus.PENDING_SUPERVISOR_REVIEW,
        assigned_employee_id="emp-1",
    )
    new = old.model_copy(update={"status": TaskStatus.TO_DO, "admin_feedback": "Please redo step 2"})
    notification = task_rejected(actors["emp-1"], Changed(old, new), ctx)
    assert notification is not None
    assert notification.title == "Task Requires Changes"
    assert "Please redo step 2" in notification.message


def test_rejection_without_feedback(actors: dict[str, Actor], ctx: LookupContext) -> None:
    transition = _changed(TaskStatus.PENDING_SUPERVISOR_REVIEW, TaskStatus.TO_DO, assigned_employee_id="emp-1")
    notification = task_rejected(actors["emp-1"], transition, ctx)
    assert notification is not None
    assert "Please review and resubmit" in notification.message


@pytest.mark.parametrize(
    ("old_status", "new_status", "expected"),
    [
        (TaskStatus.TO_DO, TaskStatus.PENDING_SUPERVISOR_REVIEW, "task_submitted_to_supervisor"),
        (TaskStatus.SEEN, TaskStatus.PENDING_REVIEW, "task_submitted_to_admin"),
        (TaskStatus.PENDING_SUPERVISOR_REVIEW, TaskStatus.COMPLETED, "task_approved"),
        (TaskStatus.PENDING_SUPERVISOR_REVIEW, TaskStatus.TO_DO, "task_rejected"),
        (TaskStatus.PENDING_REVIEW, TaskStatus.COMPLETED, None),
        (TaskStatus.TO_DO, TaskStatus.SEEN, None),
    ],
)
def test_status_rules_are_mutually_exclusive(
    actors: dict[str, Actor],
    ctx: LookupContext,
    old_status: TaskStatus,
    new_status: TaskStatus,
    expected: str | None,
) -> None:
    transition = _changed(old_status, new_status, performed_by_user_id="emp-1", assigned_employee_id="emp-1")
    fired = [rule.__name__ for rule in STATUS_RULES if rule(actors["admin-1"], transition, ctx) is not None]
    assert fired == ([expected] if expected else [])
