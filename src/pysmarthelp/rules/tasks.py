"""Eligibility rules for the ``tasks`` collection.

Status transitions follow the review workflow::

    ToDo/Seen -> PendingSupervisorReview   submitted by an employee
    ToDo/Seen -> PendingReview             submitted by a supervisor to admins
    PendingSupervisorReview -> Completed   approved
    PendingSupervisorReview -> ToDo        rejected

Each shape has its own rule; any other status change produces nothing.
"""

from __future__ import annotations

from pysmarthelp._constants import NAV_TASKS
from pysmarthelp.diff import Added, Changed
from pysmarthelp.models import Actor, Notification, NotificationCategory, Task, TaskStatus, UserRole
from pysmarthelp.rules.capabilities import is_admin_class
from pysmarthelp.rules.context import LookupContext


def _task_notification(task: Task, title: str, message: str) -> Notification:
    return Notification(
        item_id=task.id,
        type=NotificationCategory.TASK,
        title=title,
        message=message,
        navigate_to=NAV_TASKS,
    )


def new_task(actor: Actor, transition: Added[Task], ctx: LookupContext) -> Notification | None:
    task = transition.item

    if is_admin_class(actor):
        category_name = ctx.category_name(task.assigned_category_id, "a category")
        if task.assigned_employee_id is not None:
            assignee = ctx.username(task.assigned_employee_id, "an employee")
        elif task.assigned_sub_department_id is not None:
            assignee = ctx.sub_department_name(task.assigned_sub_department_id, "a team")
        else:
            assignee = category_name
        return _task_notification(task, "New Task Created", f'Task "{task.title}" was created for {assignee}.')

    if actor.role == UserRole.SUPERVISOR:
        for_my_category = (
            task.assigned_employee_id is None
            and task.assigned_sub_department_id is None
            and task.assigned_category_id in actor.assigned_category_ids
        )
        if for_my_category:
            category_name = ctx.category_name(task.assigned_category_id, "your assigned category")
            return _task_notification(
                task,
                "New Task Assigned",
                f'A new task "{task.title}" has been assigned to the {category_name} category.',
            )
        return None

    if actor.role == UserRole.EMPLOYEE:
        for_me = task.assigned_employee_id == actor.id
        for_my_team = (
            task.assigned_employee_id is None
            and task.assigned_sub_department_id is not None
            and task.assigned_sub_department_id in actor.assigned_sub_department_ids
        )
        if for_me or for_my_team:
            return _task_notification(task, "New Task Assigned", f'You have been assigned a new task: "{task.title}".')
    return None


def task_submitted_to_supervisor(actor: Actor, transition: Changed[Task], ctx: LookupContext) -> Notification | None:
    old, task = transition.old, transition.new
    if not (old.status.is_open and task.status == TaskStatus.PENDING_SUPERVISOR_REVIEW):
        return None
    if task.performed_by_user_id is None:
        return None

    employee_name = ctx.username(task.performed_by_user_id, "An employee")
    supervisor = ctx.supervisor_of(task.performed_by_user_id)
    if supervisor is not None and actor.id == supervisor.id:
        return _task_notification(
            task,
            "Task Submitted for Review",
            f'Employee "{employee_name}" submitted task "{task.title}" for your review.',
        )
    if is_admin_class(actor):
        return _task_notification(
            task,
            "Task Submitted to Supervisor",
            f'Employee "{employee_name}" submitted task "{task.title}" to their supervisor.',
        )
    return None


def task_submitted_to_admin(actor: Actor, transition: Changed[Task], ctx: LookupContext) -> Notification | None:
    old, task = transition.old, transition.new
    if not (old.status.is_open and task.status == TaskStatus.PENDING_REVIEW):
        return None
    if task.performed_by_user_id is None or not is_admin_class(actor):
        return None

    category_name = ctx.category_name(task.assigned_category_id, "unassigned")
    performer = ctx.user(task.performed_by_user_id)
    if performer is not None:
        message = (
            f'Supervisor "{performer.username}" submitted a task for review in the '
            f'"{category_name}" category: "{task.title}".'
        )
    else:
        message = f'A task in the "{category_name}" category is ready for review: "{task.title}".'
    return _task_notification(task, "Task Ready for Review", message)


def task_approved(actor: Actor, transition: Changed[Task], ctx: LookupContext) -> Notification | None:
    old, task = transition.old, transition.new
    if not (old.status == TaskStatus.PENDING_SUPERVISOR_REVIEW and task.status == TaskStatus.COMPLETED):
        return None

    if task.assigned_employee_id is not None and actor.id == task.assigned_employee_id:
        return _task_notification(
            task,
            "Task Approved!",
            f'Your task "{task.title}" has been approved and completed by your supervisor.',
        )
    if is_admin_class(actor):
        employee_name = ctx.username(task.assigned_employee_id, "an employee")
        approver_name = ctx.username(task.completed_by_user_id, "A reviewer")
        return _task_notification(
            task,
            "Employee Task Approved",
            f'{approver_name} approved task "{task.title}" for {employee_name}.',
        )
    return None


def task_rejected(actor: Actor, transition: Changed[Task], ctx: LookupContext) -> Notification | None:
    old, task = transition.old, transition.new
    if not (old.status == TaskStatus.PENDING_SUPERVISOR_REVIEW and task.status == TaskStatus.TO_DO):
        return None

    if task.assigned_employee_id is not None and actor.id == task.assigned_employee_id:
        if task.admin_feedback:
            message = f'Your supervisor requested changes for "{task.title}": {task.admin_feedback}'
        else:
            message = f'Your supervisor requested changes for task "{task.title}". Please review and resubmit.'
        return _task_notification(task, "Task Requires Changes", message)
    if is_admin_class(actor):
        employee_name = ctx.username(task.assigned_employee_id, "an employee")
        return _task_notification(
            task,
            "Employee Task Rejected",
            f'A submission for task "{task.title}" from {employee_name} was rejected and needs rework.',
        )
    return None
