"""Aggregate notifications shown once when a viewer logs in."""

from __future__ import annotations

from collections.abc import Sequence

from pysmarthelp._constants import NAV_MANAGE_TEAM, NAV_STAFF_REQUESTS, NAV_TASKS, NAV_TICKETS
from pysmarthelp.models import (
    Actor,
    Notification,
    NotificationCategory,
    StaffRequest,
    StaffRequestStatus,
    Task,
    TaskStatus,
    Ticket,
    TicketStatus,
    UserRole,
)
from pysmarthelp.rules.capabilities import can_approve_staff, is_admin_class
from pysmarthelp.rules.context import LookupContext


def _summary(item_id: str, category: NotificationCategory, title: str, message: str, target: str) -> Notification:
    return Notification(item_id=item_id, type=category, title=title, message=message, navigate_to=target)


def _supervisor_summaries(
    actor: Actor,
    tickets: Sequence[Ticket],
    tasks: Sequence[Task],
    staff_requests: Sequence[StaffRequest],
    ctx: LookupContext,
) -> list[Notification]:
    result: list[Notification] = []
    if is_admin_class(actor):
        category_ids = set(ctx.categories)
    else:
        category_ids = set(actor.assigned_category_ids)
    my_reports = ctx.reports_of(actor.id)

    pending_tickets = sum(
        1 for t in tickets if t.category_id in category_ids and t.status in (TicketStatus.NEW, TicketStatus.SEEN)
    )
    if pending_tickets:
        result.append(
            _summary(
                "tickets-summary",
                NotificationCategory.TICKET,
                "Pending Support Tickets",
                f"You have {pending_tickets} pending ticket(s) awaiting a response.",
                NAV_TICKETS,
            )
        )

    from_admin = sum(
        1
        for t in tasks
        if t.assigned_category_id in category_ids and t.assigned_employee_id is None and t.status.is_open
    )
    if from_admin:
        result.append(
            _summary(
                "tasks-admin-summary",
                NotificationCategory.TASK,
                "New Tasks From Admin",
                f"You have {from_admin} new task(s) from an admin.",
                NAV_TASKS,
            )
        )

    to_review = sum(
        1
        for t in tasks
        if t.status == TaskStatus.PENDING_SUPERVISOR_REVIEW and t.assigned_employee_id in my_reports
    )
    if to_review:
        result.append(
            _summary(
                "tasks-review-summary",
                NotificationCategory.TASK,
                "Tasks Awaiting Review",
                f"You have {to_review} task(s) from your team for review.",
                NAV_TASKS,
            )
        )

    approved = sum(
        1
        for r in staff_requests
        if r.requested_by_supervisor_id == actor.id
        and r.status == StaffRequestStatus.APPROVED
        and not r.acknowledged_by_supervisor
    )
    if approved:
        result.append(
            _summary(
                "staff-approval-summary",
                NotificationCategory.EMPLOYEE_APPROVAL,
                "Employee Request Approved",
                f"You have {approved} new employee request(s) that have been approved.",
                NAV_MANAGE_TEAM,
            )
        )
    return result


def _admin_summaries(actor: Actor, tasks: Sequence[Task], staff_requests: Sequence[StaffRequest]) -> list[Notification]:
    result: list[Notification] = []
    ready = sum(1 for t in tasks if t.status == TaskStatus.PENDING_REVIEW)
    if ready:
        result.append(
            _summary(
                "admin-review-summary",
                NotificationCategory.TASK,
                "Tasks Ready for Review",
                f"There are {ready} tasks from supervisors ready for your review.",
                NAV_TASKS,
            )
        )

    if can_approve_staff(actor):
        pending = sum(1 for r in staff_requests if r.status == StaffRequestStatus.PENDING)
        if pending:
            result.append(
                _summary(
                    "admin-staff-request-summary",
                    NotificationCategory.EMPLOYEE_APPROVAL,
                    "Pending Staff Requests",
                    f"There are {pending} new employee requests awaiting your approval.",
                    NAV_STAFF_REQUESTS,
                )
            )
    return result


def login_summaries(
    actor: Actor,
    *,
    tickets: Sequence[Ticket],
    tasks: Sequence[Task],
    staff_requests: Sequence[StaffRequest],
    ctx: LookupContext,
) -> list[Notification]:
    """Build the "you have N pending ..." notifications for a fresh login.

    Only summaries with a positive count are returned.  A supervisor with the
    view-all capability receives both the supervisor and the admin summaries.
    """
    result: list[Notification] = []
    if actor.role == UserRole.SUPERVISOR:
        result.extend(_supervisor_summaries(actor, tickets, tasks, staff_requests, ctx))
    if is_admin_class(actor):
        result.extend(_admin_summaries(actor, tasks, staff_requests))
    if actor.role == UserRole.EMPLOYEE:
        open_tasks = sum(1 for t in tasks if t.assigned_employee_id == actor.id and t.status.is_open)
        if open_tasks:
            result.append(
                _summary(
                    "employee-tasks-summary",
                    NotificationCategory.TASK,
                    "You Have Open Tasks",
                    f"You have {open_tasks} open task(s) that require your attention.",
                    NAV_TASKS,
                )
            )
    return result
