"""Eligibility rules for the ``employeeRequests`` collection."""

from __future__ import annotations

from pysmarthelp._constants import NAV_STAFF_REQUESTS
from pysmarthelp.diff import Added, Changed
from pysmarthelp.models import Actor, Notification, NotificationCategory, StaffRequest, StaffRequestStatus, UserRole
from pysmarthelp.rules.capabilities import can_approve_staff
from pysmarthelp.rules.context import LookupContext


def staff_request_created(actor: Actor, transition: Added[StaffRequest], ctx: LookupContext) -> Notification | None:
    request = transition.item
    if request.status != StaffRequestStatus.PENDING or not can_approve_staff(actor):
        return None

    requester = ctx.user(request.requested_by_supervisor_id)
    if requester is not None:
        message = (
            f'Supervisor "{requester.username}" has requested a new employee account '
            f'for "{request.new_employee_username}".'
        )
    else:
        message = f'A new employee account for "{request.new_employee_username}" has been requested.'
    return Notification(
        item_id=request.id,
        type=NotificationCategory.EMPLOYEE_APPROVAL,
        title="New Staff Request",
        message=message,
        navigate_to=NAV_STAFF_REQUESTS,
    )


def staff_request_resolved(
    actor: Actor, transition: Changed[StaffRequest], ctx: LookupContext
) -> Notification | None:
    """Tell the requesting supervisor once the request leaves ``pending``."""
    old, request = transition.old, transition.new
    if old.status != StaffRequestStatus.PENDING or request.status == StaffRequestStatus.PENDING:
        return None
    if actor.role != UserRole.SUPERVISOR or actor.id != request.requested_by_supervisor_id:
        return None

    outcome = request.status.value
    return Notification(
        item_id=request.id,
        type=NotificationCategory.EMPLOYEE_APPROVAL,
        title=f"Request {outcome}",
        message=f'Your request for employee "{request.new_employee_username}" was {outcome}.',
        navigate_to=NAV_STAFF_REQUESTS,
    )
