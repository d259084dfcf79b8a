from __future__ import annotations

from pysmarthelp.diff import Added, Changed
from pysmarthelp.models import Actor, NotificationCategory, StaffRequest, StaffRequestStatus
from pysmarthelp.rules.context import LookupContext
from pysmarthelp.rules.staff_requests import staff_request_created, staff_request_resolved


def _request(**kwargs: object) -> StaffRequest:
    return StaffRequest(id="r1", requested_by_supervisor_id="sup-1", new_employee_username="newbie", **kwargs)


def test_new_request_reaches_approvers_only(actors: dict[str, Actor], ctx: LookupContext) -> None:
    transition = Added(_request())
    admin = staff_request_created(actors["admin-1"], transition, ctx)
    assert admin is not None
    assert admin.type == NotificationCategory.EMPLOYEE_APPROVAL
    assert admin.navigate_to == "staffRequests"
    assert '"sam"' in admin.message

    assert staff_request_created(actors["sup-2"], transition, ctx) is not None
    assert staff_request_created(actors["sup-1"], transition, ctx) is None
    assert staff_request_created(actors["emp-1"], transition, ctx) is None


def test_already_resolved_request_is_not_announced(actors: dict[str, Actor], ctx: LookupContext) -> None:
    transition = Added(_request(status=StaffRequestStatus.APPROVED))
    assert staff_request_created(actors["admin-1"], transition, ctx) is None


def test_resolution_reaches_requesting_supervisor(actors: dict[str, Actor], ctx: LookupContext) -> None:
    old = _request()
    transition = Changed(old, old.model_copy(update={"status": StaffRequestStatus.APPROVED}))

    notification = staff_request_resolved(actors["sup-1"], transition, ctx)
    assert notification is not None
    assert notification.title == "Request approved"
    assert "newbie" in notification.message

    assert staff_request_resolved(actors["sup-2"], transition, ctx) is None
    assert staff_request_resolved(actors["admin-1"], transition, ctx) is None


def test_rejection_wording(actors: dict[str, Actor], ctx: LookupContext) -> None:
    old = _request()
    transition = Changed(old, old.model_copy(update={"status": StaffRequestStatus.REJECTED}))
    notification = staff_request_resolved(actors["sup-1"], transition, ctx)
    assert notification is not None
    assert notification.message.endswith("was rejected.")


def test_acknowledgement_is_not_a_resolution(actors: dict[str, Actor], ctx: LookupContext) -> None:
    old = _request(status=StaffRequestStatus.APPROVED)
    transition = Changed(old, old.model_copy(update={"acknowledged_by_supervisor": True}))
    assert staff_request_resolved(actors["sup-1"], transition, ctx) is None
