from __future__ import annotations

from pysmarthelp.models import Actor, UserRole
from pysmarthelp.rules.capabilities import (
    Capability,
    can_approve_staff,
    can_handle_tickets,
    is_admin_class,
    resolve_capabilities,
)


def test_admin_holds_every_capability() -> None:
    actor = Actor(id="a", role=UserRole.ADMIN)
    assert resolve_capabilities(actor) == frozenset(Capability)


def test_plain_supervisor_holds_nothing() -> None:
    actor = Actor(id="s", role=UserRole.SUPERVISOR)
    assert resolve_capabilities(actor) == frozenset()
    assert not is_admin_class(actor)


def test_supervisor_with_delegated_permissions() -> None:
    actor = Actor(
        id="s",
        role=UserRole.SUPERVISOR,
        admin_permissions=["view_all_dashboards", "approve_staff_requests", "bogus"],
    )
    assert is_admin_class(actor)
    assert can_approve_staff(actor)
    assert not can_handle_tickets(actor)


def test_admin_style_permissions_are_ignored_for_employees() -> None:
    actor = Actor(id="e", role=UserRole.EMPLOYEE, admin_permissions=["view_all_dashboards"])
    assert not is_admin_class(actor)


def test_employee_ticket_handling() -> None:
    assert can_handle_tickets(Actor(id="e", role=UserRole.EMPLOYEE, permissions=["handle_tickets"]))
    assert not can_handle_tickets(Actor(id="e", role=UserRole.EMPLOYEE))


def test_driver_and_anonymous_hold_nothing() -> None:
    assert resolve_capabilities(Actor(id="d", role=UserRole.DRIVER)) == frozenset()
    assert resolve_capabilities(None) == frozenset()
