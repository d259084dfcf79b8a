"""Capability resolution.

Every eligibility rule asks the same questions of the viewer ("may they see
everything?", "may they approve staff?").  They are answered here once, as a
set of capabilities, so rules read as membership tests.
"""

from __future__ import annotations

from enum import StrEnum

from pysmarthelp.models.user import Actor, UserRole


class Capability(StrEnum):
    VIEW_ALL_DASHBOARDS = "view_all_dashboards"
    APPROVE_STAFF_REQUESTS = "approve_staff_requests"
    HANDLE_TICKETS = "handle_tickets"


CapabilitySet = frozenset[Capability]

_ADMIN_STYLE: frozenset[Capability] = frozenset(
    {Capability.VIEW_ALL_DASHBOARDS, Capability.APPROVE_STAFF_REQUESTS}
)
_EMPLOYEE_STYLE: frozenset[Capability] = frozenset({Capability.HANDLE_TICKETS})


def _known(values: frozenset[str], allowed: frozenset[Capability]) -> set[Capability]:
    return {Capability(value) for value in values if value in allowed}


def resolve_capabilities(actor: Actor | None) -> CapabilitySet:
    """Return the capabilities *actor* holds.

    Admins hold every capability.  Supervisors hold the admin-style
    capabilities delegated to them, employees the employee-level ones granted
    to them.  Drivers and anonymous viewers hold none.
    """
    if actor is None:
        return frozenset()
    if actor.role == UserRole.ADMIN:
        return frozenset(Capability)
    if actor.role == UserRole.SUPERVISOR:
        return frozenset(_known(actor.admin_permissions, _ADMIN_STYLE))
    if actor.role == UserRole.EMPLOYEE:
        return frozenset(_known(actor.permissions, _EMPLOYEE_STYLE))
    return frozenset()


def is_admin_class(actor: Actor | None) -> bool:
    """Admin, or a supervisor allowed to view every dashboard."""
    return Capability.VIEW_ALL_DASHBOARDS in resolve_capabilities(actor)


def can_approve_staff(actor: Actor | None) -> bool:
    return Capability.APPROVE_STAFF_REQUESTS in resolve_capabilities(actor)


def can_handle_tickets(actor: Actor | None) -> bool:
    return Capability.HANDLE_TICKETS in resolve_capabilities(actor)

