"""Eligibility rules for the ``tickets`` collection."""

from __future__ import annotations

from pysmarthelp._constants import NAV_TICKETS
from pysmarthelp.diff import Added, Changed
from pysmarthelp.models import Actor, Notification, NotificationCategory, Ticket, TicketStatus, UserRole
from pysmarthelp.rules.capabilities import can_handle_tickets, is_admin_class
from pysmarthelp.rules.context import LookupContext


def _ticket_notification(ticket: Ticket, title: str, message: str) -> Notification:
    return Notification(
        item_id=ticket.id,
        type=NotificationCategory.TICKET,
        title=title,
        message=message,
        navigate_to=NAV_TICKETS,
    )


def new_ticket(actor: Actor, transition: Added[Ticket], ctx: LookupContext) -> Notification | None:
    """A ticket in status ``New`` appeared.

    Admin-class viewers hear about every ticket, supervisors about tickets in
    their categories, ticket-handling employees about tickets routed to one of
    their sub-departments.
    """
    ticket = transition.item
    if ticket.status != TicketStatus.NEW:
        return None

    if is_admin_class(actor):
        category_name = ctx.category_name(ticket.category_id, "a category")
        return _ticket_notification(
            ticket,
            "New Support Ticket",
            f'A new ticket "{ticket.subject}" has been submitted to {category_name}.',
        )
    if actor.role == UserRole.SUPERVISOR:
        if ticket.category_id is not None and ticket.category_id in actor.assigned_category_ids:
            category_name = ctx.category_name(ticket.category_id, "a category")
            return _ticket_notification(
                ticket,
                "New Support Ticket",
                f'A new ticket "{ticket.subject}" has been submitted to {category_name}.',
            )
        return None
    if actor.role == UserRole.EMPLOYEE and can_handle_tickets(actor):
        if ticket.sub_department_id is not None and ticket.sub_department_id in actor.assigned_sub_department_ids:
            team = ctx.sub_department_name(ticket.sub_department_id, "your team")
            return _ticket_notification(
                ticket,
                "New Ticket For You",
                f'A new ticket for "{team}" has been submitted: "{ticket.subject}".',
            )
    return None


def ticket_assigned(actor: Actor, transition: Changed[Ticket], ctx: LookupContext) -> Notification | None:
    """The assignee moved from absent/someone else to a concrete employee.

    The assigned employee, their supervisor and admin-class viewers each get
    their own wording; an admin who is also that supervisor hears it once.
    """
    old, ticket = transition.old, transition.new
    employee_id = ticket.assigned_employee_id
    if employee_id is None or old.assigned_employee_id == employee_id:
        return None

    employee = ctx.user(employee_id)
    supervisor = ctx.user(employee.supervisor_id) if employee is not None else None

    if actor.id == employee_id:
        if supervisor is not None:
            message = f'Supervisor "{supervisor.username}" has assigned you a new ticket: "{ticket.subject}".'
        else:
            message = f'A new ticket has been assigned to you: "{ticket.subject}".'
        return _ticket_notification(ticket, "New Ticket Assignment", message)

    employee_name = ctx.username(employee_id, "an employee")
    if supervisor is not None and actor.id == supervisor.id:
        return _ticket_notification(
            ticket,
            "Team Ticket Assigned",
            f'Ticket "{ticket.subject}" was assigned to your team member, {employee_name}.',
        )
    if is_admin_class(actor):
        return _ticket_notification(
            ticket,
            "Ticket Assigned",
            f'Ticket "{ticket.subject}" has been assigned to {employee_name}.',
        )
    return None


def ticket_reopened(actor: Actor, transition: Changed[Ticket], ctx: LookupContext) -> Notification | None:
    """Status moved ``Answered -> Seen`` (the customer re-opened it)."""
    old, ticket = transition.old, transition.new
    if old.status != TicketStatus.ANSWERED or ticket.status != TicketStatus.SEEN:
        return None

    if ticket.answered_by_user_id is not None and actor.id == ticket.answered_by_user_id:
        return _ticket_notification(
            ticket,
            "Ticket Re-opened",
            f'Ticket "{ticket.subject}" has been re-opened for your review.',
        )
    if is_admin_class(actor):
        return _ticket_notification(
            ticket,
            "Ticket Re-opened",
            f'Ticket "{ticket.subject}" was re-opened by the customer.',
        )
    return None
