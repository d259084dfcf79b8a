"""Support ticket model."""

from __future__ import annotations

from pysmarthelp.models._base import EntityId, OptionalId, SmartHelpBaseModel, SmartHelpEnum, Timestamp


class TicketStatus(SmartHelpEnum):
    """Ticket lifecycle.

    ``NEW -> SEEN -> ANSWERED -> CLOSED``, plus ``ANSWERED -> SEEN`` when a
    customer re-opens the ticket.
    """

    NEW = "New"
    SEEN = "Seen"
    ANSWERED = "Answered"
    CLOSED = "Closed"
    UNKNOWN = "Unknown"


class Ticket(SmartHelpBaseModel):
    id: EntityId
    subject: str = ""
    status: TicketStatus = TicketStatus.NEW
    category_id: OptionalId = None
    sub_department_id: OptionalId = None
    assigned_employee_id: OptionalId = None
    answered_by_user_id: OptionalId = None
    created_at: Timestamp = None
