"""Declarative rule table.

Each entry binds a collection and the fields whose change matters to the
rules evaluated for added and changed elements.  The dispatcher iterates the
table in order; the full rule set is therefore enumerable and testable
without a store.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pysmarthelp.diff import Added, Changed
from pysmarthelp.models import Actor, Notification
from pysmarthelp.rules import staff_requests, tasks, tickets
from pysmarthelp.rules.context import LookupContext
from pysmarthelp.state.events import CollectionName

AddedRule = Callable[[Actor, Added[Any], LookupContext], Notification | None]
ChangedRule = Callable[[Actor, Changed[Any], LookupContext], Notification | None]


@dataclass(frozen=True)
class RuleEntry:
    """One (collection, field selector, rule set) row.

    ``fields`` selects what counts as "changed"; ``None`` means any field.
    """

    name: str
    collection: CollectionName
    fields: tuple[str, ...] | None = None
    on_added: tuple[AddedRule, ...] = ()
    on_changed: tuple[ChangedRule, ...] = ()


DEFAULT_RULE_TABLE: tuple[RuleEntry, ...] = (
    RuleEntry(
        name="ticket-created",
        collection=CollectionName.TICKETS,
        on_added=(tickets.new_ticket,),
    ),
    RuleEntry(
        name="ticket-assignment",
        collection=CollectionName.TICKETS,
        fields=("assigned_employee_id",),
        on_changed=(tickets.ticket_assigned,),
    ),
    RuleEntry(
        name="ticket-reopened",
        collection=CollectionName.TICKETS,
        fields=("status",),
        on_changed=(tickets.ticket_reopened,),
    ),
    RuleEntry(
        name="task-created",
        collection=CollectionName.TASKS,
        on_added=(tasks.new_task,),
    ),
    RuleEntry(
        name="task-status",
        collection=CollectionName.TASKS,
        fields=("status",),
        on_changed=(
            tasks.task_submitted_to_supervisor,
            tasks.task_submitted_to_admin,
            tasks.task_approved,
            tasks.task_rejected,
        ),
    ),
    RuleEntry(
        name="staff-request-created",
        collection=CollectionName.STAFF_REQUESTS,
        on_added=(staff_requests.staff_request_created,),
    ),
    RuleEntry(
        name="staff-request-resolved",
        collection=CollectionName.STAFF_REQUESTS,
        fields=("status",),
        on_changed=(staff_requests.staff_request_resolved,),
    ),
)


def entries_for(collection: CollectionName, table: tuple[RuleEntry, ...] = DEFAULT_RULE_TABLE) -> list[RuleEntry]:
    return [entry for entry in table if entry.collection == collection]
