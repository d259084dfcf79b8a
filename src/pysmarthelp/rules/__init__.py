"""Eligibility rules.

One pure function per (entity type, transition kind).  Every rule takes the
viewer, the transition and a :class:`~pysmarthelp.rules.context.LookupContext`
and returns a notification or ``None``; rules never raise for unmatched
transitions or dangling references.
"""

from pysmarthelp.rules.capabilities import (
    Capability,
    CapabilitySet,
    can_approve_staff,
    can_handle_tickets,
    is_admin_class,
    resolve_capabilities,
)
from pysmarthelp.rules.context import LookupContext

__all__ = [
    "Capability",
    "CapabilitySet",
    "LookupContext",
    "can_approve_staff",
    "can_handle_tickets",
    "is_admin_class",
    "resolve_capabilities",
]
