"""Internal constants shared across the library."""

from __future__ import annotations

# ------------------------------------------------------------------
# Navigation target tokens
# ------------------------------------------------------------------

NAV_TICKETS = "tickets"
NAV_TASKS = "tasks"
NAV_STAFF_REQUESTS = "staffRequests"
NAV_MANAGE_TEAM = "manageTeam"

# ------------------------------------------------------------------
# Messages
# ------------------------------------------------------------------

STORAGE_FULL_MESSAGE = "Could not save. Storage is full. Try using smaller files or removing unneeded data."
STORAGE_FAILED_MESSAGE = "Could not save {collection}. Changes are kept for this session only."

# ------------------------------------------------------------------
# Violation keys
# ------------------------------------------------------------------


def maintenance_trigger_id(vehicle_id: str, maintenance_date: str) -> str:
    """Idempotence key for one missed maintenance date on one vehicle."""
    return f"maintenance-{vehicle_id}-{maintenance_date}"
