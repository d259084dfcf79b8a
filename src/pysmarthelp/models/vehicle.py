"""Fleet vehicle model."""

from __future__ import annotations

from datetime import datetime

from pysmarthelp.ingestion.normalize import parse_timestamp
from pysmarthelp.models._base import EntityId, OptionalId, SmartHelpBaseModel


class Vehicle(SmartHelpBaseModel):
    """A fleet vehicle.

    ``next_maintenance_date`` is kept exactly as persisted: it is part of the
    missed-maintenance idempotence key, so re-serializing it must not change it.
    """

    id: EntityId
    plate_number: str = ""
    make: str = ""
    model: str = ""
    assigned_driver_id: OptionalId = None
    next_maintenance_date: str | None = None

    @property
    def next_maintenance_at(self) -> datetime | None:
        """Parsed ``next_maintenance_date`` as an aware UTC datetime."""
        return parse_timestamp(self.next_maintenance_date)
