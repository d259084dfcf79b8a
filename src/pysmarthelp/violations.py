"""Automated violation detection.

Runs once per evaluation cycle over the drivers and vehicles and records
fines for two conditions:

* speeding: edge-triggered on the driver's speed crossing the rule threshold;
* missed maintenance: level-triggered on an overdue maintenance date, made
  idempotent by a per-vehicle, per-date trigger key.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime

from pysmarthelp._constants import maintenance_trigger_id
from pysmarthelp.models import (
    User,
    UserRole,
    Vehicle,
    Violation,
    ViolationKind,
    ViolationRule,
    ViolationStatus,
)

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _enabled_rule(rules: Iterable[ViolationRule], kind: ViolationKind) -> ViolationRule | None:
    for rule in rules:
        if rule.kind == kind and rule.is_enabled:
            return rule
    return None


def is_speeding(speed: float | None, threshold: float) -> bool:
    return speed is not None and speed > threshold


class ViolationEvaluator:
    """Threshold-crossing detector for speeding and missed maintenance."""

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock

    def evaluate(
        self,
        *,
        previous_users: Sequence[User],
        users: Sequence[User],
        vehicles: Sequence[Vehicle],
        rules: Sequence[ViolationRule],
        existing: Sequence[Violation],
    ) -> list[Violation]:
        """Return the violations newly detected in this cycle.

        *previous_users* is the users snapshot of the prior cycle; pass the
        current users when they did not change so that no speed crossing is
        detected.  Disabled or missing rules are skipped silently.
        """
        now = self._clock()
        taken_ids = {v.id for v in existing}
        created: list[Violation] = []

        speeding = _enabled_rule(rules, ViolationKind.SPEEDING)
        if speeding is not None:
            created.extend(self._speeding(speeding, previous_users, users, vehicles, now, taken_ids))

        maintenance = _enabled_rule(rules, ViolationKind.MISSED_MAINTENANCE)
        if maintenance is not None:
            created.extend(self._missed_maintenance(maintenance, vehicles, existing, now, taken_ids))

        if created:
            _logger.debug("Detected %d new violation(s)", len(created))
        return created

    def _speeding(
        self,
        rule: ViolationRule,
        previous_users: Sequence[User],
        users: Sequence[User],
        vehicles: Sequence[Vehicle],
        now: datetime,
        taken_ids: set[str],
    ) -> list[Violation]:
        previous_speed = {u.id: u.current_speed for u in previous_users}
        result: list[Violation] = []
        for driver in users:
            if driver.role != UserRole.DRIVER:
                continue
            if not is_speeding(driver.current_speed, rule.threshold):
                continue
            if is_speeding(previous_speed.get(driver.id), rule.threshold):
                continue
            vehicle = next((v for v in vehicles if v.assigned_driver_id == driver.id), None)
            if vehicle is None:
                # The crossing is dropped, not deferred.
                _logger.debug("Driver %s crossed the speed limit without an assigned vehicle", driver.id)
                continue
            speed = driver.current_speed if driver.current_speed is not None else 0.0
            description = rule.description.replace("{speed}", _format_number(speed)).replace(
                "{threshold}", _format_number(rule.threshold)
            )
            result.append(
                Violation(
                    id=self._new_id(now, driver.id, taken_ids),
                    driver_id=driver.id,
                    vehicle_id=vehicle.id,
                    date=now,
                    description=description,
                    amount=rule.fine_amount,
                    status=ViolationStatus.PENDING,
                )
            )
        return result

    def _missed_maintenance(
        self,
        rule: ViolationRule,
        vehicles: Sequence[Vehicle],
        existing: Sequence[Violation],
        now: datetime,
        taken_ids: set[str],
    ) -> list[Violation]:
        known_triggers = {v.trigger_event_id for v in existing if v.trigger_event_id}
        result: list[Violation] = []
        for vehicle in vehicles:
            due = vehicle.next_maintenance_at
            if due is None or not due < now or vehicle.next_maintenance_date is None:
                continue
            if vehicle.assigned_driver_id is None:
                continue
            trigger_id = maintenance_trigger_id(vehicle.id, vehicle.next_maintenance_date)
            if trigger_id in known_triggers:
                continue
            known_triggers.add(trigger_id)
            result.append(
                Violation(
                    id=self._new_id(now, vehicle.id, taken_ids),
                    driver_id=vehicle.assigned_driver_id,
                    vehicle_id=vehicle.id,
                    date=now,
                    description=rule.description.replace("{date}", due.date().isoformat()),
                    amount=rule.fine_amount,
                    status=ViolationStatus.PENDING,
                    trigger_event_id=trigger_id,
                )
            )
        return result

    @staticmethod
    def _new_id(now: datetime, suffix: str, taken_ids: set[str]) -> str:
        base = f"vio_{int(now.timestamp() * 1000)}_{suffix}"
        candidate = base
        counter = 1
        while candidate in taken_ids:
            counter += 1
            candidate = f"{base}_{counter}"
        taken_ids.add(candidate)
        return candidate
