"""Tests for Pydantic model parsing with SmartHelpBaseModel + SmartHelpEnum."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from pysmarthelp.models import (
    Actor,
    Notification,
    NotificationCategory,
    StaffRequest,
    Task,
    TaskStatus,
    Ticket,
    TicketStatus,
    User,
    UserRole,
    Vehicle,
    Violation,
    ViolationKind,
    ViolationRule,
)

# ------------------------------------------------------------------
# SmartHelpEnum
# ------------------------------------------------------------------


class TestSmartHelpEnum:
    def test_unknown_value_falls_back(self) -> None:
        assert TicketStatus("Escalated") == TicketStatus.UNKNOWN

    def test_case_insensitive_match(self) -> None:
        assert TaskStatus("pendingsupervisorreview") == TaskStatus.PENDING_SUPERVISOR_REVIEW
        assert UserRole("Admin") == UserRole.ADMIN

    def test_unknown_status_parses_in_model(self) -> None:
        ticket = Ticket.model_validate({"id": "t1", "status": "Escalated"})
        assert ticket.status == TicketStatus.UNKNOWN


# ------------------------------------------------------------------
# SmartHelpBaseModel
# ------------------------------------------------------------------


class TestRecordParsing:
    def test_camel_case_aliases(self) -> None:
        task = Task.model_validate(
            {
                "id": "k1",
                "title": "Audit",
                "status": "PendingReview",
                "assignedCategoryId": "billing",
                "performedByUserId": "sup-1",
                "adminFeedback": "ok",
            }
        )
        assert task.status == TaskStatus.PENDING_REVIEW
        assert task.assigned_category_id == "billing"
        assert task.performed_by_user_id == "sup-1"
        assert task.admin_feedback == "ok"

    def test_snake_case_names_are_accepted(self) -> None:
        ticket = Ticket(id="t1", assigned_employee_id="emp-1")
        assert ticket.assigned_employee_id == "emp-1"

    def test_empty_strings_mean_absent(self) -> None:
        ticket = Ticket.model_validate({"id": "t1", "assignedEmployeeId": "", "subject": "  "})
        assert ticket.assigned_employee_id is None
        assert ticket.subject == ""
        assert ticket.status == TicketStatus.NEW

    def test_numeric_ids_are_coerced_to_strings(self) -> None:
        user = User.model_validate({"id": 42, "supervisorId": 7.0, "assignedCategoryIds": [1, "", None, "b"]})
        assert user.id == "42"
        assert user.supervisor_id == "7"
        assert user.assigned_category_ids == ["1", "b"]

    def test_missing_id_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Ticket.model_validate({"subject": "orphan"})

    def test_unknown_keys_are_ignored(self) -> None:
        ticket = Ticket.model_validate({"id": "t1", "attachments": [{"dataUrl": "data:..."}]})
        assert ticket.id == "t1"

    def test_records_are_frozen(self) -> None:
        ticket = Ticket(id="t1")
        with pytest.raises(ValidationError):
            ticket.subject = "changed"  # type: ignore[misc]

    def test_to_record_uses_camel_case_and_drops_none(self) -> None:
        record = StaffRequest(id="r1", requested_by_supervisor_id="sup-1").to_record()
        assert record == {
            "id": "r1",
            "requestedBySupervisorId": "sup-1",
            "newEmployeeUsername": "",
            "status": "pending",
            "acknowledgedBySupervisor": False,
        }

    def test_created_at_accepts_epoch_millis(self) -> None:
        ticket = Ticket.model_validate({"id": "t1", "createdAt": 1_767_225_600_000})
        assert ticket.created_at == datetime(2026, 1, 1, tzinfo=UTC)


# ------------------------------------------------------------------
# Users and actors
# ------------------------------------------------------------------


class TestUsers:
    def test_speed_is_parsed_leniently(self) -> None:
        assert User.model_validate({"id": "d", "currentSpeed": "72.5"}).current_speed == 72.5
        assert User.model_validate({"id": "d", "currentSpeed": "fast"}).current_speed is None

    def test_password_hidden_from_repr(self) -> None:
        user = User(id="u", username="alice", password="hunter2")
        assert "hunter2" not in repr(user)

    def test_actor_from_user_drops_password(self) -> None:
        user = User(
            id="u",
            username="alice",
            role=UserRole.SUPERVISOR,
            password="hunter2",
            assigned_category_ids=["billing", "billing"],
        )
        actor = Actor.from_user(user)
        assert not hasattr(actor, "password")
        assert actor.assigned_category_ids == frozenset({"billing"})
        assert actor.role == UserRole.SUPERVISOR


# ------------------------------------------------------------------
# Fleet
# ------------------------------------------------------------------


class TestFleet:
    def test_rule_type_alias(self) -> None:
        rule = ViolationRule.model_validate(
            {"id": "r", "type": "speeding", "isEnabled": "true", "threshold": "60", "fineAmount": 100}
        )
        assert rule.kind == ViolationKind.SPEEDING
        assert rule.is_enabled is True
        assert rule.threshold == 60.0
        assert rule.to_record()["type"] == "speeding"

    def test_maintenance_date_kept_verbatim(self) -> None:
        vehicle = Vehicle.model_validate({"id": "v", "nextMaintenanceDate": "2026-02-01"})
        assert vehicle.next_maintenance_date == "2026-02-01"
        assert vehicle.next_maintenance_at == datetime(2026, 2, 1, tzinfo=UTC)

    def test_violation_date_round_trip(self) -> None:
        violation = Violation.model_validate({"id": "v1", "date": "2026-03-01T12:00:00Z", "amount": "150"})
        assert violation.date == datetime(2026, 3, 1, 12, tzinfo=UTC)
        assert violation.amount == 150.0
        assert Violation.model_validate(violation.to_record()) == violation


# ------------------------------------------------------------------
# Notifications
# ------------------------------------------------------------------


def test_notification_accepts_aliases() -> None:
    notification = Notification.model_validate(
        {"itemId": "t1", "type": "ticket", "title": "x", "message": "y", "navigateTo": "tickets"}
    )
    assert notification.type == NotificationCategory.TICKET
    assert notification.item_id == "t1"
    assert notification.id is None
