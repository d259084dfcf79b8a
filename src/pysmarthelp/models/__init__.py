"""Data models for SmartHelp collections and engine payloads."""

from pysmarthelp.models._base import EntityId, IdList, OptionalId, SmartHelpBaseModel, SmartHelpEnum, Timestamp
from pysmarthelp.models.directory import Category, SubDepartment
from pysmarthelp.models.notification import Notification, NotificationCategory, Toast, ToastSeverity
from pysmarthelp.models.staff_request import StaffRequest, StaffRequestStatus
from pysmarthelp.models.task import Task, TaskStatus
from pysmarthelp.models.ticket import Ticket, TicketStatus
from pysmarthelp.models.user import Actor, User, UserRole
from pysmarthelp.models.vehicle import Vehicle
from pysmarthelp.models.violation import Violation, ViolationKind, ViolationRule, ViolationStatus

__all__ = [
    "Actor",
    "Category",
    "EntityId",
    "IdList",
    "Notification",
    "NotificationCategory",
    "OptionalId",
    "SmartHelpBaseModel",
    "SmartHelpEnum",
    "StaffRequest",
    "StaffRequestStatus",
    "SubDepartment",
    "Task",
    "TaskStatus",
    "Ticket",
    "TicketStatus",
    "Timestamp",
    "Toast",
    "ToastSeverity",
    "User",
    "UserRole",
    "Vehicle",
    "Violation",
    "ViolationKind",
    "ViolationRule",
    "ViolationStatus",
]
