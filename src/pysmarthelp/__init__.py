"""pysmarthelp - snapshot-diff notification engine for the SmartHelp desk."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysmarthelp")
except PackageNotFoundError:
    __version__ = "0+local"
from pysmarthelp.config import EngineConfig
from pysmarthelp.diff import Added, Changed, SnapshotDiff, diff
from pysmarthelp.dispatcher import Dispatcher
from pysmarthelp.exceptions import (
    SmartHelpConfigError,
    SmartHelpError,
    SnapshotError,
    SnapshotValidationError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    UnknownCollectionError,
)
from pysmarthelp.models import (
    Actor,
    Category,
    Notification,
    NotificationCategory,
    StaffRequest,
    StaffRequestStatus,
    SubDepartment,
    Task,
    TaskStatus,
    Ticket,
    TicketStatus,
    Toast,
    ToastSeverity,
    User,
    UserRole,
    Vehicle,
    Violation,
    ViolationKind,
    ViolationRule,
    ViolationStatus,
)
from pysmarthelp.notification_queue import NotificationQueue
from pysmarthelp.state.events import CollectionName, SnapshotReplaced
from pysmarthelp.state.storage import JsonFileBackend, MemoryBackend, StorageBackend
from pysmarthelp.state.store import SnapshotStore
from pysmarthelp.violations import ViolationEvaluator

__all__ = [
    "__version__",
    "Actor",
    "Added",
    "Category",
    "Changed",
    "CollectionName",
    "Dispatcher",
    "EngineConfig",
    "JsonFileBackend",
    "MemoryBackend",
    "Notification",
    "NotificationCategory",
    "NotificationQueue",
    "SmartHelpConfigError",
    "SmartHelpError",
    "SnapshotDiff",
    "SnapshotError",
    "SnapshotReplaced",
    "SnapshotStore",
    "SnapshotValidationError",
    "StaffRequest",
    "StaffRequestStatus",
    "StorageBackend",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "SubDepartment",
    "Task",
    "TaskStatus",
    "Ticket",
    "TicketStatus",
    "Toast",
    "ToastSeverity",
    "UnknownCollectionError",
    "User",
    "UserRole",
    "Vehicle",
    "Violation",
    "ViolationEvaluator",
    "ViolationKind",
    "ViolationRule",
    "ViolationStatus",
    "diff",
]
