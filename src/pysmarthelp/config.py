"""Engine configuration for pysmarthelp."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pysmarthelp.exceptions import SmartHelpConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class EngineConfig:
    """Notification engine configuration.

    Parameters
    ----------
    notify_on_initial_snapshot : bool
        Treat every element of a collection's first observed snapshot as
        newly added.  Off by default so that opening a session does not
        produce a storm of "new item" notifications.
    login_summaries_enabled : bool
        Enqueue aggregate "you have N pending ..." notifications when a
        viewer logs in.
    violation_toasts_enabled : bool
        Report the number of automatically generated violations to the
        toast sink after each cycle that produced any.
    clear_queue_on_logout : bool
        Drop undelivered notifications when the viewer logs out.
    storage_dir : str or None
        Directory for the JSON file backend.  ``None`` keeps all
        collections in memory only.
    trace_enabled : bool
        Log redacted snapshot payloads at DEBUG level on every pass.
    """

    notify_on_initial_snapshot: bool = False
    login_summaries_enabled: bool = True
    violation_toasts_enabled: bool = True
    clear_queue_on_logout: bool = True
    storage_dir: str | None = None
    trace_enabled: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> EngineConfig:
        """Create configuration from ``SMARTHELP_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        SmartHelpConfigError
            If an override names an unknown field.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise SmartHelpConfigError(f"Unknown configuration field(s): {', '.join(sorted(unknown))}")

        env = os.environ
        _ENV_BOOL_MAP = {
            "SMARTHELP_NOTIFY_ON_INITIAL_SNAPSHOT": ("notify_on_initial_snapshot", False),
            "SMARTHELP_LOGIN_SUMMARIES": ("login_summaries_enabled", True),
            "SMARTHELP_VIOLATION_TOASTS": ("violation_toasts_enabled", True),
            "SMARTHELP_CLEAR_QUEUE_ON_LOGOUT": ("clear_queue_on_logout", True),
            "SMARTHELP_TRACE_ENABLED": ("trace_enabled", False),
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        storage_dir = env.get("SMARTHELP_STORAGE_DIR")
        if storage_dir and "storage_dir" not in overrides:
            config_kwargs["storage_dir"] = storage_dir

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
