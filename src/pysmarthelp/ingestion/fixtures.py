"""Replay fixtures.

A fixture describes an initial store, the viewer and an ordered list of
steps (collection replaces, login/logout, dismiss/navigate).  It is used by
``scripts/replay_snapshots.py`` and by tests that exercise whole sessions.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pysmarthelp.exceptions import SmartHelpConfigError


class ReplayStep(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    action: Literal["replace", "login", "logout", "dismiss", "navigate"]
    collection: str | None = None
    value: list[dict[str, Any]] = Field(default_factory=list)
    user_id: str | None = Field(default=None, alias="userId")


class ReplayFixture(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    initial: dict[str, list[dict[str, Any]]] = Field(default_factory=dict)
    actor_id: str | None = Field(default=None, alias="actorId")
    steps: list[ReplayStep] = Field(default_factory=list)


def load_fixture(path: str | Path) -> ReplayFixture:
    """Read and validate a replay fixture from a JSON file."""
    file = Path(path)
    try:
        return ReplayFixture.model_validate(json.loads(file.read_text(encoding="utf-8")))
    except (OSError, ValueError, ValidationError) as exc:
        raise SmartHelpConfigError(f"Invalid replay fixture {file}: {exc}") from exc
