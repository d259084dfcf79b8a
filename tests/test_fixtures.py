from __future__ import annotations

import json
from pathlib import Path

import pytest

from pysmarthelp.exceptions import SmartHelpConfigError
from pysmarthelp.ingestion.fixtures import load_fixture


def test_load_fixture(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text(
        json.dumps(
            {
                "initial": {"users": [{"id": "sup-1", "role": "supervisor"}]},
                "actorId": "sup-1",
                "steps": [
                    {"action": "replace", "collection": "tickets", "value": [{"id": "t1"}]},
                    {"action": "login", "userId": "admin-1"},
                    {"action": "dismiss"},
                ],
            }
        ),
        encoding="utf-8",
    )

    fixture = load_fixture(path)

    assert fixture.actor_id == "sup-1"
    assert [step.action for step in fixture.steps] == ["replace", "login", "dismiss"]
    assert fixture.steps[1].user_id == "admin-1"
    assert fixture.initial["users"][0]["role"] == "supervisor"


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"steps": [{"action": "explode"}]}),
        json.dumps({"unexpected": 1}),
    ],
)
def test_invalid_fixture_raises_config_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(SmartHelpConfigError):
        load_fixture(path)


def test_missing_fixture_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(SmartHelpConfigError):
        load_fixture(tmp_path / "absent.json")
