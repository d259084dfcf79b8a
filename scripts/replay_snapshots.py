#!/usr/bin/env python3
"""Replay a snapshot fixture through the notification engine.

Usage
-----
    python scripts/replay_snapshots.py session.json
    python scripts/replay_snapshots.py --verbose --initial-notify session.json

Fixture format::

    {
      "initial": {"users": [...], "tickets": [...]},
      "actorId": "sup-1",
      "steps": [
        {"action": "replace", "collection": "tickets", "value": [...]},
        {"action": "dismiss"},
        {"action": "logout"}
      ]
    }
"""

from __future__ import annotations

import argparse
import logging
import sys

from pysmarthelp import Actor, CollectionName, Dispatcher, EngineConfig, SnapshotStore, Toast
from pysmarthelp.exceptions import SmartHelpError
from pysmarthelp.ingestion.fixtures import load_fixture

MAX_VAL_WIDTH = 80


def _truncate(val: object, width: int = MAX_VAL_WIDTH) -> str:
    s = str(val)
    if len(s) <= width:
        return s
    return s[: width - 3] + "..."


def main() -> int:
    parser = argparse.ArgumentParser(description="Replay a snapshot fixture.")
    parser.add_argument("fixture", help="JSON fixture file")
    parser.add_argument("--initial-notify", action="store_true", help="Treat first snapshots as all-new")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        fixture = load_fixture(args.fixture)
        config = EngineConfig.from_env(notify_on_initial_snapshot=args.initial_notify)
        store = SnapshotStore.from_config(config, initial=fixture.initial)
    except SmartHelpError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    viewer: dict[str, Actor | None] = {"actor": None}

    def _login(user_id: str | None) -> None:
        user = next((u for u in store.read(CollectionName.USERS) if u.id == user_id), None)
        viewer["actor"] = Actor.from_user(user) if user is not None else None

    def _toast(toast: Toast) -> None:
        print(f"  [toast:{toast.severity}] {toast.message}")

    def _navigate(target: str) -> None:
        print(f"  [navigate] {target}")

    _login(fixture.actor_id)
    dispatcher = Dispatcher(
        store,
        actor_resolver=lambda: viewer["actor"],
        config=config,
        toast_sink=_toast,
        navigation_sink=_navigate,
    )
    dispatcher.sync_actor()

    for index, step in enumerate(fixture.steps, start=1):
        print(f"Step {index}: {step.action} {step.collection or step.user_id or ''}".rstrip())
        try:
            if step.action == "replace":
                store.replace(step.collection or "", step.value)
            elif step.action == "login":
                _login(step.user_id)
                dispatcher.sync_actor()
            elif step.action == "logout":
                viewer["actor"] = None
                dispatcher.sync_actor()
            elif step.action == "dismiss":
                dispatcher.dismiss()
            elif step.action == "navigate":
                dispatcher.navigate()
        except SmartHelpError as exc:
            print(f"  error: {exc}")
            continue

        current = dispatcher.current_notification
        if current is not None:
            print(f"  showing: [{current.type}] {current.title} - {_truncate(current.message)}")
            print(f"  waiting: {dispatcher.pending_count}")

    violations = store.read(CollectionName.VIOLATIONS)
    print(f"\n{len(violations)} violation(s) on record.")
    for violation in violations:
        print(f"  {violation.id}  driver={violation.driver_id}  {_truncate(violation.description)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
