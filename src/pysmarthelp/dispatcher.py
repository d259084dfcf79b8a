"""Notification dispatcher.

Wires the snapshot store to the transition detector, the rule table, the
violation evaluator and the single-flight notification queue.

Every replace of a tracked collection runs exactly one evaluation pass:

1. read the viewer once;
2. diff the new snapshot against the tracker's previous value, per rule
   table entry, and run the matching rules for the viewer;
3. enqueue the resulting notifications in discovery order;
4. remember the new snapshot as "previous";
5. run the violation evaluator for driver, vehicle and violation-rule
   replaces.

Replaces issued while a pass runs (the violation write-back, or a listener
writing to the store) are queued and processed after it, in order.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from typing import Any

from pysmarthelp._constants import STORAGE_FAILED_MESSAGE, STORAGE_FULL_MESSAGE
from pysmarthelp._redact import redact_for_log
from pysmarthelp.config import EngineConfig
from pysmarthelp.diff import Added, Changed, diff
from pysmarthelp.exceptions import StorageError, StorageWriteError
from pysmarthelp.models import Actor, Notification, Toast, ToastSeverity
from pysmarthelp.notification_queue import NotificationQueue
from pysmarthelp.rules.context import LookupContext
from pysmarthelp.rules.summaries import login_summaries
from pysmarthelp.rules.table import DEFAULT_RULE_TABLE, RuleEntry, entries_for
from pysmarthelp.state.events import CollectionName, SnapshotReplaced
from pysmarthelp.state.store import SnapshotStore
from pysmarthelp.state.tracker import PreviousSnapshotTracker
from pysmarthelp.violations import ViolationEvaluator

_logger = logging.getLogger(__name__)

ActorResolver = Callable[[], Actor | None]
ToastSink = Callable[[Toast], None]
NavigationSink = Callable[[str], None]

_VIOLATION_INPUTS = (CollectionName.USERS, CollectionName.VEHICLES, CollectionName.VIOLATION_RULES)


class Dispatcher:
    """Single owner of the previous-snapshot tracker and the notification queue.

    Usage::

        store = SnapshotStore()
        dispatcher = Dispatcher(store, actor_resolver=lambda: session.actor)
        store.replace("tickets", [*store.read("tickets"), ticket])
        dispatcher.current_notification
    """

    def __init__(
        self,
        store: SnapshotStore,
        *,
        actor_resolver: ActorResolver,
        config: EngineConfig | None = None,
        rule_table: tuple[RuleEntry, ...] = DEFAULT_RULE_TABLE,
        evaluator: ViolationEvaluator | None = None,
        toast_sink: ToastSink | None = None,
        navigation_sink: NavigationSink | None = None,
        id_clock: Callable[[], float] = time.time,
        prime: bool = True,
    ) -> None:
        self._store = store
        self._actor_resolver = actor_resolver
        self._config = config or EngineConfig()
        self._rule_table = rule_table
        self._evaluator = evaluator or ViolationEvaluator()
        self._toast_sink = toast_sink
        self._navigation_sink = navigation_sink
        self._id_clock = id_clock

        self._tracker = PreviousSnapshotTracker()
        self._queue = NotificationQueue()
        self._lock = threading.RLock()
        self._pending: deque[SnapshotReplaced] = deque()
        self._draining = False
        self._active_actor: Actor | None = None
        self._last_notification_id = 0

        if prime:
            self._tracker.prime(store)
        self._unsubscribe: Callable[[], None] | None = store.subscribe(self.handle_replace)
        store.set_write_error_handler(self._on_write_error)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def prime(self) -> None:
        """Re-seed the tracker from the store (e.g. after ``store.load()``)."""
        with self._lock:
            self._tracker.prime(self._store)

    def close(self) -> None:
        """Stop listening to the store."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._store.set_write_error_handler(None)

    def sync_actor(self) -> Actor | None:
        """Re-read the viewer outside of a pass (call after login/logout)."""
        with self._lock:
            return self._sync_actor()

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    @property
    def current_notification(self) -> Notification | None:
        return self._queue.current()

    @property
    def pending_count(self) -> int:
        return self._queue.pending_count

    def dismiss(self) -> Notification | None:
        """Dismiss the displayed notification; returns the next one, if any."""
        with self._lock:
            return self._queue.dismiss()

    def navigate(self) -> str | None:
        """Act on the displayed notification.

        Emits its navigation target to the navigation sink and dismisses it.
        Returns the emitted target, or ``None`` when nothing is displayed.
        """
        with self._lock:
            notification = self._queue.current()
            if notification is None:
                return None
            if self._navigation_sink is not None:
                self._navigation_sink(notification.navigate_to)
            self._queue.dismiss()
            return notification.navigate_to

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def handle_replace(self, event: SnapshotReplaced) -> None:
        """Store listener: queue the replace and drain unless a pass is running."""
        with self._lock:
            self._pending.append(event)
            if self._draining:
                return
            self._draining = True
            try:
                while self._pending:
                    queued = self._pending.popleft()
                    try:
                        self._run_pass(queued)
                    except Exception:
                        self._skip_pending(queued)
                        raise
            finally:
                self._draining = False

    def _skip_pending(self, failed: SnapshotReplaced) -> None:
        """Drop the queued replaces after a failed pass.

        Their snapshots are remembered unevaluated so that the tracker stays
        in step with the store and nothing is announced twice later.
        """
        skipped = [failed, *self._pending]
        self._pending.clear()
        for event in skipped:
            self._tracker.remember(event.collection, event.value)
        _logger.warning("Pass for %s failed; skipped %d replace(s)", failed.collection, len(skipped))

    def _run_pass(self, event: SnapshotReplaced) -> None:
        name = event.collection
        current = event.value
        previous = self._tracker.get(name)
        actor = self._sync_actor()

        if self._config.trace_enabled:
            _logger.debug("Pass for %s: %s", name, redact_for_log(list(current)))

        produced = 0
        if actor is not None:
            ctx = self._lookup_context()
            for entry in entries_for(name, self._rule_table):
                produced += self._apply_entry(entry, actor, previous, current, ctx)

        self._tracker.remember(name, current)
        if name in _VIOLATION_INPUTS and previous is not None:
            if name == CollectionName.USERS:
                self._record_violations(actor, previous_users=previous, users=current)
            elif name == CollectionName.VEHICLES:
                users = self._store.read(CollectionName.USERS)
                self._record_violations(actor, previous_users=users, users=users, vehicles=current)
            else:
                # A rule change re-checks standing conditions; speeds did not move.
                users = self._store.read(CollectionName.USERS)
                self._record_violations(actor, previous_users=users, users=users)

        _logger.debug("Pass for %s produced %d notification(s)", name, produced)

    def _apply_entry(
        self,
        entry: RuleEntry,
        actor: Actor,
        previous: tuple[Any, ...] | None,
        current: tuple[Any, ...],
        ctx: LookupContext,
    ) -> int:
        changes = diff(
            previous,
            current,
            fields=entry.fields,
            treat_missing_as_empty=self._config.notify_on_initial_snapshot,
        )
        if changes.is_empty:
            return 0
        produced = 0
        if entry.on_added:
            for item in changes.added:
                transition = Added(item)
                for rule in entry.on_added:
                    notification = rule(actor, transition, ctx)
                    if notification is not None:
                        self._enqueue(notification)
                        produced += 1
        if entry.on_changed:
            for old, new in changes.changed:
                changed = Changed(old, new)
                for changed_rule in entry.on_changed:
                    notification = changed_rule(actor, changed, ctx)
                    if notification is not None:
                        self._enqueue(notification)
                        produced += 1
        return produced

    def _record_violations(
        self,
        actor: Actor | None,
        *,
        previous_users: tuple[Any, ...],
        users: tuple[Any, ...],
        vehicles: tuple[Any, ...] | None = None,
    ) -> None:
        existing = self._store.read(CollectionName.VIOLATIONS)
        created = self._evaluator.evaluate(
            previous_users=previous_users,
            users=users,
            vehicles=vehicles if vehicles is not None else self._store.read(CollectionName.VEHICLES),
            rules=self._store.read(CollectionName.VIOLATION_RULES),
            existing=existing,
        )
        if not created:
            return
        # Queued behind the current pass by handle_replace.
        self._store.replace(CollectionName.VIOLATIONS, [*existing, *created])
        _logger.info("Recorded %d automatic violation(s)", len(created))
        # Recorded without a viewer, but only announced to one.
        if actor is not None and self._config.violation_toasts_enabled:
            self._toast(f"{len(created)} new violation(s) automatically generated.", ToastSeverity.INFO)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _sync_actor(self) -> Actor | None:
        actor = self._actor_resolver()
        previous = self._active_actor
        previous_id = previous.id if previous is not None else None
        current_id = actor.id if actor is not None else None
        self._active_actor = actor
        if previous_id == current_id:
            return actor

        if previous is not None and self._config.clear_queue_on_logout:
            _logger.debug("Viewer %s logged out; dropping %d notification(s)", previous_id, len(self._queue))
            self._queue.clear()
        if previous is None and actor is not None and self._config.login_summaries_enabled:
            for notification in login_summaries(
                actor,
                tickets=self._summary_source(CollectionName.TICKETS),
                tasks=self._summary_source(CollectionName.TASKS),
                staff_requests=self._summary_source(CollectionName.STAFF_REQUESTS),
                ctx=self._lookup_context(),
            ):
                self._enqueue(notification)
        return actor

    def _summary_source(self, name: CollectionName) -> tuple[Any, ...]:
        # Items added by the replace being evaluated are announced by the rules.
        remembered = self._tracker.get(name)
        return remembered if remembered is not None else self._store.read(name)

    def _lookup_context(self) -> LookupContext:
        return LookupContext.build(
            users=self._store.read(CollectionName.USERS),
            categories=self._store.read(CollectionName.CATEGORIES),
            sub_departments=self._store.read(CollectionName.SUB_DEPARTMENTS),
        )

    def _next_notification_id(self) -> int:
        candidate = int(self._id_clock() * 1000)
        self._last_notification_id = max(candidate, self._last_notification_id + 1)
        return self._last_notification_id

    def _enqueue(self, notification: Notification) -> None:
        stamped = notification.model_copy(update={"id": self._next_notification_id()})
        _logger.debug("Enqueue %s notification for item %s", stamped.type, stamped.item_id)
        self._queue.enqueue(stamped)

    def _toast(self, message: str, severity: ToastSeverity) -> None:
        if self._toast_sink is None:
            return
        try:
            self._toast_sink(Toast(message=message, severity=severity))
        except Exception:
            _logger.debug("Toast sink failed", exc_info=True)

    def _on_write_error(self, name: CollectionName, error: StorageError) -> None:
        if isinstance(error, StorageWriteError) and error.storage_full:
            message = STORAGE_FULL_MESSAGE
        else:
            message = STORAGE_FAILED_MESSAGE.format(collection=name.value)
        self._toast(message, ToastSeverity.WARNING)
