"""In-memory event log plus pluggy dispatch: the store's notification sink.

Each notification is appended to the event log before dispatch, so a
failed plugin call is visible and retryable. Async dispatch runs on a
single-worker ``ThreadPoolExecutor``, which keeps hooks firing in the
order the store emitted them. ``drain()`` retries failed events
synchronously.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chainvertex.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


@dataclass
class EventRecord:
    """One entry in the event log."""

    id: int
    hook_name: str
    payload: dict[str, Any]
    status: str = "pending"
    retries: int = 0
    error: str | None = None
    created: str = field(default_factory=_now_iso)
    completed: str | None = None

    def summary(self) -> dict[str, Any]:
        return {"id": self.id, "hook_name": self.hook_name, "status": self.status}


class EventBus:
    """Notification sink that dispatches store events to plugin hooks.

    Parameters:
        plugin_manager: Loaded PluginManager for hook dispatch.
        sync: Dispatch on the calling thread (useful for testing / ``--sync``).
        max_retries: Attempts before an event is marked ``dead_letter``.
        history: Completed events kept in the log. Older ones are pruned;
            pending, failed and dead-letter events are always kept.
    """

    def __init__(
        self,
        plugin_manager: PluginManager,
        *,
        sync: bool = False,
        max_retries: int = 3,
        history: int = 1000,
    ) -> None:
        self._pm = plugin_manager
        self._max_retries = max_retries
        self._history = history
        self._executor: ThreadPoolExecutor | None = None
        if not sync:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="chainvertex")
        self._futures: set[Future[None]] = set()
        self._log: list[EventRecord] = []
        self._last_id = 0
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def __call__(self, hook_name: str, payload: dict[str, Any]) -> None:
        self.dispatch(hook_name, payload)

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> int:
        """Log the event, then dispatch it (async unless ``sync``).

        Returns the event log id.
        """
        with self._lock:
            self._last_id += 1
            record = EventRecord(id=self._last_id, hook_name=hook_name, payload=dict(payload))
            self._log.append(record)

        if self._executor is None:
            self._execute_hook(record)
            return record.id

        future = self._executor.submit(self._execute_hook, record)
        with self._lock:
            self._futures.add(future)
        future.add_done_callback(self._forget_future)
        return record.id

    @property
    def events(self) -> list[EventRecord]:
        """The event log in emission order."""
        with self._lock:
            return list(self._log)

    def drain(self) -> list[dict[str, Any]]:
        """Wait for in-flight dispatches, then retry failed events synchronously.

        Returns ``{id, hook_name, status}`` for each retried event.
        """
        self._wait_futures()
        with self._lock:
            retry = [r for r in self._log if r.status in ("pending", "failed")]

        results: list[dict[str, Any]] = []
        for record in retry:
            self._execute_hook(record)
            results.append(record.summary())
        return results

    def shutdown(self) -> None:
        """Wait for pending dispatches and stop the worker thread."""
        self._wait_futures()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _execute_hook(self, record: EventRecord) -> None:
        """Call the hook and record the outcome on *record*."""
        hook_fn = getattr(self._pm.hook, record.hook_name, None)
        if hook_fn is None:
            self._mark_completed(record)
            return

        try:
            hook_fn(**record.payload)
        except Exception as exc:
            logger.warning("Hook %s failed: %s", record.hook_name, exc)
            self._mark_failed(record, str(exc))
        else:
            self._mark_completed(record)

    def _mark_completed(self, record: EventRecord) -> None:
        with self._lock:
            record.status = "completed"
            record.error = None
            record.completed = _now_iso()
            self._prune_completed()

    def _prune_completed(self) -> None:
        """Drop the oldest completed records beyond ``history``. Caller holds the lock."""
        completed = [r for r in self._log if r.status == "completed"]
        excess = len(completed) - self._history
        if excess <= 0:
            return
        dropped = {id(r) for r in completed[:excess]}
        self._log = [r for r in self._log if id(r) not in dropped]

    def _mark_failed(self, record: EventRecord, error: str) -> None:
        with self._lock:
            record.retries += 1
            record.error = error
            if record.retries >= self._max_retries:
                record.status = "dead_letter"
                record.completed = _now_iso()
            else:
                record.status = "failed"

    def _forget_future(self, future: Future[None]) -> None:
        with self._lock:
            self._futures.discard(future)

    def _wait_futures(self) -> None:
        with self._lock:
            futures, self._futures = self._futures, set()
        for future in futures:
            # _execute_hook records its own failures; this only surfaces bugs.
            future.result(timeout=30)
