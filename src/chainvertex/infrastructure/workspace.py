"""Workspace — the single dependency injected into every service.

Owns the GraphStore, the single-writer lock that serializes access to it,
the optional event bus, and the optional state file:

- **Lock**: ``threading.RLock`` around every read and mutation, so
  parallel callers see the total order the engine assumes.
- **State file**: restored on construction, rewritten after each
  successful :meth:`transaction`.
- **Transactions**: all or nothing. If the body raises or the state file
  cannot be written, the store is put back as it was before the
  transaction and its notifications are discarded.
- **Events**: notifications raised inside a transaction are held until it
  commits, then forwarded to the EventBus once :meth:`init_event_bus` has
  run. Without a bus they are dropped.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from chainvertex.domain.clock import WallClock, make_clock
from chainvertex.domain.errors import GraphStoreError
from chainvertex.infrastructure.graph.store import GraphStore
from chainvertex.infrastructure.snapshot import SnapshotError, load_snapshot, save_snapshot

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from chainvertex.config.settings import ChainSettings
    from chainvertex.plugins.event_bus import EventBus

logger = logging.getLogger(__name__)


class Workspace:
    """Store plus the collaborators it needs at runtime."""

    def __init__(self, settings: ChainSettings) -> None:
        self._settings = settings
        self._lock = threading.RLock()
        self._event_bus: EventBus | None = None
        self._pending: list[tuple[str, dict[str, Any]]] | None = None
        self._state_path: Path | None = settings.resolve_path(settings.store.state_file)
        self._store = self._open_store()

    @property
    def settings(self) -> ChainSettings:
        return self._settings

    @property
    def caller(self) -> str:
        """Default caller identity for operations that need one."""
        return self._settings.store.caller

    @property
    def state_path(self) -> Path | None:
        return self._state_path

    @property
    def event_bus(self) -> EventBus | None:
        return self._event_bus

    def init_event_bus(self, *, sync: bool | None = None) -> EventBus:
        """Create the EventBus and load plugins. Idempotent."""
        if self._event_bus is not None:
            return self._event_bus

        from chainvertex.plugins.builtins.audit import AuditPlugin
        from chainvertex.plugins.event_bus import EventBus
        from chainvertex.plugins.manager import PluginManager

        plugins = self._settings.plugins
        pm = PluginManager()
        if plugins.audit:
            pm.register_plugin(AuditPlugin(), name="audit")
        pm.discover_and_load(
            local_dir=self._settings.resolve_path(plugins.local_dir),
            entry_points=plugins.entry_points,
        )

        self._event_bus = EventBus(
            pm,
            sync=self._settings.events.sync if sync is None else sync,
            max_retries=self._settings.events.max_retries,
            history=self._settings.events.history,
        )
        return self._event_bus

    @contextmanager
    def transaction(self) -> Iterator[GraphStore]:
        """Hold the write lock around a mutation, then persist state.

        On any error, from the body or from writing the state file, the
        store is rolled back and the error propagates. Notifications are
        dispatched only after the state file has been written.

        A nested transaction joins the outer one.
        """
        with self._lock:
            if self._pending is not None:
                yield self._store
                return

            before = self._store.copy()
            self._pending = []
            try:
                yield self._store
                self._persist()
            except Exception:
                self._store = before
                logger.debug("Rolled back transaction")
                raise
            finally:
                pending, self._pending = self._pending, None
            for hook_name, payload in pending:
                self._dispatch(hook_name, payload)

    @contextmanager
    def read(self) -> Iterator[GraphStore]:
        """Hold the lock for a consistent read."""
        with self._lock:
            yield self._store

    def close(self) -> None:
        """Flush pending notifications and stop the event worker."""
        if self._event_bus is not None:
            self._event_bus.drain()
            self._event_bus.shutdown()
            self._event_bus = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _open_store(self) -> GraphStore:
        kind = self._settings.store.clock
        snapshot = load_snapshot(self._state_path) if self._state_path is not None else None
        if snapshot is None:
            return GraphStore(clock=make_clock(kind), sink=self._notify)

        # A restored logical clock resumes after the newest stamp.
        clock = WallClock() if kind == "wall" else None
        try:
            store = GraphStore.from_snapshot(snapshot, clock=clock, sink=self._notify)
        except GraphStoreError as exc:
            assert self._state_path is not None
            raise SnapshotError(self._state_path, exc.message) from exc
        logger.debug("Restored state from %s", self._state_path)
        return store

    def _persist(self) -> None:
        if self._state_path is None:
            return
        save_snapshot(self._state_path, self._store.snapshot())

    def _notify(self, hook_name: str, payload: dict[str, Any]) -> None:
        if self._pending is not None:
            self._pending.append((hook_name, payload))
            return
        self._dispatch(hook_name, payload)

    def _dispatch(self, hook_name: str, payload: dict[str, Any]) -> None:
        if self._event_bus is None:
            return
        self._event_bus.dispatch(hook_name, payload)
