"""Shared pytest fixtures for chainvertex tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from chainvertex.config.settings import ChainSettings
from chainvertex.infrastructure.graph.store import GraphStore
from chainvertex.infrastructure.workspace import Workspace


class RecordingSink:
    """Notification sink that keeps every ``(hook_name, payload)`` it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, hook_name: str, payload: dict[str, Any]) -> None:
        self.events.append((hook_name, payload))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Restore root and package logger state after each test.

    The CLI reconfigures logging on every invocation, binding a handler to
    the runner's stderr.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("chainvertex")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def store(sink: RecordingSink) -> GraphStore:
    """Empty store wired to a recording sink."""
    return GraphStore(sink=sink)


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ChainSettings:
    """Settings rooted at a temp dir with no config file, no plugins, sync events."""
    monkeypatch.delenv("CHAINVERTEX_CONFIG", raising=False)
    base = ChainSettings.from_cli(root=tmp_path)
    return base.with_overrides(
        store={"caller": "alice"},
        events={"sync": True},
        plugins={"audit": False, "entry_points": False},
    )


@pytest.fixture
def workspace(settings: ChainSettings) -> Iterator[Workspace]:
    """In-memory workspace (no state file) with its event bus initialized."""
    ws = Workspace(settings)
    ws.init_event_bus()
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    return tmp_path / "graph.json"


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty temp dir so no stray config is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CHAINVERTEX_CONFIG", raising=False)
    for var in ("CHAINVERTEX_STORE__CALLER", "CHAINVERTEX_STORE__STATE_FILE"):
        monkeypatch.delenv(var, raising=False)
