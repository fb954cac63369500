"""Tests for PluginManager registration and local directory discovery."""

from __future__ import annotations

import sys
from pathlib import Path

import pluggy

from chainvertex.plugins.event_bus import EventBus
from chainvertex.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("chainvertex")

_VALID_PLUGIN_SRC = """\
import pluggy

hookimpl = pluggy.HookimplMarker("chainvertex")

calls: list[dict] = []


class EdgeCapturePlugin:
    \"\"\"Captures edge_created calls.\"\"\"

    @hookimpl
    def edge_created(self, from_id: int, to_id: int, weight: int, edge_type: str) -> None:
        calls.append({"from_id": from_id, "to_id": to_id})
"""

_SYNTAX_ERROR_SRC = """\
def broken(
"""

_NO_HOOKS_SRC = """\
class PlainClass:
    def hello(self) -> str:
        return "world"
"""

_BAD_INIT_SRC = """\
import pluggy

hookimpl = pluggy.HookimplMarker("chainvertex")


class NeedsArgs:
    def __init__(self, required):
        self.required = required

    @hookimpl
    def vertex_deleted(self, vertex_id, owner):
        pass
"""


class Marker:
    @hookimpl
    def vertex_deleted(self, vertex_id: int, owner: object) -> None:
        pass


class TestRegistration:
    def test_register_and_list(self) -> None:
        pm = PluginManager()
        pm.register_plugin(Marker(), name="marker")
        assert pm.list_plugin_names() == ["marker"]

    def test_default_name_is_class_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(Marker())
        assert pm.list_plugin_names() == ["Marker"]

    def test_unregister(self) -> None:
        pm = PluginManager()
        plugin = Marker()
        pm.register_plugin(plugin)
        pm.unregister(plugin)
        assert pm.get_plugins() == []

    def test_entry_points_disabled(self) -> None:
        pm = PluginManager()
        assert pm.discover_and_load(entry_points=False) == []


class TestLocalDiscovery:
    def test_discovers_and_dispatches(self, tmp_path: Path) -> None:
        (tmp_path / "capture.py").write_text(_VALID_PLUGIN_SRC, encoding="utf-8")
        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path, entry_points=False)
        assert names == ["chainvertex_local_plugin_capture.EdgeCapturePlugin"]

        EventBus(pm, sync=True).dispatch(
            "edge_created", {"from_id": 0, "to_id": 1, "weight": 1, "edge_type": "x"}
        )
        module = sys.modules["chainvertex_local_plugin_capture"]
        assert module.calls == [{"from_id": 0, "to_id": 1}]

    def test_skips_syntax_error(self, tmp_path: Path) -> None:
        (tmp_path / "broken.py").write_text(_SYNTAX_ERROR_SRC, encoding="utf-8")
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path, entry_points=False) == []

    def test_skips_classes_without_hooks(self, tmp_path: Path) -> None:
        (tmp_path / "plain.py").write_text(_NO_HOOKS_SRC, encoding="utf-8")
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path, entry_points=False) == []

    def test_skips_underscore_files(self, tmp_path: Path) -> None:
        (tmp_path / "_private.py").write_text(_VALID_PLUGIN_SRC, encoding="utf-8")
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path, entry_points=False) == []

    def test_skips_uninstantiable_class(self, tmp_path: Path) -> None:
        (tmp_path / "needs.py").write_text(_BAD_INIT_SRC, encoding="utf-8")
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path, entry_points=False) == []

    def test_missing_directory(self, tmp_path: Path) -> None:
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path / "nope", entry_points=False) == []
