"""Plugin discovery and registration for store notifications.

Sources, in load order: the ``chainvertex.plugins`` entry-point group,
then single-file plugins in an optional local directory. Built-ins are
registered directly by the Workspace.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path

import pluggy

from chainvertex.plugins.hookspecs import ChainVertexHookSpec

PROJECT_NAME = "chainvertex"
ENTRY_POINT_GROUP = "chainvertex.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Thin wrapper over ``pluggy.PluginManager`` with discovery helpers."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ChainVertexHookSpec)

    def discover_and_load(
        self,
        *,
        local_dir: Path | None = None,
        entry_points: bool = True,
    ) -> list[str]:
        """Load entry-point plugins, then any plugins found in *local_dir*.

        Returns the names of all registered plugins.
        """
        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._instantiate_class_plugins()
        if local_dir is not None:
            self._discover_local(local_dir)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def hook(self) -> pluggy.HookRelay:
        """Hook relay used by the EventBus to call implementations."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Import each ``*.py`` in *local_dir* and register its plugin classes.

        Files starting with ``_`` are skipped. A file that fails to import,
        or a class that fails to instantiate, is logged and skipped.
        """
        if not local_dir.is_dir():
            logger.debug("Local plugin directory %s does not exist", local_dir)
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"chainvertex_local_plugin_{py_file.stem}"
            spec = importlib.util.spec_from_file_location(module_name, py_file)
            if spec is None or spec.loader is None:
                logger.warning("Could not create module spec for %s", py_file)
                continue
            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            try:
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name or not _has_hook_impls(obj):
                    continue
                try:
                    self.register_plugin(obj(), name=f"{module_name}.{obj.__name__}")
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _instantiate_class_plugins(self) -> None:
        """Swap plugin classes registered by entry points for instances.

        Hooks called on a class object would leave ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not _has_hook_impls(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s", plugin_name, exc_info=True
                )
                continue
            self._pm.register(instance, name=plugin_name)


def _has_hook_impls(cls: type) -> bool:
    """True if *cls* has a method marked by ``HookimplMarker("chainvertex")``."""
    marker = f"{PROJECT_NAME}_impl"
    for name in dir(cls):
        if name.startswith("_"):
            continue
        if getattr(getattr(cls, name, None), marker, None):
            return True
    return False
