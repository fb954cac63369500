"""Extension layer — notification sink and plugin system via pluggy.

Discovery: entry points (pip-installed) via pluggy, then an optional local
plugin directory.
INVARIANT: Plugin failures are warnings, never errors.
"""

from chainvertex.plugins.event_bus import EventBus
from chainvertex.plugins.manager import PluginManager

__all__ = ["EventBus", "PluginManager"]
