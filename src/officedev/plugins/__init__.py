"""Extension layer — plugin system via pluggy.

Discovery: entry points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

import pluggy

from officedev.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("officedev")

__all__ = ["PluginManager", "hookimpl"]
