"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin notification failures are warnings, never errors.
"""

from cfxlink.plugins.hookspecs import hookimpl
from cfxlink.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
