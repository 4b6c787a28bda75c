"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) in the ``valify.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from valify.plugins.hookspecs import hookimpl
from valify.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
