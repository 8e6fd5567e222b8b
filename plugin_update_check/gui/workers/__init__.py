"""
Background workers for plugin update operations.
"""

from .plugin_update_worker import PluginUpdateWorker

__all__ = ["PluginUpdateWorker"]
