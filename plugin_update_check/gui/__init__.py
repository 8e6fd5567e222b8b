"""
Qt integration: notification rendering and background workers.
"""

from .notifier import QtNotificationSink
from .workers.plugin_update_worker import PluginUpdateWorker

__all__ = ["QtNotificationSink", "PluginUpdateWorker"]
