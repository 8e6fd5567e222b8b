"""
Core data models and interfaces for plugin update checking.
"""

from .exceptions import (FilesystemFailure, InvalidArgument, NetworkFailure,
                         ParseFailure, PluginUpdateError)
from .interfaces import NotificationSink
from .models import InstalledPlugin, Notification, PluginRecord, Severity

__all__ = [
    "PluginRecord",
    "InstalledPlugin",
    "Notification",
    "Severity",
    "NotificationSink",
    "PluginUpdateError",
    "InvalidArgument",
    "NetworkFailure",
    "ParseFailure",
    "FilesystemFailure",
]
