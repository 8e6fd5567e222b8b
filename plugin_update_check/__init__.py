"""
Plugin Update Check - plugin update checker for desktop applications
"""

__version__ = "1.0.0"
__author__ = "Els_kom org."
__email__ = "elskom@users.noreply.github.com"


def get_info() -> dict:
    """Returns basic package information."""
    return {
        "name": "Plugin Update Check",
        "version": __version__,
        "description": "Checks plugin sources for updates and installs or removes plugin files.",
        "author": __author__,
        "email": __email__,
    }


from .core.exceptions import (FilesystemFailure, InvalidArgument,
                              NetworkFailure, ParseFailure, PluginUpdateError)
from .core.interfaces import NotificationSink
from .core.models import InstalledPlugin, Notification, PluginRecord, Severity
from .notifications import CallbackNotificationSink, LoggingNotificationSink
from .updates.checker import PluginUpdateChecker

__all__ = [
    "__version__",
    "get_info",
    "PluginRecord",
    "InstalledPlugin",
    "Notification",
    "Severity",
    "NotificationSink",
    "LoggingNotificationSink",
    "CallbackNotificationSink",
    "PluginUpdateError",
    "InvalidArgument",
    "NetworkFailure",
    "ParseFailure",
    "FilesystemFailure",
    "PluginUpdateChecker",
]
