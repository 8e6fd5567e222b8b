"""
Notification sinks that need no GUI.
"""

import logging
from typing import Callable

from .core.interfaces import NotificationSink
from .core.models import Notification, Severity
from .utils.logging import get_logger


class LoggingNotificationSink(NotificationSink):
    """Writes notifications to a logger. Used when no other sink is given."""

    LEVELS = {
        Severity.INFO: logging.INFO,
        Severity.ERROR: logging.ERROR,
    }

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or get_logger(__name__)

    def notify(self, notification: Notification) -> None:
        level = self.LEVELS.get(notification.severity, logging.INFO)
        text = notification.text.replace("\n", " ")
        self.logger.log(level, f"{notification.caption} {text}")


class CallbackNotificationSink(NotificationSink):
    """Forwards notifications to a plain callable."""

    def __init__(self, callback: Callable[[Notification], None]):
        self.callback = callback

    def notify(self, notification: Notification) -> None:
        self.callback(notification)
