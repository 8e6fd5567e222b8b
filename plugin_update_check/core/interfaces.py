from abc import ABC, abstractmethod

from .models import Notification


class NotificationSink(ABC):
    """Abstract base class for notification consumers (GUI, logger, ...)."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Deliver a notification. Must not block on user interaction."""
        pass
