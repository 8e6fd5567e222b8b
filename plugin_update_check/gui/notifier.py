"""
Qt rendering of plugin update notifications.
"""
from typing import List, Optional

from PySide6.QtWidgets import QMessageBox, QSystemTrayIcon, QWidget

from ..core.interfaces import NotificationSink
from ..core.models import Notification, Severity
from ..utils.logging import get_logger


class QtNotificationSink(NotificationSink):
    """
    Shows notifications as a tray balloon when notifications are enabled and a
    tray icon is available, otherwise as a non-modal message box.

    Must be called from the GUI thread; PluginUpdateWorker relays
    notifications from its thread through a signal.
    """

    TRAY_ICONS = {
        Severity.INFO: QSystemTrayIcon.MessageIcon.Information,
        Severity.ERROR: QSystemTrayIcon.MessageIcon.Critical,
    }
    BOX_ICONS = {
        Severity.INFO: QMessageBox.Icon.Information,
        Severity.ERROR: QMessageBox.Icon.Critical,
    }

    def __init__(self, tray_icon: Optional[QSystemTrayIcon] = None,
                 parent: Optional[QWidget] = None, timeout_ms: int = 5000):
        self.tray_icon = tray_icon
        self.parent = parent
        self.timeout_ms = timeout_ms
        self.logger = get_logger(__name__)
        self._open_boxes: List[QMessageBox] = []

    def notify(self, notification: Notification) -> None:
        if notification.use_notifications and self.tray_icon is not None:
            self.tray_icon.showMessage(
                notification.caption,
                notification.text,
                self.TRAY_ICONS.get(notification.severity, QSystemTrayIcon.MessageIcon.Information),
                self.timeout_ms,
            )
            return
        self._show_message_box(notification)

    def _show_message_box(self, notification: Notification):
        box = QMessageBox(
            self.BOX_ICONS.get(notification.severity, QMessageBox.Icon.Information),
            notification.caption,
            notification.text,
            QMessageBox.StandardButton.Ok,
            self.parent,
        )
        box.setModal(False)
        # Python owns the box until the user dismisses it.
        self._open_boxes.append(box)
        box.finished.connect(lambda _result, b=box: self._open_boxes.remove(b))
        box.show()
