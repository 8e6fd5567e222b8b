"""
PluginUpdateWorker for checking, installing and uninstalling plugins in a separate thread.
"""
from typing import Any, List, Optional, Sequence, Tuple

from PySide6.QtCore import QThread, Signal

from ...core.models import InstalledPlugin, PluginRecord
from ...notifications import CallbackNotificationSink
from ...updates.checker import PluginUpdateChecker
from ...utils.logging import get_logger


class PluginUpdateWorker(QThread):
    """
    Worker thread for plugin update operations.

    Runs one action per start(), so calls on the shared checker never
    overlap. Records cross the thread boundary as dicts.
    """
    records_ready = Signal(list)  # list of PluginRecord dicts
    update_available = Signal(dict)  # PluginRecord dict
    install_finished = Signal(bool)
    uninstall_finished = Signal(bool)
    notification_received = Signal(object)  # Notification
    operation_failed = Signal(str)

    def __init__(self, checker: PluginUpdateChecker, parent=None):
        super().__init__(parent)
        self.logger = get_logger(__name__)
        self.checker = checker
        self._pending: Optional[Tuple[str, Tuple[Any, ...]]] = None

    def notification_sink(self) -> CallbackNotificationSink:
        """A sink that relays notifications to the GUI thread via notification_received."""
        return CallbackNotificationSink(self.notification_received.emit)

    def check_for_updates(self, urls: Sequence[str], locally_installed: Sequence[InstalledPlugin]):
        """Public method to trigger an update check."""
        self._submit("check", (list(urls), list(locally_installed)))

    def install(self, record_dict: dict, save_to_archive: bool = False):
        """Public method to trigger a plugin install."""
        self._submit("install", (PluginRecord.from_dict(record_dict), save_to_archive))

    def uninstall(self, record_dict: dict, save_to_archive: bool = False):
        """Public method to trigger a plugin uninstall."""
        self._submit("uninstall", (PluginRecord.from_dict(record_dict), save_to_archive))

    def _submit(self, action: str, args: Tuple[Any, ...]):
        if self.isRunning():
            self.operation_failed.emit("A plugin operation is already in progress.")
            return
        self._pending = (action, args)
        self.start()

    def run(self):
        """Main execution method for the QThread."""
        if self._pending is None:
            return
        action, args = self._pending
        self._pending = None
        self.logger.info(f"PluginUpdateWorker started for action: {action}")
        try:
            if action == "check":
                self._run_check(*args)
            elif action == "install":
                self.install_finished.emit(self.checker.install(*args))
            elif action == "uninstall":
                self.uninstall_finished.emit(self.checker.uninstall(*args))
        except Exception as e:
            self.logger.critical(f"PluginUpdateWorker: unhandled exception in {action}: {e}", exc_info=True)
            self.operation_failed.emit(f"Critical worker error: {e}")
        finally:
            self.logger.info(f"PluginUpdateWorker for action '{action}' finished.")

    def _run_check(self, urls: List[str], locally_installed: List[InstalledPlugin]):
        records = self.checker.check_for_updates(urls, locally_installed)
        for record in self.checker.notify_updates(records):
            self.update_available.emit(record.to_dict())
        self.records_ready.emit([record.to_dict() for record in records])
