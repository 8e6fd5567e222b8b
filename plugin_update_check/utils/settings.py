from pathlib import Path
from typing import Any, Optional

from PySide6.QtCore import QSettings

from .logging import get_logger

USE_NOTIFICATIONS_KEY = "UseNotifications"


class SettingsManager:
    """Manage host application settings stored through QSettings."""

    def __init__(self, app_name: str = "PluginUpdateCheck", org_name: str = "Elskom",
                 settings_file: Optional[str] = None):
        self.app_name = app_name
        self.org_name = org_name
        self.logger = get_logger(__name__)
        if settings_file:
            Path(settings_file).parent.mkdir(parents=True, exist_ok=True)
            self.qt_settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.qt_settings = QSettings(org_name, app_name)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        return self.qt_settings.value(key, default)

    def set(self, key: str, value: Any):
        """Set a setting value."""
        self.qt_settings.setValue(key, value)
        self.qt_settings.sync()

    def remove(self, key: str):
        """Remove a setting."""
        self.qt_settings.remove(key)
        self.qt_settings.sync()

    def contains(self, key: str) -> bool:
        """Check if setting exists."""
        return self.qt_settings.contains(key)

    def use_notifications(self) -> Optional[bool]:
        """
        Read the three-state notifications flag.

        Returns:
            True or False when the key holds "1"/"0" (or a bool),
            None when it is absent, empty or unreadable.
        """
        raw = self.get(USE_NOTIFICATIONS_KEY)
        if raw is None or raw == "":
            return None
        if isinstance(raw, bool):
            return raw
        try:
            return bool(int(str(raw).strip()))
        except ValueError:
            if str(raw).strip().lower() in ("true", "false"):
                return str(raw).strip().lower() == "true"
            self.logger.warning(f"Ignoring invalid {USE_NOTIFICATIONS_KEY} setting: {raw!r}")
            return None

    def set_use_notifications(self, enabled: Optional[bool]):
        if enabled is None:
            self.remove(USE_NOTIFICATIONS_KEY)
        else:
            self.set(USE_NOTIFICATIONS_KEY, "1" if enabled else "0")
