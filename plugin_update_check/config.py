"""
Configuration management for the plugin update checker.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .utils.logging import get_logger
from .utils.validators import URLValidator


@dataclass
class SourcesConfig:
    """Where plugins come from and where they are installed."""
    plugin_urls: List[str] = field(default_factory=list)
    root_dir: str = ""  # empty means the current working directory
    plugins_dir_name: str = "plugins"
    archive_name: str = "plugins.zip"
    save_to_archive: bool = False
    request_timeout: int = 30
    user_agent: str = ""


@dataclass
class NotificationConfig:
    """Configuration for user notifications."""
    use_notifications: Optional[bool] = None  # None: read the host settings, else off
    settings_file: str = ""  # INI file holding UseNotifications; empty means the platform default


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file_path: str = "plugin_update_check.log"
    max_file_size: int = 5 * 1024 * 1024
    backup_count: int = 3


class Config:
    """Main configuration class."""

    def __init__(self):
        self.sources = SourcesConfig()
        self.notifications = NotificationConfig()
        self.logging = LoggingConfig()
        self.logger = get_logger(__name__)

    @classmethod
    def load_from_file(cls, config_path: Optional[str] = None) -> 'Config':
        """Load configuration from a JSON file, keeping defaults for anything missing."""
        if config_path is None:
            config_path = cls.get_default_config_path()

        config_file = Path(config_path)
        config = cls()

        if config_file.exists():
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                config._update_from_dict(data)
                config.logger.info(f"Configuration loaded from {config_file}")
            except (OSError, ValueError) as e:
                config.logger.warning(f"Failed to load config from {config_file}: {e}")
                config.logger.info("Using default configuration")
        else:
            config.logger.info("No config file found, using defaults")

        return config

    def save_to_file(self, config_path: Optional[str] = None):
        """Save configuration to file."""
        if config_path is None:
            config_path = self.get_default_config_path()

        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)

        self.logger.info(f"Configuration saved to {config_file}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'sources': asdict(self.sources),
            'notifications': asdict(self.notifications),
            'logging': asdict(self.logging),
        }

    def _update_from_dict(self, data: Dict[str, Any]):
        """Update configuration from dictionary."""
        if not isinstance(data, dict):
            raise ValueError("configuration root must be a JSON object")

        if 'sources' in data:
            self._update_dataclass(self.sources, data['sources'])

        if 'notifications' in data:
            self._update_dataclass(self.notifications, data['notifications'])

        if 'logging' in data:
            self._update_dataclass(self.logging, data['logging'])

    def _update_dataclass(self, instance, data: Dict[str, Any]):
        """Update a dataclass instance from dictionary."""
        for key, value in data.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

    @staticmethod
    def get_default_config_path() -> str:
        """Get the default configuration file path."""
        config_dir = Path.home() / ".config" / "plugin_update_check"
        return str(config_dir / "config.json")

    def validate(self) -> bool:
        """Drop invalid plugin source URLs and fix out-of-range values. Returns True if nothing was changed."""
        validator = URLValidator()
        valid_urls = []
        for url in self.sources.plugin_urls:
            valid, error = validator.validate(url)
            if valid:
                valid_urls.append(url)
            else:
                self.logger.warning(f"Ignoring plugin source {url!r}: {error}")

        changed = len(valid_urls) != len(self.sources.plugin_urls)
        self.sources.plugin_urls = valid_urls

        timeout = self.sources.request_timeout
        try:
            seconds = int(timeout) if not isinstance(timeout, bool) else 0
        except (TypeError, ValueError):
            seconds = 0
        if seconds <= 0:
            self.logger.warning(f"request_timeout {timeout!r} is invalid, using 30 seconds")
            seconds = 30
        if seconds != timeout or type(timeout) is not int:
            self.sources.request_timeout = seconds
            changed = True

        return not changed

    def add_plugin_url(self, url: str) -> bool:
        """Add a plugin source if it is a valid URL and not already configured."""
        valid, error = URLValidator().validate(url)
        if not valid:
            self.logger.warning(f"Not adding plugin source {url!r}: {error}")
            return False
        if url in self.sources.plugin_urls:
            return False
        self.sources.plugin_urls.append(url)
        return True
