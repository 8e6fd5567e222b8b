"""Data models for plugin manifests, installed plugins and notifications."""

import importlib.metadata
import sys
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

# Version reported for a loaded plugin whose package carries no version.
DEFAULT_PLUGIN_VERSION = "0.0.0.0"


class Severity(Enum):
    """Severity of a notification."""
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A message for the user, rendered by a NotificationSink."""
    text: str
    caption: str
    severity: Severity = Severity.INFO
    use_notifications: bool = False  # prefer a tray balloon over a dialog


@dataclass(frozen=True)
class InstalledPlugin:
    """A plugin currently loaded by the host application."""
    name: str
    version: str

    @classmethod
    def from_object(cls, plugin: Any) -> 'InstalledPlugin':
        """
        Describe a loaded plugin object.

        The name is the package containing the plugin's class. The version is
        that package's ``__version__``, then its distribution version, then
        DEFAULT_PLUGIN_VERSION.
        """
        module_name = type(plugin).__module__
        namespace = module_name.rpartition('.')[0] or module_name
        version = getattr(sys.modules.get(namespace), '__version__', None)
        if not version:
            try:
                version = importlib.metadata.version(namespace.split('.')[0])
            except importlib.metadata.PackageNotFoundError:
                version = DEFAULT_PLUGIN_VERSION
        return cls(name=namespace, version=str(version))


@dataclass(frozen=True)
class PluginRecord:
    """One plugin entry from a source manifest, resolved against local plugins."""
    name: str
    current_version: str
    installed_version: str = ""  # empty when the plugin is not loaded locally
    download_url: str = ""
    download_files: Tuple[str, ...] = field(default_factory=tuple)
    source_url: str = ""

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple.
        object.__setattr__(self, 'download_files', tuple(self.download_files))

    @property
    def is_installed(self) -> bool:
        return self.installed_version != ""

    @property
    def display_version(self) -> str:
        """Get formatted version string for display."""
        if self.is_installed and self.installed_version != self.current_version:
            return f"{self.installed_version} → {self.current_version}"
        return self.current_version

    def file_url(self, file_name: str) -> str:
        return f"{self.download_url}{file_name}"

    def to_dict(self) -> Dict[str, Any]:
        """Converts the record to a dictionary."""
        data = asdict(self)
        data['download_files'] = list(self.download_files)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PluginRecord':
        """Creates a record from a dictionary."""
        return cls(
            name=data["name"],
            current_version=data["current_version"],
            installed_version=data.get("installed_version", ""),
            download_url=data.get("download_url", ""),
            download_files=tuple(data.get("download_files", ())),
            source_url=data.get("source_url", ""),
        )
