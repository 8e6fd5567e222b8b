"""
Plugin update checking functionality.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

import requests

from .. import __version__
from ..core.exceptions import (InvalidArgument, NetworkFailure, ParseFailure,
                               PluginUpdateError)
from ..core.interfaces import NotificationSink
from ..core.models import InstalledPlugin, Notification, PluginRecord, Severity
from ..notifications import LoggingNotificationSink
from ..utils.logging import get_logger
from .archive import PluginArchive
from .downloader import PluginDownloader
from .installer import PluginInstaller
from .manifest import build_records, normalize_source_url, parse_manifest

if TYPE_CHECKING:
    from ..config import Config
    from ..utils.settings import SettingsManager

DEFAULT_PLUGINS_DIR_NAME = "plugins"
DEFAULT_ARCHIVE_NAME = "plugins.zip"
DEFAULT_USER_AGENT = f"PluginUpdateCheck/{__version__}"

ERROR_CAPTION = "Error!"
UPDATE_CAPTION = "New plugin update."


class PluginUpdateChecker:
    """
    Checks plugin sources for updates and installs or removes plugin files.

    Each checker owns its HTTP session and its list of manifest URLs already
    fetched, so independent checkers do not share state. Calls on one checker
    must not overlap.
    """

    def __init__(self,
                 notification_sink: Optional[NotificationSink] = None,
                 use_notifications: Optional[bool] = None,
                 root_dir: Optional[Path] = None,
                 plugins_dir_name: str = DEFAULT_PLUGINS_DIR_NAME,
                 archive_name: str = DEFAULT_ARCHIVE_NAME,
                 session: Optional[requests.Session] = None,
                 timeout: Optional[float] = 30,
                 user_agent: str = DEFAULT_USER_AGENT):
        self.logger = get_logger(__name__)
        self.notification_sink = notification_sink or LoggingNotificationSink()
        self.use_notifications = use_notifications
        self.root_dir = Path(root_dir) if root_dir is not None else Path.cwd()
        self.plugins_dir = self.root_dir / plugins_dir_name
        self.archive_path = self.root_dir / archive_name
        self.seen_urls: List[str] = []

        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": user_agent})
        self.session = session
        self._closed = False

        self.downloader = PluginDownloader(session, timeout=timeout)
        self.installer = PluginInstaller(self.downloader, self.plugins_dir, PluginArchive(self.archive_path))

    @classmethod
    def from_config(cls, config: 'Config',
                    notification_sink: Optional[NotificationSink] = None,
                    settings: Optional['SettingsManager'] = None) -> 'PluginUpdateChecker':
        """
        Create a checker from the 'sources' and 'notifications' sections of a Config.

        When the config leaves use_notifications unset, the host application's
        UseNotifications setting is read from settings, if given.
        """
        sources = config.sources
        use_notifications = config.notifications.use_notifications
        if use_notifications is None and settings is not None:
            use_notifications = settings.use_notifications()
        return cls(
            notification_sink=notification_sink,
            use_notifications=use_notifications,
            root_dir=Path(sources.root_dir) if sources.root_dir else None,
            plugins_dir_name=sources.plugins_dir_name,
            archive_name=sources.archive_name,
            timeout=sources.request_timeout,
            user_agent=sources.user_agent or DEFAULT_USER_AGENT,
        )

    def __enter__(self) -> 'PluginUpdateChecker':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """Release the HTTP session if this checker created it."""
        if self._closed:
            return
        self._closed = True
        if self._owns_session:
            self.session.close()
            self.logger.debug("HTTP session closed")

    def check_for_updates(self, urls: Sequence[str],
                          locally_installed: Iterable[InstalledPlugin]) -> List[PluginRecord]:
        """
        Check the plugin sources for available plugins.

        Args:
            urls: Plugin source (repository) URLs.
            locally_installed: Plugins currently loaded by the host application.

        Returns:
            Records of every plugin listed by the sources not fetched before
            by this checker, in manifest order.
        """
        if urls is None:
            raise InvalidArgument("urls must not be None")
        if locally_installed is None:
            raise InvalidArgument("locally_installed must not be None")
        urls = [urls] if isinstance(urls, str) else list(urls)

        installed = list(locally_installed)
        records: List[PluginRecord] = []
        for url in urls:
            manifest_url = normalize_source_url(url)
            if manifest_url in self.seen_urls:
                self.logger.debug(f"Skipping already checked source {manifest_url}")
                continue
            try:
                records.extend(self._check_source(manifest_url, installed))
            finally:
                self.seen_urls.append(manifest_url)

        self.logger.info(f"Found {len(records)} plugin record(s) from {len(urls)} source(s)")
        return records

    def _check_source(self, manifest_url: str, installed: List[InstalledPlugin]) -> List[PluginRecord]:
        self.logger.info(f"Checking plugin source {manifest_url}")
        try:
            entries = parse_manifest(self.downloader.fetch_bytes(manifest_url), manifest_url)
        except (NetworkFailure, ParseFailure) as e:
            self.logger.error(f"Failed to read plugin source {manifest_url}: {e}")
            self._notify(
                f"Failed to download the plugins sources list.\nReason: {e}",
                ERROR_CAPTION,
                Severity.ERROR,
            )
            return []
        return build_records(entries, installed, manifest_url)

    @staticmethod
    def needs_update(record: PluginRecord) -> bool:
        """True when the plugin is installed locally at a different version."""
        return record.installed_version != "" and record.installed_version != record.current_version

    def notify_if_outdated(self, record: PluginRecord) -> bool:
        """Emit an update notification for record if it needs one."""
        if not self.needs_update(record):
            return False
        self._notify(
            f"Update {record.current_version} for plugin {record.name} is available.",
            UPDATE_CAPTION,
            Severity.INFO,
        )
        return True

    def notify_updates(self, records: Iterable[PluginRecord]) -> List[PluginRecord]:
        """Notify about every outdated record and return those records."""
        return [record for record in records if self.notify_if_outdated(record)]

    def install(self, record: PluginRecord, save_to_archive: bool = False) -> bool:
        """
        Installs the files of the plugin described by record.

        Every listed file is attempted; a failed file is reported and skipped.

        Returns:
            True if at least one file was installed.
        """
        if record is None:
            raise InvalidArgument("record must not be None")

        changed = False
        for file_name in record.download_files:
            try:
                self.installer.install_file(record, file_name, save_to_archive)
                changed = True
            except PluginUpdateError as e:
                self.logger.error(f"Failed to install {file_name} for plugin {record.name}: {e}")
                self._notify(
                    f"Failed to install the selected plugin.\nReason: {e}",
                    ERROR_CAPTION,
                    Severity.ERROR,
                )
        return changed

    def uninstall(self, record: PluginRecord, save_to_archive: bool = False) -> bool:
        """
        Uninstalls the files of the plugin described by record.

        Stops at the first failure.

        Returns:
            True if the plugin's files were removed, False on failure or
            when the record lists no files.
        """
        if record is None:
            raise InvalidArgument("record must not be None")

        try:
            for file_name in record.download_files:
                self.installer.uninstall_file(record, file_name, save_to_archive)
        except PluginUpdateError as e:
            self.logger.error(f"Failed to uninstall plugin {record.name}: {e}")
            self._notify(
                f"Failed to uninstall the selected plugin.\nReason: {e}",
                ERROR_CAPTION,
                Severity.ERROR,
            )
            return False
        return len(record.download_files) > 0

    def _notify(self, text: str, caption: str, severity: Severity):
        notification = Notification(
            text=text,
            caption=caption,
            severity=severity,
            use_notifications=bool(self.use_notifications),
        )
        try:
            self.notification_sink.notify(notification)
        except Exception as e:
            self.logger.error(f"Notification sink failed to deliver '{caption}': {e}", exc_info=True)
