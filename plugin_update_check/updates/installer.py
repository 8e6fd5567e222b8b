import threading
from pathlib import Path

from ..core.exceptions import FilesystemFailure
from ..core.models import PluginRecord
from ..utils.logging import get_logger
from .archive import PluginArchive
from .downloader import PluginDownloader


class PluginInstaller:
    """Places plugin files in the plugins directory or the plugins archive."""

    def __init__(self, downloader: PluginDownloader, plugins_dir: Path, archive: PluginArchive):
        self.downloader = downloader
        self.plugins_dir = Path(plugins_dir)
        self.archive = archive
        self.logger = get_logger(__name__)
        self._archive_lock = threading.Lock()

    def file_path(self, file_name: str) -> Path:
        """
        Path of a plugin file inside the plugins directory.

        Raises:
            FilesystemFailure: file_name points outside the plugins directory.
        """
        plugins_dir = self.plugins_dir.resolve()
        resolved = (plugins_dir / file_name).resolve()
        if plugins_dir not in resolved.parents:
            raise FilesystemFailure(
                f"Plugin file name {file_name!r} points outside {self.plugins_dir}", str(resolved)
            )
        return self.plugins_dir / file_name

    def install_file(self, record: PluginRecord, file_name: str, save_to_archive: bool):
        """
        Download one plugin file.

        With save_to_archive the file ends up as an archive entry and the
        loose copy is removed.

        Raises:
            NetworkFailure: the download failed.
            FilesystemFailure: the file or archive could not be written.
        """
        path = self.downloader.download(record.file_url(file_name), self.file_path(file_name))
        if save_to_archive:
            with self._archive_lock:
                self.archive.replace_entry(path, file_name)
            self._delete(path)
        self.logger.info(f"Installed {file_name} for plugin {record.name} {record.current_version}")

    def uninstall_file(self, record: PluginRecord, file_name: str, save_to_archive: bool):
        """
        Remove one plugin file from disk and, with save_to_archive, from the archive.

        Raises:
            FilesystemFailure: the file or archive could not be modified.
        """
        path = self.file_path(file_name)
        if path.exists():
            self._delete(path)
        if save_to_archive:
            with self._archive_lock:
                self.archive.remove_entry(file_name)
        self.logger.info(f"Uninstalled {file_name} of plugin {record.name}")

    def _delete(self, path: Path):
        try:
            path.unlink()
        except OSError as e:
            raise FilesystemFailure(f"Cannot delete {path}: {e}", str(path)) from e
