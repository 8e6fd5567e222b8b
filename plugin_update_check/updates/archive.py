import os
import tempfile
import zipfile
from pathlib import Path, PurePosixPath
from typing import List

from ..core.exceptions import FilesystemFailure
from ..utils.logging import get_logger


class PluginArchive:
    """
    A zip file used as a virtual plugins folder.

    Each installed plugin file is one entry named after the file. The zipfile
    module cannot delete entries in place, so removals rewrite the archive
    through a temporary file in the same directory.
    """

    def __init__(self, path: Path, compression: int = zipfile.ZIP_DEFLATED):
        self.path = Path(path)
        self.compression = compression
        self.logger = get_logger(__name__)

    def exists(self) -> bool:
        return self.path.is_file()

    def entry_names(self) -> List[str]:
        if not self.exists():
            return []
        try:
            with zipfile.ZipFile(self.path) as archive:
                return archive.namelist()
        except (OSError, zipfile.BadZipFile) as e:
            raise FilesystemFailure(f"Cannot read plugins archive: {e}", str(self.path)) from e

    def check_entry_name(self, entry_name: str):
        """Reject absolute entry names and names that climb out of the archive root."""
        parts = PurePosixPath(entry_name.replace("\\", "/")).parts
        if not parts or parts[0] == "/" or ".." in parts or ":" in parts[0]:
            raise FilesystemFailure(f"Invalid plugins archive entry name {entry_name!r}", str(self.path))

    def replace_entry(self, source: Path, entry_name: str):
        """Store source under entry_name, dropping any entry of the same name first."""
        self.check_entry_name(entry_name)
        try:
            if self.exists():
                self._rewrite_without(entry_name)
            with zipfile.ZipFile(self.path, 'a', self.compression) as archive:
                archive.write(source, entry_name)
        except (OSError, zipfile.BadZipFile) as e:
            raise FilesystemFailure(f"Cannot update plugins archive: {e}", str(self.path)) from e
        self.logger.debug(f"Stored {entry_name} in {self.path}")

    def remove_entry(self, entry_name: str) -> int:
        """
        Remove entry_name if present; delete the archive once it is empty.

        Returns:
            Number of entries left (0 when the archive is missing or was deleted).
        """
        self.check_entry_name(entry_name)
        if not self.exists():
            return 0
        try:
            remaining = self._rewrite_without(entry_name)
            if remaining == 0:
                self.path.unlink()
                self.logger.info(f"Plugins archive {self.path} is empty, deleted it")
        except (OSError, zipfile.BadZipFile) as e:
            raise FilesystemFailure(f"Cannot update plugins archive: {e}", str(self.path)) from e
        return remaining

    def _rewrite_without(self, entry_name: str) -> int:
        with zipfile.ZipFile(self.path) as source:
            infos = source.infolist()
            kept = [info for info in infos if info.filename != entry_name]
            if len(kept) == len(infos):
                return len(kept)

            fd, tmp_name = tempfile.mkstemp(prefix=self.path.name, suffix=".tmp", dir=self.path.parent)
            os.close(fd)
            try:
                with zipfile.ZipFile(tmp_name, 'w', self.compression) as target:
                    for info in kept:
                        target.writestr(info, source.read(info.filename))
            except Exception:
                Path(tmp_name).unlink(missing_ok=True)
                raise

        os.replace(tmp_name, self.path)
        return len(kept)
