from pathlib import Path
from typing import Optional

import requests

from ..core.exceptions import FilesystemFailure, NetworkFailure
from ..utils.logging import get_logger

CHUNK_SIZE = 8192
PARTIAL_SUFFIX = ".part"


class PluginDownloader:
    """Blocking HTTP transfers over a shared requests session."""

    def __init__(self, session: requests.Session, timeout: Optional[float] = 30):
        self.session = session
        self.timeout = timeout
        self.logger = get_logger(__name__)

    def fetch_bytes(self, url: str) -> bytes:
        """
        Download a document as raw bytes, leaving decoding to the parser.

        Raises:
            NetworkFailure: the request failed or returned an HTTP error status.
        """
        self.logger.debug(f"Fetching {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.content
        except requests.RequestException as e:
            raise NetworkFailure(str(e), url) from e

    def download(self, url: str, destination: Path) -> Path:
        """
        Download a file to destination, creating its directory if needed.

        Raises:
            NetworkFailure: the request failed or returned an HTTP error status.
            FilesystemFailure: the file could not be written.
        """
        destination = Path(destination)
        self.logger.info(f"Downloading {url} to {destination}")
        try:
            response = self.session.get(url, timeout=self.timeout, stream=True)
        except requests.RequestException as e:
            raise NetworkFailure(str(e), url) from e

        # An existing destination is only replaced once the body is fully written.
        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)
        try:
            response.raise_for_status()
            destination.parent.mkdir(parents=True, exist_ok=True)
            with open(partial, 'wb') as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
            partial.replace(destination)
        except requests.RequestException as e:
            self._discard(partial)
            raise NetworkFailure(str(e), url) from e
        except OSError as e:
            self._discard(partial)
            raise FilesystemFailure(str(e), str(destination)) from e
        finally:
            response.close()

        self.logger.debug(f"Download completed: {destination}")
        return destination

    def _discard(self, path: Path):
        """Remove a partially written file."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            self.logger.warning(f"Failed to clean up {path}: {e}")
