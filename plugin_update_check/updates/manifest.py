"""
Plugin source manifests.

A source publishes ``master/plugins.xml``::

    <Plugins>
      <Plugin Name="..." Version="..." DownloadUrl="...">
        <DownloadFile Name="..."/>
      </Plugin>
    </Plugins>
"""

import urllib.parse
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from ..core.exceptions import ParseFailure
from ..core.models import InstalledPlugin, PluginRecord

GITHUB_WEB_HOSTS = ("github.com", "www.github.com")
GITHUB_RAW_HOST = "raw.githubusercontent.com"
MANIFEST_PATH = "master/plugins.xml"


@dataclass(frozen=True)
class ManifestEntry:
    """A single <Plugin> element."""
    name: str
    version: str
    download_url: str
    download_files: Tuple[str, ...]

    @property
    def versioned_download_url(self) -> str:
        return f"{self.download_url}/{self.version}/"


def normalize_source_url(url: str) -> str:
    """
    Turn a plugin source URL into the URL of its manifest.

    GitHub web URLs are pointed at the raw content host, then
    ``master/plugins.xml`` is appended.
    """
    parsed = urllib.parse.urlsplit(url)
    if parsed.netloc.lower() in GITHUB_WEB_HOSTS:
        url = urllib.parse.urlunsplit(parsed._replace(scheme="https", netloc=GITHUB_RAW_HOST))
    separator = "" if url.endswith("/") else "/"
    return f"{url}{separator}{MANIFEST_PATH}"


def _required(element: ET.Element, attribute: str, source_url: str) -> str:
    value = element.get(attribute)
    if value is None:
        raise ParseFailure(
            f"<{element.tag}> element is missing the required '{attribute}' attribute.",
            source_url,
        )
    return value


def parse_manifest(text: Union[str, bytes], source_url: str = "") -> List[ManifestEntry]:
    """
    Parse manifest XML.

    Pass the response body as bytes so the XML declaration and any byte
    order mark decide the encoding.

    Raises:
        ParseFailure: the XML is malformed or a required attribute is missing.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ParseFailure(f"Malformed plugins sources list: {e}", source_url) from e

    entries = []
    for element in root.findall("Plugin"):
        entries.append(ManifestEntry(
            name=_required(element, "Name", source_url),
            version=_required(element, "Version", source_url),
            download_url=_required(element, "DownloadUrl", source_url),
            download_files=tuple(
                _required(download_file, "Name", source_url)
                for download_file in element.iter("DownloadFile")
            ),
        ))
    return entries


def build_records(entries: Sequence[ManifestEntry],
                  locally_installed: Sequence[InstalledPlugin],
                  source_url: str = "") -> List[PluginRecord]:
    """
    Resolve manifest entries against locally installed plugins.

    Every installed plugin whose name equals an entry's name yields its own
    record; an entry nobody matches yields one record with no installed version.
    """
    records = []
    for entry in entries:
        matches = [plugin for plugin in locally_installed if plugin.name == entry.name]
        installed_versions = [plugin.version for plugin in matches] or [""]
        for installed_version in installed_versions:
            records.append(PluginRecord(
                name=entry.name,
                current_version=entry.version,
                installed_version=installed_version,
                download_url=entry.versioned_download_url,
                download_files=entry.download_files,
                source_url=source_url,
            ))
    return records
