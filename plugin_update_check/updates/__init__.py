"""
Plugin update system: manifest checks, downloads and installation.
"""

from .archive import PluginArchive
from .checker import PluginUpdateChecker
from .downloader import PluginDownloader
from .installer import PluginInstaller
from .manifest import ManifestEntry, normalize_source_url, parse_manifest

__all__ = [
    "PluginUpdateChecker",
    "PluginDownloader",
    "PluginInstaller",
    "PluginArchive",
    "ManifestEntry",
    "normalize_source_url",
    "parse_manifest",
]
