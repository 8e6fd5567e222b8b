"""
Tests for core data models.
"""

import sys
import types
from dataclasses import FrozenInstanceError

import pytest

from plugin_update_check.core.models import (DEFAULT_PLUGIN_VERSION,
                                             InstalledPlugin, Notification,
                                             PluginRecord, Severity)


class TestPluginRecord:
    """Test PluginRecord model."""

    def test_download_files_stored_as_tuple(self):
        record = PluginRecord("Foo", "2.0", download_files=["a.dll", "b.dll"])
        assert record.download_files == ("a.dll", "b.dll")

    def test_record_is_read_only(self):
        record = PluginRecord("Foo", "2.0")
        with pytest.raises(FrozenInstanceError):
            record.installed_version = "1.0"

    def test_is_installed(self):
        assert PluginRecord("Foo", "2.0", installed_version="1.0").is_installed is True
        assert PluginRecord("Foo", "2.0").is_installed is False

    def test_display_version(self):
        assert PluginRecord("Foo", "2.0", installed_version="1.0").display_version == "1.0 → 2.0"
        assert PluginRecord("Foo", "2.0", installed_version="2.0").display_version == "2.0"
        assert PluginRecord("Foo", "2.0").display_version == "2.0"

    def test_file_url(self):
        record = PluginRecord("Foo", "2.0", download_url="http://x/f/2.0/")
        assert record.file_url("foo.dll") == "http://x/f/2.0/foo.dll"

    def test_dict_round_trip(self):
        record = PluginRecord(
            name="Foo",
            current_version="2.0",
            installed_version="1.0",
            download_url="http://x/f/2.0/",
            download_files=("foo.dll",),
            source_url="http://x/master/plugins.xml",
        )
        data = record.to_dict()
        assert data["download_files"] == ["foo.dll"]
        assert PluginRecord.from_dict(data) == record


class TestInstalledPlugin:
    """Test InstalledPlugin.from_object."""

    def test_uses_package_version(self, monkeypatch):
        package = types.ModuleType("fakeplugins")
        package.__version__ = "1.2.3"
        monkeypatch.setitem(sys.modules, "fakeplugins", package)

        plugin_class = type("SamplePlugin", (), {"__module__": "fakeplugins.sample"})

        installed = InstalledPlugin.from_object(plugin_class())
        assert installed == InstalledPlugin(name="fakeplugins", version="1.2.3")

    def test_falls_back_to_default_version(self, monkeypatch):
        monkeypatch.delitem(sys.modules, "no_such_plugin_package_xyz", raising=False)
        plugin_class = type("Orphan", (), {"__module__": "no_such_plugin_package_xyz.core"})

        installed = InstalledPlugin.from_object(plugin_class())
        assert installed.name == "no_such_plugin_package_xyz"
        assert installed.version == DEFAULT_PLUGIN_VERSION


class TestNotification:
    """Test Notification and Severity."""

    def test_defaults(self):
        notification = Notification("text", "caption")
        assert notification.severity == Severity.INFO
        assert notification.use_notifications is False
