"""
Pytest configuration and fixtures for plugin update check tests.
"""

import os
from typing import Dict, List
from unittest.mock import Mock

import pytest
import requests

from plugin_update_check.core.models import InstalledPlugin
from plugin_update_check.notifications import CallbackNotificationSink
from plugin_update_check.updates.checker import PluginUpdateChecker

SOURCE_URL = "https://github.com/Elskom/plugins"
MANIFEST_URL = "https://raw.githubusercontent.com/Elskom/plugins/master/plugins.xml"

FOO_MANIFEST = (
    '<Plugins>'
    '<Plugin Name="Foo" Version="2.0" DownloadUrl="http://x/f">'
    '<DownloadFile Name="foo.dll"/>'
    '</Plugin>'
    '</Plugins>'
)

MULTI_FILE_MANIFEST = (
    '<Plugins>'
    '<Plugin Name="Bar" Version="1.1" DownloadUrl="http://x/b">'
    '<DownloadFile Name="bar.dll"/>'
    '<DownloadFile Name="bar.pdb"/>'
    '</Plugin>'
    '</Plugins>'
)


def make_response(status: int = 200, text: str = "", content: bytes = b"") -> Mock:
    """Create a mock requests.Response."""
    response = Mock()
    response.status_code = status
    response.text = text
    response.content = content or text.encode("utf-8")
    response.iter_content = Mock(return_value=[content])
    if status >= 400:
        response.raise_for_status = Mock(side_effect=requests.HTTPError(f"{status} Client Error"))
    else:
        response.raise_for_status = Mock()
    response.close = Mock()
    return response


class FakeSession:
    """Stands in for requests.Session, serving canned responses by URL."""

    def __init__(self, routes: Dict[str, Mock] = None):
        self.routes = routes or {}
        self.calls: List[str] = []
        self.headers = {}
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append(url)
        route = self.routes.get(url)
        if isinstance(route, Exception):
            raise route
        return route if route is not None else make_response(404)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    """A session serving the Foo manifest and its file."""
    return FakeSession({
        MANIFEST_URL: make_response(text=FOO_MANIFEST),
        "http://x/f/2.0/foo.dll": make_response(content=b"foo-v2"),
    })


@pytest.fixture
def notifications():
    """Collected notifications."""
    return []


@pytest.fixture
def checker(tmp_path, fake_session, notifications):
    """A checker rooted in a temporary directory."""
    checker = PluginUpdateChecker(
        notification_sink=CallbackNotificationSink(notifications.append),
        root_dir=tmp_path,
        session=fake_session,
    )
    yield checker
    checker.close()


@pytest.fixture
def foo_installed():
    return [InstalledPlugin(name="Foo", version="1.0")]


@pytest.fixture(scope="session")
def qt_app():
    """A QApplication on the offscreen platform, shared by the whole session."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication
    return QApplication.instance() or QApplication([])


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Clean environment variables for each test."""
    for var in ('DEBUG', 'LOG_LEVEL'):
        monkeypatch.delenv(var, raising=False)


# Pytest markers
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "gui: marks tests that need PySide6")
    config.addinivalue_line("markers", "network: marks tests that require network access")
