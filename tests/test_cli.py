"""
Tests for the command line entry point.
"""

import argparse
import json

import pytest
import requests

from conftest import MANIFEST_URL, SOURCE_URL
from plugin_update_check import cli


@pytest.fixture
def cli_env(tmp_path, fake_session, monkeypatch):
    """Run the CLI against the fake session with logging left untouched."""
    monkeypatch.setattr(requests, "Session", lambda: fake_session)
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({
        "sources": {"root_dir": str(tmp_path)},
        "notifications": {"settings_file": str(tmp_path / "settings.ini")},
    }), encoding="utf-8")
    return ["--config", str(config_path)]


def test_parse_installed():
    installed = cli.parse_installed(["Foo=1.0", "Bar=2.0=beta"])
    assert [(p.name, p.version) for p in installed] == [("Foo", "1.0"), ("Bar", "2.0=beta")]


@pytest.mark.parametrize("value", ["Foo", "=1.0", "Foo="])
def test_parse_installed_rejects(value):
    with pytest.raises(argparse.ArgumentTypeError):
        cli.parse_installed([value])


def test_check_lists_records(cli_env, capsys):
    assert cli.main(cli_env + ["check", SOURCE_URL, "--installed", "Foo=1.0"]) == 0
    out = capsys.readouterr().out
    assert "Foo\t1.0 → 2.0 (update available)" in out


def test_check_without_sources(cli_env, capsys):
    assert cli.main(cli_env + ["check"]) == 1


def test_bad_installed_value_exits(cli_env):
    with pytest.raises(SystemExit):
        cli.main(cli_env + ["check", SOURCE_URL, "--installed", "Foo"])


def test_install_and_uninstall(cli_env, fake_session, tmp_path, capsys):
    assert cli.main(cli_env + ["install", SOURCE_URL, "Foo", "--archive"]) == 0
    assert (tmp_path / "plugins.zip").exists()

    assert cli.main(cli_env + ["uninstall", SOURCE_URL, "Foo", "--archive"]) == 0
    assert not (tmp_path / "plugins.zip").exists()
    assert fake_session.calls.count(MANIFEST_URL) == 2


def test_unknown_plugin(cli_env, capsys):
    assert cli.main(cli_env + ["install", SOURCE_URL, "Missing"]) == 1
    assert "Missing is not listed" in capsys.readouterr().err


def test_failure_points_at_log_file(cli_env, monkeypatch, capsys):
    monkeypatch.setattr(cli, "get_log_file_path", lambda: "/var/log/plugins.log")
    assert cli.main(cli_env + ["install", SOURCE_URL, "Missing"]) == 1
    assert "See /var/log/plugins.log for details." in capsys.readouterr().err


@pytest.mark.gui
def test_notifications_flag_read_from_host_settings(cli_env, monkeypatch, tmp_path):
    from plugin_update_check.utils.settings import SettingsManager

    SettingsManager(settings_file=str(tmp_path / "settings.ini")).set_use_notifications(True)
    checkers = []
    from_config = cli.PluginUpdateChecker.from_config

    def recording_from_config(config, notification_sink=None, settings=None):
        checker = from_config(config, notification_sink, settings)
        checkers.append(checker)
        return checker

    monkeypatch.setattr(cli.PluginUpdateChecker, "from_config", recording_from_config)

    assert cli.main(cli_env + ["check", SOURCE_URL]) == 0
    assert checkers[0].use_notifications is True
