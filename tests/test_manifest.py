"""
Tests for manifest URL handling and parsing.
"""

import pytest

from conftest import FOO_MANIFEST, MULTI_FILE_MANIFEST
from plugin_update_check.core.exceptions import ParseFailure
from plugin_update_check.core.models import InstalledPlugin
from plugin_update_check.updates.manifest import (build_records,
                                                  normalize_source_url,
                                                  parse_manifest)


class TestNormalizeSourceUrl:

    @pytest.mark.parametrize("url", [
        "https://github.com/Elskom/plugins/",
        "https://github.com/Elskom/plugins",
    ])
    def test_github_url_rewritten_to_raw_host(self, url):
        assert normalize_source_url(url) == \
            "https://raw.githubusercontent.com/Elskom/plugins/master/plugins.xml"

    def test_other_hosts_kept(self):
        assert normalize_source_url("http://example.com/repo") == \
            "http://example.com/repo/master/plugins.xml"
        assert normalize_source_url("http://example.com/repo/") == \
            "http://example.com/repo/master/plugins.xml"

    def test_raw_host_not_rewritten_twice(self):
        url = "https://raw.githubusercontent.com/Elskom/plugins/"
        assert normalize_source_url(url) == url + "master/plugins.xml"


class TestParseManifest:

    def test_parse_single_plugin(self):
        entries = parse_manifest(FOO_MANIFEST)
        assert len(entries) == 1
        entry = entries[0]
        assert entry.name == "Foo"
        assert entry.version == "2.0"
        assert entry.download_files == ("foo.dll",)
        assert entry.versioned_download_url == "http://x/f/2.0/"

    def test_download_files_in_document_order(self):
        entries = parse_manifest(MULTI_FILE_MANIFEST)
        assert entries[0].download_files == ("bar.dll", "bar.pdb")

    def test_empty_manifest(self):
        assert parse_manifest("<Plugins/>") == []

    def test_malformed_xml(self):
        with pytest.raises(ParseFailure) as exc_info:
            parse_manifest("<Plugins><Plugin", "http://src")
        assert exc_info.value.url == "http://src"

    @pytest.mark.parametrize("xml", [
        '<Plugins><Plugin Version="1" DownloadUrl="u"/></Plugins>',
        '<Plugins><Plugin Name="A" DownloadUrl="u"/></Plugins>',
        '<Plugins><Plugin Name="A" Version="1"/></Plugins>',
        '<Plugins><Plugin Name="A" Version="1" DownloadUrl="u"><DownloadFile/></Plugin></Plugins>',
    ])
    def test_missing_required_attribute(self, xml):
        with pytest.raises(ParseFailure, match="missing the required"):
            parse_manifest(xml)


class TestBuildRecords:

    def test_not_installed_gives_empty_installed_version(self):
        records = build_records(parse_manifest(FOO_MANIFEST), [], "src")
        assert len(records) == 1
        assert records[0].installed_version == ""
        assert records[0].source_url == "src"

    def test_match_is_case_sensitive(self):
        records = build_records(parse_manifest(FOO_MANIFEST), [InstalledPlugin("foo", "1.0")])
        assert records[0].installed_version == ""

    def test_one_record_per_match(self):
        installed = [InstalledPlugin("Foo", "1.0"), InstalledPlugin("Other", "3.0"), InstalledPlugin("Foo", "1.5")]
        records = build_records(parse_manifest(FOO_MANIFEST), installed)
        assert [r.installed_version for r in records] == ["1.0", "1.5"]
        assert all(r.download_url == "http://x/f/2.0/" for r in records)
