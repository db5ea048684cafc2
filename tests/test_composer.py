"""Tests for composer.json autoload loading."""

from __future__ import annotations

import json
import logging
import os

from psrcheck.composer.manifest import load_autoload_mapping

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def _write_manifest(tmp_path, data) -> str:
    (tmp_path / "composer.json").write_text(
        data if isinstance(data, str) else json.dumps(data), encoding="utf-8"
    )
    return str(tmp_path)


class TestLoadAutoloadMapping:
    def test_fixture_project(self):
        mapping = load_autoload_mapping(os.path.join(FIXTURES_DIR, "php_project"))
        assert mapping == {"App\\": ["src/"], "App\\Legacy\\": ["legacy/"]}

    def test_include_dev(self):
        mapping = load_autoload_mapping(
            os.path.join(FIXTURES_DIR, "php_project"), include_dev=True
        )
        assert list(mapping) == ["App\\", "App\\Legacy\\", "Tests\\"]
        assert mapping["Tests\\"] == ["tests/"]

    def test_dev_directories_merge_into_existing_prefix(self, tmp_path):
        root = _write_manifest(tmp_path, {
            "autoload": {"psr-4": {"App\\": "src/"}},
            "autoload-dev": {"psr-4": {"App\\": ["src/", "dev/"]}},
        })
        assert load_autoload_mapping(root, include_dev=True) == {"App\\": ["src/", "dev/"]}

    def test_list_values(self, tmp_path):
        root = _write_manifest(tmp_path, {"autoload": {"psr-4": {"App\\": ["src/", "lib/"]}}})
        assert load_autoload_mapping(root) == {"App\\": ["src/", "lib/"]}

    def test_missing_manifest(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING, logger="psrcheck")
        assert load_autoload_mapping(str(tmp_path)) == {}
        assert "No composer.json found" in caplog.text

    def test_malformed_json(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING, logger="psrcheck")
        root = _write_manifest(tmp_path, "{not json")
        assert load_autoload_mapping(root) == {}
        assert "Failed to read" in caplog.text

    def test_no_autoload_section(self, tmp_path):
        root = _write_manifest(tmp_path, {"name": "acme/empty"})
        assert load_autoload_mapping(root) == {}

    def test_malformed_psr4_section(self, tmp_path):
        root = _write_manifest(tmp_path, {"autoload": {"psr-4": ["src/"]}})
        assert load_autoload_mapping(root) == {}

    def test_malformed_entry_skipped(self, tmp_path):
        root = _write_manifest(tmp_path, {
            "autoload": {"psr-4": {"App\\": "src/", "Bad\\": 42}},
        })
        assert load_autoload_mapping(root) == {"App\\": ["src/"]}

    def test_custom_filename(self, tmp_path):
        (tmp_path / "composer.custom.json").write_text(
            json.dumps({"autoload": {"psr-4": {"Lib\\": "lib/"}}}), encoding="utf-8"
        )
        assert load_autoload_mapping(str(tmp_path), "composer.custom.json") == {"Lib\\": ["lib/"]}
