"""Tests for Phase 1 (discovery) and Phase 2 (extraction)."""

from __future__ import annotations

import os

import pytest

from psrcheck.composer.manifest import load_autoload_mapping
from psrcheck.config import CheckConfig, ParserMode, SourceFile
from psrcheck.errors import ProjectRootError
from psrcheck.index.autoload_map import AutoloadMap
from psrcheck.phases.discovery import run_discovery_phase
from psrcheck.phases.extraction import run_extraction_phase

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")
PROJECT = os.path.join(FIXTURES_DIR, "php_project")


def _discover(root: str, include_dev: bool = False, **kwargs) -> list[SourceFile]:
    config = CheckConfig(project_root=root, include_dev=include_dev, **kwargs)
    amap = AutoloadMap.build(load_autoload_mapping(root, include_dev=include_dev))
    return run_discovery_phase(config, amap)


class TestDiscoveryPhase:
    def test_finds_mapped_files_in_order(self):
        paths = [s.relative_path for s in _discover(PROJECT)]
        assert paths == [
            "legacy/Formatter.php",
            "legacy/Report.php",
            "src/helpers.php",
            "src/Http/Controllers/Wrong.php",
            "src/Models/Order.php",
            "src/Models/Concerns/HasTotals.php",
            "src/Repositories/OrderRepository.php",
            "src/Services/OrderService.php",
            "src/Support/Stray.php",
        ]

    def test_skips_vendor_directories(self):
        paths = {s.relative_path for s in _discover(PROJECT)}
        for path in paths:
            assert "vendor/" not in path

    def test_dev_directories_included(self):
        paths = [s.relative_path for s in _discover(PROJECT, include_dev=True)]
        assert "tests/OrderTest.php" in paths

    def test_reads_text(self):
        sources = {s.relative_path: s for s in _discover(PROJECT)}
        assert "namespace App\\Controllers;" in sources["src/Http/Controllers/Wrong.php"].text

    def test_extra_exclusions(self):
        paths = {s.relative_path for s in _discover(PROJECT, exclude_dirs=["vendor", "Models"])}
        assert not any("/Models/" in p for p in paths)
        assert "src/Services/OrderService.php" in paths

    def test_overlapping_base_dirs_read_once(self, tmp_path):
        (tmp_path / "src" / "Sub").mkdir(parents=True)
        (tmp_path / "src" / "Sub" / "Thing.php").write_text("<?php\nnamespace Sub;\n")
        (tmp_path / "src" / "Top.php").write_text("<?php\nnamespace App;\n")
        amap = AutoloadMap.build({"App\\": "src/", "Sub\\": "src/Sub/"})
        config = CheckConfig(project_root=str(tmp_path))
        paths = [s.relative_path for s in run_discovery_phase(config, amap)]
        assert sorted(paths) == ["src/Sub/Thing.php", "src/Top.php"]
        assert len(paths) == 2

    def test_no_mapping_walks_root(self, tmp_path):
        (tmp_path / "lib").mkdir()
        (tmp_path / "lib" / "A.php").write_text("<?php\nnamespace Lib;\n")
        (tmp_path / "vendor").mkdir()
        (tmp_path / "vendor" / "B.php").write_text("<?php\n")
        (tmp_path / "notes.txt").write_text("not php")
        config = CheckConfig(project_root=str(tmp_path))
        paths = [s.relative_path for s in run_discovery_phase(config, AutoloadMap())]
        assert paths == ["lib/A.php"]

    def test_missing_base_dir_skipped(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "A.php").write_text("<?php\n")
        amap = AutoloadMap.build({"App\\": "src/", "Gone\\": "gone/"})
        config = CheckConfig(project_root=str(tmp_path))
        paths = [s.relative_path for s in run_discovery_phase(config, amap)]
        assert paths == ["src/A.php"]

    def test_extension_matched_exactly(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "Upper.PHP").write_text("<?php\nnamespace Wrong;\n")
        (tmp_path / "src" / "Lower.php").write_text("<?php\nnamespace App;\n")
        amap = AutoloadMap.build({"App\\": "src/"})
        config = CheckConfig(project_root=str(tmp_path))
        paths = [s.relative_path for s in run_discovery_phase(config, amap)]
        assert paths == ["src/Lower.php"]

    def test_oversized_file_skipped(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "Big.php").write_text("<?php\n" + "//" * 100)
        amap = AutoloadMap.build({"App\\": "src/"})
        config = CheckConfig(project_root=str(tmp_path), max_file_size=10)
        assert run_discovery_phase(config, amap) == []

    def test_missing_root_raises(self, tmp_path):
        config = CheckConfig(project_root=str(tmp_path / "nope"))
        with pytest.raises(ProjectRootError):
            run_discovery_phase(config, AutoloadMap())


class TestExtractionPhase:
    @pytest.mark.parametrize("mode", [ParserMode.LINE, ParserMode.TREE_SITTER])
    def test_fixture_units(self, mode):
        config = CheckConfig(project_root=PROJECT, parser=mode)
        units = {u.relative_path: u for u in run_extraction_phase(config, _discover(PROJECT))}

        assert units["src/helpers.php"].declared_namespace is None
        assert units["legacy/Report.php"].declared_namespace == "App\\Legacy"
        repo = units["src/Repositories/OrderRepository.php"]
        assert [i.fully_qualified_name for i in repo.imports] == [
            "App\\Models\\Order",
            "App\\Models\\Missing",
            "InvalidArgumentException",
        ]

    def test_units_keep_discovery_order(self):
        sources = _discover(PROJECT)
        units = run_extraction_phase(CheckConfig(project_root=PROJECT), sources)
        assert [u.relative_path for u in units] == [s.relative_path for s in sources]

    def test_unknown_extension_skipped(self):
        sources = [SourceFile("README.md", "use App\\Foo;")]
        assert run_extraction_phase(CheckConfig(), sources) == []
