"""Tests for AutoloadMap and ProjectFileIndex."""

from psrcheck.config import PrefixMapping
from psrcheck.index.autoload_map import AutoloadMap
from psrcheck.index.file_index import ProjectFileIndex


class TestAutoloadMapBuild:
    def test_normalises_prefix_and_dir(self):
        amap = AutoloadMap.build({"App\\": "src/"})
        assert list(amap) == [PrefixMapping(prefix="App", base_dir="src")]

    def test_root_and_dot_slash_dirs(self):
        amap = AutoloadMap.build({"App\\": "./", "Lib\\": "./lib/"})
        dirs = {e.prefix: e.base_dir for e in amap}
        assert dirs == {"App": "", "Lib": "lib"}

    def test_list_of_directories(self):
        amap = AutoloadMap.build({"App\\": ["src/", "lib/"]})
        assert [e.base_dir for e in amap] == ["src", "lib"]

    def test_sorted_longest_prefix_first(self):
        amap = AutoloadMap.build({
            "App\\": "src/",
            "App\\Domain\\Billing\\": "billing/",
            "App\\Domain\\": "domain/",
        })
        assert [e.prefix for e in amap] == ["App\\Domain\\Billing", "App\\Domain", "App"]

    def test_ties_keep_declaration_order(self):
        amap = AutoloadMap.build({"Bbb\\": "b/", "Aaa\\": "a/"})
        assert [e.prefix for e in amap] == ["Bbb", "Aaa"]

    def test_empty_mapping(self):
        amap = AutoloadMap.build(None)
        assert len(amap) == 0
        assert not amap
        assert amap.lookup("App\\Foo") is None


class TestAutoloadMapLookup:
    def test_longest_prefix_wins(self):
        amap = AutoloadMap.build({"App\\": "src/", "App\\Legacy\\": "legacy/"})
        assert amap.lookup("App\\Legacy").base_dir == "legacy"
        assert amap.lookup("App\\Legacy\\Report").base_dir == "legacy"
        assert amap.lookup("App\\Services").base_dir == "src"

    def test_respects_segment_boundaries(self):
        amap = AutoloadMap.build({"App\\F\\": "f/"})
        assert amap.lookup("App\\Foo") is None
        assert amap.lookup("App\\F\\Bar").base_dir == "f"

    def test_exact_prefix_matches(self):
        amap = AutoloadMap.build({"App\\": "src/"})
        assert amap.lookup("App").prefix == "App"

    def test_leading_separator_ignored(self):
        amap = AutoloadMap.build({"App\\": "src/"})
        assert amap.lookup("\\App\\Foo").prefix == "App"

    def test_case_sensitive(self):
        amap = AutoloadMap.build({"App\\": "src/"})
        assert amap.lookup("app\\Foo") is None

    def test_empty_prefix_is_fallback(self):
        amap = AutoloadMap.build({"": "lib/", "App\\": "src/"})
        assert amap.lookup("Anything\\Else").base_dir == "lib"
        assert amap.lookup("App\\Foo").base_dir == "src"

    def test_candidates_for_multi_directory_prefix(self):
        amap = AutoloadMap.build({"App\\": ["src/", "lib/"], "Other\\": "other/"})
        assert [e.base_dir for e in amap.candidates("App\\Foo")] == ["src", "lib"]
        assert amap.candidates("Vendor\\Foo") == []

    def test_matches_every_covering_prefix(self):
        amap = AutoloadMap.build({"App\\": "src/", "App\\Tests\\": "tests/", "Other\\": "o/"})
        assert [e.prefix for e in amap.matches("App\\Tests\\Helper")] == ["App\\Tests", "App"]
        assert [e.prefix for e in amap.candidates("App\\Tests\\Helper")] == ["App\\Tests"]
        assert amap.matches("Vendor\\Foo") == []

    def test_covers(self):
        amap = AutoloadMap.build({"App\\": "src/"})
        assert amap.covers("App\\Foo")
        assert not amap.covers("Vendor\\Foo")

    def test_base_dirs_unique(self):
        amap = AutoloadMap.build({"App\\": "src/", "App\\Legacy\\": "legacy/", "Lib\\": "src/"})
        assert amap.base_dirs() == ["legacy", "src"]


class TestProjectFileIndex:
    def test_exists(self):
        idx = ProjectFileIndex(["src/Models/Order.php"])
        assert idx.exists("src/Models/Order.php")
        assert "src/Models/Order.php" in idx
        assert not idx.exists("src/Models/order.php")

    def test_normalises_separators(self):
        idx = ProjectFileIndex(["src\\Models\\Order.php"])
        assert idx.exists("/src/Models/Order.php")

    def test_no_duplicates(self):
        idx = ProjectFileIndex()
        idx.add("a.php")
        idx.add("a.php")
        assert len(idx) == 1
