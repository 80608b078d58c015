"""
Unit tests for skill inventory persistence.
"""

import json

from pathfinder.roadmap.inventory import InventoryStore, LoadResult


class TestLoad:
    """Tests for reading the stored inventory."""

    def test_missing_file_is_empty_and_ok(self, store):
        result = store.load()

        assert result.ok
        assert result.skills == frozenset()

    def test_reads_mapping(self, store, progress_file):
        progress_file.write_text(json.dumps({"linux": True, "git": True, "docker": False}))

        result = store.load()

        assert result.ok
        assert result.skills == frozenset({"linux", "git"})

    def test_reads_list(self, store, progress_file):
        progress_file.write_text(json.dumps(["linux", "git"]))

        assert store.load().skills == frozenset({"linux", "git"})

    def test_corrupt_json_reported(self, store, progress_file):
        progress_file.write_text("{not json")

        result = store.load()

        assert not result.ok
        assert "JSONDecodeError" in result.error
        assert result.unwrap_or_empty() == frozenset()

    def test_unexpected_shape_reported(self, store, progress_file):
        progress_file.write_text(json.dumps(42))

        result = store.load()

        assert not result.ok
        assert result.unwrap_or_empty() == frozenset()

    def test_unreadable_path_reported(self, tmp_path):
        store = InventoryStore(tmp_path / ("a" * 300) / "progress.json")

        result = store.load()

        assert not result.ok
        assert "OSError" in result.error
        assert result.unwrap_or_empty() == frozenset()

    def test_directory_in_place_of_file_reported(self, progress_file):
        progress_file.mkdir()

        result = InventoryStore(progress_file).load()

        assert not result.ok
        assert result.unwrap_or_empty() == frozenset()

    def test_non_true_values_ignored(self, store, progress_file):
        progress_file.write_text(json.dumps({"linux": "yes", "git": 1, "docker": True}))

        assert store.load().skills == frozenset({"docker"})


class TestSave:
    """Tests for writing the inventory."""

    def test_round_trip(self, store):
        assert store.save({"linux", "git"}) is True
        assert store.load().skills == frozenset({"linux", "git"})

    def test_writes_mapping_of_true(self, store, progress_file):
        store.save({"b", "a"})

        assert json.loads(progress_file.read_text()) == {"a": True, "b": True}

    def test_creates_parent_directory(self, tmp_path):
        store = InventoryStore(tmp_path / "nested" / "dir" / "progress.json")

        assert store.save({"linux"}) is True
        assert store.path.exists()

    def test_clear(self, store):
        store.save({"linux"})

        assert store.clear() is True
        assert store.load().skills == frozenset()

    def test_write_failure_swallowed(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = InventoryStore(blocker / "progress.json")

        assert store.save({"linux"}) is False


class TestLoadResult:
    def test_unwrap_ok(self):
        assert LoadResult(skills=frozenset({"a"})).unwrap_or_empty() == frozenset({"a"})

    def test_unwrap_error(self):
        result = LoadResult(skills=frozenset({"a"}), error="boom")

        assert result.unwrap_or_empty() == frozenset()
