"""Tests for treecheck.redis_source against an in-process Redis-FS fake."""

import pytest

from treecheck import Path, PathNotFoundError, ViolationKind, walk
from treecheck.redis_source import RedisFSSource, Snapshot, load_snapshot

from conftest import FakeRedisFS


class TestLoad:
    """Test building snapshots from a volume."""

    def test_missing_volume(self, fake_redis):
        """Test that a volume that does not exist is an empty tree."""
        snapshot = load_snapshot(fake_redis, "no-such-vol")
        assert snapshot == Snapshot(root=None, count=0, is_initialized=False)
        assert snapshot.is_valid()

    def test_structure(self, fake_redis):
        """Test that the snapshot mirrors the volume."""
        snapshot = load_snapshot(fake_redis, "test-vol")
        assert snapshot.is_initialized
        assert snapshot.count == 8
        assert [n.path.pathname for n in walk(snapshot.root)] == [
            "/",
            "/notes",
            "/notes/done.md",
            "/notes/todo.md",
            "/readme.md",
            "/src",
            "/src/deep",
            "/src/deep/main.py",
        ]

    def test_consistent_volume_is_valid(self, fake_redis, checker, collector):
        """Test that a consistent volume passes the checker."""
        assert load_snapshot(fake_redis, "test-vol").is_valid(checker)
        assert len(collector) == 0

    def test_listing_order_ignored(self, fake_redis, checker):
        """Test that FS.LS order does not matter."""
        fake_redis.listings["/notes"] = ["todo.md", "done.md"]
        assert load_snapshot(fake_redis, "test-vol").is_valid(checker)

    def test_byte_and_str_replies(self, fake_redis):
        """Test that decoded replies are handled like raw bytes."""
        class DecodingFake(FakeRedisFS):
            def execute_command(self, *args):
                result = super().execute_command(*args)
                return [r.decode() for r in result]

        decoding = DecodingFake(fake_redis.key, fake_redis.entries)
        assert load_snapshot(decoding, "test-vol").count == 8


class TestInconsistentVolumes:
    """Test that broken volumes fail the checker."""

    def test_listed_but_missing(self, fake_redis, checker, collector):
        """Test a directory listing an entry that does not exist."""
        fake_redis.listings["/src"] = ["deep", "ghost.py"]
        assert not load_snapshot(fake_redis, "test-vol").is_valid(checker)
        assert collector.kinds == [ViolationKind.STRUCTURAL_NULL]
        assert collector.last.paths == ("/src",)

    def test_not_listed(self, fake_redis, checker, collector):
        """Test an entry its parent directory does not list."""
        fake_redis.listings["/notes"] = ["todo.md"]
        assert not load_snapshot(fake_redis, "test-vol").is_valid(checker)
        assert collector.kinds == [ViolationKind.COUNT_MISMATCH]

    def test_listed_twice(self, fake_redis, checker, collector):
        """Test a directory listing the same name twice."""
        fake_redis.listings["/notes"] = ["done.md", "todo.md", "todo.md"]
        assert not load_snapshot(fake_redis, "test-vol").is_valid(checker)
        assert collector.kinds == [ViolationKind.DUPLICATE_CHILDREN]

    def test_invalid_name_listed(self, fake_redis, checker, collector):
        """Test a listing entry that is not a valid path component."""
        fake_redis.listings["/src/deep"] = ["../main.py", "main.py"]
        assert not load_snapshot(fake_redis, "test-vol").is_valid(checker)
        assert collector.kinds == [ViolationKind.STRUCTURAL_NULL]
        assert collector.last.paths == ("/src/deep",)


class TestErrors:
    """Test mapping of Redis errors."""

    def test_not_a_directory(self, fake_redis):
        """Test that listing a file maps to PathNotFoundError."""
        source = RedisFSSource(fake_redis, "test-vol")
        with pytest.raises(PathNotFoundError):
            source._ls(Path.from_string("/readme.md"))

    def test_missing_key_reply(self, fake_redis):
        """Test that a missing filesystem reply reads as empty."""
        source = RedisFSSource(fake_redis, "other-vol")
        assert source._find() == []
