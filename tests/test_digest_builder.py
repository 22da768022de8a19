"""
Unit tests for DigestBuilderImpl.
Verifies parallel hashing, merging, and the strict/tolerant failure policies.
"""
import threading
import time

import pytest

from dupsrm.core.digest_builder import DigestBuilderImpl, default_worker_count
from dupsrm.core.errors import HashError
from dupsrm.core.hasher import HasherImpl
from dupsrm.core.models import HashAlgorithmName
from dupsrm.core.scanner import FileScannerImpl


class FakeHasher:
    """Hasher returning canned digests, optionally failing for some paths."""

    def __init__(self, digests, failing=(), delay=0.0):
        self.digests = digests
        self.failing = set(failing)
        self.delay = delay
        self.active = 0
        self.max_active = 0
        self.calls = []
        self._lock = threading.Lock()

    def compute_digest(self, path):
        with self._lock:
            self.calls.append(path)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            if path in self.failing:
                raise HashError(path, "Permission denied")
            return self.digests[path]
        finally:
            with self._lock:
                self.active -= 1


class TestDigestBuilderImpl:

    def test_builds_map_from_real_files(self, trees):
        hasher = HasherImpl.for_name(HashAlgorithmName.SHA2_256)
        scanner = FileScannerImpl(root_dir=str(trees["root"]))

        digest_map = DigestBuilderImpl(hasher).build(scanner.scan())

        shared = hasher.compute_digest(str(trees["root_y"]))
        assert digest_map.file_count == 3
        assert digest_map.paths_for(shared) == sorted([str(trees["root_y"]), str(trees["root_z"])])
        assert digest_map.skipped == []

    def test_files_sharing_a_digest_are_all_retained(self):
        hasher = FakeHasher({"/t/a": "d1", "/t/b": "d1", "/t/c": "d2"})

        digest_map = DigestBuilderImpl(hasher, max_workers=2).build(["/t/c", "/t/b", "/t/a"])

        assert digest_map.paths_for("d1") == ["/t/a", "/t/b"]
        assert digest_map.paths_for("d2") == ["/t/c"]

    def test_hashing_runs_on_several_workers(self):
        paths = [f"/t/{i}" for i in range(16)]
        hasher = FakeHasher({p: p for p in paths}, delay=0.05)

        DigestBuilderImpl(hasher, max_workers=4).build(paths)

        assert hasher.max_active > 1
        assert sorted(hasher.calls) == sorted(paths)

    def test_more_files_than_pending_limit(self):
        paths = [f"/t/{i:03d}" for i in range(200)]
        hasher = FakeHasher({p: p for p in paths})

        digest_map = DigestBuilderImpl(hasher, max_workers=2).build(iter(paths))

        assert digest_map.file_count == 200

    def test_strict_build_raises_on_hash_error(self):
        hasher = FakeHasher({"/t/a": "d1", "/t/c": "d3"}, failing=["/t/b"])

        with pytest.raises(HashError) as exc_info:
            DigestBuilderImpl(hasher, max_workers=2).build(["/t/a", "/t/b", "/t/c"], strict=True)
        assert exc_info.value.path == "/t/b"

    def test_tolerant_build_records_skipped_files(self):
        hasher = FakeHasher({"/t/a": "d1", "/t/c": "d3"}, failing=["/t/b"])

        digest_map = DigestBuilderImpl(hasher, max_workers=2).build(
            ["/t/a", "/t/b", "/t/c"], strict=False
        )

        assert digest_map.file_count == 2
        assert [(f.path, f.kind) for f in digest_map.skipped] == [("/t/b", "hash")]

    def test_errors_from_path_stream_propagate(self):
        hasher = FakeHasher({"/t/a": "d1"})

        def broken_stream():
            yield "/t/a"
            raise RuntimeError("walk failed")

        with pytest.raises(RuntimeError, match="walk failed"):
            DigestBuilderImpl(hasher, max_workers=2).build(broken_stream())

    def test_progress_callback_reports_processed_files(self):
        paths = ["/t/a", "/t/b", "/t/c"]
        hasher = FakeHasher({p: p for p in paths})
        events = []

        DigestBuilderImpl(hasher, max_workers=2, stage_name="Hashing root tree").build(
            paths, progress_callback=lambda stage, current, total: events.append((stage, current, total))
        )

        assert events
        assert events[-1] == ("Hashing root tree", 3, None)

    def test_empty_stream_gives_empty_map(self):
        digest_map = DigestBuilderImpl(FakeHasher({})).build([])

        assert len(digest_map) == 0

    def test_default_worker_count_is_bounded(self):
        assert 1 <= default_worker_count() <= 32
