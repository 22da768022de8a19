"""
Unit tests for configuration and result models.
"""
import pytest

from dupsrm.core.errors import ConfigurationError
from dupsrm.core.models import (
    DigestMap, FileEntry, FileFailure, FilterSpec, HashAlgorithmName, RemovalOutcome,
    RemovalStatus, RunConfig, RunReport, RunStats,
)


class TestHashAlgorithmName:

    def test_default_is_sha2_256(self):
        assert HashAlgorithmName.default() is HashAlgorithmName.SHA2_256

    @pytest.mark.parametrize("raw, expected", [
        ("SHA2-256", HashAlgorithmName.SHA2_256),
        ("sha3-256", HashAlgorithmName.SHA3_256),
        (" md5 ", HashAlgorithmName.MD5),
        ("xxh3-128", HashAlgorithmName.XXH3_128),
        ("ripemd-160", HashAlgorithmName.RIPEMD_160),
    ])
    def test_from_name_is_case_insensitive(self, raw, expected):
        assert HashAlgorithmName.from_name(raw) is expected

    def test_unknown_name_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Unknown hash algorithm"):
            HashAlgorithmName.from_name("CRC32")

    def test_collision_risk_is_visible(self):
        assert HashAlgorithmName.SHA2_256.is_cryptographic
        assert HashAlgorithmName.BLAKE2B_256.is_cryptographic
        assert HashAlgorithmName.RIPEMD_160.is_cryptographic
        assert not HashAlgorithmName.MD5.is_cryptographic
        assert not HashAlgorithmName.SHA1.is_cryptographic
        assert not HashAlgorithmName.XXH64.is_cryptographic


class TestFilterSpec:

    def test_no_pattern_matches_everything(self):
        path_filter = FilterSpec()
        assert path_filter.matches("a.bin")
        assert path_filter.matches("sub/dir/b.txt")

    def test_pattern_is_searched(self):
        path_filter = FilterSpec(r"\.txt$")
        assert path_filter.matches("b.txt")
        assert path_filter.matches("sub/b.txt")
        assert not path_filter.matches("a.bin")

    def test_malformed_pattern_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Invalid filter pattern"):
            FilterSpec("([unclosed")


class TestDigestMap:

    def test_paths_sharing_a_digest_are_kept_sorted(self):
        digest_map = DigestMap()
        digest_map.add(FileEntry(path="/t/b", digest="aa"))
        digest_map.add(FileEntry(path="/t/a", digest="aa"))
        digest_map.add(FileEntry(path="/t/c", digest="bb"))

        assert digest_map.paths_for("aa") == ["/t/a", "/t/b"]
        assert "aa" in digest_map
        assert "cc" not in digest_map
        assert len(digest_map) == 2
        assert digest_map.file_count == 3

    def test_adding_same_entry_twice_is_idempotent(self):
        digest_map = DigestMap()
        digest_map.add(FileEntry(path="/t/a", digest="aa"))
        digest_map.add(FileEntry(path="/t/a", digest="aa"))

        assert digest_map.file_count == 1

    def test_entries_are_deterministic(self):
        digest_map = DigestMap()
        digest_map.add(FileEntry(path="/t/z", digest="bb"))
        digest_map.add(FileEntry(path="/t/y", digest="aa"))

        assert [e.path for e in digest_map.entries()] == ["/t/y", "/t/z"]

    def test_paths_for_returns_a_copy(self):
        digest_map = DigestMap()
        digest_map.add(FileEntry(path="/t/a", digest="aa"))
        digest_map.paths_for("aa").append("/t/evil")

        assert digest_map.paths_for("aa") == ["/t/a"]


class TestRunConfig:

    def test_valid_config_resolves_paths(self, trees):
        config = RunConfig.create(str(trees["reference"]), str(trees["root"]))

        assert config.reference_dir == str(trees["reference"].resolve())
        assert config.root_dir == str(trees["root"].resolve())
        assert config.algorithm is HashAlgorithmName.SHA2_256
        assert config.dry_run is False
        assert config.path_filter.pattern is None

    def test_config_is_immutable(self, trees):
        config = RunConfig.create(str(trees["reference"]), str(trees["root"]))
        with pytest.raises(AttributeError):
            config.dry_run = True

    def test_missing_directory(self, trees):
        with pytest.raises(ConfigurationError, match="No such file or directory"):
            RunConfig.create(str(trees["reference"] / "nope"), str(trees["root"]))

    def test_file_instead_of_directory(self, trees):
        with pytest.raises(ConfigurationError, match="not a directory"):
            RunConfig.create(str(trees["reference"]), str(trees["root_x"]))

    def test_identical_directories_rejected(self, trees):
        with pytest.raises(ConfigurationError, match="must not be identical"):
            RunConfig.create(str(trees["root"]), str(trees["root"] / "deep" / ".."))

    def test_unknown_algorithm_rejected(self, trees):
        with pytest.raises(ConfigurationError):
            RunConfig.create(str(trees["reference"]), str(trees["root"]), algorithm="CRC32")

    def test_bad_pattern_rejected(self, trees):
        with pytest.raises(ConfigurationError):
            RunConfig.create(str(trees["reference"]), str(trees["root"]), pattern="*.txt")

    def test_nested_reference_is_excluded_from_root_scan(self, tmp_path):
        root = tmp_path / "root"
        reference = root / "inbox"
        reference.mkdir(parents=True)

        config = RunConfig.create(str(reference), str(root))

        assert config.nested_dirs() == ([str(reference.resolve())], [])

    def test_nested_root_is_excluded_from_reference_scan(self, tmp_path):
        reference = tmp_path / "reference"
        root = reference / "keep"
        root.mkdir(parents=True)

        config = RunConfig.create(str(reference), str(root))

        assert config.nested_dirs() == ([], [str(root.resolve())])

    def test_sibling_with_common_prefix_is_not_nested(self, tmp_path):
        (tmp_path / "data").mkdir()
        (tmp_path / "data-old").mkdir()

        config = RunConfig.create(str(tmp_path / "data-old"), str(tmp_path / "data"))

        assert config.nested_dirs() == ([], [])


class TestRunReport:

    def test_counters_and_failures(self):
        report = RunReport(outcomes=[
            RemovalOutcome(path="/r/a", digest="aa", status=RemovalStatus.REMOVED, size=10),
            RemovalOutcome(path="/r/b", digest="bb", status=RemovalStatus.FAILED, reason="denied"),
            RemovalOutcome(path="/r/c", digest="cc", status=RemovalStatus.REMOVED, size=5),
        ])

        assert len(report.removed) == 2
        assert len(report.failed) == 1
        assert report.bytes_freed == 15
        assert report.has_failures

    def test_warnings_count_as_failures(self):
        report = RunReport(warnings=[FileFailure(path="/r/x", reason="denied", kind="hash")])
        assert report.has_failures

    def test_clean_empty_report(self):
        report = RunReport()
        assert not report.has_failures
        assert report.bytes_freed == 0


class TestRunStats:

    def test_update_and_summary(self):
        stats = RunStats()
        stats.update_stage("root", 10, 0.5)
        stats.update_stage("root", 5, 0.25)

        assert stats.stage_stats["root"] == {"files": 15, "time": 0.75}
        assert "Root tree digests: 15" in stats.print_summary()
