"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for scanning, digesting and removing reference-tree duplicates.
"""

import bisect
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from dupsrm.core.errors import ConfigurationError


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """
    Closed set of content digest algorithms a run can use.
    Exactly one algorithm is used for both trees of a run.
    """
    SHA2_256 = "SHA2-256"
    SHA3_256 = "SHA3-256"
    BLAKE2B_256 = "BLAKE2B-256"
    RIPEMD_160 = "RIPEMD-160"
    SHA1 = "SHA1"
    MD5 = "MD5"
    XXH64 = "XXH64"
    XXH3_128 = "XXH3-128"

    @classmethod
    def default(cls) -> "HashAlgorithmName":
        return cls.SHA2_256

    @classmethod
    def from_name(cls, name: str) -> "HashAlgorithmName":
        """Case-insensitive lookup by value, e.g. 'sha2-256' or 'XXH64'."""
        wanted = name.strip().upper()
        for member in cls:
            if member.value == wanted:
                return member
        valid = ", ".join(m.value for m in cls)
        raise ConfigurationError(f"Unknown hash algorithm: '{name}'. Valid options: {valid}")

    @property
    def is_cryptographic(self) -> bool:
        """
        True for algorithms whose collision risk is negligible for duplicate matching.
        SHA1 and MD5 have known collision attacks; xxHash is a non-cryptographic checksum.
        """
        return self in (
            HashAlgorithmName.SHA2_256,
            HashAlgorithmName.SHA3_256,
            HashAlgorithmName.BLAKE2B_256,
            HashAlgorithmName.RIPEMD_160,
        )

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            HashAlgorithmName.SHA2_256: "SHA-2 256 bit (default, cryptographic)",
            HashAlgorithmName.SHA3_256: "SHA-3 256 bit (cryptographic)",
            HashAlgorithmName.BLAKE2B_256: "BLAKE2b 256 bit (cryptographic, fast)",
            HashAlgorithmName.RIPEMD_160: "RIPEMD-160 160 bit (cryptographic)",
            HashAlgorithmName.SHA1: "SHA-1 160 bit (legacy, collisions are known)",
            HashAlgorithmName.MD5: "MD5 128 bit (legacy, collisions are known)",
            HashAlgorithmName.XXH64: "xxHash 64 bit (checksum, fastest, highest collision risk)",
            HashAlgorithmName.XXH3_128: "xxHash3 128 bit (checksum, very fast)",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class RemovalStatus(str, Enum):
    REMOVED = "removed"
    WOULD_REMOVE = "would-remove"
    FAILED = "failed"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileEntry:
    """A file path together with its lowercase hex content digest."""
    path: str
    digest: str


@dataclass(frozen=True)
class FileFailure:
    """
    A file or directory that could not be scanned or hashed.
    kind is "scan" or "hash".
    """
    path: str
    reason: str
    kind: str


class DigestMap:
    """
    Mapping from digest to the paths sharing that digest, within one tree.
    Path lists are kept sorted so reports are reproducible.
    """

    def __init__(self):
        self._paths: Dict[str, List[str]] = {}
        self.skipped: List[FileFailure] = []

    def add(self, entry: FileEntry) -> None:
        paths = self._paths.setdefault(entry.digest, [])
        if entry.path not in paths:
            bisect.insort(paths, entry.path)

    def paths_for(self, digest: str) -> List[str]:
        return list(self._paths.get(digest, []))

    def digests(self) -> List[str]:
        return sorted(self._paths)

    def entries(self) -> Iterator[FileEntry]:
        for digest in self.digests():
            for path in self._paths[digest]:
                yield FileEntry(path=path, digest=digest)

    @property
    def file_count(self) -> int:
        return sum(len(paths) for paths in self._paths.values())

    def __contains__(self, digest: object) -> bool:
        return digest in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self):
        return f"<DigestMap digests={len(self)}, files={self.file_count}>"


@dataclass(frozen=True)
class FilterSpec:
    """
    Optional regular expression applied to reference-tree paths
    (relative to the reference directory). No pattern matches everything.
    """
    pattern: Optional[str] = None
    _compiled: Optional[re.Pattern] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.pattern is None:
            return
        try:
            compiled = re.compile(self.pattern)
        except re.error as e:
            raise ConfigurationError(f"Invalid filter pattern '{self.pattern}': {e}") from e
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, relative_path: str) -> bool:
        if self._compiled is None:
            return True
        return self._compiled.search(relative_path) is not None


@dataclass(frozen=True)
class DuplicateCandidate:
    """
    A reference-tree file whose digest also exists in the root tree.
    matched_path is the lexically first root-tree path holding the same digest.
    """
    path: str
    digest: str
    matched_path: str


@dataclass(frozen=True)
class RemovalOutcome:
    path: str
    digest: str
    status: RemovalStatus
    matched_path: Optional[str] = None
    size: int = 0
    reason: Optional[str] = None

    def __repr__(self):
        return f"<RemovalOutcome path={self.path}, status={self.status.value}>"


class RunStats:
    """
    Statistics collected while a run moves through its stages.
    """

    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}

    def update_stage(self, stage_name: str, files_processed: int, duration: float) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {"files": 0, "time": 0.0}
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            "root": "Root tree digests",
            "reference": "Reference tree digests",
            "resolve": "Duplicate candidates",
            "remove": "Removal",
        }

        lines = [
            "Run Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: FILES / TIME",
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


@dataclass
class RunReport:
    """Final result of one invocation, consumed by the reporting layer."""
    outcomes: List[RemovalOutcome] = field(default_factory=list)
    warnings: List[FileFailure] = field(default_factory=list)
    stats: RunStats = field(default_factory=RunStats)

    def _with_status(self, status: RemovalStatus) -> List[RemovalOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def removed(self) -> List[RemovalOutcome]:
        return self._with_status(RemovalStatus.REMOVED)

    @property
    def would_remove(self) -> List[RemovalOutcome]:
        return self._with_status(RemovalStatus.WOULD_REMOVE)

    @property
    def failed(self) -> List[RemovalOutcome]:
        return self._with_status(RemovalStatus.FAILED)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed or self.warnings)

    @property
    def bytes_freed(self) -> int:
        return sum(o.size for o in self.removed)


# ======================
#  Run Configuration
# ======================

@dataclass(frozen=True)
class RunConfig:
    """
    Immutable configuration snapshot for one invocation, built once before any traversal.
    Interface-agnostic: used by the CLI and by library callers alike.
    """
    reference_dir: str
    root_dir: str
    algorithm: HashAlgorithmName = HashAlgorithmName.SHA2_256
    dry_run: bool = False
    path_filter: FilterSpec = field(default_factory=FilterSpec)

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        resolved = []
        for label, value in (("Reference", self.reference_dir), ("Root", self.root_dir)):
            if not value:
                raise ConfigurationError(f"{label} directory cannot be empty")
            path = Path(value)
            if not path.exists():
                raise ConfigurationError(f"{label} directory {value}: No such file or directory")
            if not path.is_dir():
                raise ConfigurationError(f"{label} path is not a directory: {value}")
            resolved.append(str(path.resolve()))

        reference_dir, root_dir = resolved
        if reference_dir == root_dir or os.path.samefile(reference_dir, root_dir):
            raise ConfigurationError("Reference directory must not be identical to root directory")

        object.__setattr__(self, "reference_dir", reference_dir)
        object.__setattr__(self, "root_dir", root_dir)

    @staticmethod
    def create(
            reference_dir: str,
            root_dir: str,
            algorithm: Optional[str] = None,
            dry_run: bool = False,
            pattern: Optional[str] = None,
    ) -> "RunConfig":
        """
        Factory method to create a config from raw string inputs.
        Useful for CLI argument parsing.
        """
        algorithm_name = (
            HashAlgorithmName.from_name(algorithm) if algorithm else HashAlgorithmName.default()
        )
        return RunConfig(
            reference_dir=reference_dir,
            root_dir=root_dir,
            algorithm=algorithm_name,
            dry_run=dry_run,
            path_filter=FilterSpec(pattern),
        )

    def nested_dirs(self) -> Tuple[List[str], List[str]]:
        """
        Directories to prune from (root scan, reference scan).
        When one tree contains the other, the inner tree is excluded from the
        outer scan so no file is ever compared with itself.
        """
        root_excluded = []
        reference_excluded = []
        if _is_within(self.reference_dir, self.root_dir):
            root_excluded.append(self.reference_dir)
        if _is_within(self.root_dir, self.reference_dir):
            reference_excluded.append(self.root_dir)
        return root_excluded, reference_excluded


def _is_within(path: str, directory: str) -> bool:
    normalized_path = os.path.normpath(path)
    normalized_dir = os.path.normpath(directory)
    return normalized_path.startswith(normalized_dir.rstrip(os.sep) + os.sep)
