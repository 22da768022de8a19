"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate removal engine.
These protocols enforce structural typing using Python's `typing.Protocol` so that
each stage can be replaced (e.g. by a fake in tests) without touching the others.

Key Components:
---------------
- HashState / HashAlgorithm: incremental hash objects and the strategies creating them.
- Hasher: computes the digest of one file.
- FileScanner: lazily enumerates the regular files of one tree.
- DigestBuilder: turns a stream of paths into a DigestMap.
- DuplicateResolver: matches reference digests against root digests.
- RemovalExecutor: deletes (or pretends to delete) resolved duplicates.
"""

from typing import Protocol, List, Iterable, Iterator, Optional, Callable
from dupsrm.core.models import (
    DigestMap,
    DuplicateCandidate,
    FileFailure,
    RemovalOutcome,
)


# ===== Interfaces =====

class HashState(Protocol):
    """Incremental hash object, as returned by hashlib.new() or xxhash.xxh64()."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the rest of the pipeline.
    """
    name: str

    def new(self) -> HashState:
        """Returns a fresh incremental hash object."""
        ...


class Hasher(Protocol):
    """Interface for hashing the full content of a file."""
    def compute_digest(self, path: str) -> str: ...


class FileScanner(Protocol):
    """
    Interface for walking one directory tree.

    Attributes:
        warnings: Problems a tolerant scanner skipped over during the last scan.
    """
    warnings: List[FileFailure]

    def scan(self) -> Iterator[str]:
        """
        Lazily yield the paths of regular files under the configured directory.
        Every call re-walks the tree from scratch.
        """
        ...


class DigestBuilder(Protocol):
    """Interface for computing a DigestMap over a stream of file paths."""
    def build(
        self,
        paths: Iterable[str],
        strict: bool = True,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> DigestMap:
        """
        Digest every path and merge the results.

        Args:
            paths: File paths, typically produced by a FileScanner.
            strict: Raise on the first unreadable file instead of recording it in DigestMap.skipped.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            DigestMap for the whole stream.
        """
        ...


class DuplicateResolver(Protocol):
    """Interface for matching reference-tree digests against root-tree digests."""
    def resolve(self, reference_map: DigestMap, root_map: DigestMap) -> List[DuplicateCandidate]:
        ...


class RemovalExecutor(Protocol):
    """Interface for acting on resolved duplicates."""
    def execute(self, candidates: List[DuplicateCandidate], dry_run: bool) -> List[RemovalOutcome]:
        """
        Remove every candidate, or only record the intent when dry_run is set.
        A failure on one file never stops processing of the others.
        """
        ...
