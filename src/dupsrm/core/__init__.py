"""
Core duplicate removal engine: scanner, hasher, digest builder, resolver and remover.

This package contains the whole algorithmic part of dupsrm:
- FileScannerImpl: lazy recursive traversal with regex filter and excluded directories
- HasherImpl + algorithm strategies: SHA-2/SHA-3/BLAKE2b, legacy SHA-1/MD5, xxHash checksums
- DigestBuilderImpl: parallel hashing into a DigestMap
- DuplicateResolverImpl: reference digests present in the root tree
- RemovalExecutorImpl: delete or dry-run report, per-file outcomes
- Models: RunConfig, DigestMap, RemovalOutcome, RunReport and friends

All components are plain Python with no CLI dependencies.
"""

from .errors import DupsrmError, ConfigurationError, ScanError, HashError, RemovalError
from .scanner import FileScannerImpl
from .hasher import HasherImpl, HashlibAlgorithmImpl, XXHashAlgorithmImpl, get_algorithm
from .digest_builder import DigestBuilderImpl
from .resolver import DuplicateResolverImpl
from .remover import RemovalExecutorImpl
from .models import (
    HashAlgorithmName, RemovalStatus, FileEntry, FileFailure, DigestMap, FilterSpec,
    DuplicateCandidate, RemovalOutcome, RunStats, RunReport, RunConfig)

__all__ = [
    "DupsrmError",
    "ConfigurationError",
    "ScanError",
    "HashError",
    "RemovalError",
    "FileScannerImpl",
    "HasherImpl",
    "HashlibAlgorithmImpl",
    "XXHashAlgorithmImpl",
    "get_algorithm",
    "DigestBuilderImpl",
    "DuplicateResolverImpl",
    "RemovalExecutorImpl",
    "HashAlgorithmName",
    "RemovalStatus",
    "FileEntry",
    "FileFailure",
    "DigestMap",
    "FilterSpec",
    "DuplicateCandidate",
    "RemovalOutcome",
    "RunStats",
    "RunReport",
    "RunConfig",
]
