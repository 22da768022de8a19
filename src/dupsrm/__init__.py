"""
dupsrm: remove files from a reference directory that already exist in a root directory.

Core features:
- Content matching by digest: SHA2-256 (default), SHA3-256, BLAKE2B-256, legacy SHA1/MD5, xxHash checksums
- Parallel hashing on a thread pool
- Dry-run mode that reports without touching the filesystem
- Fail-closed: an unreadable root tree aborts the run before anything is removed
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dupsrm")
except PackageNotFoundError:
    import tomllib
    from pathlib import Path

    with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API: only what users should import directly
from dupsrm.commands import DuplicateRemovalCommand
from dupsrm.core import (
    RunConfig, RunReport, RemovalOutcome, RemovalStatus, HashAlgorithmName, FilterSpec,
    DupsrmError, ConfigurationError, ScanError, HashError, RemovalError)
from dupsrm.services.file_service import FileService

__all__ = [
    "DuplicateRemovalCommand",
    "RunConfig",
    "RunReport",
    "RemovalOutcome",
    "RemovalStatus",
    "HashAlgorithmName",
    "FilterSpec",
    "DupsrmError",
    "ConfigurationError",
    "ScanError",
    "HashError",
    "RemovalError",
    "FileService",
    "__version__",
]
