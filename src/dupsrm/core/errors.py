"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception hierarchy for the duplicate removal engine.
"""


class DupsrmError(Exception):
    """Base class for all errors raised by dupsrm."""


class ConfigurationError(DupsrmError):
    """Invalid paths, unknown algorithm name or malformed filter pattern."""


class ScanError(DupsrmError):
    """A directory or directory entry could not be enumerated."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot scan {path}: {reason}")
        self.path = path
        self.reason = reason


class HashError(DupsrmError):
    """A file could not be opened or fully read while computing its digest."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot hash {path}: {reason}")
        self.path = path
        self.reason = reason


class RemovalError(DupsrmError):
    """A file could not be deleted."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot remove {path}: {reason}")
        self.path = path
        self.reason = reason
