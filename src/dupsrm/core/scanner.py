"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements lazy, recursive directory traversal.
Features:
- Uses os.walk for fast traversal, never following symbolic links
- Yields regular, non-empty files only
- Applies an optional regex filter to paths relative to the scanned directory
- Prunes excluded directories before descending into them
- Strict mode raises ScanError, tolerant mode records warnings and carries on
"""

import os
import stat
from typing import Iterator, List, Optional
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

# Local imports
from dupsrm.core.errors import ScanError
from dupsrm.core.models import FileFailure, FilterSpec
from dupsrm.core.interfaces import FileScanner


class FileScannerImpl(FileScanner):
    """
    Scans a directory tree recursively and yields matching file paths.

    Attributes:
        root_dir: Directory to scan
        path_filter: Filter applied to paths relative to root_dir (optional)
        excluded_dirs: Directories that are never entered
        strict: Raise ScanError on unreadable entries instead of skipping them
        warnings: Entries skipped during the last scan (tolerant mode only)
    """

    def __init__(
        self,
        root_dir: str,
        path_filter: Optional[FilterSpec] = None,
        excluded_dirs: Optional[List[str]] = None,
        strict: bool = True
    ):
        self.root_dir = root_dir
        self.path_filter = path_filter or FilterSpec()
        self.excluded_dirs = [os.path.normpath(str(Path(d).resolve())) for d in excluded_dirs] if excluded_dirs else []
        self.strict = strict
        self.warnings: List[FileFailure] = []

    def scan(self) -> Iterator[str]:
        """
        Generator walking the tree from scratch on every call.
        Files are yielded as they are found, in sorted order per directory.
        """
        logger.debug(f"Scanning directory: {self.root_dir} (strict={self.strict})")
        logger.debug(f"Filter: {self.path_filter.pattern}, excluded: {self.excluded_dirs}")
        self.warnings = []

        root_path = Path(self.root_dir)
        if not root_path.is_dir():
            raise ScanError(self.root_dir, "not a directory")

        found = 0
        for root, dirs, files in os.walk(str(root_path), onerror=self._on_walk_error):
            # Pre-filter subdirectories BEFORE os.walk enters them
            dirs[:] = sorted(d for d in dirs if not self._is_excluded_directory(os.path.join(root, d)))

            for filename in sorted(files):
                path = os.path.join(root, filename)
                if self._process_file(path):
                    found += 1
                    yield path

        logger.debug(f"Scan of {self.root_dir} completed. Found {found} matching files.")

    def _on_walk_error(self, error: OSError) -> None:
        path = error.filename or self.root_dir
        self._handle_error(path, error.strerror or str(error))

    def _handle_error(self, path: str, reason: str) -> None:
        if self.strict:
            logger.debug(f"Cannot scan {path}: {reason}")
            raise ScanError(path, reason)
        logger.warning(f"Skipping unreadable entry {path}: {reason}")
        self.warnings.append(FileFailure(path=path, reason=reason, kind="scan"))

    def _is_excluded_directory(self, path: str) -> bool:
        """Check if path is one of the excluded directories."""
        if not self.excluded_dirs:
            return False
        normalized = os.path.realpath(path)
        if normalized in self.excluded_dirs:
            logger.debug(f"Skipping excluded directory: {path}")
            return True
        return False

    def _process_file(self, path: str) -> bool:
        """
        Decide whether a directory entry should be yielded.
        Returns:
            True for non-empty regular files passing the filter
        """
        try:
            stat_result = os.lstat(path)
        except FileNotFoundError:
            # Vanished between listing and stat; nothing left to compare
            logger.debug(f"File disappeared during scan: {path}")
            return False
        except OSError as e:
            self._handle_error(path, e.strerror or str(e))
            return False

        if stat.S_ISLNK(stat_result.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return False

        if not stat.S_ISREG(stat_result.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return False

        # Skip zero-byte files
        if stat_result.st_size == 0:
            logger.debug(f"Skipping zero-byte file: {path}")
            return False

        relative_path = os.path.relpath(path, self.root_dir)
        if not self.path_filter.matches(relative_path):
            logger.debug(f"Skipping {path} (does not match filter)")
            return False

        return True
