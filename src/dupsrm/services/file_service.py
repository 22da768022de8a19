"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File operations used by the removal phase.
Deletion is permanent: there is no trash and no undo.
"""
import os
import stat
from dupsrm.core.errors import RemovalError


class FileService:
    """
    Filesystem mutations, kept in one place so tests can patch them.
    Every failure is raised as RemovalError with a human-readable reason.
    """

    @staticmethod
    def remove_file(file_path: str):
        """Permanently deletes a regular file."""
        try:
            mode = os.lstat(file_path).st_mode
        except FileNotFoundError as e:
            raise RemovalError(file_path, "file not found") from e
        except OSError as e:
            raise RemovalError(file_path, e.strerror or str(e)) from e

        if stat.S_ISDIR(mode):
            raise RemovalError(file_path, "path is a directory")

        try:
            os.remove(file_path)
        except OSError as e:
            raise RemovalError(file_path, e.strerror or str(e)) from e
