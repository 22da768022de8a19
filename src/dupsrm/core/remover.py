"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/remover.py
Removal phase: deletes resolved duplicates, or only reports them in dry-run mode.
Each candidate is handled independently; one failure never stops the others.
Nothing is retried and nothing can be rolled back.
"""

import logging
import os
from typing import List, Optional, Type

from dupsrm.core.errors import RemovalError
from dupsrm.core.interfaces import RemovalExecutor
from dupsrm.core.models import DuplicateCandidate, RemovalOutcome, RemovalStatus
from dupsrm.services.file_service import FileService

logger = logging.getLogger(__name__)


class RemovalExecutorImpl(RemovalExecutor):

    def __init__(self, file_service: Type[FileService] = FileService):
        self.file_service = file_service

    def execute(self, candidates: List[DuplicateCandidate], dry_run: bool) -> List[RemovalOutcome]:
        outcomes = []
        for candidate in candidates:
            size = self._size_of(candidate.path)

            if dry_run:
                logger.info(f"Would remove {candidate.path} (same content as {candidate.matched_path})")
                outcomes.append(self._outcome(candidate, RemovalStatus.WOULD_REMOVE, size))
                continue

            try:
                self.file_service.remove_file(candidate.path)
            except RemovalError as e:
                logger.warning(f"Failed to remove {candidate.path}: {e.reason}")
                outcomes.append(self._outcome(candidate, RemovalStatus.FAILED, 0, reason=e.reason))
                continue

            logger.info(f"Removed {candidate.path} (same content as {candidate.matched_path})")
            outcomes.append(self._outcome(candidate, RemovalStatus.REMOVED, size))

        return outcomes

    @staticmethod
    def _size_of(path: str) -> int:
        try:
            return os.lstat(path).st_size
        except OSError:
            return 0

    @staticmethod
    def _outcome(
        candidate: DuplicateCandidate,
        status: RemovalStatus,
        size: int,
        reason: Optional[str] = None
    ) -> RemovalOutcome:
        return RemovalOutcome(
            path=candidate.path,
            digest=candidate.digest,
            status=status,
            matched_path=candidate.matched_path,
            size=size,
            reason=reason,
        )
