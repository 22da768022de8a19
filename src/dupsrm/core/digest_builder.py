"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/digest_builder.py
Parallel digest computation for one directory tree.

Paths are submitted to a fixed-size thread pool as the scanner yields them, so
hashing starts before the walk is finished. Workers only compute digests; the
calling thread is the single owner of the DigestMap and merges every result,
so the map itself needs no locking.

Failure policy:
  • strict (root tree): the first HashError cancels pending work and propagates,
    because an incomplete root map would hide real duplicates
  • tolerant (reference tree): the file is recorded in DigestMap.skipped and
    the build carries on
"""

import logging
import os
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, Iterable, Optional, Set

from dupsrm.core.errors import HashError
from dupsrm.core.interfaces import DigestBuilder, Hasher
from dupsrm.core.models import DigestMap, FileEntry, FileFailure

logger = logging.getLogger(__name__)

MAX_WORKERS_LIMIT = 32


def default_worker_count() -> int:
    return min(MAX_WORKERS_LIMIT, os.cpu_count() or 4)


class DigestBuilderImpl(DigestBuilder):
    """
    Builds a DigestMap using a pool of worker threads.
    Uses an injected Hasher instance for flexibility and testability.
    """

    def __init__(self, hasher: Hasher, max_workers: Optional[int] = None, stage_name: str = "Hashing"):
        self.hasher = hasher
        self.max_workers = max_workers or default_worker_count()
        self.stage_name = stage_name
        # Upper bound on queued futures, so a huge tree is not materialized up front
        self.max_pending = self.max_workers * 4

    def build(
        self,
        paths: Iterable[str],
        strict: bool = True,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> DigestMap:
        digest_map = DigestMap()
        pending: Dict[Future, str] = {}
        processed = 0

        executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="dupsrm-hash")
        try:
            for path in paths:
                pending[executor.submit(self.hasher.compute_digest, path)] = path
                if len(pending) >= self.max_pending:
                    done, _ = wait(pending, return_when=FIRST_COMPLETED)
                    processed += self._merge(done, pending, digest_map, strict)
                    if progress_callback:
                        progress_callback(self.stage_name, processed, None)

            while pending:
                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                processed += self._merge(done, pending, digest_map, strict)
                if progress_callback:
                    progress_callback(self.stage_name, processed, None)
        except BaseException:
            executor.shutdown(wait=True, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

        logger.debug(
            f"{self.stage_name}: {digest_map.file_count} files, {len(digest_map)} distinct digests, "
            f"{len(digest_map.skipped)} skipped"
        )
        return digest_map

    @staticmethod
    def _merge(
        done: Set[Future],
        pending: Dict[Future, str],
        digest_map: DigestMap,
        strict: bool
    ) -> int:
        """Moves finished futures from pending into the map. Returns how many were merged."""
        merged = 0
        # Sorted so the first error raised is deterministic within one batch
        for future in sorted(done, key=lambda f: pending[f]):
            path = pending.pop(future)
            merged += 1
            try:
                digest = future.result()
            except HashError as e:
                if strict:
                    logger.debug(str(e))
                    raise
                logger.warning(f"Skipping {path}: {e.reason}")
                digest_map.skipped.append(FileFailure(path=path, reason=e.reason, kind="hash"))
                continue
            digest_map.add(FileEntry(path=path, digest=digest))
        return merged
