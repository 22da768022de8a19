"""
Unified command orchestrator for duplicate removal.
This is the SINGLE source of truth for the run workflow, used by the CLI and by library callers.
"""
import logging
import time
from typing import Callable, Optional

from dupsrm.core.models import RunConfig, RunReport, RunStats
from dupsrm.core.scanner import FileScannerImpl
from dupsrm.core.hasher import HasherImpl
from dupsrm.core.digest_builder import DigestBuilderImpl
from dupsrm.core.resolver import DuplicateResolverImpl
from dupsrm.core.remover import RemovalExecutorImpl
from dupsrm.core.interfaces import DuplicateResolver, Hasher, RemovalExecutor

logger = logging.getLogger(__name__)


class DuplicateRemovalCommand:
    """
    Orchestrates the entire workflow for one RunConfig:
    1. Scan and digest the root tree (strict: any error aborts the run)
    2. Scan and digest the reference tree (tolerant: errors become warnings)
    3. Resolve reference files whose digest exists in the root tree
    4. Remove them, or only report them in dry-run mode

    Each phase finishes completely before the next one starts, so resolution
    never sees a partial map and removal never starts before resolution is done.

    Usage:
        config = RunConfig.create("~/backup", "~/photos", dry_run=True)
        report = DuplicateRemovalCommand().execute(config)
        for outcome in report.outcomes:
            print(outcome.status.value, outcome.path)
    """

    def __init__(
            self,
            hasher: Optional[Hasher] = None,
            resolver: Optional[DuplicateResolver] = None,
            remover: Optional[RemovalExecutor] = None,
            max_workers: Optional[int] = None
    ):
        self._hasher = hasher
        self._resolver = resolver or DuplicateResolverImpl()
        self._remover = remover or RemovalExecutorImpl()
        self._max_workers = max_workers

    def execute(
            self,
            config: RunConfig,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> RunReport:
        """
        Execute one run with the given configuration.

        Args:
            config: Validated run configuration
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            RunReport with one outcome per duplicate candidate plus reference-tree warnings

        Raises:
            ScanError: If the root tree cannot be fully enumerated (nothing is removed)
            HashError: If a root-tree file cannot be read (nothing is removed)
        """
        stats = RunStats()
        total_start_time = time.time()

        if not config.algorithm.is_cryptographic:
            logger.warning(
                f"{config.algorithm.value} is not a cryptographic hash: unrelated files with "
                f"colliding digests would be treated as duplicates"
            )

        hasher = self._hasher or HasherImpl.for_name(config.algorithm)
        root_excluded, reference_excluded = config.nested_dirs()

        # Step 1: root tree, always scanned in full
        start_time = time.time()
        root_scanner = FileScannerImpl(
            root_dir=config.root_dir,
            excluded_dirs=root_excluded,
            strict=True
        )
        root_map = DigestBuilderImpl(hasher, self._max_workers, stage_name="Hashing root tree").build(
            root_scanner.scan(),
            strict=True,
            progress_callback=progress_callback
        )
        stats.update_stage("root", root_map.file_count, time.time() - start_time)

        # Step 2: reference tree, filtered
        start_time = time.time()
        reference_scanner = FileScannerImpl(
            root_dir=config.reference_dir,
            path_filter=config.path_filter,
            excluded_dirs=reference_excluded,
            strict=False
        )
        reference_map = DigestBuilderImpl(hasher, self._max_workers, stage_name="Hashing reference tree").build(
            reference_scanner.scan(),
            strict=False,
            progress_callback=progress_callback
        )
        stats.update_stage("reference", reference_map.file_count, time.time() - start_time)

        # Step 3: resolve
        start_time = time.time()
        candidates = self._resolver.resolve(reference_map, root_map)
        stats.update_stage("resolve", len(candidates), time.time() - start_time)
        if not candidates:
            logger.info("No duplicates found")

        # Step 4: remove
        start_time = time.time()
        outcomes = self._remover.execute(candidates, dry_run=config.dry_run)
        stats.update_stage("remove", len(outcomes), time.time() - start_time)
        if progress_callback:
            progress_callback("Removing duplicates", len(outcomes), len(candidates))

        stats.total_time = time.time() - total_start_time

        return RunReport(
            outcomes=outcomes,
            warnings=reference_scanner.warnings + reference_map.skipped,
            stats=stats,
        )
