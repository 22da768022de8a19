#!/usr/bin/env python3
"""
dupsrm CLI: remove files from a reference directory that already exist in a root directory.
Builds a RunConfig from the command line, runs the engine and prints one line per duplicate.
Deletion is permanent; use --dry-run to preview.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")
try:
    import Crypto.Hash
except ImportError:
    _MISSING_DEPS.append("pycryptodome")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dupsrm import __version__
from dupsrm.core.errors import ConfigurationError, HashError, ScanError
from dupsrm.core.models import HashAlgorithmName, RemovalOutcome, RemovalStatus, RunConfig, RunReport
from dupsrm.commands import DuplicateRemovalCommand
from dupsrm.utils.convert_utils import ConvertUtils
from dupsrm.aliases import HASH_ALGORITHM_CHOICES, HASH_ALGORITHM_HELP_TEXT, EPILOG_TEXT

EXIT_OK = 0
EXIT_PARTIAL_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3
EXIT_INTERRUPTED = 130


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupsrm",
            description="Remove files in the reference directory whose content "
                        "already exists somewhere in the root directory tree",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Required arguments
        parser.add_argument(
            "reference_dir",
            type=str,
            help="Reference directory; its duplicates are removed"
        )
        parser.add_argument(
            "root_dir",
            type=str,
            help="Root directory; its files are never touched"
        )

        # Run options
        parser.add_argument(
            "--dry-run", "-n",
            action="store_true",
            dest="dry_run",
            help="Report what would be removed without removing any file"
        )
        parser.add_argument(
            "--regex", "-r",
            default=None,
            type=str,
            metavar="PATTERN",
            help="Regular expression filtering files of the reference directory\n"
                 "(matched against the path relative to it). Default: all files"
        )
        parser.add_argument(
            "--hash-algorithm", "-a",
            choices=HASH_ALGORITHM_CHOICES,
            default=HashAlgorithmName.default().value,
            type=str.upper,
            dest="hash_algorithm",
            metavar="NAME",
            help=HASH_ALGORITHM_HELP_TEXT
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Only print failures"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics, progress and debug logging"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser.parse_args(args)

    def create_config(self, args: argparse.Namespace) -> RunConfig:
        """Create RunConfig from CLI arguments."""
        try:
            return RunConfig.create(
                reference_dir=os.path.expanduser(args.reference_dir),
                root_dir=os.path.expanduser(args.root_dir),
                algorithm=args.hash_algorithm,
                dry_run=args.dry_run,
                pattern=args.regex,
            )
        except ConfigurationError as e:
            self.error_exit(str(e), code=EXIT_CONFIG_ERROR)

    def configure_logging(self) -> None:
        root_logger = logging.getLogger()
        if self.verbose:
            root_logger.setLevel(logging.DEBUG)
        elif self.quiet:
            root_logger.setLevel(logging.ERROR)
        else:
            root_logger.setLevel(logging.WARNING)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
            sys.stderr.flush()
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
            sys.stderr.flush()

    def run_removal(self, config: RunConfig) -> RunReport:
        """Execute the run; fatal root-tree errors end the process."""
        command = DuplicateRemovalCommand()
        if self.verbose:
            print(f"Comparing with {config.algorithm.value}...")

        try:
            report = command.execute(
                config,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except (ScanError, HashError) as e:
            self.error_exit(f"{e}. Nothing was removed.", code=EXIT_FATAL)

        if self.verbose:
            sys.stderr.write("\n")
            print("\n" + report.stats.print_summary())

        return report

    def output_results(self, report: RunReport, dry_run: bool) -> None:
        """Print one line per outcome, warnings and a summary."""
        for outcome in report.outcomes:
            if outcome.status == RemovalStatus.FAILED or not self.quiet:
                print(self.format_outcome(outcome))

        for warning in report.warnings:
            self.warning(f"Skipped {warning.path} ({warning.kind}): {warning.reason}")

        if self.quiet:
            return

        if not report.outcomes:
            print("No duplicates found.")
            return

        print("=" * 60)
        if dry_run:
            size_str = ConvertUtils.bytes_to_human(sum(o.size for o in report.would_remove))
            print(f"Dry run: {len(report.would_remove)} files would be removed ({size_str})")
        else:
            size_str = ConvertUtils.bytes_to_human(report.bytes_freed)
            print(f"Removed {len(report.removed)}/{len(report.outcomes)} files ({size_str} freed)")
            if report.failed:
                print(f"⚠️  Failed to remove {len(report.failed)} file(s)")

    @staticmethod
    def format_outcome(outcome: RemovalOutcome) -> str:
        digest = ConvertUtils.short_digest(outcome.digest)
        if outcome.status == RemovalStatus.REMOVED:
            return f"[DEL]  {outcome.path}  (= {outcome.matched_path}, {digest})"
        if outcome.status == RemovalStatus.WOULD_REMOVE:
            return f"[DRY]  {outcome.path}  (= {outcome.matched_path}, {digest})"
        return f"[FAIL] {outcome.path}: {outcome.reason}"

    @staticmethod
    def exit_code(report: RunReport) -> int:
        return EXIT_PARTIAL_FAILURE if report.has_failures else EXIT_OK

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, args: Optional[List[str]] = None) -> int:
        """Main entry point. Returns the process exit code."""
        parsed = self.parse_args(args)
        self.verbose = parsed.verbose
        self.quiet = parsed.quiet
        self.configure_logging()

        config = self.create_config(parsed)

        if not self.quiet:
            mode = " (dry run)" if config.dry_run else ""
            print(f"Looking for files of {config.reference_dir} in {config.root_dir}{mode}")

        report = self.run_removal(config)
        self.output_results(report, dry_run=config.dry_run)

        # Show completion time
        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")

        return self.exit_code(report)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
