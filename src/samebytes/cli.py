#!/usr/bin/env python3
"""
SameBytes CLI: command line interface for finding byte-identical files.
Builds a BlockConfiguration from the flags, runs the scan-and-match command and
prints every group as a block of paths.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from samebytes import __version__
from samebytes.commands import FindDuplicatesCommand
from samebytes.core.errors import ConfigurationError
from samebytes.core.models import BlockConfiguration, Group, DEFAULT_BLOCK_SIZE, DEFAULT_MIN_FILE_SIZE
from samebytes.utils.convert_utils import ConvertUtils
from samebytes.aliases import (
    HASH_ALGORITHM_ALIASES, HASH_ALGORITHM_CHOICES, HASH_ALGORITHM_HELP_TEXT,
    EPILOG_TEXT
)

logger = logging.getLogger(__name__)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments. --help prints usage and exits with status 0."""
        parser = argparse.ArgumentParser(
            prog="samebytes",
            description="SameBytes: find byte-identical files by lazy block-wise comparison",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Traversal options
        parser.add_argument(
            "--include-dir", "-i",
            action="append",
            default=None,
            type=str,
            metavar="DIR",
            dest="include_dirs",
            help="Directory to scan (repeatable). Nothing is scanned without one."
        )
        parser.add_argument(
            "--exclude-dir", "-e",
            action="append",
            default=None,
            type=str,
            metavar="DIR",
            dest="exclude_dirs",
            help="Directory to skip entirely, matched by canonical path (repeatable)"
        )
        parser.add_argument(
            "--max-depth", "-d",
            default=None,
            type=int,
            metavar="N",
            help="Descend at most N levels below each root. Default: unlimited"
        )
        parser.add_argument(
            "--no-follow-symlinks", "-P",
            action="store_false",
            dest="follow_symlinks",
            help="Skip symbolic links instead of following them"
        )

        # Filtering options
        parser.add_argument(
            "--file-size", "-s",
            default=str(DEFAULT_MIN_FILE_SIZE),
            type=str,
            metavar="SIZE",
            help=f"Only files strictly larger than SIZE (e.g., 100, 4K, 1MB). Default: {DEFAULT_MIN_FILE_SIZE}"
        )
        parser.add_argument(
            "--file", "-f",
            action="append",
            default=None,
            type=str,
            metavar="REGEX",
            dest="name_patterns",
            help="File name pattern, must match the whole name (repeatable).\n"
                 "A file is kept if it matches at least one pattern."
        )

        # Comparison options
        parser.add_argument(
            "--block-size", "-b",
            default=str(DEFAULT_BLOCK_SIZE),
            type=str,
            metavar="SIZE",
            help=f"Comparison block size (e.g., 4096, 64K). Default: {DEFAULT_BLOCK_SIZE}"
        )
        parser.add_argument(
            "--hash-algorithm", "-a",
            choices=HASH_ALGORITHM_CHOICES,
            default="none",
            type=str,
            help=HASH_ALGORITHM_HELP_TEXT
        )

        # Output options
        parser.add_argument(
            "--duplicates-only", "-D",
            action="store_true",
            help="Print only groups with two or more files"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Only report errors on stderr"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress information and statistics on stderr"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together", code=2)

        if not ConvertUtils.is_valid_size_format(args.file_size):
            self.error_exit(f"Invalid --file-size format: {args.file_size}", code=2)
        if not ConvertUtils.is_valid_size_format(args.block_size):
            self.error_exit(f"Invalid --block-size format: {args.block_size}", code=2)

        # Missing or non-directory roots are reported by the scanner itself
        if not args.include_dirs:
            self.warning("No --include-dir given, nothing to scan")

        for excl_dir in args.exclude_dirs or []:
            excl_path = Path(excl_dir).resolve()
            if not excl_path.exists():
                self.warning(f"Excluded directory not found: {excl_dir}")
            elif not excl_path.is_dir():
                self.warning(f"Excluded path is not a directory: {excl_dir}")

    @staticmethod
    def create_config(args: argparse.Namespace) -> BlockConfiguration:
        """
        Create BlockConfiguration from CLI arguments.
        Raises ConfigurationError for any invalid value.
        """
        try:
            min_file_size = ConvertUtils.human_to_bytes(args.file_size)
            block_size = ConvertUtils.human_to_bytes(args.block_size)
        except ValueError as e:
            raise ConfigurationError(f"Invalid size format: {e}") from e

        return BlockConfiguration(
            block_size=block_size,
            min_file_size=min_file_size,
            max_depth=args.max_depth,
            include_dirs=tuple(args.include_dirs or ()),
            exclude_dirs=tuple(args.exclude_dirs or ()),
            name_patterns=tuple(args.name_patterns or ()),
            follow_symlinks=args.follow_symlinks,
            hash_algorithm=HASH_ALGORITHM_ALIASES[args.hash_algorithm],
        )

    @staticmethod
    def configure_logging(verbose: bool, quiet: bool) -> None:
        if verbose:
            level = logging.INFO
        elif quiet:
            level = logging.ERROR
        else:
            level = logging.WARNING
        logging.getLogger().setLevel(level)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return
        sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    @staticmethod
    def stopped_flag() -> bool:
        """Check if operation should stop (placeholder for signal handling)."""
        return False

    def run_matching(self, config: BlockConfiguration) -> List[Group]:
        """Execute the scan-and-match workflow."""
        command = FindDuplicatesCommand()
        groups, stats = command.execute(
            config,
            progress_callback=self.progress_callback if self.verbose else None,
            stopped_flag=self.stopped_flag
        )

        if self.verbose:
            sys.stderr.write("\n")
            print(stats.summary(), file=sys.stderr)

        if stats.files_dropped and not self.quiet:
            self.warning(f"{stats.files_dropped} file(s) could not be read and were left out")
        if stats.groups_retired and not self.quiet:
            self.warning(f"{stats.groups_retired} group(s) stopped matching because their first file became unreadable")

        return groups

    @staticmethod
    def format_groups(groups: List[Group], duplicates_only: bool = False) -> str:
        """One block of newline-separated paths per group, blank line between groups."""
        blocks = [
            "\n".join(group.paths)
            for group in groups
            if group.is_duplicate() or not duplicates_only
        ]
        return "\n\n".join(blocks)

    def output_results(self, groups: List[Group], duplicates_only: bool = False) -> None:
        """Print groups in creation order without additional sorting."""
        text = self.format_groups(groups, duplicates_only=duplicates_only)
        if text:
            print(text)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.configure_logging(self.verbose, self.quiet)

        self.validate_args(args)
        config = self.create_config(args)

        if not config.include_dirs:
            return

        groups = self.run_matching(config)
        self.output_results(groups, duplicates_only=args.duplicates_only)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"Completed in {elapsed:.2f} seconds", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run(argv)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except ConfigurationError as e:
        app.error_exit(str(e), code=2)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
