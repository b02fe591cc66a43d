"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements directory scanning using os.walk and pathlib.
Features:
- Scans several root directories, each under an optional depth limit
- Skips excluded directories (by canonical path); follows symbolic links unless disabled
- Walks every directory at most once, across roots and through links
- Applies strict minimum-size and full-match name-pattern filters
- Yields candidates lazily; only metadata is queried, file content is never opened
"""

import os
import stat
from typing import Callable, Iterator, Optional, Set
from pathlib import Path
import logging

from samebytes.core.errors import ScanAccessError
from samebytes.core.interfaces import CandidateScanner
from samebytes.core.models import BlockConfiguration, Candidate

logger = logging.getLogger(__name__)


class DirectoryScannerImpl(CandidateScanner):
    """
    Walks the configured root directories and yields filtered candidates.

    Access errors on a root or an entry are logged and the root/entry is skipped;
    they never abort the traversal.
    """

    # Progress throttling: update every N entries
    PROGRESS_INTERVAL = 5000

    def __init__(self, config: BlockConfiguration):
        self.config = config
        self._visited: Set[str] = set()

    def scan(self,
             stopped_flag: Optional[Callable[[], bool]] = None,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> Iterator[Candidate]:
        """
        Yield candidates from every root in configuration order.
        Enumeration order inside a root is whatever the filesystem returns.
        """
        logger.debug(f"Roots: {list(self.config.include_dirs)}")
        logger.debug(
            f"Filters: min_size>{self.config.min_file_size}, max_depth={self.config.max_depth}, "
            f"patterns={list(self.config.name_patterns)}, excluded={list(self.config.exclude_dirs)}"
        )

        self._visited = set()
        processed = 0
        accepted = 0

        for root_dir in self.config.include_dirs:
            root_path = self._check_root(root_dir)
            if root_path is None:
                continue

            logger.info(f"Scanning directory: {root_path}")
            for current, dirs, files in os.walk(
                    str(root_path),
                    onerror=self._on_walk_error,
                    followlinks=self.config.follow_symlinks):
                if stopped_flag and stopped_flag():
                    logger.debug("Scan interrupted by user")
                    return

                current_path = Path(current)
                self._visited.add(self._canonical(current_path))

                depth = len(current_path.relative_to(root_path).parts)
                if self.config.depth_allows(depth):
                    # Pre-filter subdirectories BEFORE os.walk enters them
                    dirs[:] = [d for d in dirs if self._prefilter_dirs(current_path / d)]
                else:
                    dirs[:] = []

                for filename in files:
                    candidate = self._process_file(current_path / filename)
                    processed += 1
                    if progress_callback and processed % self.PROGRESS_INTERVAL == 0:
                        progress_callback('scanning', processed, None)
                    if candidate is not None:
                        accepted += 1
                        yield candidate

        if progress_callback and processed % self.PROGRESS_INTERVAL:
            progress_callback('scanning', processed, None)

        logger.debug(f"Scan completed. {accepted} of {processed} files accepted.")

    def _check_root(self, root_dir: str) -> Optional[Path]:
        """Return the canonical root path, or None (with a warning) if it cannot be scanned."""
        path = Path(root_dir)
        try:
            if not path.exists():
                logger.warning(f"Failed to find: {root_dir}")
                return None
            if not path.is_dir():
                logger.warning(f"Is not directory: {root_dir}")
                return None
            resolved = path.resolve()
        except OSError as e:
            logger.warning(str(ScanAccessError(root_dir, str(e))))
            return None

        if self.config.is_excluded(str(resolved)):
            logger.warning(f"Root is in the excluded list, skipping: {root_dir}")
            return None
        if str(resolved) in self._visited:
            logger.warning(f"Root was already scanned, skipping: {root_dir}")
            return None
        self._visited.add(str(resolved))
        return resolved

    @staticmethod
    def _canonical(path: Path) -> str:
        try:
            return str(path.resolve())
        except (OSError, RuntimeError):
            return str(path)

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        """os.walk callback: a directory could not be listed."""
        path = error.filename or "<unknown>"
        logger.warning(str(ScanAccessError(str(path), error.strerror or str(error))))

    def _prefilter_dirs(self, path: Path) -> bool:
        """Pre-filter directories: skip excluded, symlinked, revisited and inaccessible locations."""
        try:
            if path.is_symlink() and not self.config.follow_symlinks:
                logger.debug(f"Skipping symbolic link: {path}")
                return False
            canonical = str(path.resolve())
        except (OSError, RuntimeError) as e:
            logger.warning(str(ScanAccessError(str(path), str(e))))
            return False

        if self.config.is_excluded(canonical):
            logger.debug(f"Skipping excluded directory: {path}")
            return False

        # Already walked or queued: overlapping roots, symlink loops and aliases
        if canonical in self._visited:
            logger.debug(f"Skipping already visited directory: {path}")
            return False

        if not os.access(path, os.R_OK | os.X_OK):
            logger.warning(f"Skipping inaccessible directory: {path}")
            return False
        self._visited.add(canonical)
        return True

    def _stat(self, path: Path) -> os.stat_result:
        try:
            if not self.config.follow_symlinks and path.is_symlink():
                return path.lstat()
            return path.stat()
        except OSError as e:
            reason = e.strerror or str(e)
            if os.path.islink(path):
                reason = f"broken symbolic link ({reason})"
            raise ScanAccessError(str(path), reason) from e

    def _process_file(self, path: Path) -> Optional[Candidate]:
        """
        Process an individual file path and return a Candidate if it passes all filters.
        Args:
            path: Path object pointing to the file
        Returns:
            Optional[Candidate]: Candidate object if it passes filters, else None
        """
        try:
            stat_result = self._stat(path)
        except ScanAccessError as e:
            logger.warning(str(e))
            return None

        if stat.S_ISLNK(stat_result.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return None

        if not stat.S_ISREG(stat_result.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        size = stat_result.st_size
        if not self.config.size_passes(size):
            logger.debug(f"Skipping {path} (size {size} bytes not above {self.config.min_file_size})")
            return None

        if not self.config.matches_name(path.name):
            logger.debug(f"Skipping {path} (name does not match any pattern)")
            return None

        logger.debug(f"Accepted file: {path.name} ({size} bytes)")
        return Candidate(path=str(path), size=size)
