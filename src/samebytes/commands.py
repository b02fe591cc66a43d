"""
Command orchestrator for a matching run: scanner → matcher.
This is the single place where the comparison-error policy lives; the CLI only
formats what it returns.
"""
from typing import Callable, List, Optional, Tuple
import logging
import time

from samebytes.core.errors import ComparisonReadError
from samebytes.core.matcher import GroupMatcherImpl
from samebytes.core.models import BlockConfiguration, Group, MatchStats
from samebytes.core.scanner import DirectoryScannerImpl

logger = logging.getLogger(__name__)


class FindDuplicatesCommand:
    """
    Orchestrates the whole workflow:
    1. Scan the configured roots lazily
    2. Feed every candidate to the group matcher
    3. Drop candidates whose blocks cannot be read, and keep going
       (a group with an unreadable representative is retired by the matcher)

    Usage:
        config = BlockConfiguration(include_dirs=("/data",), block_size=4096)
        groups, stats = FindDuplicatesCommand().execute(config)
    """

    def __init__(self):
        self._groups: List[Group] = []

    def execute(
            self,
            config: BlockConfiguration,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Tuple[List[Group], MatchStats]:
        """
        Run one scan-and-match pass.

        Args:
            config: Validated run configuration
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)

        Returns:
            Tuple of (groups in creation order, statistics). Read handles are
            released before returning.
        """
        stats = MatchStats()
        start_time = time.time()
        scanner = DirectoryScannerImpl(config)

        with GroupMatcherImpl(config) as matcher:
            for candidate in scanner.scan(stopped_flag=stopped_flag, progress_callback=progress_callback):
                if stopped_flag and stopped_flag():
                    logger.info("Matching interrupted by user")
                    break

                try:
                    matcher.add_candidate(candidate)
                except ComparisonReadError as e:
                    stats.files_dropped += 1
                    logger.warning(f"Dropping {candidate.path}: {e}")
                    continue

                stats.candidates_matched += 1
                if progress_callback:
                    progress_callback('matching', stats.candidates_matched, None)

            self._groups = matcher.groups

        stats.groups_found = len(self._groups)
        stats.duplicate_groups = sum(1 for g in self._groups if g.is_duplicate())
        stats.groups_retired = sum(1 for g in self._groups if g.retired)
        for group in self._groups:
            for file in group.files:
                stats.blocks_read += file.blocks_read
                stats.bytes_read += min(file.blocks_read * file.block_size, file.size)
        stats.total_time = time.time() - start_time

        logger.info(
            f"Matched {stats.candidates_matched} files into {stats.groups_found} groups "
            f"({stats.duplicate_groups} with duplicates)"
        )
        return self.get_groups(), stats

    def get_groups(self) -> List[Group]:
        """Groups from the last execution."""
        return self._groups.copy()
