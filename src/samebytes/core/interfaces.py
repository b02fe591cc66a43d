"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the matching system.

Key Components:
---------------
- HashAlgorithm: Digest function applied to single blocks (e.g. xxHash64).
- ContentComparator: Creates tracked files and decides whether two of them are byte-identical.
- CandidateScanner: Walks root directories and yields filtered candidates.
- GroupMatcher: Inserts candidates one at a time into groups of identical files.
"""

from typing import Protocol, List, Iterator, Optional, Callable
from samebytes.core.models import Candidate, TrackedFile, Group


class HashAlgorithm(Protocol):
    """
    Interface for block digest functions.

    Allows caching a short digest per block instead of the raw bytes
    without affecting the comparison order.
    """

    @staticmethod
    def hash(data: bytes) -> bytes:
        """Computes the digest of the provided byte data."""
        ...


class ContentComparator(Protocol):
    """Strategy deciding content equality of two tracked files."""

    def track(self, candidate: Candidate) -> TrackedFile:
        """Wrap a candidate in a TrackedFile suitable for this comparator."""
        ...

    def equal(self, first: TrackedFile, second: TrackedFile) -> bool:
        """True if both files have identical content."""
        ...


class CandidateScanner(Protocol):
    """
    Interface for scanning file systems and yielding candidate files.
    """
    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Iterator[Candidate]:
        """
        Lazily yield candidates from the configured roots.

        Args:
            stopped_flag: Function that returns True if operation should be canceled.
            progress_callback: Optional callback for reporting progress (stage, current, total).
        """
        ...


class GroupMatcher(Protocol):
    """
    Interface for the grouping engine.
    """
    def add_candidate(self, candidate: Candidate) -> Group:
        """Insert one candidate and return the group it ended up in."""
        ...

    @property
    def groups(self) -> List[Group]:
        ...

    def close(self) -> None:
        ...
