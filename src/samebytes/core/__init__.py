"""
Core matching engine: scanner, incremental comparator and group matcher.

This package contains the I/O-sensitive foundation of samebytes:
- DirectoryScannerImpl: multi-root traversal with depth, exclusion, size and name filters
- BlockwiseComparator / DigestBlockComparator: lazy block-by-block content comparison
- GroupMatcherImpl: first-match-wins grouping against group representatives
- Models: Candidate, TrackedFile, Group, BlockConfiguration, MatchStats

All components are pure Python with no UI dependencies.
"""

from .errors import SameBytesError, ConfigurationError, ScanAccessError, ComparisonReadError
from .models import Candidate, TrackedFile, Group, BlockConfiguration, MatchStats
from .hasher import XXHashAlgorithmImpl
from .comparator import BlockwiseComparator, DigestBlockComparator, create_comparator
from .matcher import GroupMatcherImpl
from .scanner import DirectoryScannerImpl

__all__ = [
    "SameBytesError",
    "ConfigurationError",
    "ScanAccessError",
    "ComparisonReadError",
    "Candidate",
    "TrackedFile",
    "Group",
    "BlockConfiguration",
    "MatchStats",
    "XXHashAlgorithmImpl",
    "BlockwiseComparator",
    "DigestBlockComparator",
    "create_comparator",
    "GroupMatcherImpl",
    "DirectoryScannerImpl",
]
