"""
SameBytes: finds groups of byte-identical files without hashing whole files.

Core features:
- Lazy block-by-block comparison: files are read only as far as needed to tell them apart
- Multi-root scanning with depth limit, excluded directories, minimum size and name patterns
- Optional per-block xxHash64 digests to bound memory on large block sizes
- CLI interface for headless usage
"""

from importlib.metadata import PackageNotFoundError, version as _version

try:
    __version__ = _version("samebytes")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from samebytes.commands import FindDuplicatesCommand
from samebytes.core import (
    BlockConfiguration, Candidate, TrackedFile, Group, MatchStats,
    ConfigurationError, ComparisonReadError, ScanAccessError)
from samebytes.utils.convert_utils import ConvertUtils

__all__ = [
    "FindDuplicatesCommand",
    "BlockConfiguration",
    "Candidate",
    "TrackedFile",
    "Group",
    "MatchStats",
    "ConfigurationError",
    "ComparisonReadError",
    "ScanAccessError",
    "ConvertUtils",
    "__version__",
]
