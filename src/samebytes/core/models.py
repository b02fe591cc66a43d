"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for scanning and block-wise matching: candidates, tracked files,
groups, run configuration and statistics.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, List, Optional, Tuple
import logging
import os
import re

from samebytes.core.errors import ComparisonReadError, ConfigurationError
from samebytes.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 1024
DEFAULT_MIN_FILE_SIZE = 1
SUPPORTED_HASH_ALGORITHMS = ("xxhash64",)


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class Candidate:
    """
    A regular file discovered by the scanner.
    Immutable once yielded: only its path and size are known at this point.
    """
    path: str
    size: int  # in bytes

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.size}")

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


class TrackedFile:
    """
    A candidate plus its lazily read block cache.

    Blocks are the half-open byte ranges [i * block_size, min((i + 1) * block_size, size)).
    Each block is read once, in order, and kept in an append-only list. With a
    block transform (e.g. a digest function) the transformed value is cached
    instead of the raw bytes.

    The read handle is opened on the first fetch and released by close(), or as
    soon as the last block has been cached. It is reopened if ever needed again.
    """

    def __init__(
            self,
            candidate: Candidate,
            block_size: int,
            block_transform: Optional[Callable[[bytes], bytes]] = None
    ):
        if block_size <= 0:
            raise ValueError("Block size must be positive")
        self.candidate = candidate
        self.block_size = block_size
        self._block_transform = block_transform
        self._specs: List[bytes] = []
        self._handle: Optional[BinaryIO] = None

    @property
    def path(self) -> str:
        return self.candidate.path

    @property
    def size(self) -> int:
        return self.candidate.size

    @property
    def block_count(self) -> int:
        """Number of blocks the file is made of (0 for an empty file)."""
        return -(-self.size // self.block_size)

    @property
    def blocks_read(self) -> int:
        return len(self._specs)

    @property
    def is_exhausted(self) -> bool:
        """True once every block of the file has been cached."""
        return self.blocks_read >= self.block_count

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def has_block(self, index: int) -> bool:
        """True if block `index` is cached or would yield at least one byte."""
        return index < len(self._specs) or index * self.block_size < self.size

    def block(self, index: int) -> bytes:
        """Return the cached value of block `index`, reading it (and any unread predecessors) on first access."""
        if not self.has_block(index):
            raise IndexError(f"Block {index} is beyond the end of {self.path}")
        while len(self._specs) <= index:
            self._specs.append(self._read_next_block())
        return self._specs[index]

    def _read_next_block(self) -> bytes:
        index = len(self._specs)
        start = index * self.block_size
        end = min(start + self.block_size, self.size)
        length = end - start

        handle = self._open()
        try:
            handle.seek(start)
            data = handle.read(length)
        except OSError as e:
            self.close()
            raise ComparisonReadError(self.path, index, str(e)) from e

        if len(data) != length:
            self.close()
            raise ComparisonReadError(
                self.path, index, f"short read: expected {length} bytes, got {len(data)}"
            )

        logger.debug(f"Read block {index} [{start}, {end}) of {self.path}")

        # Last block cached: nothing left to read through this handle
        if end >= self.size:
            self.close()

        if self._block_transform is not None:
            return self._block_transform(data)
        return data

    def _open(self) -> BinaryIO:
        if self._handle is None:
            try:
                self._handle = open(self.path, "rb")
            except OSError as e:
                raise ComparisonReadError(self.path, len(self._specs), str(e)) from e
        return self._handle

    def close(self) -> None:
        """Release the read handle. Cached blocks are kept."""
        if self._handle is not None:
            try:
                self._handle.close()
            finally:
                self._handle = None

    def __enter__(self) -> "TrackedFile":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self):
        return f"<TrackedFile path={self.path}, size={self.size}, blocks_read={self.blocks_read}>"


@dataclass
class Group:
    """
    Files proven byte-identical by the incremental comparator.
    The first member is the representative: the only one compared with new candidates.
    Groups only grow by appending; they never shrink or merge.
    A retired group keeps its members but is no longer compared with new candidates.
    """
    files: List[TrackedFile]
    retired: bool = False

    def __post_init__(self):
        if not self.files:
            raise ValueError("A group cannot be empty")

    @property
    def representative(self) -> TrackedFile:
        return self.files[0]

    @property
    def size(self) -> int:
        return self.representative.size

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    @property
    def file_count(self) -> int:
        return len(self.files)

    def add_file(self, file: TrackedFile) -> None:
        if file.size != self.size:
            raise ValueError("Cannot add file with different size to a group.")
        self.files.append(file)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.file_count >= 2

    def __repr__(self):
        return f"<Group size={self.size}, count={self.file_count}>"


# =============================
# Configuration and statistics
# =============================

@dataclass(frozen=True)
class BlockConfiguration:
    """Process-wide parameters, validated on creation and read-only afterwards."""
    block_size: int = DEFAULT_BLOCK_SIZE
    min_file_size: int = DEFAULT_MIN_FILE_SIZE
    max_depth: Optional[int] = None
    include_dirs: Tuple[str, ...] = ()
    exclude_dirs: Tuple[str, ...] = ()
    name_patterns: Tuple[str, ...] = ()
    follow_symlinks: bool = True
    hash_algorithm: Optional[str] = None
    _compiled_patterns: Tuple[re.Pattern, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if isinstance(self.block_size, bool) or not isinstance(self.block_size, int):
            raise ConfigurationError(f"Block size must be an integer, got {self.block_size!r}")
        if self.block_size <= 0:
            raise ConfigurationError(f"Block size must be positive, got {self.block_size}")

        if isinstance(self.min_file_size, bool) or not isinstance(self.min_file_size, int):
            raise ConfigurationError(f"Minimum file size must be an integer, got {self.min_file_size!r}")
        if self.min_file_size < 0:
            raise ConfigurationError("Minimum file size cannot be negative")

        if self.max_depth is not None and not isinstance(self.max_depth, int):
            raise ConfigurationError(f"Maximum depth must be an integer, got {self.max_depth!r}")

        if self.hash_algorithm is not None and self.hash_algorithm not in SUPPORTED_HASH_ALGORITHMS:
            raise ConfigurationError(
                f"Unknown hash algorithm '{self.hash_algorithm}'. "
                f"Supported: {', '.join(SUPPORTED_HASH_ALGORITHMS)}"
            )

        compiled = []
        for pattern in self.name_patterns:
            try:
                compiled.append(re.compile(pattern))
            except re.error as e:
                raise ConfigurationError(f"Malformed name pattern '{pattern}': {e}") from e

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "include_dirs", tuple(str(d) for d in self.include_dirs))
        object.__setattr__(self, "exclude_dirs", tuple(str(Path(d).resolve()) for d in self.exclude_dirs))
        object.__setattr__(self, "name_patterns", tuple(self.name_patterns))
        object.__setattr__(self, "_compiled_patterns", tuple(compiled))

    @property
    def unlimited_depth(self) -> bool:
        return self.max_depth is None or self.max_depth < 0

    def depth_allows(self, depth: int) -> bool:
        """True if a directory `depth` levels below a root may be descended into."""
        return self.unlimited_depth or depth < self.max_depth

    def size_passes(self, size: int) -> bool:
        """Minimum size is a strict lower bound."""
        return size > self.min_file_size

    def matches_name(self, name: str) -> bool:
        """File name must fully match at least one pattern, if any are configured."""
        if not self._compiled_patterns:
            return True
        return any(p.fullmatch(name) for p in self._compiled_patterns)

    def is_excluded(self, canonical_path: str) -> bool:
        return canonical_path in self.exclude_dirs


@dataclass
class MatchStats:
    """Statistics collected while matching one run."""
    candidates_matched: int = 0
    files_dropped: int = 0
    groups_found: int = 0
    groups_retired: int = 0
    duplicate_groups: int = 0
    blocks_read: int = 0
    bytes_read: int = 0
    total_time: float = 0.0

    def summary(self) -> str:
        lines = [
            "Matching Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Files matched: {self.candidates_matched}",
            f"Files dropped (read errors): {self.files_dropped}",
            f"Groups: {self.groups_found} ({self.duplicate_groups} with duplicates)",
            f"Groups retired (unreadable representative): {self.groups_retired}",
            f"Blocks read: {self.blocks_read} ({ConvertUtils.bytes_to_human(self.bytes_read)})",
        ]
        return "\n".join(lines)
