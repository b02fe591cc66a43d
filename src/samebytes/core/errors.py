"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception hierarchy shared by the scanner, the comparator and the CLI.
"""

from typing import Optional


class SameBytesError(Exception):
    """Base class for all errors raised by samebytes."""


class ConfigurationError(SameBytesError, ValueError):
    """Invalid configuration value (block size, size filter, name pattern...)."""


class ScanAccessError(SameBytesError, OSError):
    """
    A root directory or a directory entry could not be stat'd or listed.
    Recovered by the scanner: the entry is logged and skipped.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot access {path}: {reason}")
        self.path = path
        self.reason = reason


class ComparisonReadError(SameBytesError, OSError):
    """
    A block could not be read from a file that passed the scanner filters.
    Propagates out of GroupMatcherImpl.add_candidate().
    """

    def __init__(self, path: str, block_index: Optional[int], reason: str):
        where = f" (block {block_index})" if block_index is not None else ""
        super().__init__(f"Failed to read {path}{where}: {reason}")
        self.path = path
        self.block_index = block_index
        self.reason = reason
