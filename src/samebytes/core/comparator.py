"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparator.py
Incremental block-wise content comparison.

Two files are compared block by block, in order, reading each block only when
it is needed and never twice. The comparison stops at the first differing
block, or as soon as one file runs out of blocks while the other still has
data. Files of different sizes are therefore proven distinct no later than the
end of the shorter file.
"""

from typing import Optional
import logging

from samebytes.core.interfaces import ContentComparator, HashAlgorithm
from samebytes.core.models import BlockConfiguration, Candidate, TrackedFile
from samebytes.core.hasher import XXHashAlgorithmImpl, get_hash_algorithm

logger = logging.getLogger(__name__)


class BlockwiseComparator(ContentComparator):
    """Compares raw block bytes. Tracked files cache the bytes they read."""

    def __init__(self, block_size: int):
        if block_size <= 0:
            raise ValueError("Block size must be positive")
        self.block_size = block_size

    def track(self, candidate: Candidate) -> TrackedFile:
        return TrackedFile(candidate, self.block_size)

    def equal(self, first: TrackedFile, second: TrackedFile) -> bool:
        if first is second:
            return True
        if first.block_size != second.block_size:
            raise ValueError("Cannot compare files tracked with different block sizes")

        index = 0
        while first.has_block(index) and second.has_block(index):
            if first.block(index) != second.block(index):
                logger.debug(f"{first.path} and {second.path} differ at block {index}")
                return False
            index += 1

        # One side still has data: sizes differ
        return not (first.has_block(index) or second.has_block(index))


class DigestBlockComparator(BlockwiseComparator):
    """
    Same comparison order as BlockwiseComparator, but each cached block is
    replaced by its digest, bounding memory per block to the digest size.
    """

    def __init__(self, block_size: int, algorithm: Optional[HashAlgorithm] = None):
        super().__init__(block_size)
        self.algorithm = algorithm or XXHashAlgorithmImpl()

    def track(self, candidate: Candidate) -> TrackedFile:
        return TrackedFile(candidate, self.block_size, block_transform=self.algorithm.hash)


def create_comparator(config: BlockConfiguration) -> ContentComparator:
    """Pick the comparison strategy configured for this run."""
    if config.hash_algorithm:
        return DigestBlockComparator(config.block_size, get_hash_algorithm(config.hash_algorithm))
    return BlockwiseComparator(config.block_size)
