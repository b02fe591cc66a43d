"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Block digest algorithms for the digest-based comparison strategy.
"""

from typing import Dict, Type

import xxhash

from samebytes.core.errors import ConfigurationError
from samebytes.core.interfaces import HashAlgorithm


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    @staticmethod
    def hash(data: bytes) -> bytes:
        return xxhash.xxh64(data).digest()


HASH_ALGORITHMS: Dict[str, Type[HashAlgorithm]] = {
    "xxhash64": XXHashAlgorithmImpl,
}


def get_hash_algorithm(name: str) -> HashAlgorithm:
    try:
        return HASH_ALGORITHMS[name]()
    except KeyError:
        raise ConfigurationError(f"Unknown hash algorithm '{name}'") from None
