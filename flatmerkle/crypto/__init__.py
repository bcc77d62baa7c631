"""
Core cryptographic utilities.

Truncating, domain-tagged hashing used by the flat Merkle tree.
"""
from .hashing import (
    LEAF_TAG,
    NODE_TAG,
    DEFAULT_ALGORITHM,
    DEFAULT_HASH_SIZE,
    DEFAULT_HASHER,
    DigestAlgorithm,
    Hasher,
    resolve_digest,
    native_digest_size,
    to_hex,
    from_hex,
)

__all__ = [
    "LEAF_TAG",
    "NODE_TAG",
    "DEFAULT_ALGORITHM",
    "DEFAULT_HASH_SIZE",
    "DEFAULT_HASHER",
    "DigestAlgorithm",
    "Hasher",
    "resolve_digest",
    "native_digest_size",
    "to_hex",
    "from_hex",
]
