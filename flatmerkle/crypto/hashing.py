"""
Crypto - Hashing Primitives
Truncating, domain-tagged hashing over an arbitrary digest function.

This module provides:
- Digest resolution from a hashlib name or a constructor
- Hasher: validated (digest, N, ND) bundle with hash / concat_hash / tag_hash
- Leaf vs. internal node tagging (LEAF_TAG / NODE_TAG)
- Hex encoding/decoding with 0x prefix

Hashing Rules (Hard Contracts):
1. hash(data)          = digest(data)[:N]
2. concat_hash(a, b)   = hash(a || b), with len(a) == len(b) == N and ND == 2N
3. tag_hash(tag, data) = concat_hash(tag * N, hash(data))
4. leaf_hash(data)     = tag_hash(LEAF_TAG, data)
5. node_hash(l, r)     = tag_hash(NODE_TAG, concat_hash(l, r))

A leaf commitment and an internal node commitment are fed different tag
blocks, so leaf data can never be replayed as an internal node.
"""
from __future__ import annotations

import functools
import hashlib
from typing import Any, Callable, Union

from flatmerkle.schemas.errors import ConfigurationException, UnknownDigestException


LEAF_TAG: int = 1
NODE_TAG: int = 2

DEFAULT_ALGORITHM = "sha256"
DEFAULT_HASH_SIZE = 32

# A hashlib algorithm name, or a zero-argument callable returning a fresh
# hashlib-compatible object (update(), digest(), digest_size).
DigestAlgorithm = Union[str, Callable[[], Any]]


def resolve_digest(algorithm: DigestAlgorithm) -> Callable[[], Any]:
    """
    Turn a digest specification into a factory of fresh digest objects.

    Args:
        algorithm: hashlib algorithm name (e.g. "sha256", "blake2b")
                   or a zero-argument constructor (e.g. hashlib.sha3_256)

    Returns:
        Zero-argument callable producing a new digest object per call

    Raises:
        UnknownDigestException: If the name is not known to hashlib
    """
    if callable(algorithm):
        return algorithm

    if not isinstance(algorithm, str):
        raise UnknownDigestException(
            f"Digest algorithm must be a name or a constructor, got {type(algorithm).__name__}"
        )

    try:
        hashlib.new(algorithm)
    except ValueError as e:
        raise UnknownDigestException(
            f"Unsupported digest algorithm: {algorithm!r}",
            algorithm=algorithm,
        ) from e

    return functools.partial(hashlib.new, algorithm)


def native_digest_size(algorithm: DigestAlgorithm) -> int:
    """Return the native output length D (bytes) of a digest algorithm."""
    return resolve_digest(algorithm)().digest_size


class Hasher:
    """
    Hashing parameters of one tree: digest algorithm, slot width N and
    concatenation buffer width ND.

    All parameters are checked once, at construction, so hashing itself
    never has to fail on a misconfiguration.

    Example:
        >>> hasher = Hasher("sha256", hash_size=16, concat_size=32)
        >>> len(hasher.leaf_hash(b"payload"))
        16
    """

    def __init__(
        self,
        algorithm: DigestAlgorithm = DEFAULT_ALGORITHM,
        hash_size: int = DEFAULT_HASH_SIZE,
        concat_size: int | None = None,
    ) -> None:
        if concat_size is None:
            concat_size = 2 * hash_size

        self._factory = resolve_digest(algorithm)
        probe = self._factory()

        self.algorithm = algorithm
        self.name: str = algorithm if isinstance(algorithm, str) else getattr(probe, "name", repr(algorithm))
        self.digest_size: int = probe.digest_size
        self.hash_size = hash_size
        self.concat_size = concat_size

        self._validate()

    def _validate(self) -> None:
        if self.digest_size <= 0:
            raise ConfigurationException(
                f"Digest {self.name!r} has no fixed output length",
                parameter="algorithm",
                details={"expected": "fixed-length digest", "actual": self.name},
            )

        if not isinstance(self.hash_size, int) or self.hash_size < 1:
            raise ConfigurationException(
                f"hash_size must be a positive integer, got {self.hash_size!r}",
                parameter="hash_size",
                details={"expected": ">= 1", "actual": self.hash_size},
            )

        # Byte bound: a slot can never be wider than the digest it truncates.
        if self.hash_size > self.digest_size:
            raise ConfigurationException(
                f"hash_size {self.hash_size} exceeds the {self.digest_size}-byte "
                f"output of {self.name!r}",
                parameter="hash_size",
                details={"expected": f"<= {self.digest_size}", "actual": self.hash_size},
            )

        if self.concat_size != 2 * self.hash_size:
            raise ConfigurationException(
                f"concat_size must be 2 * hash_size ({2 * self.hash_size}), "
                f"got {self.concat_size!r}",
                parameter="concat_size",
                details={"expected": 2 * self.hash_size, "actual": self.concat_size},
            )

    def hash(self, data: bytes) -> bytes:
        """
        Hash raw bytes and truncate to the slot width.

        A fresh digest object is used per call, so no state leaks
        between invocations.

        Args:
            data: Raw bytes to hash

        Returns:
            First N bytes of the digest
        """
        h = self._factory()
        h.update(data)
        return h.digest()[:self.hash_size]

    def concat_hash(self, first: bytes, second: bytes) -> bytes:
        """
        Hash two N-byte slots laid side by side in an ND-byte buffer.

        Raises:
            ValueError: If either input is not exactly N bytes
        """
        n = self.hash_size
        if len(first) != n or len(second) != n:
            raise ValueError(
                f"concat_hash expects two {n}-byte values, "
                f"got {len(first)} and {len(second)} bytes"
            )

        buf = bytearray(self.concat_size)
        buf[0:n] = first
        buf[n:self.concat_size] = second

        return self.hash(bytes(buf))

    def tag_block(self, tag: int) -> bytes:
        """N copies of the tag byte."""
        return bytes([tag]) * self.hash_size

    def tag_hash(self, tag: int, data: bytes) -> bytes:
        """Domain-tagged hash: concat_hash(tag * N, hash(data))."""
        return self.concat_hash(self.tag_block(tag), self.hash(data))

    def leaf_hash(self, data: bytes) -> bytes:
        """Commitment of a caller-supplied leaf payload."""
        return self.tag_hash(LEAF_TAG, data)

    def node_hash(self, left: bytes, right: bytes) -> bytes:
        """Commitment of an internal node from its two children."""
        return self.tag_hash(NODE_TAG, self.concat_hash(left, right))

    def __repr__(self) -> str:
        return (
            f"Hasher(algorithm={self.name!r}, hash_size={self.hash_size}, "
            f"concat_size={self.concat_size})"
        )


DEFAULT_HASHER = Hasher()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


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
