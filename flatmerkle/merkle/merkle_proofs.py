"""
Merkle - Inclusion Proofs
Proof elements and stateless proof verification.

This module provides:
- Direction: which side a sibling hash is combined on
- ProofElement: one (sibling hash, direction) step of a proof
- verify_proof: recompute a root from a payload and a proof
- MerkleVerifier: verifier bound to one set of hashing parameters

Verification needs only the payload, the proof and the expected root;
it never touches a tree. A mismatch is reported as False, never raised.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from flatmerkle.crypto.hashing import DEFAULT_HASHER, Hasher


logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Side on which the sibling hash enters the parent hash."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ProofElement:
    """
    One step of an inclusion proof.

    Attributes:
        hash: Sibling slot value (N bytes)
        direction: LEFT  -> parent = node_hash(hash, acc)
                   RIGHT -> parent = node_hash(acc, hash)
    """
    hash: bytes
    direction: Direction

    def __post_init__(self) -> None:
        """Normalise the direction to the enum."""
        if not isinstance(self.direction, Direction):
            object.__setattr__(self, "direction", Direction(self.direction))


def fold_proof(
    data: bytes,
    proof: Sequence[ProofElement],
    hasher: Hasher = DEFAULT_HASHER,
) -> Optional[bytes]:
    """
    Recompute the root implied by a payload and a proof.

    Args:
        data: Leaf payload
        proof: Proof elements in leaf-to-root order
        hasher: Hashing parameters of the tree the proof came from

    Returns:
        The recomputed root, or None if a sibling hash has the wrong width
    """
    acc = hasher.leaf_hash(data)

    for step, element in enumerate(proof):
        if len(element.hash) != hasher.hash_size:
            logger.debug(
                f"Proof step {step} has a {len(element.hash)}-byte sibling, "
                f"expected {hasher.hash_size}"
            )
            return None

        if element.direction is Direction.LEFT:
            acc = hasher.node_hash(element.hash, acc)
        else:
            acc = hasher.node_hash(acc, element.hash)

    return acc


def verify_proof(
    data: bytes,
    proof: Sequence[ProofElement],
    expected_root: Optional[bytes],
    hasher: Hasher | None = None,
) -> bool:
    """
    Verify that `data` is a leaf of the tree committed to by `expected_root`.

    Algorithm:
    1. acc = leaf_hash(data)
    2. For each element (leaf to root):
       - LEFT:  acc = node_hash(sibling, acc)
       - RIGHT: acc = node_hash(acc, sibling)
    3. Compare acc with expected_root byte-wise

    The comparison is a plain equality check, not constant-time; all
    inputs are public.

    Args:
        data: Leaf payload
        proof: Proof elements in leaf-to-root order
        expected_root: Root to check against (None never verifies)
        hasher: Hashing parameters (default: sha256, N=32, ND=64)

    Returns:
        True if the proof is valid, False otherwise
    """
    if expected_root is None:
        return False

    computed = fold_proof(data, proof, hasher or DEFAULT_HASHER)
    if computed is None:
        return False

    return computed == bytes(expected_root)


class MerkleVerifier:
    """
    Verifier bound to one set of hashing parameters.

    Example:
        >>> verifier = MerkleVerifier(tree.hasher)
        >>> verifier.verify(b"payload", proof, root)
        True
    """

    def __init__(self, hasher: Hasher | None = None) -> None:
        self.hasher = hasher or DEFAULT_HASHER

    def verify(
        self,
        data: bytes,
        proof: Sequence[ProofElement],
        expected_root: Optional[bytes],
    ) -> bool:
        """Verify a proof; see verify_proof()."""
        return verify_proof(data, proof, expected_root, self.hasher)

    def compute_root(self, data: bytes, proof: Sequence[ProofElement]) -> Optional[bytes]:
        """Root implied by a payload and a proof, or None for a malformed proof."""
        return fold_proof(data, proof, self.hasher)


__all__ = [
    "Direction",
    "ProofElement",
    "fold_proof",
    "verify_proof",
    "MerkleVerifier",
]
