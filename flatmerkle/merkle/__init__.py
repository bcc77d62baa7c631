"""
Merkle - Flat Append-Only Merkle Tree

An append-only Merkle tree stored as a single in-order list of
fixed-width hash slots, with inclusion proofs.

This module provides:
- MerkleTree: append / root / create_proof
- ProofElement, Direction: proof representation
- verify_proof, MerkleVerifier: stateless verification
- indexing: positional arithmetic for the flat layout

Hashing Rules:
1. Leaf:   tag_hash(LEAF_TAG, data)
2. Parent: tag_hash(NODE_TAG, concat_hash(left, right))
3. Empty tree: no root (None)
4. Single leaf: root = leaf commitment

Usage:
    from flatmerkle.merkle import MerkleTree, verify_proof

    tree = MerkleTree()
    for payload in payloads:
        tree.append(payload)

    root = tree.root()
    proof = tree.create_proof(payloads[2])

    assert verify_proof(payloads[2], proof, root)
"""
from .merkle_proofs import (
    Direction,
    ProofElement,
    MerkleVerifier,
    fold_proof,
    verify_proof,
)

from .merkle_tree import (
    MerkleTree,
)


__all__ = [
    # Core types
    "MerkleTree",
    "ProofElement",
    "Direction",
    # Verification
    "verify_proof",
    "fold_proof",
    "MerkleVerifier",
]
