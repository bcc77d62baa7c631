"""
flatmerkle - append-only Merkle tree in a flat array.

Usage:
    from flatmerkle import MerkleTree, verify_proof
"""

from flatmerkle.merkle import (
    Direction,
    MerkleTree,
    MerkleVerifier,
    ProofElement,
    verify_proof,
)

__version__ = "0.1.0"

__all__ = [
    "Direction",
    "MerkleTree",
    "MerkleVerifier",
    "ProofElement",
    "verify_proof",
]
