"""
Merkle - Flat Append-Only Tree
An append-only Merkle tree living in a single flat list of hash slots.

This module provides:
- MerkleTree: append / root / create_proof over an in-order flat layout
- O(1)-amortized append with O(log n) ancestor recomputation
- Proof construction by structural search (locates a leaf by content)

Layout Rules (Hard Contracts):
1. After k >= 1 appends the list holds exactly 2k - 1 slots
2. Every slot is exactly N bytes
3. Leaf k (0-based insertion order) lives at position 2k
4. Root position is lpbt_root(len(slots)); the empty tree has no root
5. Topology is never stored; see flatmerkle.merkle.indexing

Thread Safety:
- No internal locking. append() must not run concurrently with any other
  call on the same tree. Read-only calls may run concurrently with each
  other. verify_proof() is pure.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Sequence

from flatmerkle.crypto.hashing import (
    DEFAULT_ALGORITHM,
    DEFAULT_HASH_SIZE,
    DigestAlgorithm,
    Hasher,
)
from flatmerkle.merkle.indexing import (
    lpbt_children,
    lpbt_parent,
    lpbt_root,
)
from flatmerkle.merkle.merkle_proofs import (
    Direction,
    ProofElement,
    verify_proof as _verify_proof,
)
from flatmerkle.schemas.errors import StructuralException

if TYPE_CHECKING:
    from flatmerkle.config.runtime import TreeConfig


logger = logging.getLogger(__name__)


def _as_bytes(data: bytes) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(
            f"Leaf data must be bytes-like, got {type(data).__name__}"
        )
    return bytes(data)


class MerkleTree:
    """
    Append-only Merkle tree stored as an in-order flat list of slots.

    Example:
        >>> tree = MerkleTree()
        >>> for payload in (b"\\x01", b"\\x02", b"\\x03"):
        ...     tree.append(payload)
        >>> proof = tree.create_proof(b"\\x02")
        >>> MerkleTree.verify_proof(b"\\x02", proof, tree.root())
        True
    """

    def __init__(
        self,
        algorithm: DigestAlgorithm = DEFAULT_ALGORITHM,
        hash_size: int = DEFAULT_HASH_SIZE,
        concat_size: int | None = None,
        hasher: Hasher | None = None,
    ) -> None:
        """
        Create an empty tree.

        Args:
            algorithm: hashlib name or digest constructor
            hash_size: Slot width N in bytes
            concat_size: Concatenation buffer width ND (default 2 * N)
            hasher: Pre-built Hasher; overrides the three arguments above

        Raises:
            ConfigurationException: If N / ND do not fit the digest
        """
        self.hasher = hasher or Hasher(algorithm, hash_size, concat_size)
        self._slots: list[bytes] = []
        self._empty_slot = bytes(self.hasher.hash_size)

    @classmethod
    def from_config(cls, config: "TreeConfig") -> "MerkleTree":
        """Create an empty tree from a TreeConfig."""
        return cls(
            algorithm=config.algorithm,
            hash_size=config.hash_size,
            concat_size=config.concat_size,
        )

    # -------------------------------------------------------------------------
    # Size queries
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        """Number of slots (2k - 1 for k leaves, 0 when empty)."""
        return len(self._slots)

    @property
    def leaf_count(self) -> int:
        return (len(self._slots) + 1) // 2

    @property
    def is_empty(self) -> bool:
        return not self._slots

    @property
    def hash_size(self) -> int:
        return self.hasher.hash_size

    def slot(self, position: int) -> bytes:
        """Raw slot value at a position (IndexError if out of range)."""
        return self._slots[position]

    def leaf_hashes(self) -> Iterator[bytes]:
        """Leaf commitments in insertion order."""
        return iter(self._slots[0::2])

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def append(self, data: bytes) -> None:
        """
        Append a leaf payload and recompute its ancestors.

        The first leaf occupies one slot. Every later leaf reserves two
        new slots: an ancestor slot and the leaf slot itself. The leaf is
        written at the end, and its ancestors are rehashed bottom-up
        until the root is reached.

        Args:
            data: Leaf payload (bytes-like)

        Raises:
            TypeError: If data is not bytes-like
            StructuralException: If the flat layout is inconsistent. A
                correct tree never raises this; the tree must be treated
                as corrupt afterwards.
        """
        leaf = self.hasher.leaf_hash(_as_bytes(data))

        if not self._slots:
            self._slots.append(leaf)
        else:
            self._slots.append(self._empty_slot)
            self._slots.append(self._empty_slot)
            self._set_leaf(len(self._slots) // 2, leaf)

        logger.debug(f"Appended leaf #{self.leaf_count - 1} at slot {len(self._slots) - 1}")

    def extend(self, payloads: Iterable[bytes]) -> None:
        """Append several payloads in order."""
        for payload in payloads:
            self.append(payload)

    def _set_leaf(self, leaf_index: int, leaf: bytes) -> None:
        """Write a leaf commitment and rehash the path up to the root."""
        size = len(self._slots)
        pos = leaf_index * 2

        if pos >= size:
            raise self._structural_error(
                f"Leaf index {leaf_index} out of bounds for {size} slots",
                position=pos,
            )

        self._slots[pos] = leaf

        parent = lpbt_parent(pos, size)
        if parent is None:
            raise self._structural_error(
                f"Leaf at slot {pos} has no parent",
                position=pos,
            )

        while parent is not None:
            children = lpbt_children(parent, size)
            if children is None:
                raise self._structural_error(
                    f"Could not resolve children of slot {parent}",
                    position=parent,
                )

            left, right = children
            self._slots[parent] = self.hasher.node_hash(self._slots[left], self._slots[right])

            parent = lpbt_parent(parent, size)

    def _structural_error(self, message: str, position: int) -> StructuralException:
        logger.warning(f"Structural invariant violated: {message}")
        return StructuralException(message, position=position, size=len(self._slots))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def root(self) -> Optional[bytes]:
        """Root commitment, or None for an empty tree."""
        if not self._slots:
            return None
        return self._slots[lpbt_root(len(self._slots))]

    def create_proof(self, data: bytes) -> Optional[list[ProofElement]]:
        """
        Build an inclusion proof for a leaf payload.

        The leaf is located by content: a depth-first search from the root
        compares each visited slot with leaf_hash(data). Descending left
        records the right sibling (RIGHT); descending right records the
        left sibling (LEFT); a failed branch drops its element again.

        The search runs on an explicit stack of (position, stage) frames:
        stage 0 = not yet visited, 1 = left subtree searched,
        2 = both subtrees searched.

        Args:
            data: Leaf payload to look for

        Returns:
            Proof elements in leaf-to-root order, or None if no leaf
            carries this payload. A single-leaf tree yields [].
        """
        if not self._slots:
            return None

        target = self.hasher.leaf_hash(_as_bytes(data))
        slots = self._slots
        size = len(slots)

        route: list[ProofElement] = []
        stack: list[tuple[int, int]] = [(lpbt_root(size), 0)]

        while stack:
            pos, stage = stack[-1]

            if stage == 0:
                if slots[pos] == target:
                    route.reverse()
                    logger.debug(f"Found leaf at slot {pos}, proof length {len(route)}")
                    return route

                children = lpbt_children(pos, size)
                if children is None:
                    stack.pop()
                    continue

                left, right = children
                stack[-1] = (pos, 1)
                route.append(ProofElement(slots[right], Direction.RIGHT))
                stack.append((left, 0))

            elif stage == 1:
                left, right = lpbt_children(pos, size)
                route.pop()
                stack[-1] = (pos, 2)
                route.append(ProofElement(slots[left], Direction.LEFT))
                stack.append((right, 0))

            else:
                route.pop()
                stack.pop()

        logger.debug("Leaf not found in tree")
        return None

    def contains(self, data: bytes) -> bool:
        """True if some leaf carries this payload."""
        return self.create_proof(data) is not None

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    @staticmethod
    def verify_proof(
        data: bytes,
        proof: Sequence[ProofElement],
        expected_root: Optional[bytes],
        hasher: Hasher | None = None,
    ) -> bool:
        """Stateless verification; see flatmerkle.merkle.merkle_proofs.verify_proof."""
        return _verify_proof(data, proof, expected_root, hasher)

    def verify(
        self,
        data: bytes,
        proof: Sequence[ProofElement],
        expected_root: Optional[bytes] = None,
    ) -> bool:
        """
        Verify a proof with this tree's hashing parameters.

        Checks against the current root unless expected_root is given.
        """
        if expected_root is None:
            expected_root = self.root()
        return _verify_proof(data, proof, expected_root, self.hasher)

    def __repr__(self) -> str:
        root = self.root()
        root_hex = root.hex() if root is not None else None
        return f"MerkleTree(leaves={self.leaf_count}, hasher={self.hasher!r}, root={root_hex})"


__all__ = [
    "MerkleTree",
]
