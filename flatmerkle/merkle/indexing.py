"""
Merkle - Flat Tree Index Arithmetic
Navigation over a binary tree stored in-order in a flat list.

This module provides pure functions over slot positions:
- PBT (perfect binary tree) algebra: parent / children / leftmost leaf
  for an in-order layout whose size is 2^k - 1
- LPBT (left-packed binary tree) variants that take the actual list
  size into account and redirect into the most recently appended tail

In-order layout of a perfect tree with 4 leaves::

                 3
               /   \\
              1     5
             / \\   / \\
            0   2 4   6

Leaves live at even positions, internal nodes at odd positions. The
level of a node is the number of trailing 1-bits of its position.

After 3 leaves the list has 5 slots and position 5 does not exist yet.
The parent of leaf 4 is then redirected to slot 3, and the right child
of 3 is redirected to 4::

              3
             / \\
            1   4
           / \\
          0   2

Nothing about the topology is ever stored: every navigation step is
recomputed from (position, size).
"""
from __future__ import annotations

from typing import Optional


def last_set_bit(n: int) -> int:
    """
    Isolate the lowest set bit of n.

    Example:
        >>> last_set_bit(12)
        4
    """
    return n - ((n - 1) & n)


def last_zero_bit(n: int) -> int:
    """
    Isolate the lowest clear bit of n (as a power of two).

    For a node position this is 2^level, where level is the number of
    trailing 1-bits.

    Example:
        >>> last_zero_bit(3)
        4
    """
    return last_set_bit(n + 1)


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def is_leaf(n: int) -> bool:
    """Leaves occupy even positions."""
    return n & 1 == 0


def pbt_parent(n: int) -> int:
    """
    Parent of n in a perfect binary tree.

    The result may lie past the end of the actual list; use
    lpbt_parent() when navigating a real tree.
    """
    lzb = last_zero_bit(n)
    return (lzb | n) & ~(lzb << 1)


def pbt_left_child(n: int) -> Optional[int]:
    """Left child of n, or None when n is a leaf."""
    if is_leaf(n):
        return None
    return n & ~(last_zero_bit(n) >> 1)


def pbt_right_child(n: int) -> Optional[int]:
    """Right child of n in a perfect binary tree, or None when n is a leaf."""
    if is_leaf(n):
        return None
    lzb = last_zero_bit(n)
    return (n | lzb) & ~(lzb >> 1)


def pbt_leftmost_leaf(n: int) -> int:
    """Position of the leftmost leaf in the subtree rooted at n."""
    return n & (n + 1)


def lpbt_root(size: int) -> int:
    """
    Root position for a flat list of the given length.

    The list is embedded in the smallest enclosing perfect tree; its root
    sits in the middle of that tree.

    Args:
        size: Number of slots in the list

    Returns:
        Root position (0 for sizes 0 and 1)

    Example:
        >>> [lpbt_root(s) for s in (1, 3, 5, 7, 9)]
        [0, 1, 3, 3, 7]
    """
    return (next_power_of_two(size + 1) - 1) >> 1


def lpbt_parent(n: int, size: int) -> Optional[int]:
    """
    Parent of n in the left-packed tree realised by a list of `size` slots.

    If the perfect-tree parent does not exist yet, the parent is the slot
    just before the leftmost leaf of n's subtree. That slot always exists
    and holds n's actual ancestor, because appends grow the list two slots
    at a time (reserved ancestor first, then the leaf).

    Args:
        n: Position of a node
        size: Current list length

    Returns:
        Parent position, or None when n is the root
    """
    if n == lpbt_root(size):
        return None

    p = pbt_parent(n)
    if p < size:
        return p
    return pbt_leftmost_leaf(n) - 1


def lpbt_right_child(n: int, size: int) -> Optional[int]:
    """
    Right child of n in the left-packed tree realised by `size` slots.

    If the perfect-tree right child does not exist yet, the right subtree
    is whatever has been appended after n: its root is found by treating
    the tail (positions n+1 .. size-1) as a list of its own.

    Args:
        n: Position of an internal node
        size: Current list length

    Returns:
        Right child position, or None when n is a leaf
    """
    r = pbt_right_child(n)
    if r is None:
        return None

    if r < size:
        return r
    return n + 1 + lpbt_root(size - n - 1)


def lpbt_children(n: int, size: int) -> Optional[tuple[int, int]]:
    """(left, right) children of n, or None when n is a leaf."""
    left = pbt_left_child(n)
    right = lpbt_right_child(n, size)
    if left is None or right is None:
        return None
    return left, right


__all__ = [
    "last_set_bit",
    "last_zero_bit",
    "next_power_of_two",
    "is_leaf",
    "pbt_parent",
    "pbt_left_child",
    "pbt_right_child",
    "pbt_leftmost_leaf",
    "lpbt_root",
    "lpbt_parent",
    "lpbt_right_child",
    "lpbt_children",
]
