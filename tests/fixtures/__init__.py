"""
Test fixtures package for flatmerkle tests.

This package provides factory functions for creating test objects:
- trees.py: payload lists, populated trees and a reference root

Usage:
    from fixtures import make_payloads, make_tree, reference_root

    def test_something():
        payloads = make_payloads(7)
        tree = make_tree(payloads)
        assert tree.root() == reference_root(payloads, tree.hasher)
"""

from .trees import (
    FIVE_BYTE_PAYLOADS,
    make_payloads,
    make_tree,
    reference_root,
)

__all__ = [
    "FIVE_BYTE_PAYLOADS",
    "make_payloads",
    "make_tree",
    "reference_root",
]
