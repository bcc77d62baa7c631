"""
CLI Tree Builder

Turns command-line payload arguments into an in-memory MerkleTree
using the effective configuration.
"""

from __future__ import annotations

import logging
from argparse import Namespace
from typing import Sequence

from flatmerkle.config.runtime import RuntimeConfig
from flatmerkle.crypto.hashing import from_hex
from flatmerkle.merkle import MerkleTree


logger = logging.getLogger(__name__)


def parse_payload(value: str, hex_input: bool) -> bytes:
    """
    Decode one payload argument.

    Args:
        value: Raw argument
        hex_input: Interpret as 0x-prefixed hex instead of UTF-8 text

    Raises:
        ValueError: If hex_input is set and the value is not valid hex
    """
    if hex_input:
        return from_hex(value)
    return value.encode("utf-8")


def parse_payloads(values: Sequence[str], hex_input: bool) -> list[bytes]:
    return [parse_payload(v, hex_input) for v in values]


def build_tree(payloads: Sequence[bytes], config: RuntimeConfig) -> MerkleTree:
    """Append every payload, in order, to a fresh tree."""
    tree = MerkleTree.from_config(config.tree)
    tree.extend(payloads)
    logger.info(f"Built tree with {tree.leaf_count} leaves ({tree.hasher!r})")
    return tree


def tree_from_args(args: Namespace) -> MerkleTree:
    """Build the tree described by the parsed `payloads` / `hex` arguments."""
    payloads = parse_payloads(args.payloads, args.hex)
    return build_tree(payloads, args.runtime_config)
