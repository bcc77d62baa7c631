"""
CLI Root Command

Append payloads to a fresh tree and print its root.

Usage:
    flatmerkle root a b c [--json]
    flatmerkle --hex root 0x01 0x02 0x03
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from typing import Any

from flatmerkle.crypto.hashing import to_hex
from flatmerkle_cli.tree_builder import tree_from_args


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class RootSummary:
    """Summary of a built tree for CLI output."""
    algorithm: str = ""
    hash_size: int = 0
    leaves: int = 0
    slots: int = 0
    root: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def print_summary_human(summary: RootSummary) -> None:
    """Print summary in human-readable format."""
    print(f"algorithm: {summary.algorithm}")
    print(f"hash_size: {summary.hash_size}")
    print(f"leaves: {summary.leaves}")
    print(f"slots: {summary.slots}")
    print(f"root: {summary.root if summary.root is not None else '(empty)'}")


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        tree = tree_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root = tree.root()
    summary = RootSummary(
        algorithm=tree.hasher.name,
        hash_size=tree.hash_size,
        leaves=tree.leaf_count,
        slots=len(tree),
        root=to_hex(root) if root is not None else None,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
