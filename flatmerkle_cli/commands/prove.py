"""
CLI Prove Command

Append payloads to a fresh tree, build an inclusion proof for a target
payload and check it against the root.

Usage:
    flatmerkle prove b a b c [--json]
    flatmerkle --hex prove 0x04 0x01 0x02 0x03 0x04 0x05

The output is a human-readable report, not a proof exchange format.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from typing import Any

from flatmerkle.crypto.hashing import to_hex
from flatmerkle.merkle import verify_proof
from flatmerkle_cli.tree_builder import parse_payload, tree_from_args


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NOT_FOUND = 2


@dataclass
class ProveSummary:
    """Summary of proof construction for CLI output."""
    target: str = ""
    root: str | None = None
    found: bool = False
    verified: bool = False
    proof: list[dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def print_summary_human(summary: ProveSummary) -> None:
    """Print summary in human-readable format."""
    print(f"target: {summary.target}")
    print(f"root: {summary.root if summary.root is not None else '(empty)'}")
    print(f"found: {str(summary.found).lower()}")
    if not summary.found:
        return

    print(f"verified: {str(summary.verified).lower()}")
    print(f"\nproof ({len(summary.proof)} elements, leaf to root):")
    for i, element in enumerate(summary.proof):
        print(f"  {i}: {element['direction']:<5} {element['hash']}")


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (2 when the target is not a leaf or fails to verify)
    """
    try:
        target = parse_payload(args.target, args.hex)
        tree = tree_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root = tree.root()
    proof = tree.create_proof(target)

    summary = ProveSummary(
        target=args.target,
        root=to_hex(root) if root is not None else None,
        found=proof is not None,
    )

    if proof is not None:
        summary.verified = verify_proof(target, proof, root, tree.hasher)
        summary.proof = [
            {"hash": to_hex(element.hash), "direction": element.direction.value}
            for element in proof
        ]

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if not summary.found:
        logger.warning(f"Payload {args.target!r} is not a leaf of this tree")
        return EXIT_NOT_FOUND

    if not summary.verified:
        logger.warning("Proof failed to verify against the root")
        return EXIT_NOT_FOUND

    logger.info("Proof verified")
    return EXIT_SUCCESS
