"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m flatmerkle_cli root <payload>... [--json]
    python -m flatmerkle_cli prove <target> <payload>... [--json]
    python -m flatmerkle_cli config --show

Environment Variables:
    FLATMERKLE_ALGORITHM        hashlib digest name (default: sha256)
    FLATMERKLE_HASH_SIZE        Slot width N in bytes (default: 32)
    FLATMERKLE_CONCAT_SIZE      Concatenation width ND in bytes (default: 2 * N)
    FLATMERKLE_LOG_LEVEL        Log level (default: INFO)
    FLATMERKLE_LOG_FILE         Optional log file
"""

from __future__ import annotations

import argparse
import copy
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from flatmerkle.config.runtime import RuntimeConfig, get_default_config
from flatmerkle.merkle import MerkleTree
from flatmerkle.schemas.errors import ConfigurationException
from flatmerkle_cli.commands import root, prove


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NOT_FOUND = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_payload_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "payloads",
        nargs="*",
        help="Leaf payloads, appended in order",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="flatmerkle",
        description="flatmerkle CLI - Build append-only Merkle trees, print roots and inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--algorithm",
        type=str,
        default=None,
        help="hashlib digest name (overrides config)",
    )
    parser.add_argument(
        "--hash-size",
        type=int,
        default=None,
        help="Slot width N in bytes (overrides config; ND follows as 2 * N)",
    )
    parser.add_argument(
        "--hex",
        action="store_true",
        default=False,
        help="Payloads are 0x-prefixed hex instead of UTF-8 text",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root of a tree built from payloads",
        description="Append the payloads in order and print the resulting root.",
    )
    _add_payload_arguments(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Build and check an inclusion proof",
        description="Append the payloads in order, then prove that TARGET is one of them.",
    )
    prove_parser.add_argument(
        "target",
        type=str,
        help="Payload to prove",
    )
    _add_payload_arguments(prove_parser)
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show the effective configuration",
        description="Display the configuration after file, env and flag overrides.",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def load_runtime_config(args: argparse.Namespace) -> RuntimeConfig:
    """
    Resolve the effective configuration.

    Precedence (lowest first): defaults, YAML file, environment, flags.
    The resulting tree parameters are validated eagerly.
    """
    if args.config is not None:
        config = RuntimeConfig.from_yaml(args.config).with_env_overrides()
    else:
        config = copy.deepcopy(get_default_config())

    if args.algorithm:
        config.tree.algorithm = args.algorithm
    if args.hash_size is not None:
        config.tree.hash_size = args.hash_size
        config.tree.concat_size = 2 * args.hash_size

    # Fail on bad parameters before any command runs
    MerkleTree.from_config(config.tree)

    return config


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: flatmerkle config --show")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=not found / not verified)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_runtime_config(args)
    except ConfigurationException as e:
        if getattr(args, "json", False):
            print(json.dumps(e.to_error_model().model_dump(), indent=2))
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except FileNotFoundError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.logging.level
    try:
        setup_logging(level=log_level, log_file=config.logging.log_file)
    except OSError as e:
        print(f"Error setting up logging: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
