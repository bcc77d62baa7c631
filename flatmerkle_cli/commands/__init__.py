"""
CLI command modules.
"""

from flatmerkle_cli.commands import root, prove

__all__ = ["root", "prove"]
