"""
flatmerkle CLI

Command-line interface for building flat Merkle trees from payloads.

Usage:
    python -m flatmerkle_cli root a b c
    python -m flatmerkle_cli prove b a b c
    python -m flatmerkle_cli --hex prove 0x04 0x01 0x02 0x03 0x04 0x05
    python -m flatmerkle_cli config --show
"""

__version__ = "0.1.0"
