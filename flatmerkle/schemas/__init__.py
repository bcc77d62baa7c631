"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy shared by every flatmerkle module.
"""

from .errors import (
    ConfigurationError,
    ConfigurationException,
    ErrorCodes,
    FlatMerkleException,
    StructuralException,
    TreeError,
    UnknownDigestException,
)

__all__ = [
    "ConfigurationError",
    "ConfigurationException",
    "ErrorCodes",
    "FlatMerkleException",
    "StructuralException",
    "TreeError",
    "UnknownDigestException",
]
