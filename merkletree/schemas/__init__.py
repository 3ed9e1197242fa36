"""
Schemas & Canonicalization

Purpose: Export error types, canonical JSON helpers and wire models.
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)

from .errors import (
    CanonicalizationException,
    DecodingException,
    DigestFailureException,
    EmptyInputException,
    EmptyTreeException,
    ErrorCodes,
    InvalidCoordinateException,
    MerkleError,
    MerkleException,
)

from .nodes import (
    HexBytes,
    SerializedLevelTable,
    SerializedNode,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Errors
    "CanonicalizationException",
    "DecodingException",
    "DigestFailureException",
    "EmptyInputException",
    "EmptyTreeException",
    "ErrorCodes",
    "InvalidCoordinateException",
    "MerkleError",
    "MerkleException",
    # Wire models
    "HexBytes",
    "SerializedLevelTable",
    "SerializedNode",
]
