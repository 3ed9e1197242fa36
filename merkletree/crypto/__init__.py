"""
Digest Provider utilities.

Hash primitives and hex helpers consumed by the tree builder and verifier.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    HASH_FUNCTIONS,
    HashFunc,
    keccak256,
    sha256,
    get_hash_func,
    hash_with,
    hash_concat,
    to_hex,
    from_hex,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "HASH_FUNCTIONS",
    "HashFunc",
    "keccak256",
    "sha256",
    "get_hash_func",
    "hash_with",
    "hash_concat",
    "to_hex",
    "from_hex",
]
