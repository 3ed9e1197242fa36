"""
Digest Provider
Pluggable hash primitives for Merkle tree construction and verification.

This module provides:
- Keccak-256 (legacy, pre-NIST padding) and SHA-256 digests of raw bytes
- A registry resolving algorithm names to hash functions
- A guarded invocation helper that reports primitive failures uniformly
- Hex encoding/decoding with 0x prefix

A hash function is any callable taking bytes and returning a fixed-length
digest. The tree code only invokes it; it never implements hashing itself.

Determinism Notes:
- Always hash raw bytes exactly as given
- Concatenation order is left then right, no separators or prefixes
"""
from __future__ import annotations

import hashlib
from typing import Callable

from eth_utils import keccak

from merkletree.schemas.errors import DigestFailureException


HashFunc = Callable[[bytes], bytes]

# Named default, passed explicitly through BuildOptions / RuntimeConfig
DEFAULT_HASH_ALGORITHM = "keccak256"


def keccak256(data: bytes) -> bytes:
    """
    Compute the legacy Keccak-256 hash of raw bytes.

    This is the Ethereum flavour of Keccak, not NIST SHA3-256.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


HASH_FUNCTIONS: dict[str, HashFunc] = {
    "keccak256": keccak256,
    "sha256": sha256,
}

_ALIASES: dict[str, str] = {
    "keccak": "keccak256",
    "keccak-256": "keccak256",
    "sha-256": "sha256",
}


def get_hash_func(name: str | None = None) -> HashFunc:
    """
    Resolve an algorithm name to its hash function.

    Args:
        name: Algorithm name, case-insensitive. None selects
              DEFAULT_HASH_ALGORITHM.

    Returns:
        The registered hash function

    Raises:
        ValueError: If the name is not registered
    """
    key = (name or DEFAULT_HASH_ALGORITHM).strip().lower()
    key = _ALIASES.get(key, key)
    try:
        return HASH_FUNCTIONS[key]
    except KeyError:
        raise ValueError(
            f"Unknown hash algorithm: {name!r}. "
            f"Supported: {', '.join(sorted(HASH_FUNCTIONS))}"
        ) from None


def hash_with(hash_func: HashFunc, data: bytes) -> bytes:
    """
    Invoke a hash function, normalizing failures.

    Args:
        hash_func: Hash function to call
        data: Bytes to hash

    Returns:
        The digest produced by hash_func

    Raises:
        DigestFailureException: If the primitive raises or returns
            something other than bytes
    """
    try:
        digest = hash_func(data)
    except Exception as e:
        raise DigestFailureException(
            message=f"Hash function failed: {e}",
            details={"error": str(e), "input_length": len(data)},
        ) from e

    if not isinstance(digest, (bytes, bytearray)):
        raise DigestFailureException(
            message=f"Hash function returned {type(digest).__name__}, expected bytes",
            details={"result_type": type(digest).__name__},
        )
    return bytes(digest)


def hash_concat(hash_func: HashFunc, left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two digests.

    This is used for computing Merkle parent hashes:
    parent = hash_func(left + right)

    Args:
        hash_func: Hash function to call
        left: Left child digest
        right: Right child digest

    Returns:
        Parent digest
    """
    return hash_with(hash_func, left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HashFunc",
    "DEFAULT_HASH_ALGORITHM",
    "HASH_FUNCTIONS",
    "keccak256",
    "sha256",
    "get_hash_func",
    "hash_with",
    "hash_concat",
    "to_hex",
    "from_hex",
]
