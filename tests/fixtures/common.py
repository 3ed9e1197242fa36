"""
Common test fixtures shared by all modules.

Provides:
- Leaf payload sets (the greeting set used across the suite)
- Recorded digests from the reference test vectors
- A minimal Content implementation for ContentTree tests
- A hash function that fails on demand
"""

from __future__ import annotations

import hashlib

from merkletree.merkle import Leaves


# =============================================================================
# Payload Sets
# =============================================================================

# Nine greetings (odd count: the build pads to ten)
GREETINGS: list[bytes] = [
    "Hello".encode("utf-8"),
    "Привет".encode("utf-8"),
    "你好".encode("utf-8"),
    "こんにちは".encode("utf-8"),
    "안녕하세요".encode("utf-8"),
    "สวัสดี".encode("utf-8"),
    "Bonjour".encode("utf-8"),
    "Hola".encode("utf-8"),
    "Hallo".encode("utf-8"),
]

# Four short greetings (even count: 4 -> 2 -> 1)
SHORT_GREETINGS: list[bytes] = [b"Hello", b"Hi", b"Hey", b"Hola"]


# =============================================================================
# Recorded Digests
# =============================================================================

# SHA-256 of "你好" (UTF-8)
NI_HAO_SHA256: bytes = bytes([
    103, 13, 151, 67, 84, 44, 174, 62, 167, 235, 227, 106, 245, 107, 213, 54,
    72, 176, 161, 18, 97, 98, 231, 141, 129, 163, 41, 52, 167, 17, 48, 46,
])

# Not the digest of anything in GREETINGS
BAD_HASH: bytes = bytes(range(1, 33))

# Keccak-256 of empty input
KECCAK256_EMPTY_HEX = "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"

# SHA-256 of b"hello"
SHA256_HELLO_HEX = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"

# SHA-256 tree over SHORT_GREETINGS: level 1 and the root
SHORT_GREETINGS_SHA256_LEVEL1_HEX = [
    "d123f97da25da4b08b962e64b8042bda739950443f172132e5a50cde10e7b6bc",
    "67b8901ac30135e74d42036dfa604336e1f978e49ee0d6bf484a46ff27a2ae9c",
]
SHORT_GREETINGS_SHA256_ROOT_HEX = "5f30cc80133b9394156e24b233f0c4be32b24e44bb3381f02c7ba52619d0febc"


# =============================================================================
# Factories
# =============================================================================

def make_leaves(payloads: list[bytes] | None = None) -> Leaves:
    """Fresh, unhashed leaves for the given payloads (default GREETINGS)."""
    return Leaves.from_payloads(GREETINGS if payloads is None else payloads)


def make_numbered_leaves(count: int) -> Leaves:
    """Leaves with payloads b"leaf0", b"leaf1", ..."""
    return Leaves.from_payloads(f"leaf{i}".encode() for i in range(count))


def h256(data: bytes) -> bytes:
    """Independent SHA-256 used to check tree digests by hand."""
    return hashlib.sha256(data).digest()


def failing_hash(data: bytes) -> bytes:
    raise OSError("hash device unavailable")


# =============================================================================
# Content
# =============================================================================

class TextContent:
    """Content item whose digest is the SHA-256 of its UTF-8 text."""

    def __init__(self, text: str) -> None:
        self.text = text

    def calculate_hash(self) -> bytes:
        return h256(self.text.encode("utf-8"))

    def equals(self, other: object) -> bool:
        return isinstance(other, TextContent) and other.text == self.text

    def __repr__(self) -> str:
        return f"TextContent({self.text!r})"
