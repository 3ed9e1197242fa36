"""
Proof Verifier
Inclusion proofs over a built level table.

This module provides:
- verify_proof: re-derive the root from a claimed leaf digest and a
  sibling path, then compare it to the stored root
- path_for / prove_leaf: table-aware path derivation for a leaf index
- MerkleProof: a self-contained proof record
- MerkleProver / MerkleVerifier: thin class-based wrappers

Concatenation order mirrors the builder: an even sibling offset was the
left child, so digest = hash(sibling || digest); an odd sibling offset
was the right child, so digest = hash(digest || sibling). A self-paired
step hashes the running digest with itself.

A root mismatch is a normal False result. Missing coordinates and empty
tables are errors.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from merkletree.crypto.hashing import HashFunc, from_hex, hash_concat, hash_with, keccak256, to_hex
from merkletree.merkle.paths import Position, SiblingPath, derive_path, is_self_paired
from merkletree.merkle.tree import LevelTable
from merkletree.schemas.errors import DecodingException, EmptyTreeException


def verify_proof(
    table: LevelTable,
    path: SiblingPath,
    claimed_leaf: bytes,
    hash_func: HashFunc | None = None,
) -> bool:
    """
    Verify that claimed_leaf is committed to by the table's root.

    Args:
        table: Built level table holding the sibling digests and root
        path: Sibling positions, leaf to root
        claimed_leaf: Digest of the leaf being proven
        hash_func: Digest provider used when the tree was built
                   (defaults to Keccak-256)

    Returns:
        True only if the recomputed root equals the stored root byte-for-byte

    Raises:
        EmptyTreeException: If the table is empty
        InvalidCoordinateException: If a path position is not in the table
        DigestFailureException: If the hash function fails
    """
    hash_func = hash_func or keccak256
    widths = table.widths()
    digest = claimed_leaf

    for level, offset in path:
        sibling = table.digest_at(level, offset)

        if is_self_paired(Position(level, offset), widths):
            digest = hash_concat(hash_func, digest, digest)
        elif offset % 2 == 0:
            # Sibling was the left child
            digest = hash_concat(hash_func, sibling, digest)
        else:
            # Sibling was the right child
            digest = hash_concat(hash_func, digest, sibling)

    return digest == table.root_digest()


def path_for(table: LevelTable, index: int) -> SiblingPath:
    """
    Derive the sibling path for leaf `index`, resolving self-paired steps.

    Raises:
        InvalidCoordinateException: If index is not a leaf offset
        EmptyTreeException: If the table is empty
    """
    if table.is_empty():
        raise EmptyTreeException()
    return derive_path(table.height(), 0, index, table.widths())


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf digest being proven
        index: The 0-based leaf offset
        path: Sibling positions from leaf to root
        root: The root digest this proof is against
    """
    leaf: bytes
    index: int
    path: list[Position] = field(default_factory=list)
    root: bytes = b""

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "leaf": to_hex(self.leaf),
            "path": [[p.level, p.offset] for p in self.path],
            "root": to_hex(self.root),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MerkleProof":
        """
        Rebuild a proof from its to_dict() form.

        Raises:
            DecodingException: If a field is missing or malformed
        """
        try:
            return cls(
                leaf=from_hex(data["leaf"]),
                index=int(data["index"]),
                path=[Position(int(level), int(offset)) for level, offset in data["path"]],
                root=from_hex(data["root"]),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise DecodingException(
                f"Malformed proof document: {e}",
                details={"error": str(e)},
            ) from e


def prove_leaf(table: LevelTable, index: int) -> MerkleProof:
    """
    Build a MerkleProof for the leaf at `index`.

    Raises:
        InvalidCoordinateException: If index is out of range
        EmptyTreeException: If the table is empty
    """
    path = path_for(table, index)
    return MerkleProof(
        leaf=table.digest_at(0, index),
        index=index,
        path=path,
        root=table.root_digest(),
    )


class MerkleProver:
    """
    Convenience class for generating proofs.

    Example:
        >>> table, root = build_tree(Leaves.from_payloads([b"a", b"b"]))
        >>> proof = MerkleProver.prove(table, 1)
        >>> proof.path
        [Position(level=0, offset=0)]
    """

    @staticmethod
    def prove(table: LevelTable, index: int) -> MerkleProof:
        return prove_leaf(table, index)

    @staticmethod
    def prove_all(table: LevelTable) -> list[MerkleProof]:
        """Proofs for every leaf, padding leaf included."""
        return [prove_leaf(table, i) for i in range(table.width(0))]


class MerkleVerifier:
    """Convenience class for verifying proofs against a level table."""

    @staticmethod
    def verify(
        table: LevelTable,
        proof: MerkleProof,
        hash_func: HashFunc | None = None,
    ) -> bool:
        """
        Verify a proof's leaf against the table.

        The proof's recorded root must also match the table's root.
        """
        if proof.root != table.root_digest():
            return False
        return verify_proof(table, proof.path, proof.leaf, hash_func)

    @staticmethod
    def verify_payload(
        table: LevelTable,
        path: SiblingPath,
        payload: bytes,
        hash_func: HashFunc | None = None,
    ) -> bool:
        """Hash a raw payload and verify it as a leaf."""
        hash_func = hash_func or keccak256
        return verify_proof(table, path, hash_with(hash_func, payload), hash_func)


__all__ = [
    "MerkleProof",
    "MerkleProver",
    "MerkleVerifier",
    "path_for",
    "prove_leaf",
    "verify_proof",
]
