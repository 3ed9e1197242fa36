"""
Leaf Set
Tree nodes and the ordered leaf container consumed by the tree builder.

This module provides:
- Node: a tree vertex (Leaf and Root are aliases)
- Leaves: an ordered, mutable list of leaves with the container
  operations the builder relies on (last leaf, clone, sort, hash)

Lifecycle Notes:
- Leaves may be appended to, hashed and sorted before a build
- A build pads an odd-length Leaves in place with a clone of its last leaf
- Callers that need the unpadded or unsorted sequence clone first
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from merkletree.crypto.hashing import HashFunc, hash_with


@dataclass
class Node:
    """
    A vertex of the Merkle tree.

    A leaf is a Node at level 0 with no children. An internal node owns
    its two children; a self-paired node holds the same child on both
    sides.

    Attributes:
        level: Height above the leaves (0 for leaves)
        digest: Node digest, None for a leaf that has not been hashed yet
        left: Left child, None for leaves
        right: Right child, None for leaves
        payload: Raw leaf payload, None for internal nodes
    """
    level: int = 0
    digest: bytes | None = None
    left: Node | None = field(default=None, repr=False)
    right: Node | None = field(default=None, repr=False)
    payload: bytes | None = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def clone(self) -> Node:
        """Return an independent copy of this node and its subtree."""
        return Node(
            level=self.level,
            digest=self.digest,
            left=self.left.clone() if self.left is not None else None,
            right=self.right.clone() if self.right is not None else None,
            payload=self.payload,
        )


Leaf = Node
Root = Node


def new_leaf(payload: bytes | None = None, digest: bytes | None = None) -> Leaf:
    """Create a level-0 leaf from a payload and/or a precomputed digest."""
    return Leaf(level=0, digest=digest, payload=payload)


class Leaves(list):
    """
    Ordered sequence of leaves.

    A plain list of Leaf objects with the helpers the builder depends on.
    Equality is element-wise, so a clone compares equal to its source.
    """

    @classmethod
    def from_payloads(cls, payloads: Iterable[bytes]) -> Leaves:
        """Create unhashed leaves from raw payloads."""
        return cls(new_leaf(payload=bytes(p)) for p in payloads)

    @classmethod
    def from_digests(cls, digests: Iterable[bytes]) -> Leaves:
        """Create leaves from precomputed digests (build with skip_hash=True)."""
        return cls(new_leaf(digest=bytes(d)) for d in digests)

    def length(self) -> int:
        return len(self)

    def is_empty(self) -> bool:
        return len(self) == 0

    def last_leaf(self) -> Leaf | None:
        """Return the last leaf, or None when there are no leaves."""
        if not self:
            return None
        return self[-1]

    def add(self, leaf: Leaf | None) -> None:
        """Append a leaf; None is ignored."""
        if leaf is None:
            return
        self.append(leaf)

    def clone(self) -> Leaves:
        """Deep copy: the clone shares no Leaf objects with this sequence."""
        return Leaves(leaf.clone() for leaf in self)

    def sort_by_digest(self) -> None:
        """
        Sort in place by digest, ascending byte-wise.

        Leaves without a digest sort as if their digest were empty.
        """
        self.sort(key=lambda leaf: leaf.digest or b"")

    def hash_payloads(self, hash_func: HashFunc) -> None:
        """
        Compute every leaf digest from its payload, in place.

        A missing payload hashes as empty bytes. Existing digests are
        overwritten.

        Raises:
            DigestFailureException: If the hash function fails
        """
        for leaf in self:
            leaf.digest = hash_with(hash_func, leaf.payload or b"")

    def digests(self) -> list[bytes | None]:
        return [leaf.digest for leaf in self]

    def build_tree(self, options=None, **kwargs):
        """Build a tree from these leaves. See builder.build_tree."""
        from merkletree.merkle.builder import build_tree

        return build_tree(self, options, **kwargs)


__all__ = [
    "Node",
    "Leaf",
    "Root",
    "Leaves",
    "new_leaf",
]
