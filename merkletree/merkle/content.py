"""
Content Tree
A pointer-linked front-end over arbitrary content objects.

Items implement the Content protocol: they compute their own leaf digest
and decide equality among themselves. The tree is built by the same
builder as raw leaves (leaf digests are trusted, hashing is skipped), so
roots and paths are identical to a Leaves build over the same digests.

Lookups are by content equality rather than by leaf offset: the first
stored item equal to the query is the one proven.
"""
from __future__ import annotations

import logging
from typing import Iterable, Protocol, runtime_checkable

from merkletree.crypto.hashing import HashFunc, keccak256
from merkletree.merkle.builder import build_tree
from merkletree.merkle.leaves import Leaves, Root, new_leaf
from merkletree.merkle.proofs import path_for, verify_proof
from merkletree.merkle.tree import LevelTable
from merkletree.schemas.errors import DigestFailureException, EmptyInputException


logger = logging.getLogger(__name__)


@runtime_checkable
class Content(Protocol):
    """Data stored in and verified by a ContentTree."""

    def calculate_hash(self) -> bytes:
        ...

    def equals(self, other: "Content") -> bool:
        ...


def _content_digest(content: Content) -> bytes:
    try:
        digest = content.calculate_hash()
    except Exception as e:
        raise DigestFailureException(
            message=f"Content hash failed: {e}",
            details={"content_type": type(content).__name__, "error": str(e)},
        ) from e
    if not isinstance(digest, (bytes, bytearray)):
        raise DigestFailureException(
            message=f"calculate_hash returned {type(digest).__name__}, expected bytes",
            details={"content_type": type(content).__name__},
        )
    return bytes(digest)


class ContentTree:
    """
    Merkle tree over Content items.

    Attributes:
        root: Root node of the node graph
        table: Level table of the same build
        leaves: Leaves built from the contents, padding leaf included
        contents: The contents as supplied (unpadded)
    """

    def __init__(self, contents: Iterable[Content], hash_func: HashFunc | None = None) -> None:
        self.hash_func: HashFunc = hash_func or keccak256
        self.root: Root
        self.table: LevelTable
        self.leaves: Leaves
        self.contents: list[Content] = []
        self._build(contents)

    def _build(self, contents: Iterable[Content]) -> None:
        items = list(contents) if contents is not None else []
        if not items:
            raise EmptyInputException("Cannot construct tree with no content")

        leaves = Leaves(new_leaf(digest=_content_digest(c)) for c in items)
        table, root = build_tree(leaves, hash_func=self.hash_func, skip_hash=True)

        self.contents = items
        self.leaves = leaves
        self.table = table
        self.root = root

    @property
    def merkle_root(self) -> bytes:
        """The root digest recorded at build time."""
        return self.root.digest

    def _index_of(self, content: Content) -> int | None:
        for index, stored in enumerate(self.contents):
            if stored.equals(content):
                return index
        return None

    def get_merkle_path(self, content: Content) -> tuple[list[bytes], list[int]] | None:
        """
        Sibling digests and sides for the first stored item equal to content.

        Returns:
            (siblings, sides) ordered leaf to root, where side 1 means the
            sibling is the right child and 0 the left child. A self-paired
            step reports the node's own digest on the right. None when the
            content is not in the tree.
        """
        index = self._index_of(content)
        if index is None:
            return None

        siblings: list[bytes] = []
        sides: list[int] = []
        offset = index
        for position in path_for(self.table, index):
            siblings.append(self.table.digest_at(*position))
            sides.append(1 if position.offset >= offset else 0)
            offset //= 2
        return siblings, sides

    def verify_content(self, content: Content) -> bool:
        """
        Whether content is in the tree and its path hashes up to the root.

        The leaf digest is recomputed from the content itself.
        """
        index = self._index_of(content)
        if index is None:
            return False
        return verify_proof(
            self.table,
            path_for(self.table, index),
            _content_digest(content),
            self.hash_func,
        )

    def verify_tree(self) -> bool:
        """Recompute the root from the stored contents and compare."""
        leaves = Leaves(new_leaf(digest=_content_digest(c)) for c in self.contents)
        _, root = build_tree(leaves, hash_func=self.hash_func, skip_hash=True)
        return root.digest == self.merkle_root

    def rebuild_tree(self) -> None:
        """Rebuild from the stored contents."""
        logger.debug("Rebuilding content tree with %d items", len(self.contents))
        self._build(self.contents)

    def rebuild_tree_with(self, contents: Iterable[Content]) -> None:
        """
        Replace the contents and rebuild.

        Raises:
            EmptyInputException: If contents is empty; the tree is unchanged
        """
        self._build(contents)
        logger.debug("Rebuilt content tree with %d new items", len(self.contents))

    def __repr__(self) -> str:
        return f"ContentTree(items={len(self.contents)}, root={self.merkle_root.hex()})"


__all__ = [
    "Content",
    "ContentTree",
]
