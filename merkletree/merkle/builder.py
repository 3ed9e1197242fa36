"""
Tree Builder
Array-addressed Merkle tree construction.

A build produces two views of the same computation in one pass: the flat
level table (authoritative, addressable by position) and the node graph
(each parent owning its two children).

Construction Rules (Hard Contracts):
1. Leaf hashing: leaf.digest = hash(payload), unless skip_hash is set
2. Leaf padding: an odd leaf count is made even by appending a clone of
   the last leaf; the clone is visible in the caller's Leaves afterwards
3. Parent hashing: parent = hash(left || right)
4. Self-pairing: a trailing unpaired node at any level hashes as
   hash(node || node); no phantom sibling slot is inserted
5. The build stops at the first level with exactly one node

Determinism Notes:
- Leaf order is defined by the caller; this module never sorts
- Every build is a full rebuild; nothing is reused across builds
"""
from __future__ import annotations

import logging
from typing import Sequence

from merkletree.config.runtime import BuildOptions
from merkletree.crypto.hashing import HashFunc, hash_concat, hash_with
from merkletree.merkle.leaves import Leaf, Leaves, Node, Root
from merkletree.merkle.tree import LevelTable
from merkletree.schemas.errors import EmptyInputException


logger = logging.getLogger(__name__)


def _resolve_options(
    options: BuildOptions | None,
    hash_func: HashFunc | None,
    skip_hash: bool | None,
) -> BuildOptions:
    opts = options or BuildOptions()
    if hash_func is not None:
        opts = opts.with_hash_func(hash_func)
    if skip_hash is not None:
        opts = opts.with_skip_hash(skip_hash)
    return opts


def build_level(nodes: Sequence[Node], hash_func: HashFunc) -> list[Node]:
    """
    Build the parent level of a level of nodes.

    Scans left to right in steps of two. A pair (i, i+1) yields
    hash(left || right); a trailing unpaired node i yields hash(i || i)
    with the node as both children.

    Args:
        nodes: One complete level, left to right
        hash_func: Digest provider

    Returns:
        The parent nodes, len == ceil(len(nodes) / 2)
    """
    parents: list[Node] = []
    for i in range(0, len(nodes), 2):
        left = nodes[i]
        right = nodes[i + 1] if i + 1 < len(nodes) else left

        parents.append(Node(
            level=max(left.level, right.level) + 1,
            digest=hash_concat(hash_func, left.digest, right.digest),
            left=left,
            right=right,
        ))
    return parents


def build_tree(
    leaves: Leaves | list[Leaf] | None,
    options: BuildOptions | None = None,
    *,
    hash_func: HashFunc | None = None,
    skip_hash: bool | None = None,
) -> tuple[LevelTable, Root]:
    """
    Build the level table and node graph for a sequence of leaves.

    Args:
        leaves: Leaves to build from. Mutated in place: digests are
                (re)computed unless skip_hash, and an odd sequence gets a
                clone of its last leaf appended.
        options: Build options; defaults to Keccak-256 with hashing on
        hash_func: Overrides options.hash_func
        skip_hash: Overrides options.skip_hash

    Returns:
        (level table, root node)

    Raises:
        EmptyInputException: If leaves is None or empty, or if skip_hash
            is set and a leaf has no digest
        DigestFailureException: If the hash function fails; no partial
            table is returned
    """
    if not leaves:
        raise EmptyInputException()

    opts = _resolve_options(options, hash_func, skip_hash)

    if not opts.skip_hash:
        for leaf in leaves:
            leaf.digest = hash_with(opts.hash_func, leaf.payload or b"")
    else:
        for index, leaf in enumerate(leaves):
            if leaf.digest is None:
                raise EmptyInputException(
                    f"Leaf {index} has no digest and hashing is skipped",
                    leaf_index=index,
                )

    padded = False
    if len(leaves) % 2 == 1:
        leaves.append(leaves[-1].clone())
        padded = True

    table = LevelTable()
    table.append_level([leaf.digest for leaf in leaves])

    level: list[Node] = list(leaves)
    while len(level) > 1:
        level = build_level(level, opts.hash_func)
        table.append_level([node.digest for node in level])

    root = level[0]
    logger.debug(
        "Built tree: leaves=%d padded=%s height=%d",
        len(leaves), padded, table.height(),
    )
    return table, root


__all__ = [
    "build_level",
    "build_tree",
]
