"""
Path Deriver
Sibling paths from a leaf position up to (not including) the root.

Sibling rule: an even offset's sibling is offset + 1, an odd offset's
sibling is offset - 1; the parent of (level, offset) is
(level + 1, offset // 2).

Self-paired nodes: a trailing node at an odd-width level has no real
sibling. When level widths are supplied, the deriver emits the node's own
position for that step. A verifier recognises it because an even offset
that is the last entry of an odd-width level can never be a real left
sibling. Without widths the nominal rule applies and the step points past
the end of its level.
"""
from __future__ import annotations

from typing import NamedTuple, Sequence

from merkletree.schemas.errors import InvalidCoordinateException


class Position(NamedTuple):
    """A (level, offset) coordinate into a level table."""
    level: int
    offset: int


SiblingPath = list[Position]


def sibling_offset(offset: int) -> int:
    return offset + 1 if offset % 2 == 0 else offset - 1


def parent(position: Position) -> Position:
    """Return the position of the parent node."""
    return Position(position.level + 1, position.offset // 2)


def is_self_paired(position: Position, widths: Sequence[int]) -> bool:
    """
    Whether a position is a self-paired trailing node.

    True for an even offset that is the last entry of an odd-width level.
    """
    level, offset = position
    if level < 0 or level >= len(widths):
        return False
    width = widths[level]
    return width % 2 == 1 and offset == width - 1


def derive_path(
    height: int,
    level: int,
    offset: int,
    widths: Sequence[int] | None = None,
) -> SiblingPath:
    """
    Derive the sibling path from (level, offset) to just below the root.

    Args:
        height: Number of levels in the tree
        level: Starting level (0 for a leaf)
        offset: Starting offset within the level
        widths: Optional per-level widths; when given, self-paired steps
                are emitted as the node's own position

    Returns:
        Sibling positions ordered leaf to root, root excluded

    Raises:
        InvalidCoordinateException: If the starting position is negative,
            not below the tree height, or past the end of its level
    """
    if level < 0 or offset < 0 or level >= height:
        raise InvalidCoordinateException(
            f"Cannot derive a path from ({level}, {offset}) in a tree of height {height}",
            level=level,
            offset=offset,
        )
    if widths is not None and offset >= widths[level]:
        raise InvalidCoordinateException(
            f"Offset {offset} is past the end of level {level} (width {widths[level]})",
            level=level,
            offset=offset,
        )

    path: SiblingPath = []
    while level < height - 1:
        sibling = sibling_offset(offset)
        if widths is not None and sibling >= widths[level]:
            sibling = offset
        path.append(Position(level, sibling))
        level, offset = parent(Position(level, offset))
    return path


__all__ = [
    "Position",
    "SiblingPath",
    "derive_path",
    "is_self_paired",
    "parent",
    "sibling_offset",
]
