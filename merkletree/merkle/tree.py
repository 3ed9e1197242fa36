"""
Tree Addressing
Read-only, constant-time queries over a built level table.

Coordinates are (level, offset): level is the height above the leaves,
offset the index within that level, both zero-based.

    level
      ^
    2 | r
    1 | a  b
    0 | l0 l1 l2 l3
      +---------------> offset
"""
from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from merkletree.schemas.errors import EmptyTreeException, InvalidCoordinateException


class LevelTable:
    """
    Per-level digests of a built tree.

    Level 0 holds the leaf digests in leaf order; each following level
    holds one digest per internal node, left to right. The last level
    holds exactly the root digest.
    """

    __slots__ = ("_levels",)

    def __init__(self, levels: Iterable[Sequence[bytes]] | None = None) -> None:
        self._levels: list[list[bytes]] = (
            [list(level) for level in levels] if levels is not None else []
        )

    @classmethod
    def from_levels(cls, levels: Iterable[Sequence[bytes]]) -> LevelTable:
        return cls(levels)

    @property
    def levels(self) -> list[list[bytes]]:
        """A copy of the underlying levels."""
        return [list(level) for level in self._levels]

    def append_level(self, digests: Sequence[bytes]) -> None:
        """Append the next level up. Used by the builder only."""
        self._levels.append(list(digests))

    def is_empty(self) -> bool:
        return not self._levels

    def height(self) -> int:
        """Number of levels, 0 for an empty table."""
        return len(self._levels)

    def width(self, level: int) -> int:
        """Number of entries at a level, 0 when the level does not exist."""
        if level < 0 or level >= len(self._levels):
            return 0
        return len(self._levels[level])

    def widths(self) -> list[int]:
        return [len(level) for level in self._levels]

    def top_level(self) -> int:
        """Index of the root level, 0 for an empty table."""
        if not self._levels:
            return 0
        return len(self._levels) - 1

    def last_offset(self, level: int) -> int:
        """Largest valid offset at a level, 0 for an empty table."""
        if not self._levels:
            return 0
        return self.width(level) - 1

    def root_digest(self) -> bytes:
        """
        Return the root digest.

        Raises:
            EmptyTreeException: If the table is empty
        """
        if not self._levels:
            raise EmptyTreeException()
        return self._levels[self.top_level()][0]

    def digest_at(self, level: int, offset: int) -> bytes:
        """
        Return the digest at (level, offset).

        Raises:
            EmptyTreeException: If the table is empty
            InvalidCoordinateException: If level or offset is out of range
        """
        if not self._levels:
            raise EmptyTreeException()
        if level < 0 or level > self.top_level():
            raise InvalidCoordinateException(
                f"Invalid level {level}, tree has levels 0..{self.top_level()}",
                level=level,
                offset=offset,
            )
        if offset < 0 or offset > self.last_offset(level):
            raise InvalidCoordinateException(
                f"Invalid offset {offset} at level {level}, "
                f"level has offsets 0..{self.last_offset(level)}",
                level=level,
                offset=offset,
            )
        return self._levels[level][offset]

    def __len__(self) -> int:
        return len(self._levels)

    def __iter__(self) -> Iterator[list[bytes]]:
        return iter(self.levels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LevelTable):
            return NotImplemented
        return self._levels == other._levels

    def __repr__(self) -> str:
        return f"LevelTable(widths={self.widths()})"


__all__ = ["LevelTable"]
