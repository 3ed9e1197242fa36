"""
Wire Schemas

Purpose: Pydantic models for the serialized forms of a node graph and a
level table. Digests and payloads travel as 0x-prefixed hex strings.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator


HexBytes = Annotated[
    str,
    Field(pattern=r"^0x(?:[0-9a-fA-F]{2})*$", description="0x-prefixed hex bytes"),
]


class SerializedNode(BaseModel):
    """
    Recursive wire form of a tree node.

    Children and payload are omitted from the encoded JSON when absent.
    """

    model_config = ConfigDict(extra="forbid")

    level: int = Field(..., ge=0, description="Height above the leaves")
    digest: HexBytes = Field(..., description="Node digest")
    left: SerializedNode | None = Field(default=None)
    right: SerializedNode | None = Field(default=None)
    payload: HexBytes | None = Field(default=None, description="Leaf payload")

    @model_validator(mode="after")
    def _check_children(self) -> "SerializedNode":
        if (self.left is None) != (self.right is None):
            raise ValueError("node must have both children or none")
        for child in (self.left, self.right):
            if child is not None and child.level != self.level - 1:
                raise ValueError(
                    f"child level {child.level} does not sit below level {self.level}"
                )
        if self.left is None and self.level != 0:
            raise ValueError(f"childless node must be a leaf, got level {self.level}")
        return self


class SerializedLevelTable(RootModel[list[list[HexBytes]]]):
    """Wire form of a level table: outer index is level, inner is offset."""

    @model_validator(mode="after")
    def _check_shape(self) -> "SerializedLevelTable":
        levels = self.root
        if not levels:
            raise ValueError("level table has no levels")
        for i, level in enumerate(levels):
            if not level:
                raise ValueError(f"level {i} is empty")
            if i > 0 and len(level) != (len(levels[i - 1]) + 1) // 2:
                raise ValueError(
                    f"level {i} has {len(level)} entries, expected "
                    f"{(len(levels[i - 1]) + 1) // 2}"
                )
        if len(levels[-1]) != 1:
            raise ValueError("top level must hold exactly one digest")
        return self


SerializedNode.model_rebuild()
