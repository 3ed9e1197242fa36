"""
Serializer
Canonical JSON encoding of node graphs and level tables.

Wire format:
- Node: {"digest": "0x..", "left": {..}, "level": n, "payload": "0x..", "right": {..}}
  with absent children and payload omitted
- Level table: [["0x..", ...], ...], level 0 first

Encoding is canonical (sorted keys, no whitespace), so
marshal(unmarshal(marshal(x))) == marshal(x) byte-for-byte. A self-paired
node's child is written out on both sides; after decoding the two sides
are equal but no longer the same object.
"""
from __future__ import annotations

import logging
from typing import Any, Union

from pydantic import ValidationError

from merkletree.crypto.hashing import from_hex, to_hex
from merkletree.merkle.leaves import Node, Root
from merkletree.merkle.tree import LevelTable
from merkletree.schemas.canonical import dumps_canonical, loads_canonical
from merkletree.schemas.errors import (
    CanonicalizationException,
    DecodingException,
    EmptyTreeException,
)
from merkletree.schemas.nodes import SerializedLevelTable, SerializedNode


logger = logging.getLogger(__name__)


def _node_to_dict(node: Node) -> dict[str, Any]:
    if node.digest is None:
        raise CanonicalizationException(
            f"Cannot encode a level-{node.level} node without a digest",
            details={"level": node.level},
        )
    return {
        "level": node.level,
        "digest": to_hex(node.digest),
        "left": _node_to_dict(node.left) if node.left is not None else None,
        "right": _node_to_dict(node.right) if node.right is not None else None,
        "payload": to_hex(node.payload) if node.payload is not None else None,
    }


def _node_from_model(model: SerializedNode) -> Node:
    return Node(
        level=model.level,
        digest=from_hex(model.digest),
        left=_node_from_model(model.left) if model.left is not None else None,
        right=_node_from_model(model.right) if model.right is not None else None,
        payload=from_hex(model.payload) if model.payload is not None else None,
    )


def marshal_node(node: Root) -> bytes:
    """Encode a node and its subtree."""
    return dumps_canonical(_node_to_dict(node)).encode("utf-8")


def marshal_table(table: LevelTable) -> bytes:
    """
    Encode a level table.

    Raises:
        EmptyTreeException: If the table is empty
    """
    if table.is_empty():
        raise EmptyTreeException("Cannot marshal an empty tree")
    levels = [[to_hex(digest) for digest in level] for level in table.levels]
    return dumps_canonical(levels).encode("utf-8")


def marshal(obj: Union[Root, LevelTable]) -> bytes:
    """Encode a node graph or a level table."""
    if isinstance(obj, LevelTable):
        return marshal_table(obj)
    if isinstance(obj, Node):
        return marshal_node(obj)
    raise TypeError(f"Cannot marshal {type(obj).__name__}")


def _load_json(data: bytes | str) -> Any:
    try:
        return loads_canonical(data)
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodingException(
            f"Invalid JSON: {e}",
            details={"error": str(e)},
        ) from e


def _decoding_error(kind: str, e: ValidationError) -> DecodingException:
    logger.debug("Rejected serialized %s: %s", kind, e)
    return DecodingException(
        f"Invalid serialized {kind}: {e.error_count()} validation error(s)",
        details={
            "errors": [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
        },
    )


def _node_from_raw(raw: Any) -> Root:
    try:
        model = SerializedNode.model_validate(raw)
    except ValidationError as e:
        raise _decoding_error("node", e) from e
    return _node_from_model(model)


def _table_from_raw(raw: Any) -> LevelTable:
    try:
        model = SerializedLevelTable.model_validate(raw)
    except ValidationError as e:
        raise _decoding_error("level table", e) from e
    return LevelTable([from_hex(digest) for digest in level] for level in model.root)


def unmarshal_node(data: bytes | str) -> Root:
    """
    Decode a node graph.

    Raises:
        DecodingException: If the bytes are not a valid serialized node
    """
    return _node_from_raw(_load_json(data))


def unmarshal_table(data: bytes | str) -> LevelTable:
    """
    Decode a level table.

    Raises:
        DecodingException: If the bytes are not a valid serialized table
    """
    return _table_from_raw(_load_json(data))


def unmarshal(data: bytes | str) -> Union[Root, LevelTable]:
    """
    Decode either form: a JSON object is a node, a JSON array a level table.

    Raises:
        DecodingException: If the bytes are neither
    """
    raw = _load_json(data)
    if isinstance(raw, dict):
        return _node_from_raw(raw)
    if isinstance(raw, list):
        return _table_from_raw(raw)
    raise DecodingException(
        f"Expected a JSON object or array, got {type(raw).__name__}",
        details={"type": type(raw).__name__},
    )


__all__ = [
    "marshal",
    "marshal_node",
    "marshal_table",
    "unmarshal",
    "unmarshal_node",
    "unmarshal_table",
]
