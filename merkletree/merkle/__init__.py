"""
Merkle Tree and Inclusion Proofs
Array-addressed tree construction, positional addressing, sibling paths,
proof verification and serialization.

Construction Rules:
1. Leaf hashing: leaf = hash(payload), unless skip_hash is set
2. Parent hashing: parent = hash(left || right)
3. Padding: an odd leaf count gets a clone of the last leaf appended
4. Self-pairing: a trailing unpaired node at any level hashes with itself
5. Default digest: Keccak-256

Usage:
    from merkletree.merkle import Leaves, build_tree, path_for, verify_proof
    from merkletree.crypto import sha256

    leaves = Leaves.from_payloads([b"Hello", b"Hi", b"Hey", b"Hola"])
    table, root = build_tree(leaves, hash_func=sha256)

    path = path_for(table, 2)
    assert verify_proof(table, path, leaves[2].digest, sha256)
"""
from .leaves import (
    Leaf,
    Leaves,
    Node,
    Root,
    new_leaf,
)

from .tree import LevelTable

from .builder import (
    build_level,
    build_tree,
)

from .paths import (
    Position,
    SiblingPath,
    derive_path,
    is_self_paired,
    parent,
    sibling_offset,
)

from .proofs import (
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
    path_for,
    prove_leaf,
    verify_proof,
)

from .serializer import (
    marshal,
    marshal_node,
    marshal_table,
    unmarshal,
    unmarshal_node,
    unmarshal_table,
)

from .content import (
    Content,
    ContentTree,
)


__all__ = [
    # Leaf set
    "Leaf",
    "Leaves",
    "Node",
    "Root",
    "new_leaf",
    # Builder and addressing
    "LevelTable",
    "build_level",
    "build_tree",
    # Paths
    "Position",
    "SiblingPath",
    "derive_path",
    "is_self_paired",
    "parent",
    "sibling_offset",
    # Proofs
    "MerkleProof",
    "MerkleProver",
    "MerkleVerifier",
    "path_for",
    "prove_leaf",
    "verify_proof",
    # Serialization
    "marshal",
    "marshal_node",
    "marshal_table",
    "unmarshal",
    "unmarshal_node",
    "unmarshal_table",
    # Content front-end
    "Content",
    "ContentTree",
]
