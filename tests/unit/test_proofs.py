"""
Proof Verifier Unit Tests
Tests for merkletree/merkle/proofs.py

Tests:
- Every leaf verifies against its own path
- Wrong leaves and tampered paths are rejected
- Self-paired steps on odd-width levels
- Structural errors (empty table, missing coordinates)
- MerkleProof records and the prover/verifier classes
"""
import pytest

from merkletree.crypto.hashing import keccak256, sha256
from merkletree.merkle import (
    LevelTable,
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
    Position,
    build_tree,
    derive_path,
    path_for,
    prove_leaf,
    verify_proof,
)
from merkletree.schemas.errors import (
    DecodingException,
    DigestFailureException,
    EmptyTreeException,
    InvalidCoordinateException,
)

from fixtures.common import BAD_HASH, GREETINGS, NI_HAO_SHA256, failing_hash, h256, make_leaves, make_numbered_leaves


class TestVerifyProof:
    """verify_proof over the greeting tree."""

    def test_recorded_leaf_verifies(self, sha256_tree):
        _, table, _ = sha256_tree
        path = derive_path(table.height(), 0, 2)

        assert verify_proof(table, path, NI_HAO_SHA256, sha256) is True

    def test_bad_hash_rejected(self, sha256_tree):
        _, table, _ = sha256_tree
        path = derive_path(table.height(), 0, 2)

        assert verify_proof(table, path, BAD_HASH, sha256) is False

    def test_every_leaf_verifies(self, sha256_tree):
        leaves, table, _ = sha256_tree

        for index, leaf in enumerate(leaves):
            assert verify_proof(table, path_for(table, index), leaf.digest, sha256), index

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 6, 7, 8, 11, 13, 16, 21])
    def test_every_leaf_verifies_for_any_size(self, count):
        leaves = make_numbered_leaves(count)
        table, _ = build_tree(leaves, hash_func=sha256)

        for index in range(table.width(0)):
            assert verify_proof(table, path_for(table, index), leaves[index].digest, sha256)

    def test_leaf_at_wrong_index_rejected(self, sha256_tree):
        leaves, table, _ = sha256_tree
        assert verify_proof(table, path_for(table, 0), leaves[1].digest, sha256) is False

    def test_single_bit_flip_rejected(self, sha256_tree):
        leaves, table, _ = sha256_tree
        digest = bytearray(leaves[4].digest)
        digest[0] ^= 0x01

        assert verify_proof(table, path_for(table, 4), bytes(digest), sha256) is False

    def test_wrong_hash_function_rejected(self, sha256_tree):
        leaves, table, _ = sha256_tree
        assert verify_proof(table, path_for(table, 0), leaves[0].digest, keccak256) is False

    def test_default_hash_is_keccak(self):
        leaves = make_leaves([b"a", b"b", b"c", b"d"])
        table, _ = build_tree(leaves)
        assert verify_proof(table, path_for(table, 3), keccak256(b"d"))

    def test_tampered_table_rejected(self, short_greeting_leaves):
        table, _ = build_tree(short_greeting_leaves, hash_func=sha256)
        levels = table.levels
        levels[0][1] = BAD_HASH
        tampered = LevelTable(levels)

        assert verify_proof(tampered, path_for(tampered, 0), h256(b"Hello"), sha256) is False

    def test_digest_failure(self, sha256_tree):
        leaves, table, _ = sha256_tree
        with pytest.raises(DigestFailureException):
            verify_proof(table, path_for(table, 0), leaves[0].digest, failing_hash)


class TestSelfPairedVerification:
    """Leaves whose path crosses a 3-wide level."""

    def test_self_paired_leaf_verifies(self, six_leaf_tree):
        leaves, table, _ = six_leaf_tree

        for index in (4, 5):
            assert verify_proof(table, path_for(table, index), leaves[index].digest, sha256)

    def test_self_paired_step_recomputation(self, six_leaf_tree):
        _, table, _ = six_leaf_tree
        l4, l5 = h256(b"leaf4"), h256(b"leaf5")
        node = h256(l4 + l5)
        node = h256(node + node)
        root = h256(table.digest_at(2, 0) + node)

        assert root == table.root_digest()

    def test_self_paired_bad_leaf_rejected(self, six_leaf_tree):
        _, table, _ = six_leaf_tree
        assert verify_proof(table, path_for(table, 4), BAD_HASH, sha256) is False

    def test_nominal_path_hits_missing_coordinate(self, six_leaf_tree):
        leaves, table, _ = six_leaf_tree
        path = derive_path(table.height(), 0, 4)

        with pytest.raises(InvalidCoordinateException) as exc_info:
            verify_proof(table, path, leaves[4].digest, sha256)

        assert exc_info.value.details == {"level": 1, "offset": 3}


class TestStructuralErrors:
    """Empty tables and out-of-range positions are errors, not False."""

    def test_empty_table(self):
        with pytest.raises(EmptyTreeException):
            verify_proof(LevelTable(), [Position(0, 1)], BAD_HASH, sha256)

    def test_empty_table_empty_path(self):
        with pytest.raises(EmptyTreeException):
            verify_proof(LevelTable(), [], BAD_HASH, sha256)

    def test_path_for_empty_table(self):
        with pytest.raises(EmptyTreeException):
            path_for(LevelTable(), 0)

    def test_path_beyond_tree(self, sha256_tree):
        leaves, table, _ = sha256_tree
        path = derive_path(table.height() + 1, 0, 0)

        with pytest.raises(InvalidCoordinateException):
            verify_proof(table, path, leaves[0].digest, sha256)

    def test_path_for_index_out_of_range(self, sha256_tree):
        _, table, _ = sha256_tree
        with pytest.raises(InvalidCoordinateException):
            path_for(table, table.width(0))


class TestMerkleProof:
    """Proof records."""

    def test_prove_leaf(self, sha256_tree):
        leaves, table, root = sha256_tree
        proof = prove_leaf(table, 2)

        assert proof.leaf == NI_HAO_SHA256
        assert proof.index == 2
        assert proof.root == root.digest
        assert proof.path == path_for(table, 2)

    def test_prove_leaf_out_of_range(self, sha256_tree):
        _, table, _ = sha256_tree
        with pytest.raises(InvalidCoordinateException):
            prove_leaf(table, 10)

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            MerkleProof(leaf=b"", index=-1)

    def test_to_dict(self):
        proof = MerkleProof(
            leaf=b"\x01\x02",
            index=3,
            path=[Position(0, 2), Position(1, 0)],
            root=b"\xff",
        )
        assert proof.to_dict() == {
            "index": 3,
            "leaf": "0x0102",
            "path": [[0, 2], [1, 0]],
            "root": "0xff",
        }

    def test_from_dict(self, sha256_tree):
        _, table, _ = sha256_tree
        proof = prove_leaf(table, 7)
        assert MerkleProof.from_dict(proof.to_dict()) == proof

    @pytest.mark.parametrize("data", [
        {},
        {"index": 0, "leaf": "0x00", "path": [], "root": "nothex"},
        {"index": 0, "leaf": "0x00", "path": [[0]], "root": "0x00"},
        {"index": "x", "leaf": "0x00", "path": [], "root": "0x00"},
        {"index": -1, "leaf": "0x00", "path": [], "root": "0x00"},
    ])
    def test_from_dict_malformed(self, data):
        with pytest.raises(DecodingException):
            MerkleProof.from_dict(data)


class TestProverVerifier:
    """MerkleProver / MerkleVerifier wrappers."""

    def test_prove_all_verify(self, sha256_tree):
        _, table, _ = sha256_tree
        proofs = MerkleProver.prove_all(table)

        assert len(proofs) == len(GREETINGS) + 1
        for proof in proofs:
            assert MerkleVerifier.verify(table, proof, sha256)

    def test_prove(self, six_leaf_tree):
        _, table, _ = six_leaf_tree
        assert MerkleProver.prove(table, 4) == prove_leaf(table, 4)

    def test_verify_rejects_foreign_root(self, sha256_tree):
        _, table, _ = sha256_tree
        proof = prove_leaf(table, 0)
        foreign = MerkleProof(leaf=proof.leaf, index=0, path=proof.path, root=BAD_HASH)

        assert MerkleVerifier.verify(table, foreign, sha256) is False

    def test_verify_payload(self, sha256_tree):
        _, table, _ = sha256_tree
        path = path_for(table, 2)

        assert MerkleVerifier.verify_payload(table, path, "你好".encode("utf-8"), sha256)
        assert not MerkleVerifier.verify_payload(table, path, b"Hello", sha256)
