"""
Tree Addressing Unit Tests
Tests for merkletree/merkle/tree.py
"""
import pytest

from merkletree.merkle import LevelTable
from merkletree.schemas.errors import EmptyTreeException, ErrorCodes, InvalidCoordinateException

from fixtures.common import GREETINGS, h256


class TestEmptyTable:
    """Queries against a table with no levels."""

    def test_shape(self):
        table = LevelTable()

        assert table.is_empty()
        assert table.height() == 0
        assert table.top_level() == 0
        assert table.last_offset(0) == 0
        assert table.width(0) == 0
        assert table.widths() == []

    def test_root_digest(self):
        with pytest.raises(EmptyTreeException) as exc_info:
            LevelTable().root_digest()
        assert exc_info.value.code == ErrorCodes.EMPTY_TREE

    def test_digest_at(self):
        with pytest.raises(EmptyTreeException):
            LevelTable().digest_at(0, 0)


class TestShape:
    """Height, widths and last offsets of a built table."""

    def test_height(self, sha256_tree):
        _, table, _ = sha256_tree
        assert table.height() == 5
        assert len(table) == 5
        assert table.top_level() == 4

    def test_last_offset(self, sha256_tree):
        _, table, _ = sha256_tree
        assert table.last_offset(0) == 9
        assert table.last_offset(1) == 4
        assert table.last_offset(table.top_level()) == 0

    def test_width_out_of_range(self, sha256_tree):
        _, table, _ = sha256_tree
        assert table.width(-1) == 0
        assert table.width(5) == 0

    def test_levels_is_a_copy(self, sha256_tree):
        _, table, _ = sha256_tree
        levels = table.levels
        levels[0][0] = b"tampered"
        levels.append([b"extra"])

        assert table.digest_at(0, 0) == h256(GREETINGS[0])
        assert table.height() == 5

    def test_iteration(self, sha256_tree):
        _, table, _ = sha256_tree
        assert [len(level) for level in table] == table.widths()

    def test_repr(self, six_leaf_tree):
        _, table, _ = six_leaf_tree
        assert repr(table) == "LevelTable(widths=[6, 3, 2, 1])"


class TestDigestAt:
    """Positional lookups."""

    def test_leaf(self, sha256_tree):
        _, table, _ = sha256_tree
        assert table.digest_at(0, 0) == h256(GREETINGS[0])

    def test_root(self, sha256_tree):
        _, table, root = sha256_tree
        assert table.digest_at(table.top_level(), 0) == root.digest
        assert table.root_digest() == root.digest

    @pytest.mark.parametrize("level,offset", [
        (5, 0),
        (-1, 0),
        (0, 10),
        (1, 5),
        (0, -1),
        (4, 1),
    ])
    def test_invalid_coordinates(self, sha256_tree, level, offset):
        _, table, _ = sha256_tree

        with pytest.raises(InvalidCoordinateException) as exc_info:
            table.digest_at(level, offset)

        assert exc_info.value.code == ErrorCodes.INVALID_COORDINATE
        assert exc_info.value.details["level"] == level
        assert exc_info.value.details["offset"] == offset


class TestConstruction:
    """Tables built directly from levels."""

    def test_from_levels(self):
        table = LevelTable.from_levels([[b"\x01", b"\x02"], [b"\x03"]])
        assert table.widths() == [2, 1]
        assert table.root_digest() == b"\x03"

    def test_equality(self):
        a = LevelTable([[b"\x01", b"\x02"], [b"\x03"]])
        b = LevelTable([[b"\x01", b"\x02"], [b"\x03"]])
        c = LevelTable([[b"\x02", b"\x01"], [b"\x03"]])

        assert a == b
        assert a != c
        assert a != "not a table"

    def test_source_not_aliased(self):
        source = [[b"\x01", b"\x02"], [b"\x03"]]
        table = LevelTable(source)
        source[1][0] = b"\x04"
        assert table.root_digest() == b"\x03"
