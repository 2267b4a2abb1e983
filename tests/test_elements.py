"""Tests for raw value normalization and the shared snapshot helper."""

import math

from algostep.elements import coerce_value, format_value, normalize_elements
from algostep.snapshot import snapshot
from algostep.tree.bst_tracker import BSTNode, NodeIdAllocator


class Record:
    def __init__(self, value):
        self.value = value


class TestCoerceValue:
    def test_numbers_pass_through(self):
        assert coerce_value(7) == 7
        assert coerce_value(-2.5) == -2.5

    def test_bools_become_ints(self):
        assert coerce_value(True) == 1
        assert type(coerce_value(False)) is int

    def test_value_bearing_records(self):
        assert coerce_value({"value": 4}) == 4
        assert coerce_value(Record(9.5)) == 9.5

    def test_record_with_non_numeric_value_is_zero(self):
        assert coerce_value({"value": "abc"}) == 0
        assert coerce_value({"other": 3}) == 0

    def test_strings_are_parsed(self):
        assert coerce_value("12") == 12
        assert coerce_value(" 3.25 ") == 3.25
        assert coerce_value("1e3") == 1000.0

    def test_unparsable_defaults_to_zero(self):
        assert coerce_value("abc") == 0
        assert coerce_value("") == 0
        assert coerce_value(None) == 0
        assert coerce_value([1, 2]) == 0
        assert coerce_value("nan") == 0

    def test_digit_group_underscores_are_rejected(self):
        assert coerce_value("1_000") == 0
        assert coerce_value("2_5.0") == 0

    def test_nan_number_passes_unchanged(self):
        assert math.isnan(coerce_value(float("nan")))


class TestNormalizeElements:
    def test_ids_are_positional(self):
        items = normalize_elements([5, "3", {"value": 8}, "x"])
        assert items == [
            {"id": 0, "value": 5},
            {"id": 1, "value": 3},
            {"id": 2, "value": 8},
            {"id": 3, "value": 0},
        ]

    def test_empty_and_none(self):
        assert normalize_elements([]) == []
        assert normalize_elements(None) == []


def test_format_value():
    assert format_value(5.0) == "5"
    assert format_value(5.5) == "5.5"
    assert format_value(-3) == "-3"


class TestSnapshot:
    def test_none(self):
        assert snapshot(None) is None

    def test_array_copy_is_detached(self):
        arr = [{"id": 0, "value": 1}, None]
        copy = snapshot(arr)
        arr[0]["value"] = 99
        arr[1] = {"id": 1, "value": 2}
        assert copy == [{"id": 0, "value": 1}, None]

    def test_tree_nodes_become_dicts_with_ids(self):
        allocator = NodeIdAllocator()
        root = BSTNode(5, allocator)
        root.left = BSTNode(2, allocator)
        copy = snapshot(root)
        root.left.value = 100
        assert copy == {
            "id": 0,
            "value": 5,
            "left": {"id": 1, "value": 2, "left": None, "right": None},
            "right": None,
        }
