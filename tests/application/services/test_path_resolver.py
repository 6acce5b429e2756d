# tests/application/services/test_path_resolver.py
import pytest

from application.services.path_resolver import extract_value
from domain.values import MISSING


class TestExtractValue:
    def test_top_level(self):
        assert extract_value({"status": 200}, "status") == 200

    def test_nested(self):
        assert extract_value({"data": {"user": {"id": "abc"}}}, "data.user.id") == "abc"

    def test_missing_path(self):
        assert extract_value({"a": 1}, "b.c") is MISSING

    def test_array_index(self):
        assert extract_value({"items": ["a", "b", "c"]}, "items[1]") == "b"

    def test_nested_array_access(self):
        obj = {"data": {"users": [{"id": 1}, {"id": 2}]}}
        assert extract_value(obj, "data.users[0].id") == 1
        assert extract_value(obj, "data.users[1].id") == 2

    def test_multiple_indices_in_one_path(self):
        obj = {"a": {"b": [{"c": ["x", "y"]}]}}
        assert extract_value(obj, "a.b[0].c[1]") == "y"

    def test_chained_indices(self):
        obj = {"m": [[1, 2], [3, [4, 5]]]}
        assert extract_value(obj, "m[0][1]") == 2
        assert extract_value(obj, "m[1][1][0]") == 4

    def test_chained_index_out_of_range(self):
        assert extract_value({"m": [[1, 2]]}, "m[0][5]") is MISSING
        assert extract_value({"m": [[1, 2]]}, "m[0][0][0]") is MISSING

    def test_out_of_bounds(self):
        assert extract_value({"items": [1]}, "items[5]") is MISSING

    def test_index_on_non_sequence(self):
        assert extract_value({"items": "not an array"}, "items[0]") is MISSING
        assert extract_value({"items": {"0": "x"}}, "items[0]") is MISSING

    def test_null_in_path(self):
        assert extract_value({"a": None}, "a.b") is MISSING

    def test_null_leaf_is_returned(self):
        assert extract_value({"a": None}, "a") is None

    def test_key_on_scalar(self):
        assert extract_value({"a": 5}, "a.b") is MISSING

    @pytest.mark.parametrize("root", [None, MISSING])
    @pytest.mark.parametrize("path", ["a", "a.b", "a[0]", "x[1].y"])
    def test_null_or_missing_root(self, root, path):
        assert extract_value(root, path) is MISSING

    def test_falsy_values_are_found(self):
        obj = {"zero": 0, "no": False, "empty": ""}
        assert extract_value(obj, "zero") == 0
        assert extract_value(obj, "no") is False
        assert extract_value(obj, "empty") == ""

    def test_length_of_list(self):
        assert extract_value({"items": [1, 2, 3]}, "items.length") == 3
