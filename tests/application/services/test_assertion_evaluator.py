# tests/application/services/test_assertion_evaluator.py
import pytest

from application.services.assertion_evaluator import AI_SYNC_FALLBACK_MESSAGE, AssertionEvaluator
from domain.steps.assertion import AssertionOperator, AssertionSpec
from domain.values import MISSING


def check(operator: str, actual, value=MISSING, message=None):
    spec = AssertionSpec(path="test", operator=AssertionOperator(operator), value=value, message=message)
    return AssertionEvaluator().evaluate(spec, actual)


class TestEquals:
    def test_number(self):
        assert check("equals", 200, 200).success is True

    def test_string(self):
        assert check("equals", "hello", "hello").success is True

    def test_mismatch_message_names_both_values(self):
        r = check("equals", 404, 200)
        assert r.success is False
        assert "200" in r.message
        assert "404" in r.message

    def test_deep_equality(self):
        assert check("equals", {"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1}).success is True

    def test_deep_inequality(self):
        assert check("equals", {"a": 1}, {"a": 2}).success is False

    def test_int_and_float(self):
        assert check("equals", 1.0, 1).success is True

    def test_bool_is_not_number(self):
        assert check("equals", True, 1).success is False

    def test_missing_vs_null(self):
        assert check("equals", MISSING, None).success is False
        assert check("equals", None, None).success is True

    def test_result_keeps_actual(self):
        assert check("equals", 5, 5).actual == 5


@pytest.mark.parametrize(
    "actual,expected",
    [
        (1, 1),
        (1, 2),
        ("a", "a"),
        ({"x": [1]}, {"x": [1]}),
        ([1, 2], [2, 1]),
        (None, None),
        (None, 0),
        (MISSING, None),
        (MISSING, MISSING),
    ],
)
def test_equals_and_not_equals_are_complements(actual, expected):
    assert check("equals", actual, expected).success != check("notEquals", actual, expected).success


class TestContains:
    def test_substring(self):
        assert check("contains", "hello world", "world").success is True

    def test_substring_missing(self):
        assert check("contains", "hello", "world").success is False

    def test_substring_of_number(self):
        assert check("contains", "order 42 done", 42).success is True

    def test_list_element(self):
        assert check("contains", ["a", "b", "c"], "b").success is True

    def test_list_element_missing(self):
        assert check("contains", ["a", "b"], "z").success is False

    def test_list_element_by_value(self):
        assert check("contains", [{"id": 1}, {"id": 2}], {"id": 2}).success is True

    def test_other_types_fail(self):
        assert check("contains", 42, 4).success is False
        assert check("contains", MISSING, "x").success is False


class TestNotContains:
    def test_string(self):
        assert check("notContains", "hello", "world").success is True

    def test_string_contains(self):
        assert check("notContains", "hello world", "world").success is False

    def test_list(self):
        assert check("notContains", ["a"], "a").success is False

    def test_non_string_non_list_trivially_passes(self):
        assert check("notContains", 42, "x").success is True
        assert check("notContains", MISSING, "x").success is True


class TestExists:
    @pytest.mark.parametrize("value", [0, False, "", "something", [], {}])
    def test_present_values(self, value):
        assert check("exists", value).success is True

    @pytest.mark.parametrize("value", [None, MISSING])
    def test_absent_values(self, value):
        assert check("exists", value).success is False

    @pytest.mark.parametrize("value", [None, MISSING])
    def test_not_exists(self, value):
        assert check("notExists", value).success is True

    def test_not_exists_fails_when_present(self):
        assert check("notExists", "val").success is False


class TestOrdering:
    def test_greater_than(self):
        assert check("greaterThan", 10, 5).success is True

    def test_greater_than_boundary(self):
        assert check("greaterThan", 5, 5).success is False
        assert check("greaterThan", 3, 5).success is False

    def test_greater_than_non_numeric(self):
        r = check("greaterThan", "ten", 5)
        assert r.success is False
        assert "ten" in r.message

    def test_greater_than_bool(self):
        assert check("greaterThan", True, 0).success is False

    def test_numeric_string_expected(self):
        assert check("greaterThan", 10, "5").success is True

    def test_less_than(self):
        assert check("lessThan", 3, 10).success is True

    def test_less_than_boundary(self):
        assert check("lessThan", 10, 10).success is False

    def test_less_than_missing(self):
        assert check("lessThan", MISSING, 10).success is False


class TestMatches:
    def test_match(self):
        assert check("matches", "abc-123", r"^[a-z]+-\d+$").success is True

    def test_no_match(self):
        assert check("matches", "ABC", "^[a-z]+$").success is False

    def test_search_semantics(self):
        assert check("matches", "id=abc-123;", r"\d{3}").success is True

    def test_non_string_actual(self):
        assert check("matches", 123, r"\d+").success is False

    def test_invalid_pattern_fails_without_raising(self):
        r = check("matches", "abc", "([a-z")
        assert r.success is False
        assert "Invalid pattern" in r.message


def test_ai_evaluate_without_collaborator_fails():
    r = check("ai-evaluate", {"a": 1}, "is this valid?")
    assert r.success is False
    assert r.message == AI_SYNC_FALLBACK_MESSAGE


def test_custom_message_overrides():
    r = check("equals", 500, 200, message="Expected OK")
    assert r.success is False
    assert r.message == "Expected OK"


def test_custom_message_on_success_too():
    assert check("equals", 200, 200, message="custom").message == "custom"
