# application/services/assertion_evaluator.py
from __future__ import annotations

import re
from numbers import Real
from typing import Any, Callable, Dict, Tuple

from application.services.template_renderer import to_text
from domain.results import AssertionResult
from domain.steps.assertion import AssertionOperator, AssertionSpec
from domain.values import MISSING, json_equals, to_json_text

AI_SYNC_FALLBACK_MESSAGE = "AI evaluation requires an AI evaluator"

Verdict = Tuple[bool, str]


class AssertionEvaluator:
    """
    Evaluates one declarative assertion against an actual value.
    Side-effect free and never raises; bad or missing data is a failed verdict.
    """

    def __init__(self) -> None:
        self._rules: Dict[AssertionOperator, Callable[[AssertionSpec, Any], Verdict]] = {
            AssertionOperator.EQUALS: self._equals,
            AssertionOperator.NOT_EQUALS: self._not_equals,
            AssertionOperator.CONTAINS: self._contains,
            AssertionOperator.NOT_CONTAINS: self._not_contains,
            AssertionOperator.EXISTS: self._exists,
            AssertionOperator.NOT_EXISTS: self._not_exists,
            AssertionOperator.GREATER_THAN: self._greater_than,
            AssertionOperator.LESS_THAN: self._less_than,
            AssertionOperator.MATCHES: self._matches,
            AssertionOperator.AI_EVALUATE: self._ai_placeholder,
        }

    def evaluate(self, assertion: AssertionSpec, actual: Any) -> AssertionResult:
        rule = self._rules.get(assertion.operator)
        if rule is None:
            success, message = False, f"Unsupported operator: {assertion.operator}"
        else:
            success, message = rule(assertion, actual)
        return AssertionResult(
            assertion=assertion,
            success=success,
            actual=actual,
            message=assertion.message or message,
        )

    def _equals(self, a: AssertionSpec, actual: Any) -> Verdict:
        expected = to_json_text(a.value)
        if json_equals(actual, a.value):
            return True, f"{a.path} equals {expected}"
        return False, f"Expected {a.path} to equal {expected}, got {to_json_text(actual)}"

    def _not_equals(self, a: AssertionSpec, actual: Any) -> Verdict:
        expected = to_json_text(a.value)
        if not json_equals(actual, a.value):
            return True, f"{a.path} does not equal {expected}"
        return False, f"Expected {a.path} to not equal {expected}"

    def _contains(self, a: AssertionSpec, actual: Any) -> Verdict:
        expected = to_json_text(a.value)
        if _includes(actual, a.value) is True:
            return True, f"{a.path} contains {expected}"
        return False, f"Expected {a.path} to contain {expected}, got {to_json_text(actual)}"

    def _not_contains(self, a: AssertionSpec, actual: Any) -> Verdict:
        expected = to_json_text(a.value)
        # neither string nor sequence: nothing can be contained
        if _includes(actual, a.value) is not True:
            return True, f"{a.path} does not contain {expected}"
        return False, f"Expected {a.path} to not contain {expected}"

    def _exists(self, a: AssertionSpec, actual: Any) -> Verdict:
        if actual is not None and actual is not MISSING:
            return True, f"{a.path} exists"
        return False, f"Expected {a.path} to exist"

    def _not_exists(self, a: AssertionSpec, actual: Any) -> Verdict:
        if actual is None or actual is MISSING:
            return True, f"{a.path} does not exist"
        return False, f"Expected {a.path} to not exist, got {to_json_text(actual)}"

    def _greater_than(self, a: AssertionSpec, actual: Any) -> Verdict:
        expected = _as_number(a.value)
        if _is_number(actual) and expected is not None and actual > expected:
            return True, f"{a.path} ({_display(actual)}) > {_display(a.value)}"
        return False, f"Expected {a.path} to be > {_display(a.value)}, got {_display(actual)}"

    def _less_than(self, a: AssertionSpec, actual: Any) -> Verdict:
        expected = _as_number(a.value)
        if _is_number(actual) and expected is not None and actual < expected:
            return True, f"{a.path} ({_display(actual)}) < {_display(a.value)}"
        return False, f"Expected {a.path} to be < {_display(a.value)}, got {_display(actual)}"

    def _matches(self, a: AssertionSpec, actual: Any) -> Verdict:
        pattern = a.value
        if not isinstance(actual, str) or not isinstance(pattern, str):
            return False, f"Expected {a.path} to match {_display(pattern)}, got {to_json_text(actual)}"
        try:
            found = re.search(pattern, actual) is not None
        except re.error as e:
            return False, f"Invalid pattern {pattern!r} for {a.path}: {e}"
        if found:
            return True, f"{a.path} matches {pattern}"
        return False, f"Expected {a.path} to match {pattern}, got {to_json_text(actual)}"

    def _ai_placeholder(self, a: AssertionSpec, actual: Any) -> Verdict:
        return False, AI_SYNC_FALLBACK_MESSAGE


def _includes(actual: Any, expected: Any):
    """True/False for strings and sequences, None when containment does not apply."""
    if isinstance(actual, str):
        if expected is MISSING:
            return "undefined" in actual
        return to_text(expected) in actual
    if isinstance(actual, (list, tuple)):
        return any(json_equals(item, expected) for item in actual)
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _as_number(value: Any):
    if _is_number(value):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _display(value: Any) -> str:
    if value is MISSING:
        return "undefined"
    return to_text(value)
