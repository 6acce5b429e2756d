# application/handlers/assert_handler.py
from __future__ import annotations

from numbers import Real
from typing import Any

from application.handlers.base import StepHandler, StepState
from application.ports.http_client import HttpResponse
from application.services.assertion_evaluator import AssertionEvaluator
from application.services.execution_deps import ExecutionDeps
from application.services.path_resolver import extract_value
from domain.results import AssertionResult
from domain.run import FlowContext
from domain.steps.assertion import AssertionOperator, AssertionSpec
from domain.steps.base import Step
from domain.values import MISSING

AI_NOT_CONFIGURED_MESSAGE = "AI evaluation requires an AI provider configuration"


def resolve_actual(assertion: AssertionSpec, response: HttpResponse) -> Any:
    """
    `httpStatus` is always the transport status. `status` is the transport
    status only when the expected value is a number; otherwise it is a body path.
    """
    if assertion.path == "httpStatus":
        return response.status
    if assertion.path == "status" and isinstance(assertion.value, Real) and not isinstance(assertion.value, bool):
        return response.status
    return extract_value(response.body, assertion.path)


class AssertStepHandler(StepHandler):
    def __init__(self, evaluator: AssertionEvaluator):
        self._evaluator = evaluator

    def supports(self, step) -> bool:
        return isinstance(step, Step) and bool(step.assertions)

    def handle(self, step: Step, state: StepState, ctx: FlowContext, deps: ExecutionDeps) -> None:
        if state.response is None:
            raise RuntimeError(f"assertions need a response: step={step.name}")

        for assertion in step.assertions:
            actual = resolve_actual(assertion, state.response)
            if assertion.operator is AssertionOperator.AI_EVALUATE:
                result = self._evaluate_with_ai(assertion, actual, deps)
            else:
                result = self._evaluator.evaluate(assertion, actual)
            state.assertions.append(result)

            deps.logger.info(
                "assertion.result",
                path=assertion.path,
                operator=assertion.operator.value,
                success=result.success,
                message=result.message,
            )

    def _evaluate_with_ai(self, assertion: AssertionSpec, actual: Any, deps: ExecutionDeps) -> AssertionResult:
        if deps.ai_evaluator is None:
            return AssertionResult(
                assertion=assertion,
                success=False,
                actual=actual,
                message=assertion.message or AI_NOT_CONFIGURED_MESSAGE,
            )

        prompt = "" if assertion.value is MISSING else str(assertion.value)
        evaluation = deps.ai_evaluator.evaluate(actual, prompt)
        if evaluation.passed:
            message = f"AI passed ({evaluation.confidence * 100:.0f}%): {evaluation.reason}"
        else:
            message = f"AI failed: {evaluation.reason}"
            deps.logger.warning("ai.failed", path=assertion.path, reason=evaluation.reason)

        return AssertionResult(
            assertion=assertion,
            success=evaluation.passed,
            actual=actual,
            message=assertion.message or message,
        )
