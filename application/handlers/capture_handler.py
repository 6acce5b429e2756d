# application/handlers/capture_handler.py
from __future__ import annotations

from application.handlers.base import StepHandler, StepState
from application.services.execution_deps import ExecutionDeps
from application.services.path_resolver import extract_value
from application.services.template_renderer import to_text
from domain.run import FlowContext
from domain.steps.base import Step
from domain.values import MISSING


class CaptureStepHandler(StepHandler):
    """Copy response body values into the flow's variable bag, in declared order."""

    def supports(self, step) -> bool:
        return isinstance(step, Step) and bool(step.capture)

    def handle(self, step: Step, state: StepState, ctx: FlowContext, deps: ExecutionDeps) -> None:
        body = state.response.body if state.response is not None else MISSING
        for cap in step.capture:
            value = extract_value(body, cap.path)
            state.captures[cap.name] = value
            ctx.vars[cap.name] = value
            deps.logger.info(
                "capture.value",
                name=cap.name,
                path=cap.path,
                value=_preview(value),
            )


def _preview(value, limit: int = 40) -> str:
    if value is MISSING:
        return "undefined"
    return to_text(value)[:limit]
