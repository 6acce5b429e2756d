# application/executor/step_executor.py
from __future__ import annotations

from application.executor.handler_registry import HandlerRegistry
from application.handlers.base import StepState
from application.services.execution_deps import ExecutionDeps
from domain.results import RequestSnapshot, ResponseSnapshot, StepResult
from domain.run import FlowContext
from domain.steps.base import Step


class StepExecutor:
    """
    Runs one step through its phases (request, poll, capture, assert).
    Nothing raised inside a step escapes: failures become StepResult data.
    """

    def __init__(self, registry: HandlerRegistry):
        self._registry = registry

    def execute(self, step: Step, ctx: FlowContext, deps: ExecutionDeps) -> StepResult:
        deps = deps.with_logger(deps.logger.bind(step=step.name))
        state = StepState()

        deps.logger.info("step.start", description=step.description)
        t0 = deps.clock.monotonic_ms()

        try:
            for handler in self._registry.get_handlers(step):
                handler.handle(step, state, ctx, deps)
        except Exception as e:
            error = str(e) or type(e).__name__
            duration_ms = int(deps.clock.monotonic_ms() - t0)
            deps.logger.error("step.failed", error=error, elapsed_ms=duration_ms)
            return StepResult(
                step=step,
                success=False,
                duration_ms=duration_ms,
                request=self._request_snapshot(step, state),
                response=self._response_snapshot(state),
                captures=dict(state.captures),
                assertions=list(state.assertions),
                error=error,
            )

        success = all(a.success for a in state.assertions)
        duration_ms = int(deps.clock.monotonic_ms() - t0)
        deps.logger.info("step.end", ok=success, elapsed_ms=duration_ms)

        return StepResult(
            step=step,
            success=success,
            duration_ms=duration_ms,
            request=self._request_snapshot(step, state),
            response=self._response_snapshot(state),
            captures=dict(state.captures),
            assertions=list(state.assertions),
        )

    def _request_snapshot(self, step: Step, state: StepState) -> RequestSnapshot:
        if state.prepared is None:
            # failed before the request was resolved: report it as declared
            return RequestSnapshot(method=step.request.method.value, url=step.request.url)
        p = state.prepared
        return RequestSnapshot(method=p.method, url=p.url, headers=dict(p.headers), body=p.body)

    def _response_snapshot(self, state: StepState):
        if state.response is None:
            return None
        r = state.response
        return ResponseSnapshot(status=r.status, headers=dict(r.headers), body=r.body)
