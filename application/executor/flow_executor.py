# application/executor/flow_executor.py
from __future__ import annotations

import uuid
from typing import List

from application.executor.step_executor import StepExecutor
from application.services.execution_deps import ExecutionDeps
from domain.flow import Flow
from domain.results import FlowResult, StepResult
from domain.run import FlowContext


class FlowExecutor:
    """
    Runs every step of a flow in order against a fresh variable bag.
    A failing step never stops the flow; later steps still run and report.
    """

    def __init__(self, step_executor: StepExecutor, deps: ExecutionDeps):
        self._step_executor = step_executor
        self._deps = deps

    def execute_flow(self, flow: Flow) -> FlowResult:
        ctx = FlowContext(run_id=uuid.uuid4().hex)
        ctx.reset()

        deps = self._deps.with_logger(self._deps.logger.bind(run_id=ctx.run_id, flow=flow.name))
        deps.logger.info("flow.start", steps=len(flow.steps), tags=sorted(flow.tags))
        t0 = deps.clock.monotonic_ms()

        results: List[StepResult] = []
        for i, step in enumerate(flow.steps):
            deps.logger.debug("flow.step", index=i + 1, total=len(flow.steps))
            results.append(self._step_executor.execute(step, ctx, deps))

        success = all(r.success for r in results)
        duration_ms = int(deps.clock.monotonic_ms() - t0)
        deps.logger.info("flow.end", ok=success, elapsed_ms=duration_ms)

        return FlowResult(
            flow=flow,
            success=success,
            duration_ms=duration_ms,
            steps=results,
            variables=dict(ctx.vars),
        )
