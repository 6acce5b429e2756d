# application/handlers/poll_handler.py
from __future__ import annotations

from application.handlers.base import StepHandler, StepState
from application.services.execution_deps import ExecutionDeps
from application.services.poller import Poller
from domain.run import FlowContext
from domain.steps.base import Step


class PollStepHandler(StepHandler):
    def __init__(self, poller: Poller):
        self._poller = poller

    def supports(self, step) -> bool:
        return isinstance(step, Step) and step.wait_until is not None

    def handle(self, step: Step, state: StepState, ctx: FlowContext, deps: ExecutionDeps) -> None:
        if state.prepared is None or state.response is None:
            raise RuntimeError(f"waitUntil needs an initial response: step={step.name}")

        outcome = self._poller.poll(step.wait_until, state.prepared, state.response, deps)
        state.response = outcome.response
