# application/handlers/http_handler.py
from __future__ import annotations

from application.handlers.base import StepHandler, StepState
from application.services.execution_deps import ExecutionDeps
from application.services.redactor import mask_dict
from application.services.request_preparer import RequestPreparer
from domain.run import FlowContext
from domain.steps.base import Step


class HttpStepHandler(StepHandler):
    """Prepare the step's request and dispatch exactly one HTTP call."""

    def __init__(self, preparer: RequestPreparer):
        self._preparer = preparer

    def supports(self, step) -> bool:
        return isinstance(step, Step)

    def handle(self, step: Step, state: StepState, ctx: FlowContext, deps: ExecutionDeps) -> None:
        prepared = self._preparer.prepare(step.request, ctx, deps)
        state.prepared = prepared

        deps.logger.info(
            "http.request",
            method=prepared.method,
            url=prepared.url,
            graphql_operation=prepared.graphql_operation,
        )
        deps.logger.debug("http.request_headers", headers=mask_dict(prepared.headers))

        resp = deps.http_client.request(
            method=prepared.method,
            url=prepared.url,
            headers=prepared.headers,
            body=prepared.body,
        )
        state.response = resp

        deps.logger.info(
            "http.response",
            status=resp.status,
            elapsed_ms=resp.elapsed_ms,
        )

        if prepared.graphql_operation and isinstance(resp.body, dict):
            errors = resp.body.get("errors")
            for err in errors if isinstance(errors, list) else []:
                message = err.get("message") if isinstance(err, dict) else None
                deps.logger.warning("graphql.error", message=message or "GraphQL error")
