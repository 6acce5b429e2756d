# application/services/request_preparer.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from application.services.execution_deps import ExecutionDeps
from application.services.template_renderer import TemplateRenderer
from domain.run import FlowContext
from domain.steps.http import HttpRequestSpec
from domain.values import MISSING

_GRAPHQL_OPERATION = re.compile(r"(?:mutation|query|subscription)\s+(\w+)")


@dataclass(frozen=True)
class PreparedHttpRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = MISSING
    graphql_operation: Optional[str] = None


class RequestPreparer:
    """
    Turn a step's request spec into the concrete request to send:
    variables interpolated everywhere, URL resolved against the base URLs,
    GraphQL sections folded into a {query, variables, operationName} body.
    """

    def __init__(self, renderer: TemplateRenderer):
        self._renderer = renderer

    def prepare(self, spec: HttpRequestSpec, ctx: FlowContext, deps: ExecutionDeps) -> PreparedHttpRequest:
        variables = ctx.vars

        url = deps.resolve_url(self._renderer.interpolate(spec.url, variables))

        headers: Dict[str, str] = {}
        for k, v in (spec.headers or {}).items():
            rendered = self._renderer.interpolate(v, variables)
            headers[k] = rendered if isinstance(rendered, str) else str(rendered)

        if spec.graphql is not None:
            gql = spec.graphql
            query = self._renderer.interpolate(gql.query, variables)
            body: Dict[str, Any] = {"query": query}
            if gql.variables is not None:
                resolved = self._renderer.resolve_variables(gql.variables, variables)
                body["variables"] = self._renderer.parse_json_strings(resolved)
            if gql.operation_name:
                body["operationName"] = gql.operation_name
            operation = gql.operation_name or _operation_from_query(query)
            return PreparedHttpRequest(
                method=spec.method.value,
                url=url,
                headers=headers,
                body=body,
                graphql_operation=operation or "operation",
            )

        body = spec.body
        if body is not MISSING:
            body = self._renderer.resolve_variables(body, variables)

        return PreparedHttpRequest(
            method=spec.method.value,
            url=url,
            headers=headers,
            body=body,
        )


def _operation_from_query(query: str) -> Optional[str]:
    m = _GRAPHQL_OPERATION.search(query or "")
    return m.group(1) if m else None
