# infrastructure/flow/base_loader.py
"""
Shared normalisation from parsed YAML/JSON data to Flow domain objects.
Only the fields a flow cannot run without are validated.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Union

from domain.exceptions import FlowValidationError
from domain.flow import Flow
from domain.steps.assertion import AssertionOperator, AssertionSpec
from domain.steps.base import Step
from domain.steps.capture import CaptureSpec
from domain.steps.http import GraphQLRequestSpec, HttpMethod, HttpRequestSpec
from domain.steps.poll import (
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_POLL_TIMEOUT_MS,
    PollOperator,
    PollSpec,
)
from domain.values import MISSING


class FlowLoadError(Exception):
    pass


class FlowLoaderBase(ABC):
    def load_from_file(self, path: Union[str, Path]) -> Flow:
        p = Path(path)
        if not p.exists():
            raise FlowLoadError(f"Flow file not found: {path}")

        try:
            data = self._load_file(p)
        except FlowLoadError:
            raise
        except Exception as e:
            raise FlowLoadError(f"Failed to parse {path}: {e}") from e

        if data is None:
            raise FlowLoadError(f"Flow file is empty: {path}")
        if not isinstance(data, dict):
            raise FlowLoadError(f"Flow file is invalid: {path}")

        try:
            return self.load_from_dict(data)
        except FlowValidationError as e:
            raise FlowLoadError(f"{path}: {e}") from e

    @abstractmethod
    def _load_file(self, path: Path) -> Any:
        ...

    def load_from_dict(self, data: Dict[str, Any]) -> Flow:
        if not data.get("name") or data.get("steps") is None:
            raise FlowValidationError('Test flow must have "name" and "steps" fields')
        if not isinstance(data["steps"], list):
            raise FlowValidationError('"steps" must be a list')

        return Flow(
            name=str(data["name"]),
            description=data.get("description"),
            tags=_load_tags(data.get("tags")),
            steps=[self._load_step(s) for s in data["steps"]],
        )

    def _load_step(self, data: Any) -> Step:
        if not isinstance(data, dict) or not data.get("name") or not data.get("request"):
            raise FlowValidationError('Step must have "name" and "request" fields')

        return Step(
            name=str(data["name"]),
            description=data.get("description"),
            request=self._load_request(data["request"]),
            capture=[self._load_capture(c) for c in (data.get("capture") or [])],
            assertions=[self._load_assertion(a) for a in (data.get("assertions") or [])],
            wait_until=self._load_wait_until(data.get("waitUntil")),
        )

    def _load_request(self, data: Any) -> HttpRequestSpec:
        if not isinstance(data, dict) or not data.get("url"):
            raise FlowValidationError('Request must have a "url" field')

        headers = data.get("headers")
        return HttpRequestSpec(
            method=HttpMethod.parse(data.get("method")),
            url=str(data["url"]),
            headers={str(k): str(v) for k, v in headers.items()} if isinstance(headers, dict) else None,
            body=data["body"] if "body" in data else MISSING,
            graphql=self._load_graphql(data.get("graphql")),
        )

    def _load_graphql(self, data: Any) -> Optional[GraphQLRequestSpec]:
        if not data:
            return None
        if not isinstance(data, dict) or not data.get("query"):
            raise FlowValidationError('GraphQL request must have a "query" field')
        return GraphQLRequestSpec(
            query=str(data["query"]),
            variables=data.get("variables"),
            operation_name=data.get("operationName"),
        )

    def _load_capture(self, data: Any) -> CaptureSpec:
        if not isinstance(data, dict) or not data.get("name") or not data.get("path"):
            raise FlowValidationError('Capture must have "name" and "path" fields')
        return CaptureSpec(name=str(data["name"]), path=str(data["path"]))

    def _load_assertion(self, data: Any) -> AssertionSpec:
        if not isinstance(data, dict) or not data.get("path") or not data.get("operator"):
            raise FlowValidationError('Assertion must have "path" and "operator" fields')
        return AssertionSpec(
            path=str(data["path"]),
            operator=AssertionOperator.parse(data["operator"]),
            value=data["value"] if "value" in data else MISSING,
            message=data.get("message"),
        )

    def _load_wait_until(self, data: Any) -> Optional[PollSpec]:
        if not data:
            return None
        if not isinstance(data, dict) or not data.get("path") or not data.get("operator"):
            raise FlowValidationError('waitUntil must have "path" and "operator" fields')
        return PollSpec(
            path=str(data["path"]),
            operator=PollOperator.parse(data["operator"]),
            value=data["value"] if "value" in data else MISSING,
            # 0 or absent means "use the default"
            timeout_ms=int(data.get("timeout") or DEFAULT_POLL_TIMEOUT_MS),
            interval_ms=int(data.get("interval") or DEFAULT_POLL_INTERVAL_MS),
        )


def _load_tags(raw: Any) -> FrozenSet[str]:
    if not raw:
        return frozenset()
    if isinstance(raw, str):
        return frozenset([raw])
    return frozenset(str(t) for t in raw)
