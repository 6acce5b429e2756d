# domain/steps/http.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from domain.exceptions import FlowValidationError
from domain.values import MISSING


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, raw: Any) -> "HttpMethod":
        text = str(raw or "GET").upper()
        try:
            return cls(text)
        except ValueError:
            raise FlowValidationError(f"Unsupported HTTP method: {raw}") from None


@dataclass(frozen=True)
class GraphQLRequestSpec:
    query: str
    variables: Optional[Dict[str, Any]] = None
    operation_name: Optional[str] = None


@dataclass(frozen=True)
class HttpRequestSpec:
    method: HttpMethod
    url: str
    headers: Optional[Dict[str, str]] = None
    body: Any = MISSING  # any JSON value; MISSING => no body
    graphql: Optional[GraphQLRequestSpec] = None
