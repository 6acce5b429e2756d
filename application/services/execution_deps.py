# application/services/execution_deps.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Protocol

from application.ports.ai_evaluator import AiEvaluatorPort
from application.ports.clock import ClockPort
from application.ports.http_client import HttpClientPort
from application.ports.logger import LoggerPort


class UrlResolverPort(Protocol):
    def resolve_url(self, url: str) -> str:
        ...


@dataclass(frozen=True)
class ExecutionDeps:
    http_client: HttpClientPort
    url_resolver: UrlResolverPort
    logger: LoggerPort
    clock: ClockPort
    ai_evaluator: Optional[AiEvaluatorPort] = None

    def resolve_url(self, url: str) -> str:
        return self.url_resolver.resolve_url(url)

    def with_logger(self, logger: LoggerPort) -> "ExecutionDeps":
        return replace(self, logger=logger)
