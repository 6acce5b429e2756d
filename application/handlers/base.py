# application/handlers/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from application.ports.http_client import HttpResponse
from application.services.request_preparer import PreparedHttpRequest
from domain.results import AssertionResult
from domain.steps.base import Step

if TYPE_CHECKING:
    from domain.run import FlowContext
    from application.services.execution_deps import ExecutionDeps


@dataclass
class StepState:
    """What one step has produced so far; survives a mid-step failure."""
    prepared: Optional[PreparedHttpRequest] = None
    response: Optional[HttpResponse] = None
    captures: Dict[str, Any] = field(default_factory=dict)
    assertions: List[AssertionResult] = field(default_factory=list)


class StepHandler(ABC):
    @abstractmethod
    def supports(self, step: Step) -> bool: ...

    @abstractmethod
    def handle(self, step: Step, state: StepState, ctx: "FlowContext", deps: "ExecutionDeps") -> None: ...
