"""
Execution results for assertions, steps, flows and whole runs
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from domain.flow import Flow
from domain.steps.assertion import AssertionSpec
from domain.steps.base import Step
from domain.values import MISSING


@dataclass(frozen=True)
class AssertionResult:
    assertion: AssertionSpec
    success: bool
    message: str
    actual: Any = MISSING


@dataclass(frozen=True)
class RequestSnapshot:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = MISSING


@dataclass(frozen=True)
class ResponseSnapshot:
    status: int
    headers: Dict[str, str]
    body: Any


@dataclass(frozen=True)
class StepResult:
    step: Step
    success: bool
    duration_ms: int
    request: RequestSnapshot
    response: Optional[ResponseSnapshot] = None
    captures: Dict[str, Any] = field(default_factory=dict)
    assertions: List[AssertionResult] = field(default_factory=list)
    error: Optional[str] = None


@dataclass(frozen=True)
class FlowResult:
    flow: Flow
    success: bool
    duration_ms: int
    steps: List[StepResult]
    variables: Dict[str, Any]


@dataclass(frozen=True)
class TestReport:
    __test__ = False  # not a pytest test class

    timestamp: datetime
    duration_ms: int
    total_flows: int
    passed_flows: int
    failed_flows: int
    flows: List[FlowResult]
    narrative: str
