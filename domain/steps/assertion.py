# domain/steps/assertion.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from domain.exceptions import FlowValidationError
from domain.values import MISSING


class AssertionOperator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    CONTAINS = "contains"
    NOT_CONTAINS = "notContains"
    EXISTS = "exists"
    NOT_EXISTS = "notExists"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    MATCHES = "matches"
    AI_EVALUATE = "ai-evaluate"

    @classmethod
    def parse(cls, raw: Any) -> "AssertionOperator":
        try:
            return cls(raw)
        except ValueError:
            raise FlowValidationError(f"Unknown assertion operator: {raw}") from None


@dataclass(frozen=True)
class AssertionSpec:
    path: str
    operator: AssertionOperator
    value: Any = MISSING  # expected value, or the prompt for ai-evaluate
    message: Optional[str] = None
