# domain/steps/poll.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from domain.exceptions import FlowValidationError
from domain.values import MISSING

DEFAULT_POLL_TIMEOUT_MS = 30_000
DEFAULT_POLL_INTERVAL_MS = 2_000


class PollOperator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    EXISTS = "exists"
    NOT_EXISTS = "notExists"

    @classmethod
    def parse(cls, raw: Any) -> "PollOperator":
        try:
            return cls(raw)
        except ValueError:
            raise FlowValidationError(f"Unknown waitUntil operator: {raw}") from None


@dataclass(frozen=True)
class PollSpec:
    path: str
    operator: PollOperator
    value: Any = MISSING
    timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS
    interval_ms: int = DEFAULT_POLL_INTERVAL_MS
