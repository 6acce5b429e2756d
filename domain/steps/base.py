# domain/steps/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from domain.steps.assertion import AssertionSpec
from domain.steps.capture import CaptureSpec
from domain.steps.http import HttpRequestSpec
from domain.steps.poll import PollSpec


@dataclass(frozen=True)
class Step:
    name: str
    request: HttpRequestSpec
    description: Optional[str] = None
    capture: List[CaptureSpec] = field(default_factory=list)
    assertions: List[AssertionSpec] = field(default_factory=list)
    wait_until: Optional[PollSpec] = None
