# domain/run.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class FlowContext:
    """
    Mutable state of one flow execution. The variable bag is written only by
    capture processing and is never shared between flow executions.
    """
    run_id: str = ""

    vars: Dict[str, Any] = field(default_factory=dict)

    def reset(self) -> None:
        self.vars = {}
