"""
Flow domain model
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from domain.steps.base import Step


@dataclass(frozen=True)
class Flow:
    """
    A named, ordered test scenario. Identity is the name (not enforced unique).
    """
    name: str
    steps: List[Step]
    description: Optional[str] = None
    tags: FrozenSet[str] = field(default_factory=frozenset)
