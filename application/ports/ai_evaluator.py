from __future__ import annotations

from typing import Any, Protocol

from domain.context import AiEvaluation


class AiEvaluatorPort(Protocol):
    def evaluate(self, actual: Any, prompt: str) -> AiEvaluation:
        """
        Judge `actual` against a natural-language prompt.
        Must never raise: failures come back as AiEvaluation(passed=False, confidence=0.0, ...).
        """
        ...
