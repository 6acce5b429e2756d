# infrastructure/ai/base.py
from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import Any

import requests

from domain.context import AiConfig, AiEvaluation

SYSTEM_PROMPT = " ".join(
    [
        "You are a test evaluator. Analyze the provided data against the given criteria.",
        'Respond ONLY with valid JSON: {"pass": true/false, "confidence": 0.0-1.0, "reason": "brief explanation"}',
    ]
)

_JSON_OBJECT = re.compile(r"\{.*\}", re.S)


def build_user_prompt(actual: Any, prompt: str) -> str:
    data = json.dumps(actual, indent=2, ensure_ascii=False, default=str)
    return f"Criteria: {prompt}\n\nData:\n{data}"


def parse_evaluation(text: str) -> AiEvaluation:
    """Parse the model's JSON verdict; tolerate prose or code fences around it."""
    try:
        parsed = json.loads(text)
    except ValueError:
        m = _JSON_OBJECT.search(text or "")
        if not m:
            raise ValueError(f"no JSON object in model output: {text[:80]!r}")
        parsed = json.loads(m.group(0))

    if not isinstance(parsed, dict):
        raise ValueError("model output is not a JSON object")

    try:
        confidence = float(parsed.get("confidence") or 0)
    except (TypeError, ValueError):
        confidence = 0.0

    return AiEvaluation(
        passed=bool(parsed.get("pass")),
        confidence=min(max(confidence, 0.0), 1.0),
        reason=str(parsed.get("reason") or ""),
    )


class HttpAiEvaluator(ABC):
    """
    Template for provider adapters: subclasses build the request and pull the
    model text out of the response. evaluate() never raises.
    """

    def __init__(self, config: AiConfig, session: requests.Session | None = None):
        self._config = config
        self._session = session or requests.Session()

    def evaluate(self, actual: Any, prompt: str) -> AiEvaluation:
        try:
            text = self._complete(build_user_prompt(actual, prompt))
            return parse_evaluation(text)
        except Exception as e:
            return AiEvaluation(passed=False, confidence=0.0, reason=f"AI evaluation failed: {e}")

    def _post(self, url: str, payload: dict, headers: dict | None = None) -> Any:
        resp = self._session.post(
            url,
            json=payload,
            headers=headers or {},
            timeout=self._config.timeout_ms / 1000,
        )
        resp.raise_for_status()
        return resp.json()

    @abstractmethod
    def _complete(self, user_prompt: str) -> str:
        ...
