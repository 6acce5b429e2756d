# infrastructure/ai/ollama_evaluator.py
from __future__ import annotations

from infrastructure.ai.base import SYSTEM_PROMPT, HttpAiEvaluator


class OllamaEvaluator(HttpAiEvaluator):
    """Local LLM through Ollama's /api/generate; no API key needed."""

    def _complete(self, user_prompt: str) -> str:
        data = self._post(
            f"{self._config.effective_url}/api/generate",
            {
                "model": self._config.effective_model,
                "prompt": user_prompt,
                "system": SYSTEM_PROMPT,
                "stream": False,
                "format": "json",
            },
        )
        return data["response"]
