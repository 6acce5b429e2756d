# infrastructure/ai/anthropic_evaluator.py
from __future__ import annotations

from infrastructure.ai.base import SYSTEM_PROMPT, HttpAiEvaluator

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicEvaluator(HttpAiEvaluator):
    def _complete(self, user_prompt: str) -> str:
        if not self._config.api_key:
            raise ValueError("Anthropic requires an API key")

        data = self._post(
            f"{self._config.effective_url}/messages",
            {
                "model": self._config.effective_model,
                "max_tokens": 512,
                "system": SYSTEM_PROMPT,
                "messages": [{"role": "user", "content": user_prompt}],
            },
            headers={
                "x-api-key": self._config.api_key,
                "anthropic-version": ANTHROPIC_VERSION,
            },
        )
        return "".join(block.get("text", "") for block in data.get("content", []) if block.get("type") == "text")
