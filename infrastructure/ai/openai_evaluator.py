# infrastructure/ai/openai_evaluator.py
from __future__ import annotations

from infrastructure.ai.base import SYSTEM_PROMPT, HttpAiEvaluator


class OpenAiEvaluator(HttpAiEvaluator):
    def _complete(self, user_prompt: str) -> str:
        if not self._config.api_key:
            raise ValueError("OpenAI requires an API key")

        data = self._post(
            f"{self._config.effective_url}/chat/completions",
            {
                "model": self._config.effective_model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
                "response_format": {"type": "json_object"},
                "temperature": 0,
            },
            headers={"Authorization": f"Bearer {self._config.api_key}"},
        )
        return data["choices"][0]["message"]["content"]
