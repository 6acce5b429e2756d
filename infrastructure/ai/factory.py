# infrastructure/ai/factory.py
from __future__ import annotations

from typing import Dict, Optional, Type

from application.ports.ai_evaluator import AiEvaluatorPort
from domain.context import AiConfig, AiProvider
from infrastructure.ai.anthropic_evaluator import AnthropicEvaluator
from infrastructure.ai.base import HttpAiEvaluator
from infrastructure.ai.ollama_evaluator import OllamaEvaluator
from infrastructure.ai.openai_evaluator import OpenAiEvaluator

_EVALUATORS: Dict[AiProvider, Type[HttpAiEvaluator]] = {
    AiProvider.OLLAMA: OllamaEvaluator,
    AiProvider.OPENAI: OpenAiEvaluator,
    AiProvider.ANTHROPIC: AnthropicEvaluator,
}


def build_ai_evaluator(config: Optional[AiConfig]) -> Optional[AiEvaluatorPort]:
    if config is None:
        return None
    return _EVALUATORS[config.provider](config)
