"""
Project context: base URLs, endpoints, business rules and AI settings
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class AiProvider(str, Enum):
    OLLAMA = "ollama"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


AI_PROVIDER_DEFAULTS: Dict[AiProvider, Dict[str, str]] = {
    AiProvider.OLLAMA: {"url": "http://localhost:11434", "model": "llama3.2:3b"},
    AiProvider.OPENAI: {"url": "https://api.openai.com/v1", "model": "gpt-4o-mini"},
    AiProvider.ANTHROPIC: {"url": "https://api.anthropic.com/v1", "model": "claude-3-5-haiku-latest"},
}


@dataclass(frozen=True)
class AiConfig:
    provider: AiProvider = AiProvider.OLLAMA
    url: str = ""
    model: str = ""
    api_key: Optional[str] = None
    timeout_ms: int = 30_000

    @property
    def effective_url(self) -> str:
        return (self.url or AI_PROVIDER_DEFAULTS[self.provider]["url"]).rstrip("/")

    @property
    def effective_model(self) -> str:
        return self.model or AI_PROVIDER_DEFAULTS[self.provider]["model"]


@dataclass(frozen=True)
class AiEvaluation:
    passed: bool
    confidence: float
    reason: str


@dataclass(frozen=True)
class EndpointDefinition:
    name: str
    method: str
    path: str
    description: Optional[str] = None


@dataclass(frozen=True)
class ProjectContext:
    name: str
    description: str = ""
    base_urls: Dict[str, str] = field(default_factory=dict)  # insertion order matters: first is the default
    endpoints: List[EndpointDefinition] = field(default_factory=list)
    rules: List[str] = field(default_factory=list)
    ai: Optional[AiConfig] = None
