# infrastructure/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

from domain.context import AiConfig, AiProvider

DEFAULT_ENV_FILE = ".env"


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration from the environment and an optional .env file.
    Real environment variables win over .env entries.
    """
    ai_provider: Optional[str] = None
    ai_url: Optional[str] = None
    ai_model: Optional[str] = None
    ai_key: Optional[str] = None
    http_timeout_sec: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def load(
        cls,
        env_file: Union[str, Path, None] = DEFAULT_ENV_FILE,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        values: Dict[str, Optional[str]] = {}
        if env_file and Path(env_file).is_file():
            values.update(dotenv_values(env_file))
        values.update(os.environ if environ is None else environ)

        provider = values.get("TESTFLOW_AI_PROVIDER")
        key = values.get("TESTFLOW_AI_KEY")
        if not key and provider == AiProvider.OPENAI.value:
            key = values.get("OPENAI_API_KEY")
        if not key and provider == AiProvider.ANTHROPIC.value:
            key = values.get("ANTHROPIC_API_KEY")

        return cls(
            ai_provider=provider or None,
            ai_url=values.get("TESTFLOW_AI_URL") or None,
            ai_model=values.get("TESTFLOW_AI_MODEL") or None,
            ai_key=key or None,
            http_timeout_sec=float(values.get("TESTFLOW_HTTP_TIMEOUT_SEC") or 30),
            log_level=(values.get("TESTFLOW_LOG_LEVEL") or "INFO").upper(),
        )

    def ai_config(self) -> Optional[AiConfig]:
        if not (self.ai_provider or self.ai_url or self.ai_model or self.ai_key):
            return None
        return AiConfig(
            provider=AiProvider(self.ai_provider or AiProvider.OLLAMA.value),
            url=self.ai_url or "",
            model=self.ai_model or "",
            api_key=self.ai_key,
        )


def resolve_ai_config(*candidates: Optional[AiConfig]) -> Optional[AiConfig]:
    """First configured source wins: explicit options, project context, settings."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
