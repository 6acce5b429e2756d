from __future__ import annotations

from pathlib import Path

from domain.context import AiConfig, AiProvider
from infrastructure.config.settings import Settings, resolve_ai_config


def test_defaults_without_env(tmp_path: Path) -> None:
    settings = Settings.load(env_file=tmp_path / "missing.env", environ={})

    assert settings.http_timeout_sec == 30.0
    assert settings.log_level == "INFO"
    assert settings.ai_config() is None


def test_env_file_and_environment_precedence(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "TESTFLOW_AI_PROVIDER=ollama\nTESTFLOW_AI_MODEL=llama3\nTESTFLOW_HTTP_TIMEOUT_SEC=5\n",
        encoding="utf-8",
    )

    settings = Settings.load(env_file=env_file, environ={"TESTFLOW_AI_MODEL": "qwen", "TESTFLOW_LOG_LEVEL": "debug"})

    assert settings.ai_provider == "ollama"
    assert settings.ai_model == "qwen"
    assert settings.http_timeout_sec == 5.0
    assert settings.log_level == "DEBUG"


def test_provider_specific_key_fallback(tmp_path: Path) -> None:
    settings = Settings.load(
        env_file=None,
        environ={"TESTFLOW_AI_PROVIDER": "anthropic", "ANTHROPIC_API_KEY": "ak", "OPENAI_API_KEY": "ok"},
    )
    config = settings.ai_config()

    assert config.provider is AiProvider.ANTHROPIC
    assert config.api_key == "ak"


def test_resolve_ai_config_first_wins() -> None:
    explicit = AiConfig(provider=AiProvider.OPENAI, api_key="k")
    from_context = AiConfig(provider=AiProvider.OLLAMA)

    assert resolve_ai_config(None, from_context, None) is from_context
    assert resolve_ai_config(explicit, from_context) is explicit
    assert resolve_ai_config(None, None) is None
