from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "anthropic/claude-3.5-sonnet"


@dataclass(frozen=True)
class OpenRouterConfig:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout_seconds: int = 60
    max_tokens: int = 4000
    temperature: float = 0.3
    app_title: str = "Business Licensing Report Generator"


def get_openrouter_config() -> OpenRouterConfig:
    """
    Load OpenRouter configuration from environment variables.

    Reads OPENROUTER_API_KEY (required), OPENROUTER_BASE_URL, OPENROUTER_MODEL,
    OPENROUTER_TIMEOUT_SECONDS.
    """
    return OpenRouterConfig(
        api_key=_require_env("OPENROUTER_API_KEY"),
        base_url=os.getenv("OPENROUTER_BASE_URL", DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL,
        model=os.getenv("OPENROUTER_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL,
        timeout_seconds=int(os.getenv("OPENROUTER_TIMEOUT_SECONDS", "60")),
    )


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value
