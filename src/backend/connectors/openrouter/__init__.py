"""OpenRouter connector (network + auth lives here; report shaping lives in src/backend/adapters/report)."""

from .client import OpenRouterHttpError, chat_completion
from .config import OpenRouterConfig, get_openrouter_config

__all__ = ["OpenRouterConfig", "OpenRouterHttpError", "chat_completion", "get_openrouter_config"]
