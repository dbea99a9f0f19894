from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class ApiSettings:
    log_level: str = "INFO"
    cors_allow_origins: tuple[str, ...] = ("http://localhost:3000", "http://localhost:5173")
    app_version: str = "1.0.0"


def get_api_settings() -> ApiSettings:
    """Read LOG_LEVEL and CORS_ALLOW_ORIGINS (comma separated) from the environment."""
    defaults = ApiSettings()
    origins = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    return ApiSettings(
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).strip().upper() or defaults.log_level,
        cors_allow_origins=(
            tuple(o.strip() for o in origins.split(",") if o.strip()) if origins else defaults.cors_allow_origins
        ),
    )
