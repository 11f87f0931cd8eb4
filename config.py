"""SkillSwap API configuration loaded from environment variables."""

import os
from typing import List, Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Configuration for the API process.

    Prefix: SKILLSWAP_ for app settings. PORT is shared with the hosting
    platform, as before.
    """

    port: int
    log_level: str
    log_service: str
    log_json: bool
    ai_api_url: Optional[str]
    ai_timeout: float
    seed_demo: bool
    cors_origins: List[str]

    def __init__(self) -> None:
        self.port = int(os.environ.get("PORT", "8000"))
        self.log_level = os.environ.get("SKILLSWAP_LOG_LEVEL", "info")
        self.log_service = os.environ.get("SKILLSWAP_LOG_SERVICE", "skillswap-api")
        self.log_json = _env_bool("SKILLSWAP_LOG_JSON", True)
        # Unset means AI tagging is disabled and every post degrades gracefully.
        self.ai_api_url = os.environ.get("SKILLSWAP_AI_API_URL") or None
        self.ai_timeout = float(os.environ.get("SKILLSWAP_AI_TIMEOUT", "5.0"))
        self.seed_demo = _env_bool("SKILLSWAP_SEED_DEMO", True)
        origins = os.environ.get("SKILLSWAP_CORS_ORIGINS", "*")
        self.cors_origins = [o.strip() for o in origins.split(",") if o.strip()]


def get_settings() -> Settings:
    return Settings()
