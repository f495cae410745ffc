from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()

MAX_PORT = 65535


def check_port(port: int) -> int:
    if not 0 <= port <= MAX_PORT:
        raise ValueError(f"port must be 0-{MAX_PORT}, got {port}")
    return port


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class Settings:
    """Application settings loaded from environment variables.

    CLI flags override these per run; see app.run. Malformed values raise
    ``ValueError`` at construction.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "production")
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = check_port(_env_int("PORT", 80))
        self.images_path: Optional[str] = os.getenv("IMAGES_PATH") or None
        self.delay: str = os.getenv("RESPONSE_DELAY", "100ms")
        self.keepalive_timeout: int = _env_int("KEEPALIVE_TIMEOUT", 10)
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        if self.keepalive_timeout < 0:
            raise ValueError(f"KEEPALIVE_TIMEOUT must not be negative, got {self.keepalive_timeout}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {self.log_level!r}")

    @property
    def is_dev(self) -> bool:
        return self.app_env.lower() in {"dev", "development", "local"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
