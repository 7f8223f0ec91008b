from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Service settings read from ``RUNIC_`` prefixed environment variables."""

    redis_url: str
    environment: str
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> Settings:
        prefix = "RUNIC_"
        redis_url = os.getenv(f"{prefix}REDIS_URL", "redis://localhost:6379/0").strip()
        environment = os.getenv(f"{prefix}ENV", "local").strip() or "local"
        log_level = os.getenv(f"{prefix}LOG_LEVEL", "INFO").strip().upper() or "INFO"
        return Settings(
            redis_url=redis_url, environment=environment, log_level=log_level
        )
