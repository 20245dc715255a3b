"""Runtime settings, read from the environment or CLI options."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 10.0
DEFAULT_CONCURRENCY = 4
DEFAULT_CACHE_MAX_AGE = 1800
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000


def _env_float(name: str, default: float, minimum: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return max(minimum, float(raw))
    except ValueError:
        return default


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return max(minimum, int(raw))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY
    cache_max_age: int = DEFAULT_CACHE_MAX_AGE
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            api_url=os.getenv("LEADERBOARD_API_URL", "").strip() or DEFAULT_API_URL,
            timeout=_env_float("LEADERBOARD_TIMEOUT", DEFAULT_TIMEOUT, 0.1),
            concurrency=_env_int("LEADERBOARD_CONCURRENCY", DEFAULT_CONCURRENCY, 1),
            cache_max_age=_env_int("LEADERBOARD_CACHE_MAX_AGE", DEFAULT_CACHE_MAX_AGE, 0),
            host=os.getenv("HOST", "").strip() or DEFAULT_HOST,
            port=_env_int("PORT", DEFAULT_PORT, 1),
        )
