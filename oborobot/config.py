# =============================================
# File: oborobot/config.py
# Purpose: Environment-driven settings (read at call time so tests/env overrides take effect)
# =============================================
from __future__ import annotations
import os
from typing import List

VERB = "Verb"

DEFAULT_DB_URL = "sqlite:///./oborobot.db"
DEFAULT_GENERIC_SEARCH_MARKER = "www.google.com/search"


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def api_version() -> str:
    return os.getenv("API_VERSION", "v0.0.1")


def db_url() -> str:
    return os.getenv("DB_URL", DEFAULT_DB_URL)


def store_timeout_seconds() -> float:
    return max(0.1, _float_env("STORE_TIMEOUT_SECONDS", 10.0))


def keyword_count() -> int:
    """Number of keywords drawn per suggestion (K)."""
    return max(1, _int_env("SUGGEST_KEYWORD_COUNT", 5))


def max_sample_attempts() -> int:
    return max(1, _int_env("SUGGEST_MAX_ATTEMPTS", 10))


def generic_search_marker() -> str:
    return os.getenv("GENERIC_SEARCH_MARKER", DEFAULT_GENERIC_SEARCH_MARKER)


def cors_allow_origins() -> List[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]
