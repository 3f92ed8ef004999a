from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_ENDPOINT = "https://login.eveonline.com"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _getenv(name: str, default: str) -> str:
    return os.environ.get(name, default).strip()


@dataclass(frozen=True)
class Settings:
    endpoint: str
    user_agent: str | None
    timeout: float
    log_level: LogLevel
    log_json: bool


def load_settings() -> Settings:
    endpoint = _getenv("EVE_SSO_ENDPOINT", "") or DEFAULT_ENDPOINT
    user_agent = _getenv("EVE_SSO_USER_AGENT", "") or None
    timeout_raw = _getenv("EVE_SSO_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    log_json_raw = _getenv("LOG_JSON", "false").lower()

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    if log_json_raw not in ("true", "false", "1", "0"):
        raise ValueError(f"LOG_JSON must be true|false (got {log_json_raw!r})")

    try:
        timeout = float(timeout_raw)
    except ValueError:
        raise ValueError(
            f"EVE_SSO_TIMEOUT must be a number of seconds (got {timeout_raw!r})"
        ) from None
    if timeout <= 0:
        raise ValueError(f"EVE_SSO_TIMEOUT must be positive (got {timeout_raw!r})")

    return Settings(  # type: ignore[arg-type]
        endpoint=endpoint,
        user_agent=user_agent,
        timeout=timeout,
        log_level=log_level_raw,
        log_json=log_json_raw in ("true", "1"),
    )
