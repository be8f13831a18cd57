"""Environment-driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _safe_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _safe_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _split_csv(value: str | None, default: str) -> tuple[str, ...]:
    raw = value if value is not None else default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class ServiceConfig:
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    max_output_tokens: int = 4096
    suggestion_count: int = 5
    provider: str = "gemini"
    frontend_origins: tuple[str, ...] = ("*",)
    auth_audience: str | None = None
    auth_issuer_base_url: str | None = None
    rate_limit_window_sec: float = 15 * 60
    rate_limit_max_requests: int = 100
    rate_limit_enabled: bool = True
    port: int = 5000

    @property
    def auth_enabled(self) -> bool:
        return bool(self.auth_audience and self.auth_issuer_base_url)

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash").strip() or "gemini-2.0-flash",
            max_output_tokens=max(1, _safe_int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS"), 4096)),
            suggestion_count=max(1, min(10, _safe_int(os.getenv("SUGGESTION_COUNT"), 5))),
            provider=(os.getenv("COCKTAIL_FINDER_PROVIDER", "gemini").strip().lower() or "gemini"),
            frontend_origins=_split_csv(os.getenv("FRONTEND_ORIGINS"), "*"),
            auth_audience=os.getenv("AUTH0_AUDIENCE") or None,
            auth_issuer_base_url=os.getenv("AUTH0_ISSUER_BASE_URL") or None,
            rate_limit_window_sec=max(1.0, _safe_float(os.getenv("RATE_LIMIT_WINDOW_SEC"), 15 * 60)),
            rate_limit_max_requests=max(1, _safe_int(os.getenv("RATE_LIMIT_MAX_REQUESTS"), 100)),
            rate_limit_enabled=_parse_bool(os.getenv("RATE_LIMIT_ENABLED"), True),
            port=_safe_int(os.getenv("PORT"), 5000),
        )
