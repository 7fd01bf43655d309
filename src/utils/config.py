from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(key)
    return v if v is not None and v != "" else default


def _env_flag(key: str, default: bool) -> bool:
    v = _env(key, None)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class AppConfig:
    currency: str
    log_level: str
    preload_tables: bool


def get_app_config() -> AppConfig:
    """
    Settings for the collaborators around the engine (API, Lambda, CLI).
    The rating engine itself reads no environment.

    Env:
      QUOTE_CURRENCY (default: USD)
      LOG_LEVEL      (default: INFO)
      PRELOAD_TABLES (default: true)
    """
    return AppConfig(
        currency=(_env("QUOTE_CURRENCY", "USD") or "USD").upper(),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        preload_tables=_env_flag("PRELOAD_TABLES", True),
    )
