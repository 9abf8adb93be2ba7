# src/vcf_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No credentials required at import time; settings are built on first use.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "VCF"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    log_level: str
    data_dir: Path

    # ---- VCF API ----
    host: str
    username: str
    password: str
    allow_unverified_tls: bool
    api_timeout_seconds: float

    # ---- Task tracking ----
    polling_interval_seconds: float

    @property
    def base_url(self) -> str:
        host = self.host.strip().rstrip("/")
        if host and "://" not in host:
            host = f"https://{host}"
        return host

    @staticmethod
    def from_env() -> "Settings":
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/vcf"))

        host = _env(_k("HOST"), "").strip()
        username = _env(_k("USERNAME"), "").strip()
        password = _env(_k("PASSWORD"), "")
        allow_unverified_tls = _env_bool(_k("ALLOW_UNVERIFIED_TLS"), False)

        # keep timeouts positive; a zero interval would spin the poll loop
        api_timeout_seconds = max(1.0, _env_float(_k("API_TIMEOUT_SECONDS"), 120.0))
        polling_interval_seconds = max(0.1, _env_float(_k("POLLING_INTERVAL_SECONDS"), 20.0))

        return Settings(
            log_level=log_level,
            data_dir=data_dir,
            host=host,
            username=username,
            password=password,
            allow_unverified_tls=allow_unverified_tls,
            api_timeout_seconds=api_timeout_seconds,
            polling_interval_seconds=polling_interval_seconds,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS


def reset_settings() -> None:
    """Drop the cached Settings (tests, or after changing the environment)."""
    global _SETTINGS
    _SETTINGS = None
