from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://react-http-26861-default-rtdb.firebaseio.com"
DEFAULT_TIMEOUT = 5.0
DEFAULT_LOG_LEVEL = "WARNING"


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        raise ValueError(f"{keys[0]} must be a number, got {v!r}") from None


def parse_log_level(value: str, source: str = "CARTSYNC_LOG_LEVEL") -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{source} must be a logging level name, got {value!r}")
    return level


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(env_file: str | Path | None = ".env") -> Settings:
    """Read settings from the environment, after loading `env_file` if it exists."""
    if env_file is not None and Path(env_file).is_file():
        load_dotenv(dotenv_path=env_file)

    return Settings(
        base_url=(_get_env("CARTSYNC_BASE_URL", default=DEFAULT_BASE_URL) or DEFAULT_BASE_URL).rstrip("/"),
        timeout=_get_float("CARTSYNC_TIMEOUT", default=DEFAULT_TIMEOUT),
        log_level=parse_log_level(_get_env("CARTSYNC_LOG_LEVEL", default=DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL),
    )
