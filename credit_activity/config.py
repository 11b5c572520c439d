"""Central configuration for the credit activity package."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from credit_activity.domain.errors import ConfigurationError
from credit_activity.domain.statuses import LARGE_INSTITUTION_THRESHOLD

BASE_DIR = Path(__file__).resolve().parent.parent
ENV_FILE = BASE_DIR / ".env"

ENV_PREFIX = "CREDIT_ACTIVITY_"


@dataclass(slots=True, frozen=True)
class Settings:
    trade_endpoint: str | None = None
    confirmation_endpoint: str | None = None
    caller_id: str = ""
    request_timeout: float = 30.0
    max_workers: int = 4
    large_threshold: int = LARGE_INSTITUTION_THRESHOLD
    log_level: str = "INFO"


def load_settings(environ: Mapping[str, str] | None = None, env_file: Path | None = ENV_FILE) -> Settings:
    """Read settings from the process environment, seeded from a local ``.env``."""
    if environ is None:
        if env_file is not None:
            load_dotenv(env_file, override=False)
        environ = os.environ

    def get(name: str) -> str | None:
        value = environ.get(ENV_PREFIX + name)
        if value is None or not value.strip():
            return None
        return value.strip()

    return Settings(
        trade_endpoint=get("TRADE_ENDPOINT"),
        confirmation_endpoint=get("CONFIRMATION_ENDPOINT"),
        caller_id=get("CALLER_ID") or "",
        request_timeout=_number(get("REQUEST_TIMEOUT"), float, 30.0, "REQUEST_TIMEOUT"),
        max_workers=_number(get("MAX_WORKERS"), int, 4, "MAX_WORKERS"),
        large_threshold=_number(get("LARGE_THRESHOLD"), int, LARGE_INSTITUTION_THRESHOLD, "LARGE_THRESHOLD"),
        log_level=(get("LOG_LEVEL") or "INFO").upper(),
    )


def _number(raw: str | None, kind: type, default, name: str):
    if raw is None:
        return default
    try:
        value = kind(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be a {kind.__name__}, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be positive, got {raw!r}")
    return value
