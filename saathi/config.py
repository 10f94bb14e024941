"""
Centralized configuration with environment variable overrides.

Dialog defaults, session eviction settings, and the earnings dataset
location are configurable here. Nothing is hardcoded in dialog or tool logic.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from saathi.logging_context import build_log_handler

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_EARNINGS_PATH = Path(__file__).resolve().parent / "data" / "earnings.json"

EVICTION_POLICIES = ("ttl", "lru", "none")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class DialogConfig:
    """Defaults applied when a request leaves a field out."""

    default_driver_id: str = os.getenv("DEFAULT_DRIVER_ID", "D1")
    default_locale: str = os.getenv("DEFAULT_LOCALE", "hi-IN")
    default_form_id: str = os.getenv("DEFAULT_FORM_ID", "onboard_doc")


@dataclass(frozen=True)
class SessionConfig:
    """Session store lifecycle settings."""

    eviction_policy: str = os.getenv("SESSION_EVICTION_POLICY", "ttl")
    ttl_seconds: float = _safe_float("SESSION_TTL_SECONDS", "1800")
    max_sessions: int = _safe_int("SESSION_MAX_SESSIONS", "10000")


@dataclass(frozen=True)
class DataConfig:
    """Location of the read-only earnings dataset."""

    earnings_path: str = os.getenv("EARNINGS_DATA_PATH", str(DEFAULT_EARNINGS_PATH))


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    dialog: DialogConfig = field(default_factory=DialogConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    data: DataConfig = field(default_factory=DataConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "porter-saathi")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.session.eviction_policy not in EVICTION_POLICIES:
        raise ValueError(
            f"SESSION_EVICTION_POLICY must be one of {EVICTION_POLICIES}, "
            f"got {config.session.eviction_policy!r}"
        )
    if config.session.ttl_seconds <= 0:
        raise ValueError(
            f"SESSION_TTL_SECONDS must be > 0, got {config.session.ttl_seconds}"
        )
    if config.session.max_sessions < 1:
        raise ValueError(
            f"SESSION_MAX_SESSIONS must be >= 1, got {config.session.max_sessions}"
        )
    if not config.dialog.default_driver_id.strip():
        raise ValueError("DEFAULT_DRIVER_ID must not be empty")
    if not config.dialog.default_form_id.strip():
        raise ValueError("DEFAULT_FORM_ID must not be empty")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[build_log_handler()],
    )
    logger.info(
        "Configuration loaded for '%s' (session eviction: %s)",
        config.app_name, config.session.eviction_policy,
    )
    return config


# Singleton instance
settings = load_config()
