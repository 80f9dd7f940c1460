"""Configuration helpers for environment variables."""

from __future__ import annotations

import os
import logging

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


_TRUE_VALUES = {"1", "true", "yes"}
_FALSE_VALUES = {"0", "false", "no"}

DEFAULT_STORAGE_PREFIX = "moneywise_"
DEFAULT_STORAGE_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 500
DEFAULT_SESSION_TTL_HOURS = 24


def _should_load_dotenv() -> bool:
    """Return whether local dotenv loading should run."""
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def _get_positive_int(name: str, default: int) -> int:
    raw_value = (get_env(name, "") or "").strip()
    if not raw_value:
        return default

    try:
        value = int(raw_value)
    except ValueError:
        logger.warning("config_invalid_int name=%s value=%s default=%s", name, raw_value, default)
        return default

    if value <= 0:
        logger.warning("config_non_positive_int name=%s value=%s default=%s", name, value, default)
        return default
    return value


def app_env() -> str:
    """Return the current application environment."""
    return (get_env("APP_ENV", "dev") or "dev").strip() or "dev"


def storage_dir() -> str | None:
    """Return the directory for file-backed storage, or None for in-memory storage."""
    raw_value = (get_env("FINANCE_STORAGE_DIR", "") or "").strip()
    return raw_value or None


def storage_prefix() -> str:
    """Return the key prefix applied to every persisted entry."""
    raw_value = get_env("FINANCE_STORAGE_PREFIX")
    if raw_value is None:
        return DEFAULT_STORAGE_PREFIX
    return raw_value.strip()


def storage_max_bytes() -> int:
    """Return the maximum serialized size accepted for one key."""
    return _get_positive_int("FINANCE_STORAGE_MAX_BYTES", DEFAULT_STORAGE_MAX_BYTES)


def seed_demo_data() -> bool:
    """Return whether an empty store is seeded with the demonstration dataset."""
    raw_value = (get_env("FINANCE_SEED_DEMO_DATA", "") or "").strip().lower()
    if raw_value in _FALSE_VALUES:
        return False
    return True


def default_page_size() -> int:
    """Return the default page size used by transaction listings."""
    value = _get_positive_int("FINANCE_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)
    if value > MAX_PAGE_SIZE:
        logger.warning(
            "config_page_size_above_max value=%s max=%s default=%s",
            value,
            MAX_PAGE_SIZE,
            DEFAULT_PAGE_SIZE,
        )
        return DEFAULT_PAGE_SIZE
    return value


def auth_username() -> str:
    """Return the demo account username."""
    return (get_env("FINANCE_AUTH_USERNAME", "admin") or "admin").strip() or "admin"


def auth_password() -> str:
    """Return the demo account password."""
    return get_env("FINANCE_AUTH_PASSWORD", "finance123") or "finance123"


def session_ttl_hours() -> int:
    """Return how long a login session stays valid."""
    return _get_positive_int("FINANCE_SESSION_TTL_HOURS", DEFAULT_SESSION_TTL_HOURS)


def log_level() -> str:
    """Return configured log level name."""
    return (get_env("FINANCE_LOG_LEVEL", "INFO") or "INFO").strip().upper() or "INFO"


def debug_enabled() -> bool:
    """Return whether verbose debug logging is requested."""
    raw_value = get_env("FINANCE_DEBUG", "") or ""
    return raw_value.strip().lower() in _TRUE_VALUES
