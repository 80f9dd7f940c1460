"""Process-wide logging configuration for backend entrypoints.

Library modules only call ``logging.getLogger(__name__)``; handlers are attached
here, once, by whichever entrypoint builds the services.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

from shared import config


_PACKAGE_LOGGERS = ("backend", "shared")
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_configured = False


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = "DEBUG" if config.debug_enabled() else config.log_level()
    normalized = str(level).strip().upper()
    if normalized.isdigit():
        return int(normalized)
    numeric = getattr(logging, normalized, None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Attach a single stream handler to the package loggers."""

    global _configured
    if _configured:
        return

    resolved_level = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved_level)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    for name in _PACKAGE_LOGGERS:
        package_logger = logging.getLogger(name)
        package_logger.setLevel(resolved_level)
        package_logger.addHandler(handler)
        package_logger.propagate = False

    _configured = True


def reset_logging() -> None:
    """Detach handlers installed by :func:`configure_logging`."""

    global _configured
    for name in _PACKAGE_LOGGERS:
        package_logger = logging.getLogger(name)
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
        package_logger.propagate = True
        package_logger.setLevel(logging.NOTSET)
    _configured = False
