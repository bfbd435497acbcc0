"""Mini README: Application-wide logging helpers for FyNov.

Structure:
    * configure_root_logger - install the single stream handler and apply ``FYNOV_LOG_LEVEL``.
    * get_logger - factory returning module loggers with baseline configuration.

Usage:
    Modules declare ``LOGGER = get_logger(__name__)`` at import time, which
    installs the handler at INFO. The CLI and ``create_application`` later call
    ``configure_root_logger(settings.log_level)``; the handler is never
    duplicated when the development server reloads modules, but the level
    from the settings always wins over the import-time default.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}'")
    return resolved


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Configure the root logger with a readable, timestamped formatter.

    ``level`` accepts ``logging`` constants or names such as ``"debug"``.
    Passing it again after the first call only changes the level.
    """

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if level is not None:
        root_logger.setLevel(_resolve_level(level))
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    if level is None:
        root_logger.setLevel(logging.INFO)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
