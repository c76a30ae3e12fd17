"""Logging setup for the Categorium CLI."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from categorium.config.models import LoggingSettings

LOGGER_NAME = "categorium"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_ATTR = "_categorium_handler"


def configure_logging(settings: LoggingSettings, log_path: Optional[Path] = None) -> logging.Logger:
    """Configure the package logger from ``settings``.

    A rotating file handler is attached when ``log_path`` is given. Handlers
    installed by earlier calls are replaced, so repeated CLI invocations in
    one process do not stack them.

    Args:
        settings: Logging section of the configuration.
        log_path: Optional log file location.

    Returns:
        logging.Logger: The configured ``categorium`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.getLevelName(settings.level.upper())
    logger.setLevel(level if isinstance(level, int) else logging.WARNING)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            logger.removeHandler(handler)
            handler.close()

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max(settings.max_size_mb, 1) * 1024 * 1024,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)

    return logger


__all__ = ["LOGGER_NAME", "configure_logging"]
