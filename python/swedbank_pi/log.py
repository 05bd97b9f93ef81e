"""
Location: python/swedbank_pi/log.py

Summary:
    Best-effort logging on the configured channel. Records are dropped when
    logging is disabled, and a failure inside the logging machinery is
    discarded so it can never replace the error being reported.
"""

import logging
from typing import Any, Optional

from .config import LoggingConfig

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "alert": logging.CRITICAL,
    "emergency": logging.CRITICAL,
}


def get_channel_logger(settings: LoggingConfig) -> logging.Logger:
    """Return the channel logger with the configured level applied."""
    logger = logging.getLogger(settings.channel)
    logger.setLevel(_LEVELS[settings.level])
    return logger


def _emit(
    settings: LoggingConfig,
    level: int,
    message: str,
    context: Optional[dict[str, Any]],
) -> None:
    if not settings.enabled:
        return
    context = context or {}
    try:
        logging.getLogger(settings.channel).log(
            level, "%s %s", message, context, extra={"context": context}
        )
    except Exception:  # noqa: BLE001
        pass


def log_error(settings: LoggingConfig, message: str, context: Optional[dict[str, Any]] = None) -> None:
    _emit(settings, logging.ERROR, message, context)


def log_info(settings: LoggingConfig, message: str, context: Optional[dict[str, Any]] = None) -> None:
    _emit(settings, logging.INFO, message, context)
