"""Logging configuration for the translation client."""

from __future__ import annotations

import logging
import sys
from typing import Any

from translation_client.core.config import get_settings

_LOG_PREFIX = "[TranslationClient]"


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


class ChannelLogger(logging.LoggerAdapter):
    """Logger adapter gated by the ``logging_enabled`` setting.

    Records go to the logger named after the configured channel and carry
    a ``[TranslationClient]`` prefix. When disabled, every level reports
    as not enabled so nothing is emitted.
    """

    def __init__(self, logger: logging.Logger, enabled: bool) -> None:
        super().__init__(logger, {})
        self.enabled = enabled

    def isEnabledFor(self, level: int) -> bool:  # noqa: N802 (logging API name)
        return self.enabled and self.logger.isEnabledFor(level)

    def process(self, msg: Any, kwargs: Any) -> tuple[str, Any]:
        return f"{_LOG_PREFIX} {msg}", kwargs


def get_channel_logger(enabled: bool | None = None, channel: str | None = None) -> ChannelLogger:
    """Return the component logger for the configured channel.

    Args:
        enabled: Override for settings.logging_enabled.
        channel: Override for settings.logging_channel.

    Returns:
        ChannelLogger writing to logging.getLogger(channel).
    """
    settings = get_settings()
    if enabled is None:
        enabled = settings.logging_enabled
    if channel is None:
        channel = settings.logging_channel
    return ChannelLogger(logging.getLogger(channel), enabled)
