# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic logging helpers used when an injector runs in debug mode."""

from __future__ import annotations

import logging
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME: Final[str] = "dieb"
_CONFIGURED_MARKER: Final[str] = "_dieb_debug_configured"


def enable_debug_logging() -> logging.Logger:
    """Stream ``dieb`` debug records to stderr through Rich.

    Returns:
        logging.Logger: Package logger with the debug handler attached.
    """

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if getattr(logger, _CONFIGURED_MARKER, False):
        return logger
    handler = RichHandler(
        console=Console(stderr=True, soft_wrap=True),
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    setattr(logger, _CONFIGURED_MARKER, True)
    return logger


class Diagnostics:
    """Emit decision events only when debug mode is enabled."""

    __slots__ = ("_enabled", "_logger")

    def __init__(self, logger: logging.Logger, *, enabled: bool) -> None:
        self._logger = logger
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        """Return whether decision events are emitted."""

        return self._enabled

    def emit(self, message: str, *args: object) -> None:
        """Log ``message`` at debug level when diagnostics are enabled.

        Args:
            message: ``%``-style format string.
            *args: Values interpolated into ``message``.
        """

        if self._enabled:
            self._logger.debug("[Injectables] " + message, *args)


__all__ = ["Diagnostics", "ROOT_LOGGER_NAME", "enable_debug_logging"]
