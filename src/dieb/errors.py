# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exceptions raised while registering, resolving and invoking services."""

from __future__ import annotations

import copy
from typing import Self


class InjectionError(Exception):
    """Base class for every error raised by the container."""

    def __init__(self, message: str) -> None:
        """Create the error with a human-readable ``message``.

        Args:
            message: Description of the failure.
        """

        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        """Return the message describing the failure.

        Returns:
            str: Message supplied at construction time, including any context.
        """

        return self.message

    def with_context(self, context: str) -> Self:
        """Return a copy of the error whose message is prefixed by ``context``.

        Args:
            context: Text describing the operation that observed the failure.

        Returns:
            Self: Error of the same kind carrying the prefixed message.
        """

        clone = copy.copy(self)
        clone.message = f"{context}: {self.message}"
        clone.args = (clone.message,)
        return clone


class ValidationError(InjectionError, TypeError):
    """Raised when a target, service, capability or marker has the wrong shape."""


class AccessError(InjectionError, AttributeError):
    """Raised when an injectable attribute cannot be assigned."""

    def __init__(self, message: str, *, attribute: str | None = None) -> None:
        super().__init__(message)
        self.attribute = attribute


class ResolutionError(InjectionError, LookupError):
    """Raised when no registered service satisfies a capability or name."""

    def __init__(
        self,
        message: str,
        *,
        capability: str | None = None,
        attribute: str | None = None,
    ) -> None:
        """Create the error and remember what could not be resolved.

        Args:
            message: Description of the failure.
            capability: Name of the requested capability or type-name suffix.
            attribute: Name of the attribute being injected, when known.
        """

        super().__init__(message)
        self.capability = capability
        self.attribute = attribute


class InitializationError(InjectionError):
    """Raised when a service's ``init`` hook fails during registration."""


class InvocationError(InjectionError):
    """Raised when a callable cannot be prepared or reports a failure."""

    def __init__(self, message: str, *, signature: str | None = None) -> None:
        super().__init__(message)
        self.signature = signature


class ConfigError(InjectionError, ValueError):
    """Raised when container configuration input is invalid."""


__all__ = [
    "AccessError",
    "ConfigError",
    "InitializationError",
    "InjectionError",
    "InvocationError",
    "ResolutionError",
    "ValidationError",
]
