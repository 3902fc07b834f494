# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model consumed when constructing injectors."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigError

DEBUG_ENV: Final[str] = "DIEB_DEBUG"
_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


class InjectorConfig(BaseModel):
    """Describe the behaviour switches of a :class:`~dieb.runtime.container.StaticInjector`."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    debug: bool = False

    @classmethod
    def coerce(cls, value: InjectorConfig | Mapping[str, object] | None) -> InjectorConfig:
        """Return ``value`` as a validated configuration instance.

        Args:
            value: Existing configuration, raw mapping such as ``{"debug": True}``,
                or ``None`` for defaults.

        Returns:
            InjectorConfig: Validated configuration.

        Raises:
            ConfigError: If the mapping contains unknown keys or invalid values.
        """

        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise ConfigError(f"injector configuration must be a mapping, got {type(value).__name__}")
        try:
            return cls.model_validate(dict(value))
        except PydanticValidationError as exc:
            raise ConfigError(f"invalid injector configuration: {exc}") from exc

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> InjectorConfig:
        """Build a configuration from environment variables.

        Args:
            environ: Mapping to read instead of :data:`os.environ`.

        Returns:
            InjectorConfig: Configuration with ``debug`` taken from ``DIEB_DEBUG``.
        """

        source = os.environ if environ is None else environ
        raw = source.get(DEBUG_ENV, "")
        return cls(debug=raw.strip().lower() in _TRUTHY)


__all__ = ["DEBUG_ENV", "InjectorConfig"]
