# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lightweight runtime service container with capability-based injection."""

from __future__ import annotations

from importlib import metadata

from .config import InjectorConfig
from .errors import (
    AccessError,
    ConfigError,
    InitializationError,
    InjectionError,
    InvocationError,
    ResolutionError,
    ValidationError,
)
from .interfaces.runtime import Initializer, Injector, Shutdowner
from .runtime import (
    Declaration,
    Inject,
    StaticInjector,
    declare,
    inject,
    new_injector,
    new_injector_with_config,
    provides,
)

try:
    __version__ = metadata.version("dieb")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

__all__ = [
    "AccessError",
    "ConfigError",
    "Declaration",
    "InitializationError",
    "Inject",
    "InjectionError",
    "Initializer",
    "Injector",
    "InjectorConfig",
    "InvocationError",
    "ResolutionError",
    "Shutdowner",
    "StaticInjector",
    "ValidationError",
    "__version__",
    "declare",
    "inject",
    "new_injector",
    "new_injector_with_config",
    "provides",
]
