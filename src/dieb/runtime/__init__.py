# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime helpers (service registry, resolution, injection, lifecycle)."""

from .capabilities import Declaration, declare, provides
from .container import StaticInjector, new_injector, new_injector_with_config
from .fields import Dependency, FieldBinding, FieldInjector, Inject, collect_bindings, inject
from .invoker import FunctionInvoker
from .lifecycle import LifecycleManager
from .registry import Registration, Registry
from .resolver import Resolver

__all__ = [
    "Declaration",
    "Dependency",
    "FieldBinding",
    "FieldInjector",
    "FunctionInvoker",
    "Inject",
    "LifecycleManager",
    "Registration",
    "Registry",
    "Resolver",
    "StaticInjector",
    "collect_bindings",
    "declare",
    "inject",
    "new_injector",
    "new_injector_with_config",
    "provides",
]
