# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registration and teardown of services."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable

from ..errors import InitializationError, InjectionError, InvocationError, ValidationError
from ..logging import Diagnostics
from .capabilities import Declaration, qualified_name, reference_violation
from .fields import FieldInjector
from .invoker import FunctionInvoker
from .registry import Registration, Registry

LOGGER = logging.getLogger(__name__)


def _accepts_parameters(hook: Callable[..., object]) -> bool:
    try:
        return bool(inspect.signature(hook).parameters)
    except (TypeError, ValueError):
        return False


class LifecycleManager:
    """Prepare, initialise and register services, and shut them down again."""

    def __init__(
        self,
        registry: Registry,
        fields: FieldInjector,
        invoker: FunctionInvoker,
        *,
        debug: bool = False,
    ) -> None:
        self._registry = registry
        self._fields = fields
        self._invoker = invoker
        self._diagnostics = Diagnostics(LOGGER, enabled=debug)

    def provide(self, *services: object) -> None:
        """Register ``services`` in call order.

        Each service has its own marked attributes injected, then its ``init``
        hook run, and is finally placed at the front of the registry. When a
        service fails, the ones before it stay registered.

        Args:
            *services: Service instances, or declarations built with ``declare``.

        Raises:
            ValidationError: If a service is not a mutable object reference.
            AccessError: If a marked attribute of a service cannot be assigned.
            ResolutionError: If a mandatory attribute of a service cannot be resolved.
            InitializationError: If a service's ``init`` hook fails.
        """

        for candidate in services:
            declaration = candidate if isinstance(candidate, Declaration) else Declaration(candidate)
            instance = declaration.instance
            violation = reference_violation(instance)
            if violation is not None:
                raise ValidationError(f"services must be given as mutable object references, got {violation}")

            name = qualified_name(type(instance))
            self._diagnostics.emit("Provide '%s'", name)
            try:
                self._fields.prepare(instance)
            except InjectionError as exc:
                raise exc.with_context(f"unable to register service '{name}'") from exc

            self._initialize(instance, name)
            self._registry.prepend(Registration.create(instance, declaration.capabilities))

    def _initialize(self, instance: object, name: str) -> None:
        hook = getattr(instance, "init", None)
        if not callable(hook):
            return
        self._diagnostics.emit("Init '%s'", name)
        if _accepts_parameters(hook):
            try:
                self._invoker.invoke(hook)
            except InvocationError as exc:
                raise InitializationError(f"unable to initialize service '{name}': {exc}") from exc
            return
        try:
            result = hook()
        except Exception as exc:
            raise InitializationError(f"unable to initialize service '{name}': {exc}") from exc
        if result is None:
            return
        if isinstance(result, BaseException):
            raise InitializationError(f"unable to initialize service '{name}': {result}") from result
        raise InitializationError(
            f"unable to initialize service '{name}': init returned a {type(result).__name__} "
            "instead of None or an exception",
        )

    def shutdown(self) -> None:
        """Run every registered ``shutdown`` hook once, newest service first.

        Sentinel entries, and any other registration of the same objects, are
        never shut down. Hook failures are logged and do not stop teardown.
        Afterwards only the sentinel entries remain registered.
        """

        entries = self._registry.snapshot()
        excluded = {id(entry.service) for entry in entries if entry.sentinel}
        for entry in entries:
            if id(entry.service) in excluded:
                continue
            excluded.add(id(entry.service))
            hook = getattr(entry.service, "shutdown", None)
            if not callable(hook):
                continue
            self._diagnostics.emit("Shutdown '%s'", entry.name)
            try:
                hook()
            except Exception as exc:
                LOGGER.warning("shutdown of '%s' failed: %s", entry.name, exc, exc_info=exc)
        self._registry.retain_sentinels()


__all__ = ["LifecycleManager"]
