# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Service injector combining the registry, resolver and lifecycle passes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import TracebackType
from typing import TypeVar

from ..config import InjectorConfig
from ..errors import InjectionError
from ..interfaces.runtime import Injector
from ..logging import enable_debug_logging
from .fields import FieldInjector
from .invoker import FunctionInvoker
from .lifecycle import LifecycleManager
from .registry import Registration, Registry
from .resolver import Resolver

LOGGER = logging.getLogger(__name__)

ServiceT = TypeVar("ServiceT")


class StaticInjector(Injector):
    """Hold registered services and inject them into objects and callables.

    The injector registers itself as a sentinel entry, so collaborators can ask
    for :class:`~dieb.interfaces.runtime.Injector`. Services registered later
    take precedence over earlier ones satisfying the same capability.

    The registry is guarded by a lock, but wiring is meant to complete on one
    thread before the resolved services are used concurrently.
    """

    def __init__(self, config: InjectorConfig | Mapping[str, object] | None = None) -> None:
        """Create an empty injector.

        Args:
            config: Configuration model, raw mapping such as ``{"debug": True}``,
                or ``None`` for defaults.

        Raises:
            ConfigError: If ``config`` is invalid.
        """

        self._config = InjectorConfig.coerce(config)
        debug = self._config.debug
        if debug:
            enable_debug_logging()
        self._registry = Registry()
        self._resolver = Resolver(self._registry)
        self._fields = FieldInjector(self._resolver, debug=debug)
        self._invoker = FunctionInvoker(self._resolver, debug=debug)
        self._lifecycle = LifecycleManager(self._registry, self._fields, self._invoker, debug=debug)
        self._registry.prepend(Registration.create(self, sentinel=True))

    @property
    def config(self) -> InjectorConfig:
        """Return the configuration the injector was built with."""

        return self._config

    def provide(self, *services: object) -> None:
        """Prepare, initialise and register ``services`` in call order.

        Args:
            *services: Service instances, or declarations built with
                :func:`~dieb.runtime.capabilities.declare`.

        Raises:
            ValidationError: If a service is not a mutable object reference.
            AccessError: If a marked attribute of a service cannot be assigned.
            ResolutionError: If a mandatory attribute of a service cannot be resolved.
            InitializationError: If a service's ``init`` hook fails.
        """

        self._lifecycle.provide(*services)

    def get(self, capability: type[ServiceT]) -> ServiceT:
        """Return the most recently registered service satisfying ``capability``.

        Args:
            capability: Capability class.

        Returns:
            ServiceT: Matching service.

        Raises:
            ResolutionError: If nothing satisfies ``capability``.
        """

        return self._resolver.get(capability)

    def get_by_name(self, name: str) -> object:
        """Return the most recently registered service whose type name ends with ``name``.

        Args:
            name: Suffix of the service's ``module.QualName``.

        Returns:
            object: Matching service.

        Raises:
            ResolutionError: If no service type name ends with ``name``.
        """

        return self._resolver.get_by_name(name)

    def prepare(self, target: object) -> None:
        """Inject every marked attribute of ``target``.

        Args:
            target: Mutable object whose marked attributes are bound.

        Raises:
            ValidationError: If ``target`` is not a mutable object reference.
            AccessError: If a marked attribute cannot be assigned.
            ResolutionError: If a mandatory attribute cannot be resolved.
        """

        self._fields.prepare(target)

    def must_prepare(self, target: object) -> None:
        """Inject ``target`` or abort the process.

        Args:
            target: Mutable object whose marked attributes are bound.

        Raises:
            SystemExit: If :meth:`prepare` fails; the injection error is chained.
        """

        try:
            self._fields.prepare(target)
        except InjectionError as exc:
            LOGGER.critical("unable to prepare '%s': %s", type(target).__name__, exc)
            raise SystemExit(f"dieb: {exc}") from exc

    def prepare_func(self, func: Callable[..., object]) -> None:
        """Resolve the parameters of ``func`` and invoke it.

        Args:
            func: Callable annotated with capability parameters, returning
                ``None`` or an exception.

        Raises:
            InvocationError: If ``func`` cannot be prepared or reports a failure.
        """

        self._invoker.invoke(func)

    def shutdown(self) -> None:
        """Run the ``shutdown`` hook of every registered service once.

        Failures are logged, never raised. Calling it again is a no-op until new
        services are provided.
        """

        self._lifecycle.shutdown()

    def services(self) -> tuple[object, ...]:
        """Return registered services in lookup order, sentinel included."""

        return tuple(entry.service for entry in self._registry)

    def __enter__(self) -> StaticInjector:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.shutdown()

    def __contains__(self, service: object) -> bool:
        """Return whether ``service`` (by identity) is registered."""

        return service in self._registry

    def __len__(self) -> int:
        """Return the number of registrations, sentinel included."""

        return len(self._registry)

    def __repr__(self) -> str:
        names = ", ".join(entry.name for entry in self._registry if not entry.sentinel)
        return f"StaticInjector(debug={self._config.debug}, services=[{names}])"


def new_injector() -> StaticInjector:
    """Return an empty injector with default configuration."""

    return StaticInjector()


def new_injector_with_config(config: InjectorConfig | Mapping[str, object]) -> StaticInjector:
    """Return an empty injector built from ``config``.

    Args:
        config: Configuration model or mapping such as ``{"debug": True}``.

    Returns:
        StaticInjector: Injector honouring ``config``.
    """

    return StaticInjector(config)


__all__ = ["StaticInjector", "new_injector", "new_injector_with_config"]
