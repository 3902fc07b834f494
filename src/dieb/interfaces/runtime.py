# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Interfaces describing service lifecycle hooks and the injector surface."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable
from typing import Protocol, TypeVar, runtime_checkable

CapabilityT = TypeVar("CapabilityT")


@runtime_checkable
class Initializer(Protocol):
    """Service that finishes its setup once its own attributes are injected."""

    @abstractmethod
    def init(self) -> None:
        """Complete initialisation of the service.

        Raises:
            Exception: Any error aborts registration of the service.
        """

        raise NotImplementedError


@runtime_checkable
class Shutdowner(Protocol):
    """Service that releases resources when the injector is torn down."""

    @abstractmethod
    def shutdown(self) -> None:
        """Release resources held by the service."""

        raise NotImplementedError


@runtime_checkable
class Injector(Protocol):
    """Describe the behaviour required from service injectors."""

    @abstractmethod
    def provide(self, *services: object) -> None:
        """Prepare, initialise and register ``services`` in call order.

        Args:
            *services: Service instances or declarations produced by ``declare``.
        """

        raise NotImplementedError

    @abstractmethod
    def get(self, capability: type[CapabilityT]) -> CapabilityT:
        """Return the registered service satisfying ``capability``.

        Args:
            capability: Class describing the requested behaviour.

        Returns:
            CapabilityT: Most recently registered matching service.
        """

        raise NotImplementedError

    @abstractmethod
    def get_by_name(self, name: str) -> object:
        """Return the registered service whose qualified type name ends with ``name``.

        Args:
            name: Suffix of the ``module.QualName`` of the wanted service type.

        Returns:
            object: Most recently registered matching service.
        """

        raise NotImplementedError

    @abstractmethod
    def prepare(self, target: object) -> None:
        """Inject every marked attribute of ``target``.

        Args:
            target: Object whose marked attributes are bound.
        """

        raise NotImplementedError

    @abstractmethod
    def must_prepare(self, target: object) -> None:
        """Inject ``target`` and abort the process on failure.

        Args:
            target: Object whose marked attributes are bound.
        """

        raise NotImplementedError

    @abstractmethod
    def prepare_func(self, func: Callable[..., object]) -> None:
        """Resolve the parameters of ``func`` and invoke it.

        Args:
            func: Callable whose annotated parameters name capabilities.
        """

        raise NotImplementedError

    @abstractmethod
    def shutdown(self) -> None:
        """Run the shutdown hooks of every registered service."""

        raise NotImplementedError


__all__ = ["CapabilityT", "Initializer", "Injector", "Shutdowner"]
