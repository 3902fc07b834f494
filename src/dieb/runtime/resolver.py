# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Capability and name based lookups over a :class:`Registry`."""

from __future__ import annotations

from typing import TypeVar, cast

from ..errors import ResolutionError, ValidationError
from .capabilities import ensure_capability, qualified_name
from .registry import Registry

ServiceT = TypeVar("ServiceT")


class Resolver:
    """Find registered services by capability or by type-name suffix.

    Both lookups scan the registry once, front to back, and return the first
    match. Because the registry prepends, the most recently registered
    matching service wins.
    """

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    def get(self, capability: type[ServiceT]) -> ServiceT:
        """Return the service satisfying ``capability``.

        Args:
            capability: Capability class requested by the caller.

        Returns:
            ServiceT: First registered service declaring ``capability``.

        Raises:
            ValidationError: If ``capability`` is not a class.
            ResolutionError: If no registered service declares ``capability``.
        """

        wanted = ensure_capability(capability)
        for entry in self._registry:
            if entry.satisfies(wanted):
                return cast(ServiceT, entry.service)
        name = qualified_name(wanted)
        raise ResolutionError(
            f"unable to find service that fulfills the requirements for: {name}",
            capability=name,
        )

    def get_by_name(self, name: str) -> object:
        """Return the service whose qualified type name ends with ``name``.

        Args:
            name: Suffix of the service's ``module.QualName``.

        Returns:
            object: First registered service whose type name matches.

        Raises:
            ValidationError: If ``name`` is empty or not a string.
            ResolutionError: If no registered service matches ``name``.
        """

        if not isinstance(name, str) or not name:
            raise ValidationError(f"service names must be non-empty strings, got {name!r}")
        for entry in self._registry:
            if entry.name.endswith(name):
                return entry.service
        raise ResolutionError(f"unable to find service named: {name}", capability=name)


__all__ = ["Resolver"]
