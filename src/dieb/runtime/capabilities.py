# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Explicit capability declarations for registered services.

A service satisfies a capability when the capability appears in the service
class's MRO, when a class in that MRO was decorated with :func:`provides`, or
when the registration itself was wrapped with :func:`declare`. Structural
(duck-typed) conformance is never consulted.
"""

from __future__ import annotations

import abc
import types
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Final, Generic, Protocol, TypeVar

from ..errors import ValidationError

CAPABILITIES_ATTR: Final[str] = "__dieb_capabilities__"

# Structural bases shared by unrelated classes; never requested as capabilities.
_IMPLICIT_BASES: Final[frozenset[type]] = frozenset({object, abc.ABC, Generic, Protocol})  # type: ignore[arg-type]

_VALUE_KINDS: Final[tuple[type, ...]] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    tuple,
    frozenset,
    range,
    type(None),
)
_NON_REFERENCE_KINDS: Final[tuple[type, ...]] = (
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
)

ClassT = TypeVar("ClassT", bound=type)


def qualified_name(cls: type) -> str:
    """Return the ``module.QualName`` of ``cls``.

    Args:
        cls: Class to describe.

    Returns:
        str: Fully qualified type name used for suffix lookups and messages.
    """

    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", repr(cls))
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


def is_value_kind(cls: type) -> bool:
    """Return whether ``cls`` is an immutable value type rather than a reference type."""

    return isinstance(cls, type) and issubclass(cls, _VALUE_KINDS)


def reference_violation(obj: object) -> str | None:
    """Describe why ``obj`` cannot be held by reference, or ``None`` when it can.

    Args:
        obj: Candidate service or injection target.

    Returns:
        str | None: Kind of the rejected object, ``None`` for mutable instances.
    """

    if obj is None:
        return "None"
    if isinstance(obj, _VALUE_KINDS) or isinstance(obj, _NON_REFERENCE_KINDS):
        return type(obj).__name__
    return None


def ensure_capability(capability: object) -> type:
    """Return ``capability`` when it is a class usable for resolution.

    Args:
        capability: Object requested as a capability.

    Returns:
        type: The validated capability class.

    Raises:
        ValidationError: If ``capability`` is not a class.
    """

    if not isinstance(capability, type):
        raise ValidationError(f"capabilities must be classes, got {capability!r}")
    return capability


def provides(*capabilities: type) -> Callable[[ClassT], ClassT]:
    """Class decorator declaring additional capabilities satisfied by instances.

    Args:
        *capabilities: Capability classes the decorated class satisfies without
            inheriting from them.

    Returns:
        Callable[[ClassT], ClassT]: Decorator recording the declaration on the class.

    Raises:
        ValidationError: If any capability is not a class.
    """

    declared = tuple(ensure_capability(capability) for capability in capabilities)

    def decorator(cls: ClassT) -> ClassT:
        own = tuple(cls.__dict__.get(CAPABILITIES_ATTR, ()))
        setattr(cls, CAPABILITIES_ATTR, own + declared)
        return cls

    return decorator


@dataclass(frozen=True, slots=True)
class Declaration:
    """Pair a service instance with capabilities declared for this registration only."""

    instance: object
    capabilities: tuple[type, ...] = ()


def declare(instance: object, *capabilities: type) -> Declaration:
    """Wrap ``instance`` so it registers with extra ``capabilities``.

    Args:
        instance: Service instance to register.
        *capabilities: Capability classes the instance satisfies.

    Returns:
        Declaration: Value accepted by ``provide`` in place of the bare instance.
    """

    return Declaration(instance, tuple(ensure_capability(capability) for capability in capabilities))


def capability_set(instance: object, extra: Iterable[type] = ()) -> frozenset[type]:
    """Return every capability ``instance`` satisfies.

    Args:
        instance: Registered service.
        extra: Capabilities declared for this particular registration.

    Returns:
        frozenset[type]: Classes from the MRO (except :class:`object`,
        :class:`abc.ABC`, :class:`typing.Generic` and :class:`typing.Protocol`), classes
        declared via :func:`provides` anywhere in the MRO, and ``extra``.
    """

    mro = type(instance).__mro__
    found: set[type] = {cls for cls in mro if cls not in _IMPLICIT_BASES}
    for cls in mro:
        found.update(cls.__dict__.get(CAPABILITIES_ATTR, ()))
    found.update(extra)
    return frozenset(found)


__all__ = [
    "CAPABILITIES_ATTR",
    "Declaration",
    "capability_set",
    "declare",
    "ensure_capability",
    "is_value_kind",
    "provides",
    "qualified_name",
    "reference_violation",
]
