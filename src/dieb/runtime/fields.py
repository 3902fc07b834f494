# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Attribute injection driven by explicit markers on the target class.

Attributes take part in injection only when they carry a marker, either as a
class-level descriptor::

    class Controller:
        greeter: Greeter = inject()
        audit: AuditLog = inject("optional")

or as ``Annotated`` metadata, which suits dataclasses and slotted classes::

    @dataclass
    class Report:
        store: Annotated[Store, Inject()] = None

Markers accept the comma-separated modifiers ``optional`` and ``skip``.
"""

from __future__ import annotations

import inspect
import logging
import re
import sys
import types
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Final, Union, get_args, get_origin

from ..errors import AccessError, ResolutionError, ValidationError
from ..logging import Diagnostics
from .capabilities import ensure_capability, qualified_name, reference_violation
from .resolver import Resolver

LOGGER = logging.getLogger(__name__)

OPTIONAL: Final[str] = "optional"
SKIP: Final[str] = "skip"
_MODIFIERS: Final[frozenset[str]] = frozenset({OPTIONAL, SKIP})
_MARKER_TOKEN: Final[re.Pattern[str]] = re.compile(r"\bInject\b")


def parse_modifiers(raw: str) -> frozenset[str]:
    """Split a comma-separated modifier list into its recognised tokens.

    Args:
        raw: Modifier list such as ``"optional"`` or ``"optional,skip"``.

    Returns:
        frozenset[str]: Modifiers present in ``raw``.

    Raises:
        ValidationError: If ``raw`` names an unknown modifier.
    """

    tokens = frozenset(token.strip() for token in raw.split(",") if token.strip())
    unknown = tokens - _MODIFIERS
    if unknown:
        names = ", ".join(sorted(unknown))
        raise ValidationError(f"unknown injection modifier(s): {names}")
    return tokens


@dataclass(frozen=True, slots=True)
class Inject:
    """Marker describing how an attribute is injected."""

    capability: type | None = None
    optional: bool = False
    skip: bool = False

    def __post_init__(self) -> None:
        if self.capability is not None:
            ensure_capability(self.capability)

    @classmethod
    def parse(cls, modifiers: str = "", *, capability: type | None = None) -> Inject:
        """Build a marker from a comma-separated modifier list.

        Args:
            modifiers: Modifier list such as ``"optional,skip"``.
            capability: Explicit capability overriding the attribute annotation.

        Returns:
            Inject: Marker carrying the parsed modifiers.
        """

        tokens = parse_modifiers(modifiers)
        return cls(capability=capability, optional=OPTIONAL in tokens, skip=SKIP in tokens)


class Dependency:
    """Data descriptor created by :func:`inject`.

    Reading an attribute that has not been injected yields ``None``.
    """

    def __init__(self, marker: Inject) -> None:
        self.marker = marker
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        try:
            return instance.__dict__.get(self.name)
        except AttributeError:
            return None

    def __set__(self, instance: object, value: object) -> None:
        instance.__dict__[self.name] = value

    def __repr__(self) -> str:
        return f"Dependency({self.name!r}, {self.marker!r})"


def inject(
    *modifiers: str,
    capability: type | None = None,
    optional: bool = False,
    skip: bool = False,
) -> Any:
    """Declare an injectable attribute on a class body.

    Args:
        *modifiers: Comma-separated modifier lists (``"optional"``, ``"skip"``).
        capability: Explicit capability; defaults to the attribute annotation.
        optional: Leave the attribute unset when nothing satisfies it.
        skip: Never inject the attribute.

    Returns:
        Any: Descriptor recording the marker; typed ``Any`` so it can be
        assigned to an attribute annotated with the capability.
    """

    tokens = parse_modifiers(",".join(modifiers))
    marker = Inject(
        capability=capability,
        optional=optional or OPTIONAL in tokens,
        skip=skip or SKIP in tokens,
    )
    return Dependency(marker)


@dataclass(frozen=True, slots=True)
class FieldBinding:
    """Injection plan for a single attribute, derived on every prepare call."""

    name: str
    capability: object
    optional: bool
    skip: bool


def _strip_annotation(annotation: object) -> object:
    """Remove ``Annotated`` metadata and ``X | None`` wrappers from ``annotation``."""

    origin = get_origin(annotation)
    if origin is Annotated:
        return _strip_annotation(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return _strip_annotation(members[0])
    return annotation


def _annotated_marker(annotation: object) -> Inject | None:
    if get_origin(annotation) is not Annotated:
        return None
    for extra in get_args(annotation)[1:]:
        if isinstance(extra, Inject):
            return extra
    return None


def _class_annotations(klass: type) -> dict[str, object]:
    """Return the annotations declared directly on ``klass`` without evaluating them."""

    try:
        return dict(inspect.get_annotations(klass))
    except NameError:
        # Deferred annotations naming undefined objects; markers on them are not visible.
        return {}


def _evaluate_annotation(owner: type, name: str, raw: object) -> object:
    """Evaluate the annotation of ``owner.name`` in the owner's module namespace.

    Args:
        owner: Class whose body declared the annotation.
        name: Attribute name.
        raw: Annotation as stored on the class, possibly a string.

    Returns:
        object: Evaluated annotation.

    Raises:
        ValidationError: If the annotation refers to names that cannot be resolved.
    """

    if not isinstance(raw, str):
        return raw
    module = sys.modules.get(owner.__module__)
    namespace = vars(module) if module is not None else {}
    try:
        return eval(raw, namespace, dict(vars(owner)))  # noqa: S307 - same evaluation as typing.get_type_hints
    except (NameError, AttributeError, SyntaxError, TypeError) as exc:
        raise ValidationError(f"unable to evaluate annotation of '{qualified_name(owner)}.{name}': {exc}") from exc


def _binding_for(cls: type, name: str, owner: type | None, raw: object) -> FieldBinding | None:
    static = inspect.getattr_static(cls, name, None)
    if isinstance(static, Dependency):
        marker = static.marker
        if marker.capability is not None:
            return FieldBinding(name=name, capability=marker.capability, optional=marker.optional, skip=marker.skip)
        annotation = _evaluate_annotation(owner, name, raw) if owner is not None else None
        if get_origin(annotation) is ClassVar:
            return None
        return FieldBinding(
            name=name,
            capability=_strip_annotation(annotation),
            optional=marker.optional,
            skip=marker.skip,
        )

    if owner is None or (isinstance(raw, str) and not _MARKER_TOKEN.search(raw)):
        return None
    annotation = _evaluate_annotation(owner, name, raw)
    if get_origin(annotation) is ClassVar:
        return None
    marker = _annotated_marker(annotation)
    if marker is None:
        return None
    capability = marker.capability if marker.capability is not None else _strip_annotation(annotation)
    return FieldBinding(name=name, capability=capability, optional=marker.optional, skip=marker.skip)


def collect_bindings(cls: type) -> list[FieldBinding]:
    """Return the injection bindings declared by ``cls`` and its bases.

    Only annotations of marked attributes are evaluated, each in the module of
    the class that declared it. Unmarked attributes may use names that are
    unavailable at runtime, such as ``TYPE_CHECKING`` imports.

    Args:
        cls: Class of the injection target.

    Returns:
        list[FieldBinding]: Bindings in declaration order, base classes first.

    Raises:
        ValidationError: If the annotation of a marked attribute cannot be evaluated.
    """

    names: list[str] = []
    owners: dict[str, type] = {}
    annotations: dict[str, object] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, raw in _class_annotations(klass).items():
            owners[name] = klass
            annotations[name] = raw
            if name not in names:
                names.append(name)
        for name, value in vars(klass).items():
            if isinstance(value, Dependency) and name not in names:
                names.append(name)

    bindings: list[FieldBinding] = []
    for name in names:
        binding = _binding_for(cls, name, owners.get(name), annotations.get(name))
        if binding is not None:
            bindings.append(binding)
    return bindings


def _assignment_problem(target: object, name: str) -> str | None:
    """Describe why ``name`` cannot be assigned on ``target``, or ``None`` when it can."""

    if name.startswith("_"):
        return "private attributes are not injectable"
    cls = type(target)
    static = inspect.getattr_static(cls, name, None)
    if isinstance(static, property) and static.fset is None:
        return "read-only property"
    params = getattr(cls, "__dataclass_params__", None)
    if params is not None and params.frozen:
        return "frozen dataclass"
    if not hasattr(target, "__dict__") and not isinstance(static, types.MemberDescriptorType):
        return "no slot or instance dictionary to hold it"
    return None


class FieldInjector:
    """Bind registered services into the marked attributes of a target object."""

    def __init__(self, resolver: Resolver, *, debug: bool = False) -> None:
        self._resolver = resolver
        self._diagnostics = Diagnostics(LOGGER, enabled=debug)

    def prepare(self, target: object) -> None:
        """Inject every marked attribute of ``target``.

        Processing stops at the first failure; attributes bound before it keep
        their new values.

        Args:
            target: Mutable object whose marked attributes are bound.

        Raises:
            ValidationError: If ``target`` is not a mutable object reference or
                a binding does not name a capability class.
            AccessError: If a marked attribute cannot be assigned.
            ResolutionError: If a mandatory attribute cannot be resolved.
        """

        violation = reference_violation(target)
        if violation is not None:
            raise ValidationError(f"injection targets must be mutable object references, got {violation}")

        for binding in collect_bindings(type(target)):
            self._bind(target, binding)

    def _bind(self, target: object, binding: FieldBinding) -> None:
        name = binding.name
        if binding.skip:
            self._diagnostics.emit("Skip '%s': marked as skip", name)
            return

        problem = _assignment_problem(target, name)
        if problem is not None:
            raise AccessError(f"the field '{name}' is not accessible: {problem}", attribute=name)

        capability = binding.capability
        if not isinstance(capability, type):
            raise ValidationError(f"the field '{name}' does not declare a capability class: {capability!r}")

        try:
            service = self._resolver.get(capability)
        except ResolutionError as exc:
            if binding.optional:
                self._diagnostics.emit("Skip '%s': not found; marked as optional", name)
                return
            raise ResolutionError(
                f"unable to resolve field '{name}': {exc}",
                capability=exc.capability,
                attribute=name,
            ) from exc

        self._diagnostics.emit("Resolve '%s' with '%s'", name, qualified_name(type(service)))
        try:
            setattr(target, name, service)
        except (AttributeError, TypeError) as exc:
            raise AccessError(f"the field '{name}' is not accessible: {exc}", attribute=name) from exc


__all__ = [
    "Dependency",
    "FieldBinding",
    "FieldInjector",
    "Inject",
    "collect_bindings",
    "inject",
    "parse_modifiers",
]
