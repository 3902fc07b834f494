# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Invoke callables whose parameters are resolved from the registry."""

from __future__ import annotations

import inspect
import logging
import types
from collections.abc import Callable
from typing import Final, Union, get_args, get_origin

from ..errors import InvocationError, ResolutionError
from ..logging import Diagnostics
from .capabilities import is_value_kind, qualified_name
from .resolver import Resolver

LOGGER = logging.getLogger(__name__)

_VARIADIC: Final = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def describe_callable(func: Callable[..., object], signature: inspect.Signature | None = None) -> str:
    """Return ``qualname(signature)`` text used in error messages.

    Args:
        func: Callable being described.
        signature: Pre-computed signature of ``func`` when available.

    Returns:
        str: Human-readable description of the callable.
    """

    name = getattr(func, "__qualname__", None) or type(func).__qualname__
    return f"{name}{signature}" if signature is not None else name


def _is_error_type(annotation: object) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseException)


def is_error_compatible(annotation: object) -> bool:
    """Return whether ``annotation`` describes a "nothing or an error" result.

    Args:
        annotation: Evaluated return annotation.

    Returns:
        bool: ``True`` for a missing annotation, ``None``, exception classes,
        and unions of exception classes with ``None``.
    """

    if annotation is inspect.Signature.empty or annotation is None or annotation is type(None):
        return True
    if _is_error_type(annotation):
        return True
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return all(arg is type(None) or _is_error_type(arg) for arg in get_args(annotation))
    return False


class FunctionInvoker:
    """Resolve each declared parameter of a callable and invoke it."""

    def __init__(self, resolver: Resolver, *, debug: bool = False) -> None:
        self._resolver = resolver
        self._diagnostics = Diagnostics(LOGGER, enabled=debug)

    def invoke(self, func: Callable[..., object]) -> None:
        """Resolve the parameters of ``func``, call it, and check its result.

        Args:
            func: Callable whose parameters are annotated with capabilities and
                whose result is ``None`` or an exception.

        Raises:
            InvocationError: If ``func`` is not callable, its signature is not
                injectable, a parameter cannot be resolved, or the call raises
                or returns an exception.
        """

        if not callable(func):
            raise InvocationError(f"expected a callable, got {type(func).__name__}")
        try:
            signature = inspect.signature(func, eval_str=True)
        except (TypeError, ValueError, NameError) as exc:
            raise InvocationError(f"unable to inspect the signature of {describe_callable(func)}: {exc}") from exc
        described = describe_callable(func, signature)

        if not is_error_compatible(signature.return_annotation):
            raise InvocationError(
                f"{described} must return None or an exception, not {signature.return_annotation!r}",
                signature=described,
            )

        args: list[object] = []
        kwargs: dict[str, object] = {}
        for parameter in signature.parameters.values():
            service = self._resolve_parameter(parameter, described)
            if parameter.kind is inspect.Parameter.KEYWORD_ONLY:
                kwargs[parameter.name] = service
            else:
                args.append(service)

        self._diagnostics.emit("Invoke '%s' with %d resolved parameter(s)", described, len(signature.parameters))
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            raise InvocationError(f"{described} failed: {exc}", signature=described) from exc
        if result is None:
            return
        if isinstance(result, BaseException):
            raise InvocationError(f"{described} failed: {result}", signature=described) from result
        raise InvocationError(
            f"{described} returned a {type(result).__name__} instead of None or an exception",
            signature=described,
        )

    def _resolve_parameter(self, parameter: inspect.Parameter, described: str) -> object:
        name = parameter.name
        if parameter.kind in _VARIADIC:
            raise InvocationError(f"{described}: variadic parameter '{name}' cannot be injected", signature=described)
        capability = parameter.annotation
        if capability is inspect.Parameter.empty:
            raise InvocationError(f"{described}: parameter '{name}' does not declare a capability", signature=described)
        if not isinstance(capability, type) or is_value_kind(capability):
            raise InvocationError(
                f"{described}: parameter '{name}' must be a capability or reference type, not {capability!r}",
                signature=described,
            )
        try:
            service = self._resolver.get(capability)
        except ResolutionError as exc:
            raise InvocationError(f"unable to prepare {described}: {exc}", signature=described) from exc
        self._diagnostics.emit("Resolve parameter '%s' with '%s'", name, qualified_name(type(service)))
        return service


__all__ = ["FunctionInvoker", "describe_callable", "is_error_compatible"]
