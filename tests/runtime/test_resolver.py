# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

from typing import Protocol

import pytest

from dieb import ResolutionError, ValidationError
from dieb.runtime import Registration, Registry, Resolver


class Greeter(Protocol):
    def hello(self, name: str) -> str: ...


class Mailer(Protocol):
    def send(self, to: str) -> None: ...


class EnglishGreeter(Greeter):
    def hello(self, name: str) -> str:
        return f"Hello {name}"


class GermanGreeter(Greeter):
    def hello(self, name: str) -> str:
        return f"Hallo {name}"


def test_get_returns_registered_service(registry: Registry, resolver: Resolver) -> None:
    greeter = EnglishGreeter()
    registry.prepend(Registration.create(greeter))

    assert resolver.get(Greeter) is greeter
    assert resolver.get(EnglishGreeter) is greeter


def test_get_prefers_most_recent_registration(registry: Registry, resolver: Resolver) -> None:
    older = EnglishGreeter()
    newer = GermanGreeter()
    registry.prepend(Registration.create(older))
    registry.prepend(Registration.create(newer))

    assert resolver.get(Greeter) is newer
    assert resolver.get(EnglishGreeter) is older


def test_get_missing_capability_names_it(registry: Registry, resolver: Resolver) -> None:
    registry.prepend(Registration.create(EnglishGreeter()))

    with pytest.raises(ResolutionError, match="Mailer") as excinfo:
        resolver.get(Mailer)

    assert excinfo.value.capability is not None
    assert excinfo.value.capability.endswith("test_resolver.Mailer")


def test_get_rejects_non_class_capability(resolver: Resolver) -> None:
    with pytest.raises(ValidationError):
        resolver.get("Greeter")  # type: ignore[arg-type]


def test_get_by_name_matches_type_name_suffix(registry: Registry, resolver: Resolver) -> None:
    english = EnglishGreeter()
    german = GermanGreeter()
    registry.prepend(Registration.create(english))
    registry.prepend(Registration.create(german))

    assert resolver.get_by_name("EnglishGreeter") is english
    assert resolver.get_by_name("test_resolver.GermanGreeter") is german
    assert resolver.get_by_name("Greeter") is german


def test_get_by_name_missing(resolver: Resolver) -> None:
    with pytest.raises(ResolutionError, match="FrenchGreeter"):
        resolver.get_by_name("FrenchGreeter")


def test_get_by_name_rejects_empty_name(resolver: Resolver) -> None:
    with pytest.raises(ValidationError):
        resolver.get_by_name("")


def test_get_never_matches_structural_bases(registry: Registry, resolver: Resolver) -> None:
    registry.prepend(Registration.create(EnglishGreeter()))

    with pytest.raises(ResolutionError):
        resolver.get(Protocol)
