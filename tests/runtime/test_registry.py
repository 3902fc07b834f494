# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Protocol, TypeVar

from dieb.runtime import Registration, Registry, declare, provides
from dieb.runtime.capabilities import capability_set, qualified_name, reference_violation


class Store(ABC):
    @abstractmethod
    def load(self, key: str) -> str: ...


class Clock:
    def now(self) -> float:
        return 0.0


class MemoryStore(Store):
    def load(self, key: str) -> str:
        return key


@provides(Clock)
class FrozenClock:
    def now(self) -> float:
        return 42.0


class SubFrozenClock(FrozenClock):
    pass


ItemT = TypeVar("ItemT")


class Reader(Protocol):
    def read(self) -> str: ...


class Box(Generic[ItemT]):
    pass


class StringBox(Box[str], Reader):
    def read(self) -> str:
        return ""


def test_prepend_places_newest_first(registry: Registry) -> None:
    first = Registration.create(MemoryStore())
    second = Registration.create(MemoryStore())
    registry.prepend(first)
    registry.prepend(second)

    assert registry.snapshot() == (second, first)
    assert list(registry) == [second, first]
    assert len(registry) == 2


def test_contains_checks_identity(registry: Registry) -> None:
    store = MemoryStore()
    registry.prepend(Registration.create(store))

    assert store in registry
    assert MemoryStore() not in registry


def test_retain_sentinels_drops_services(registry: Registry) -> None:
    sentinel = Registration.create(object(), sentinel=True)
    service = Registration.create(MemoryStore())
    registry.prepend(sentinel)
    registry.prepend(service)

    removed = registry.retain_sentinels()

    assert removed == (service,)
    assert registry.snapshot() == (sentinel,)


def test_registration_records_mro_capabilities() -> None:
    registration = Registration.create(MemoryStore())

    assert registration.satisfies(Store)
    assert registration.satisfies(MemoryStore)
    assert not registration.satisfies(object)
    assert registration.name.endswith("test_registry.MemoryStore")


def test_structural_match_is_not_a_capability() -> None:
    class_with_load = type("Loader", (), {"load": lambda self, key: key})

    assert Store not in capability_set(class_with_load())


def test_provides_decorator_is_inherited() -> None:
    assert Clock in capability_set(FrozenClock())
    assert Clock in capability_set(SubFrozenClock())


def test_declare_adds_capabilities_for_one_registration() -> None:
    plain = MemoryStore()
    declared = declare(plain, Clock)

    assert Clock in capability_set(declared.instance, declared.capabilities)
    assert Clock not in capability_set(plain)


def test_reference_violation_reports_value_kinds() -> None:
    assert reference_violation(None) == "None"
    assert reference_violation(3) == "int"
    assert reference_violation("text") == "str"
    assert reference_violation((1, 2)) == "tuple"
    assert reference_violation(MemoryStore) == "ABCMeta"
    assert reference_violation(MemoryStore()) is None


def test_qualified_name_includes_module() -> None:
    assert qualified_name(MemoryStore).endswith("test_registry.MemoryStore")
    assert qualified_name(int) == "int"


def test_capability_set_excludes_structural_bases() -> None:
    capabilities = capability_set(StringBox())

    assert {StringBox, Box, Reader} <= capabilities
    assert Protocol not in capabilities
    assert Generic not in capabilities
    assert ABC not in Registration.create(MemoryStore()).capabilities
