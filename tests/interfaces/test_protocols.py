# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

from dieb import Initializer, Injector, Shutdowner, StaticInjector


class _Pool:
    def init(self) -> None:
        return None

    def shutdown(self) -> None:
        return None


class _Plain:
    pass


def test_lifecycle_protocols_match_hook_methods() -> None:
    assert isinstance(_Pool(), Initializer)
    assert isinstance(_Pool(), Shutdowner)
    assert not isinstance(_Plain(), Initializer)
    assert not isinstance(_Plain(), Shutdowner)


def test_static_injector_implements_injector_protocol() -> None:
    injector = StaticInjector()

    assert isinstance(injector, Injector)
    assert isinstance(injector, Shutdowner)
    assert issubclass(StaticInjector, Injector)
