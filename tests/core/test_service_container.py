# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

import logging
from typing import Protocol

import pytest

from dieb import (
    ConfigError,
    Injector,
    InjectorConfig,
    InvocationError,
    ResolutionError,
    StaticInjector,
    inject,
    new_injector,
    new_injector_with_config,
)


class Greeter(Protocol):
    def hello(self, name: str) -> str: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


class ServiceA(Greeter):
    def hello(self, name: str) -> str:
        return "Hello " + name


class ServiceB(Greeter):
    previous: Greeter = inject()

    def hello(self, name: str) -> str:
        return self.previous.hello(name + " elloH")


class Controller:
    greeter: Greeter = inject()


class OptionalController:
    notifier: Notifier = inject("optional")


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.messages: list[str] = []
        self.stopped = 0

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def shutdown(self) -> None:
        self.stopped += 1


def test_delegation_binds_most_recent_greeter(injector: StaticInjector) -> None:
    service_a = ServiceA()
    service_b = ServiceB()
    injector.provide(service_a, service_b)

    controller = Controller()
    injector.prepare(controller)

    assert service_b.previous is service_a
    assert controller.greeter is service_b
    assert controller.greeter.hello("World") == "Hello World elloH"


def test_mandatory_field_failure_names_capability(injector: StaticInjector) -> None:
    with pytest.raises(ResolutionError, match="Greeter"):
        injector.prepare(Controller())


def test_optional_field_stays_unset(injector: StaticInjector) -> None:
    controller = OptionalController()

    injector.prepare(controller)

    assert controller.notifier is None


def test_get_returns_the_injector_itself(injector: StaticInjector) -> None:
    assert injector.get(Injector) is injector
    assert injector.get(StaticInjector) is injector
    assert injector.get_by_name("StaticInjector") is injector


def test_get_by_name_selects_a_specific_implementation(injector: StaticInjector) -> None:
    service_a = ServiceA()
    injector.provide(service_a, ServiceB())

    assert injector.get_by_name("ServiceA") is service_a


def test_prepare_func_invokes_with_resolved_services(injector: StaticInjector) -> None:
    notifier = RecordingNotifier()
    injector.provide(ServiceA(), notifier)

    def announce(greeter: Greeter, target: Notifier) -> None:
        target.notify(greeter.hello("team"))

    assert injector.prepare_func(announce) is None
    assert notifier.messages == ["Hello team"]


def test_prepare_func_surfaces_callable_failure(injector: StaticInjector) -> None:
    injector.provide(ServiceA())
    failure = ValueError("bad greeting")

    def check(greeter: Greeter) -> ValueError | None:
        return failure

    with pytest.raises(InvocationError) as excinfo:
        injector.prepare_func(check)

    assert excinfo.value.__cause__ is failure


def test_must_prepare_aborts_on_failure(injector: StaticInjector) -> None:
    with pytest.raises(SystemExit) as excinfo:
        injector.must_prepare(Controller())

    assert isinstance(excinfo.value.__cause__, ResolutionError)


def test_must_prepare_binds_on_success(injector: StaticInjector) -> None:
    injector.provide(ServiceA())
    controller = Controller()

    injector.must_prepare(controller)

    assert isinstance(controller.greeter, ServiceA)


def test_context_manager_shuts_down_services() -> None:
    notifier = RecordingNotifier()

    with new_injector() as injector:
        injector.provide(notifier)

    assert notifier.stopped == 1
    assert len(injector) == 1


def test_container_dunder_helpers(injector: StaticInjector) -> None:
    service_a = ServiceA()
    injector.provide(service_a)

    assert len(injector) == 2
    assert service_a in injector
    assert ServiceA() not in injector
    assert injector.services() == (service_a, injector)
    assert "ServiceA" in repr(injector)


def test_new_injector_with_config_enables_debug(caplog: pytest.LogCaptureFixture) -> None:
    injector = new_injector_with_config({"debug": True})

    with caplog.at_level(logging.DEBUG, logger="dieb"):
        injector.provide(ServiceA())
        injector.prepare(Controller())
        injector.shutdown()

    assert injector.config == InjectorConfig(debug=True)
    assert "Provide" in caplog.text
    assert "Resolve 'greeter'" in caplog.text


def test_new_injector_with_config_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigError):
        new_injector_with_config({"verbose": True})
