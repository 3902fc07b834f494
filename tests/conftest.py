# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from dieb import StaticInjector, new_injector
from dieb.runtime import Registry, Resolver


@pytest.fixture
def injector() -> Iterator[StaticInjector]:
    """Return a fresh injector and tear it down after the test."""
    with new_injector() as container:
        yield container


@pytest.fixture
def registry() -> Registry:
    """Return an empty registry."""
    return Registry()


@pytest.fixture
def resolver(registry: Registry) -> Resolver:
    """Return a resolver bound to the ``registry`` fixture."""
    return Resolver(registry)
