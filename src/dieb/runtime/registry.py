# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Ordered store of registered services."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .capabilities import capability_set, qualified_name


@dataclass(frozen=True, slots=True)
class Registration:
    """Describe one service held by the registry."""

    service: object
    capabilities: frozenset[type]
    name: str
    sentinel: bool = False

    @classmethod
    def create(
        cls,
        service: object,
        capabilities: Iterable[type] = (),
        *,
        sentinel: bool = False,
    ) -> Registration:
        """Build a registration, computing the service's capability set.

        Args:
            service: Instance being registered.
            capabilities: Capabilities declared for this registration only.
            sentinel: ``True`` for the injector's own entry.

        Returns:
            Registration: Entry ready to be stored.
        """

        return cls(
            service=service,
            capabilities=capability_set(service, capabilities),
            name=qualified_name(type(service)),
            sentinel=sentinel,
        )

    def satisfies(self, capability: type) -> bool:
        """Return whether the service declares ``capability``."""

        return capability in self.capabilities

    def __repr__(self) -> str:
        marker = ", sentinel" if self.sentinel else ""
        return f"Registration({self.name}{marker})"


class Registry:
    """Keep registrations ordered from most to least recently added.

    New entries are prepended, so forward scans see the newest registration
    first. Mutation and snapshots are serialised by a re-entrant lock; callers
    iterate over snapshots and never over the live list.
    """

    def __init__(self) -> None:
        self._entries: list[Registration] = []
        self._lock = threading.RLock()

    def prepend(self, registration: Registration) -> None:
        """Insert ``registration`` ahead of every existing entry."""

        with self._lock:
            self._entries.insert(0, registration)

    def snapshot(self) -> tuple[Registration, ...]:
        """Return the current entries in lookup order.

        Returns:
            tuple[Registration, ...]: Entries, newest first.
        """

        with self._lock:
            return tuple(self._entries)

    def retain_sentinels(self) -> tuple[Registration, ...]:
        """Drop every non-sentinel entry and return the removed registrations."""

        with self._lock:
            removed = tuple(entry for entry in self._entries if not entry.sentinel)
            self._entries = [entry for entry in self._entries if entry.sentinel]
        return removed

    def __iter__(self) -> Iterator[Registration]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, service: object) -> bool:
        """Return whether ``service`` itself (by identity) is registered."""

        return any(entry.service is service for entry in self.snapshot())

    def __repr__(self) -> str:
        names = ", ".join(entry.name for entry in self.snapshot())
        return f"Registry([{names}])"


__all__ = ["Registration", "Registry"]
