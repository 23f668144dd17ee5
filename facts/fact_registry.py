"""In-memory registry mapping normalized fact names to Fact objects."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterator
from typing import Any

from facts.fact import Fact
from facts.locks import ReadWriteLock
from facts.names import normalize_name
from facts.resolution import ResolutionCode


class FactRegistry:
    """Process-wide catalogue of facts.

    Lookups never create entries. Reads share the lock; registration and
    resetting take it exclusively. Fact locks are never taken while the
    registry lock is held, and resolution code runs outside it.
    """

    def __init__(self, resolution_defaults: dict[str, Any] | None = None) -> None:
        self._facts: dict[str, Fact] = {}
        self._lock = ReadWriteLock()
        self.resolution_defaults = dict(resolution_defaults or {})

    def __contains__(self, name: object) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._facts)

    def add(
        self,
        name: Any,
        options: dict[str, Any] | None = None,
        body: ResolutionCode | None = None,
        *,
        origin: str | None = None,
    ) -> Fact:
        """Create ``name`` if needed and append a resolution when ``body`` is given."""
        key = normalize_name(name)
        with self._lock.write():
            fact = self._facts.get(key)
            if fact is None:
                fact = Fact(key, options)
                self._facts[key] = fact
        if body is not None:
            fact.add_resolution(
                {**self.resolution_defaults, **(options or {})}, body, origin=origin
            )
        return fact

    def fact(self, name: Any, **options: Any) -> Callable[[Callable[[], Any]], Callable[[], Any]]:
        """Decorator registering a function as a resolution for ``name``."""

        def decorator(func: Callable[[], Any]) -> Callable[[], Any]:
            self.add(name, options, func)
            return func

        return decorator

    def lookup(self, name: Any) -> Fact | None:
        key = normalize_name(name)
        with self._lock.read():
            return self._facts.get(key)

    def value_of(self, name: Any) -> Any:
        fact = self.lookup(name)
        if fact is None:
            return None
        return fact.resolve()

    def remove(self, name: Any) -> bool:
        key = normalize_name(name)
        with self._lock.write():
            return self._facts.pop(key, None) is not None

    def _snapshot(self) -> list[Fact]:
        with self._lock.read():
            return list(self._facts.values())

    def each(self) -> Iterator[tuple[str, Any]]:
        """Yield ``(name, value)`` for every fact with a present value."""
        for fact in self._snapshot():
            value = fact.resolve()
            if value is not None:
                yield fact.name, value

    def to_dict(self) -> dict[str, Any]:
        return dict(self.each())

    def list_names(self) -> list[str]:
        with self._lock.read():
            return list(self._facts)

    def flush(self) -> None:
        """Invalidate every cached value; registrations are kept."""
        for fact in self._snapshot():
            fact.invalidate()

    def reset(self) -> None:
        """Forget every registered fact."""
        with self._lock.write():
            self._facts.clear()

    def clear(self) -> None:
        """Flush then reset. Mostly used by tests."""
        with self._lock.write():
            facts = list(self._facts.values())
            self._facts.clear()
        for fact in facts:
            fact.invalidate()

    def discard_origin(self, origins: Collection[str]) -> int:
        """Drop resolutions registered under ``origins``; facts stay registered."""
        if not origins:
            return 0
        return sum(fact.discard_resolutions(origins) for fact in self._snapshot())
