"""Fact objects: named, lazily resolved, cached values."""

from __future__ import annotations

import threading
from collections.abc import Container
from typing import Any

from facts.names import normalize_name
from facts.resolution import Resolution, ResolutionCode

_UNSET = object()


class Fact:
    """A named value with ordered resolution mechanisms and a cached result."""

    def __init__(self, name: Any, options: dict[str, Any] | None = None) -> None:
        self.name = normalize_name(name)
        self.options = dict(options or {})
        self._resolutions: list[Resolution] = []
        self._value: Any = _UNSET
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"Fact({self.name!r}, resolutions={len(self._resolutions)})"

    @property
    def resolutions(self) -> tuple[Resolution, ...]:
        return tuple(self._resolutions)

    @property
    def is_cached(self) -> bool:
        return self._value is not _UNSET

    def add_resolution(
        self,
        options: dict[str, Any] | None,
        body: ResolutionCode,
        origin: str | None = None,
    ) -> Resolution:
        """Append a resolution mechanism built from ``options`` and ``body``."""
        resolution = Resolution(code=body, options=dict(options or {}), origin=origin)
        with self._lock:
            self._resolutions.append(resolution)
        return resolution

    def discard_resolutions(self, origins: Container[str]) -> int:
        """Drop resolutions registered under any of ``origins``."""
        with self._lock:
            kept = [r for r in self._resolutions if r.origin not in origins]
            removed = len(self._resolutions) - len(kept)
            if removed:
                self._resolutions = kept
                self._value = _UNSET
        return removed

    def resolve(self) -> Any:
        """Return the cached value, computing it on first use."""
        value = self._value
        if value is not _UNSET:
            return value
        with self._lock:
            if self._value is _UNSET:
                self._value = self._compute(self._resolutions)
            return self._value

    def invalidate(self) -> None:
        with self._lock:
            self._value = _UNSET

    @staticmethod
    def _compute(resolutions: list[Resolution]) -> Any:
        for resolution in resolutions:
            value = resolution.value()
            if value is not None:
                return value
        return None
