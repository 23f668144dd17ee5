"""Accessor-style access to fact values."""

from __future__ import annotations

from typing import Any

from facts.errors import UnknownFactError
from facts.fact_registry import FactRegistry
from facts.names import normalize_name


class FactDispatcher:
    """Two fixed entry points over the registry: plain get and boolean query."""

    def __init__(self, registry: FactRegistry) -> None:
        self.registry = registry

    def __getitem__(self, name: Any) -> Any:
        return self.get(name)

    def get(self, name: Any) -> Any:
        """Return the fact value, or None when it resolves to nothing.

        Raises UnknownFactError when ``name`` was never registered.
        """
        fact = self.registry.lookup(name)
        if fact is None:
            raise UnknownFactError(normalize_name(name))
        return fact.resolve()

    def is_(self, name: Any, *candidates: Any) -> bool:
        """Case-insensitive check of a fact value against ``candidates``.

        ``is_("osfamily?", "linux")`` and ``is_("osfamily", "linux")`` are
        equivalent. A fact without a value never matches.
        """
        base = normalize_name(name)
        if base.endswith("?"):
            base = base[:-1]
        value = self.get(base)
        if value is None:
            return False
        folded = str(value).lower()
        return any(str(candidate).lower() == folded for candidate in candidates)
