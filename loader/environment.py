"""Facts injected through environment variables."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping

from facts.fact_registry import FactRegistry


def environment_pattern(prefix: str) -> re.Pattern[str]:
    """``<prefix>_<name>`` or ``<prefix><name>``, any case."""
    return re.compile(rf"^{re.escape(prefix)}_?(\w+)$", re.IGNORECASE)


def register_environment_facts(
    registry: FactRegistry,
    environ: Mapping[str, str],
    prefix: str,
) -> dict[str, str]:
    """Register a constant fact per matching variable.

    Returns a mapping of variable name to the fact it defines.
    """
    pattern = environment_pattern(prefix)
    registered: dict[str, str] = {}
    for var, value in sorted(environ.items()):
        match = pattern.match(var)
        if not match:
            continue
        fact = registry.add(match.group(1), body=_constant(value), origin=f"env:{var}")
        registered[var] = fact.name
    return registered


def _constant(value: str) -> Callable[[], str]:
    return lambda: value
