"""Execution of fact-definition files."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from pathlib import Path
from types import ModuleType
from typing import Any

from facts.fact import Fact
from facts.fact_registry import FactRegistry
from facts.resolution import ResolutionCode


class FactFileScope:
    """Registration API handed to a fact file as the global ``facts``.

    Everything registered through it is tagged with the file as origin so a
    later reload can replace it instead of stacking duplicates.
    """

    def __init__(self, registry: FactRegistry, origin: str) -> None:
        self._registry = registry
        self.origin = origin

    def add(
        self,
        name: Any,
        options: dict[str, Any] | None = None,
        body: ResolutionCode | None = None,
    ) -> Fact:
        return self._registry.add(name, options, body, origin=self.origin)

    def fact(self, name: Any, **options: Any) -> Callable[[Callable[[], Any]], Callable[[], Any]]:
        def decorator(func: Callable[[], Any]) -> Callable[[], Any]:
            self.add(name, options, func)
            return func

        return decorator

    def value(self, name: Any) -> Any:
        return self._registry.value_of(name)


def _module_name(path: Path) -> str:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    return f"_hostfacts_file_{path.stem}_{digest}"


def execute_fact_file(path: Path, registry: FactRegistry) -> ModuleType:
    """Run ``path`` in a fresh module namespace seeded with the registration API.

    The module is never inserted into ``sys.modules`` and no bytecode is
    cached, so each call executes the current source again. Exceptions
    propagate to the caller.
    """
    source = path.read_text(encoding="utf-8")
    code = compile(source, str(path), "exec")
    module = ModuleType(_module_name(path))
    module.__file__ = str(path)
    scope = FactFileScope(registry, origin=str(path))
    module.facts = scope
    module.add = scope.add
    exec(code, module.__dict__)
    return module
