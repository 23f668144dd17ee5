"""Process-wide fact runtime and its lifecycle."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from core.debug import set_debug
from core.settings import FactSettings
from core.version import version
from facts.dispatcher import FactDispatcher
from facts.fact import Fact
from facts.fact_registry import FactRegistry
from facts.resolution import ResolutionCode
from loader.fact_loader import FactLoader, LoadReport


class HostFacts:
    """Registry, dispatcher and loader wired together.

    Generally treat it as a mapping of facts::

        facts = get_host_facts()
        facts["operatingsystem"]
        facts.is_("osfamily?", "debian", "redhat")
    """

    def __init__(
        self,
        settings: FactSettings | None = None,
        *,
        search_dirs: Iterable[str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.settings = settings or FactSettings()
        self.registry = FactRegistry(
            resolution_defaults={"timeout": self.settings.command_timeout}
        )
        self.dispatcher = FactDispatcher(self.registry)
        self.loader = FactLoader(
            self.registry,
            self.settings,
            search_dirs=search_dirs,
            environ=environ,
        )
        self.last_report: LoadReport | None = None
        if settings is not None:
            set_debug(settings.debug)

    def __getitem__(self, name: Any) -> Any:
        return self.dispatcher.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.registry

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return self.each()

    @staticmethod
    def version() -> str:
        return version()

    @staticmethod
    def set_debug(mode: Any) -> None:
        set_debug(mode)

    def add(
        self,
        name: Any,
        options: dict[str, Any] | None = None,
        body: ResolutionCode | None = None,
    ) -> Fact:
        return self.registry.add(name, options, body)

    def fact(self, name: Any, **options: Any) -> Callable[[Callable[[], Any]], Callable[[], Any]]:
        return self.registry.fact(name, **options)

    def lookup(self, name: Any) -> Fact | None:
        return self.registry.lookup(name)

    def value(self, name: Any) -> Any:
        """Fact value, or None for unknown or valueless facts."""
        return self.registry.value_of(name)

    def get(self, name: Any) -> Any:
        return self.dispatcher.get(name)

    def is_(self, name: Any, *candidates: Any) -> bool:
        return self.dispatcher.is_(name, *candidates)

    def each(self) -> Iterator[tuple[str, Any]]:
        return self.registry.each()

    def to_dict(self) -> dict[str, Any]:
        return self.registry.to_dict()

    def list_names(self) -> list[str]:
        return self.registry.list_names()

    def flush(self) -> None:
        self.registry.flush()

    def reset(self) -> None:
        self.registry.reset()

    def clear(self) -> None:
        self.registry.clear()

    def load_facts(self) -> LoadReport:
        self.last_report = self.loader.load()
        return self.last_report


_instance: HostFacts | None = None
_instance_lock = threading.RLock()


def init_host_facts(settings: FactSettings | None = None) -> HostFacts:
    """(Re)create the process-wide runtime and load its facts.

    The new runtime is published before loading so fact files that register
    through ``get_host_facts()`` reach it.
    """
    global _instance
    with _instance_lock:
        _instance = HostFacts(settings)
        _instance.load_facts()
        return _instance


def get_host_facts() -> HostFacts:
    """Return the process-wide runtime, initializing it on first use."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = HostFacts()
            _instance.load_facts()
        return _instance


def reset_host_facts() -> None:
    """Drop the process-wide runtime; the next access starts from scratch."""
    global _instance
    with _instance_lock:
        if _instance is not None:
            _instance.clear()
        _instance = None
