"""Fact registry behavior tests."""

from __future__ import annotations

import threading
import time
from enum import Enum

import pytest

from facts.fact_registry import FactRegistry


class Name(Enum):
    KERNEL = "kernel"


def _counting(value: object) -> tuple[list[int], object]:
    calls = [0]

    def body() -> object:
        calls[0] += 1
        return value

    return calls, body


def test_names_are_normalized_at_every_boundary() -> None:
    registry = FactRegistry()
    fact = registry.add("Foo", body=lambda: "bar")

    assert fact.name == "foo"
    assert registry.lookup("foo") is fact
    assert registry.lookup("FOO") is fact
    assert registry.lookup(" foo ") is fact
    assert registry.value_of("fOo") == "bar"
    assert registry.list_names() == ["foo"]

    registry.add(Name.KERNEL, body=lambda: "Linux")
    assert registry.value_of("KERNEL") == "Linux"


def test_lookup_does_not_create_entries() -> None:
    registry = FactRegistry()

    assert registry.lookup("nonexistent") is None
    assert registry.value_of("nonexistent") is None
    assert "nonexistent" not in registry
    assert "nonexistent" not in registry.list_names()
    assert len(registry) == 0


def test_duplicate_registration_merges_resolutions() -> None:
    registry = FactRegistry()
    first = registry.add("x", body=lambda: None)
    second = registry.add("X", {"note": "fallback"}, lambda: "from-b")

    assert first is second
    assert len(first.resolutions) == 2
    assert registry.list_names() == ["x"]
    assert registry.value_of("x") == "from-b"


def test_add_without_body_registers_valueless_fact() -> None:
    registry = FactRegistry()
    fact = registry.add("empty")

    assert fact.resolutions == ()
    assert registry.value_of("empty") is None
    assert registry.list_names() == ["empty"]


def test_value_is_cached_until_flush() -> None:
    registry = FactRegistry()
    payload = {"nested": [1, 2]}
    calls, body = _counting(payload)
    registry.add("x", body=body)

    first = registry.value_of("x")
    second = registry.value_of("x")
    assert first is second is payload
    assert calls[0] == 1

    registry.flush()
    assert "x" in registry.list_names()
    assert registry.value_of("x") is payload
    assert calls[0] == 2


def test_absence_is_cached_within_an_epoch() -> None:
    registry = FactRegistry()
    calls, body = _counting(None)
    registry.add("missing", body=body)

    assert registry.value_of("missing") is None
    assert registry.value_of("missing") is None
    assert calls[0] == 1


def test_reset_removes_every_fact() -> None:
    registry = FactRegistry()
    registry.add("x", body=lambda: 1)
    registry.add("y", body=lambda: 2)

    registry.reset()

    assert registry.list_names() == []
    assert registry.lookup("x") is None
    registry.reset()
    registry.flush()


def test_clear_drops_registrations_and_cache() -> None:
    registry = FactRegistry()
    calls, body = _counting("v")
    fact = registry.add("x", body=body)
    registry.value_of("x")

    registry.clear()

    assert registry.list_names() == []
    assert fact.is_cached is False


def test_each_and_to_dict_skip_absent_values() -> None:
    registry = FactRegistry()
    registry.add("present", body=lambda: "yes")
    registry.add("absent", body=lambda: None)
    registry.add("blank", body=lambda: "")

    assert dict(registry.each()) == {"present": "yes"}
    assert registry.to_dict() == {"present": "yes"}
    assert sorted(registry.list_names()) == ["absent", "blank", "present"]


def test_each_is_lazy_and_restartable() -> None:
    registry = FactRegistry()
    calls, body = _counting("v")
    registry.add("x", body=body)

    iterator = registry.each()
    assert calls[0] == 0
    assert list(iterator) == [("x", "v")]
    assert list(registry.each()) == [("x", "v")]
    assert calls[0] == 1


def test_first_resolution_with_a_value_wins() -> None:
    registry = FactRegistry()
    registry.add("os", body=lambda: None)
    registry.add("os", body=lambda: "Linux")
    registry.add("os", body=lambda: "Darwin")

    assert registry.value_of("os") == "Linux"


def test_raising_resolution_falls_through() -> None:
    registry = FactRegistry()

    def broken() -> str:
        raise RuntimeError("boom")

    registry.add("os", body=broken)
    registry.add("os", body=lambda: "Linux")

    assert registry.value_of("os") == "Linux"


def test_fact_decorator_registers_function() -> None:
    registry = FactRegistry()

    @registry.fact("Kernel", source="test")
    def kernel() -> str:
        return "Linux"

    assert kernel() == "Linux"
    assert registry.value_of("kernel") == "Linux"
    assert registry.lookup("kernel").resolutions[0].options == {"source": "test"}


def test_resolution_defaults_apply_to_new_resolutions() -> None:
    registry = FactRegistry(resolution_defaults={"timeout": 3.0})
    fact = registry.add("x", {"weight": 1}, lambda: 1)
    registry.add("x", {"timeout": 1.0}, lambda: 2)

    assert fact.resolutions[0].options == {"timeout": 3.0, "weight": 1}
    assert fact.resolutions[1].options == {"timeout": 1.0}


def test_remove_and_discard_origin() -> None:
    registry = FactRegistry()
    registry.add("x", body=lambda: "file", origin="a.py")
    registry.add("x", body=lambda: "direct")

    assert registry.value_of("x") == "file"
    assert registry.discard_origin({"a.py"}) == 1
    assert registry.value_of("x") == "direct"
    assert registry.discard_origin(set()) == 0

    assert registry.remove("X") is True
    assert registry.remove("x") is False


def test_concurrent_reads_resolve_once() -> None:
    registry = FactRegistry()
    calls, body = _counting("v")
    registry.add("x", body=body)
    results: list[object] = []

    def reader() -> None:
        for _ in range(50):
            results.append(registry.value_of("x"))

    threads = [threading.Thread(target=reader) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert calls[0] == 1
    assert results == ["v"] * 400


@pytest.mark.parametrize("mutation", ["flush", "clear", "discard_origin"])
def test_mutation_during_dependent_resolution_does_not_block(mutation: str) -> None:
    registry = FactRegistry()
    registry.add("y", body=lambda: "inner", origin="y.py")
    started = threading.Event()
    results: list[object] = []

    def dependent() -> object:
        started.set()
        time.sleep(0.2)
        return registry.value_of("y")

    registry.add("x", body=dependent)

    def mutate() -> None:
        started.wait(timeout=5)
        if mutation == "discard_origin":
            registry.discard_origin({"y.py"})
        else:
            getattr(registry, mutation)()

    def resolve() -> None:
        results.append(registry.value_of("x"))

    resolver = threading.Thread(target=resolve, daemon=True)
    mutator = threading.Thread(target=mutate, daemon=True)
    resolver.start()
    mutator.start()
    resolver.join(timeout=5)
    mutator.join(timeout=5)

    assert not resolver.is_alive()
    assert not mutator.is_alive()
    assert len(results) == 1
