"""
Тесты для AgentRegistry — реестра транспортов.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from agent_orchestrator.exceptions import AgentNotRegistered
from agent_orchestrator.registry import AgentRegistry


@pytest.fixture
def registry():
    """Создаёт новый реестр для каждого теста."""
    return AgentRegistry()


class TestAgentRegistryBasic:
    """Базовые тесты AgentRegistry."""

    def test_empty_registry(self, registry):
        assert len(registry) == 0
        assert registry.list_available() == []

    def test_register_and_lookup(self, registry, make_transport):
        transport = make_transport("calendar")

        registry.register("calendar", transport)

        assert "calendar" in registry
        assert registry.lookup("calendar") is transport
        assert registry.list_available() == ["calendar"]

    def test_reregister_replaces(self, registry, make_transport):
        """Последняя запись выигрывает."""
        first = make_transport("calendar")
        second = make_transport("calendar")

        registry.register("calendar", first)
        registry.register("calendar", second)

        assert len(registry) == 1
        assert registry.lookup("calendar") is second

    def test_empty_name_rejected(self, registry, make_transport):
        with pytest.raises(ValueError):
            registry.register("", make_transport())


class TestAgentRegistryLookup:
    """Тесты поиска."""

    def test_lookup_missing_raises(self, registry, make_transport):
        registry.register("todo", make_transport("todo"))

        with pytest.raises(AgentNotRegistered) as exc_info:
            registry.lookup("calendar")

        assert exc_info.value.agent == "calendar"
        assert exc_info.value.details["available"] == ["todo"]
        assert exc_info.value.message == "agent calendar not registered"


class TestAgentRegistryMutation:
    """Удаление и очистка."""

    def test_unregister(self, registry, make_transport):
        transport = make_transport()
        registry.register("todo", transport)

        removed = registry.unregister("todo")

        assert removed is transport
        assert "todo" not in registry
        with pytest.raises(AgentNotRegistered):
            registry.lookup("todo")

    def test_unregister_missing(self, registry):
        assert registry.unregister("nonexistent") is None

    def test_clear(self, registry, make_transport):
        registry.register("a", make_transport())
        registry.register("b", make_transport())

        registry.clear()

        assert len(registry) == 0

    def test_snapshot_is_copy(self, registry, make_transport):
        registry.register("a", make_transport())

        snapshot = registry.snapshot()
        snapshot["b"] = make_transport()

        assert "b" not in registry

    def test_iter_and_repr(self, registry, make_transport):
        registry.register("b", make_transport())
        registry.register("a", make_transport())

        assert sorted(registry) == ["a", "b"]
        assert "AgentRegistry" in repr(registry)


class TestAgentRegistryConcurrency:
    """Конкурентная регистрация и чтение."""

    def test_concurrent_registration_no_lost_entries(self, registry, make_transport):
        count = 200
        transports = {f"agent_{i}": make_transport(f"agent_{i}") for i in range(count)}

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(lambda item: registry.register(*item), transports.items()))

        assert len(registry) == count
        for name, transport in transports.items():
            assert registry.lookup(name) is transport

    def test_concurrent_reads_during_writes(self, registry, make_transport):
        registry.register("stable", make_transport("stable"))

        def write(i):
            registry.register(f"w{i}", make_transport())
            return True

        def read(_):
            return registry.lookup("stable").name == "stable"

        with ThreadPoolExecutor(max_workers=8) as pool:
            writes = pool.map(write, range(100))
            reads = pool.map(read, range(100))
            assert all(writes)
            assert all(reads)

        assert len(registry) == 101
