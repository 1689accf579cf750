"""
AgentRegistry — реестр транспортов к воркерам.

Отображение имя агента -> транспорт. Заполняется при старте сервиса
и читается на каждом запросе. Поддерживает перерегистрацию
(последняя запись выигрывает) и удаление во время работы.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import TYPE_CHECKING, Iterator, Optional

from .exceptions import AgentNotRegistered

if TYPE_CHECKING:
    from .transport import AgentTransport

logger = logging.getLogger(__name__)


class AgentRegistry:
    """
    Реестр транспортов с thread-safe доступом.

    Все чтения и записи взаимно исключены одной блокировкой: реестр маленький
    и записи редки, поэтому более тонкая синхронизация не нужна.

    Attributes:
        _agents: Словарь зарегистрированных транспортов (name -> transport).
        _lock: Блокировка для thread-safe операций.

    Example:
        >>> registry = AgentRegistry()
        >>> registry.register("calendar", calendar_transport)
        >>> registry.lookup("calendar")
        <HttpAgentTransport(name='calendar', url='http://localhost:8081')>
    """

    def __init__(self) -> None:
        """Инициализация пустого реестра."""
        self._agents: dict[str, AgentTransport] = {}
        self._lock = Lock()

    def register(self, name: str, transport: AgentTransport) -> None:
        """
        Зарегистрировать транспорт под именем агента.

        Повторная регистрация того же имени заменяет прежний транспорт.

        Args:
            name: Имя агента (ключ маршрутизации).
            transport: Транспорт к воркеру.

        Raises:
            ValueError: Если имя пустое.
        """
        if not name:
            raise ValueError("Agent name must be non-empty")
        with self._lock:
            previous = self._agents.get(name)
            self._agents[name] = transport
        if previous is not None and previous is not transport:
            logger.info("Replaced transport for agent '%s'", name)
        else:
            logger.info("agent registered: %s", name)

    def unregister(self, name: str) -> Optional[AgentTransport]:
        """
        Удалить агента из реестра.

        Args:
            name: Имя агента.

        Returns:
            Удалённый транспорт или None, если агент не найден.
        """
        with self._lock:
            transport = self._agents.pop(name, None)
        if transport is not None:
            logger.info("Unregistered agent '%s'", name)
        return transport

    def lookup(self, name: str) -> AgentTransport:
        """
        Получить транспорт по имени (с проверкой существования).

        Args:
            name: Имя агента.

        Returns:
            Транспорт к воркеру.

        Raises:
            AgentNotRegistered: Если агент не зарегистрирован.
        """
        with self._lock:
            transport = self._agents.get(name)
            if transport is None:
                raise AgentNotRegistered(name, available=sorted(self._agents))
            return transport

    def list_available(self) -> list[str]:
        """Отсортированный список имён зарегистрированных агентов."""
        with self._lock:
            return sorted(self._agents)

    def snapshot(self) -> dict[str, AgentTransport]:
        """Копия текущего содержимого реестра."""
        with self._lock:
            return dict(self._agents)

    def clear(self) -> None:
        """Очистить реестр."""
        with self._lock:
            count = len(self._agents)
            self._agents.clear()
        logger.info("Cleared registry, removed %d agents", count)

    def __len__(self) -> int:
        with self._lock:
            return len(self._agents)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._agents

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._agents))

    def __repr__(self) -> str:
        with self._lock:
            names = list(self._agents)
        return f"<AgentRegistry(agents={names})>"
