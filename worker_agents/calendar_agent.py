"""
Демо-воркер календаря: создание событий и свободные слоты.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Any, Callable, Optional

from fastapi import FastAPI

from .base import create_worker_app, require_str

EVENT_OFFSET = timedelta(hours=24)
AVAILABILITY_OFFSET = timedelta(hours=48)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _rfc3339(value: datetime) -> str:
    return value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


class CalendarStore:
    """In-memory хранилище событий календаря."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or _utc_now
        self._events: list[dict[str, Any]] = []
        self._lock = Lock()

    def create_event(self, payload: dict[str, Any]) -> dict[str, Any]:
        title = require_str(payload, "title")
        event = {
            "id": str(uuid.uuid4()),
            "title": title,
            "time": _rfc3339(self._clock() + EVENT_OFFSET),
        }
        with self._lock:
            self._events.append(event)
        return {"event": event}

    def list_availability(self, payload: dict[str, Any]) -> dict[str, Any]:
        return {"avail": [_rfc3339(self._clock() + AVAILABILITY_OFFSET)]}

    def events(self) -> list[dict[str, Any]]:
        with self._lock:
            return [dict(e) for e in self._events]


def create_calendar_app(store: Optional[CalendarStore] = None) -> FastAPI:
    store = store or CalendarStore()
    app = create_worker_app(
        "calendar",
        {
            "create_event": store.create_event,
            "list_availability": store.list_availability,
        },
    )
    app.state.store = store
    return app
