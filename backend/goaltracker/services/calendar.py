"""Calendar collaborator.

The reminder builders only need `fetch_events(start, end)`. A real
deployment plugs in an adapter for the OS calendar; `InMemoryCalendar` is
the local implementation used when none is configured and in tests.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol

from goaltracker.core.errors import NotFoundError


@dataclass
class CalendarEvent:
    title: str
    start: datetime
    end: datetime
    is_all_day: bool = False
    location: Optional[str] = None
    notes: Optional[str] = None
    identifier: str = field(default_factory=lambda: str(uuid.uuid4()))


class CalendarProvider(Protocol):
    def fetch_events(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        ...


class InMemoryCalendar:
    def __init__(self, events: Optional[list[CalendarEvent]] = None):
        self._events: dict[str, CalendarEvent] = {}
        for event in events or []:
            self._events[event.identifier] = event

    def fetch_events(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        """Events overlapping [start, end), earliest first."""
        found = [e for e in self._events.values() if e.start < end and e.end > start]
        return sorted(found, key=lambda e: e.start)

    def create_event(
        self,
        title: str,
        start: datetime,
        end: datetime,
        is_all_day: bool = False,
        location: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> CalendarEvent:
        if end < start:
            raise ValueError("Event must not end before it starts")
        event = CalendarEvent(
            title=title,
            start=start,
            end=end,
            is_all_day=is_all_day,
            location=location,
            notes=notes,
        )
        self._events[event.identifier] = event
        return event

    def update_event(self, identifier: str, **changes) -> CalendarEvent:
        event = self._events.get(identifier)
        if event is None:
            raise NotFoundError("Event not found")
        for key, value in changes.items():
            if not hasattr(event, key) or key == "identifier":
                raise ValueError(f"Unknown event field: {key}")
            setattr(event, key, value)
        return event

    def delete_event(self, identifier: str) -> None:
        if self._events.pop(identifier, None) is None:
            raise NotFoundError("Event not found")
