"""Time sources.

Everything that needs "now" takes a clock so tests can move across day and
week boundaries deterministically. Timestamps are naive local wall time,
matching what is stored in the database.
"""
from datetime import date, datetime, timedelta, timezone

from goaltracker.core.time_utils import to_local_datetime


class Clock:
    def now(self) -> datetime:
        raise NotImplementedError

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Wall clock in the configured timezone."""

    def __init__(self, tz_name: str | None = "local"):
        self.tz_name = tz_name

    def now(self) -> datetime:
        local = to_local_datetime(datetime.now(timezone.utc), self.tz_name)
        return local.replace(tzinfo=None)


class FixedClock(Clock):
    """A clock that only moves when told to."""

    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, **kwargs) -> datetime:
        self._now = self._now + timedelta(**kwargs)
        return self._now
