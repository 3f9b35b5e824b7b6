"""Monday-first week math.

All week boundaries in the app come from here; nothing else recomputes them.
"""
from datetime import date, datetime, timedelta
from typing import Optional

from goaltracker.core.clock import Clock
from goaltracker.core.time_utils import (
    as_date,
    end_of_week,
    format_day,
    format_range,
    is_same_day,
    monday_of,
)


class WeekCalculator:
    def __init__(self, clock: Clock):
        self.clock = clock

    def week_start(self, value) -> date:
        """Monday of the week containing `value` (date or datetime)."""
        return monday_of(value)

    @property
    def current_week_start(self) -> date:
        return self.week_start(self.clock.now())

    def week_end(self, value) -> datetime:
        """23:59:59 on the Sunday of the week containing `value`."""
        return end_of_week(self.week_start(value))

    def previous_week_start(self, value) -> date:
        return self.week_start(value) - timedelta(weeks=1)

    def next_week_start(self, value) -> date:
        return self.week_start(value) + timedelta(weeks=1)

    def days_of_week(self, value) -> list[date]:
        start = self.week_start(value)
        return [start + timedelta(days=offset) for offset in range(7)]

    def is_current_week(self, value) -> bool:
        return self.week_start(value) == self.current_week_start

    def is_past_week(self, value) -> bool:
        return self.week_start(value) < self.current_week_start

    def is_today(self, value) -> bool:
        return is_same_day(value, self.clock.now())

    def should_perform_rollover(self, last_launch_week: Optional[date]) -> bool:
        # First launch ever: nothing to roll over from
        if last_launch_week is None:
            return False
        return self.week_start(last_launch_week) < self.current_week_start

    # --------- formatting --------- #

    def format_week_range(self, value) -> str:
        start = self.week_start(value)
        return format_range(start, as_date(self.week_end(start)))

    def format_day(self, value) -> tuple[str, str]:
        return format_day(value)
