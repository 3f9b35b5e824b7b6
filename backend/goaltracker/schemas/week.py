from datetime import date, datetime

from pydantic import BaseModel

from goaltracker.schemas.goal import WeekStats


class WeekDay(BaseModel):
    day: date
    weekday: str  # 'Mon'
    day_number: str  # '5'
    is_today: bool


class WeekInfo(BaseModel):
    week_start: date
    week_end: datetime
    label: str  # e.g. 'Jan 5 - 11, 2026'
    days: list[WeekDay]
    is_current: bool
    is_past: bool
    previous_week_start: date
    next_week_start: date
    stats: WeekStats
