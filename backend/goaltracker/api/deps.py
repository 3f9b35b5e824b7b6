"""Per-request wiring of the stores used by the routers."""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from goaltracker.core.clock import Clock, SystemClock
from goaltracker.core.config import settings
from goaltracker.core.events import EventBus
from goaltracker.db import get_db
from goaltracker.services.archival import ArchivalEngine
from goaltracker.services.calendar import CalendarProvider
from goaltracker.services.goal_store import GoalStore
from goaltracker.services.recap_store import RecapStore
from goaltracker.services.reminders import ReminderBuilder
from goaltracker.services.week_calculator import WeekCalculator


def get_clock() -> Clock:
    return SystemClock(settings.timezone)


def get_bus(request: Request) -> EventBus:
    return request.app.state.events


def get_calendar(request: Request) -> CalendarProvider | None:
    return getattr(request.app.state, "calendar", None)


def get_weeks(clock: Clock = Depends(get_clock)) -> WeekCalculator:
    return WeekCalculator(clock)


def get_goal_store(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    weeks: WeekCalculator = Depends(get_weeks),
    bus: EventBus = Depends(get_bus),
) -> GoalStore:
    return GoalStore(db, clock, weeks, bus)


def get_archival(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    bus: EventBus = Depends(get_bus),
) -> ArchivalEngine:
    return ArchivalEngine(db, clock, bus)


def get_recap_store(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    weeks: WeekCalculator = Depends(get_weeks),
    bus: EventBus = Depends(get_bus),
) -> RecapStore:
    return RecapStore(db, clock, weeks, bus)


def get_reminders(
    goals: GoalStore = Depends(get_goal_store),
    clock: Clock = Depends(get_clock),
    weeks: WeekCalculator = Depends(get_weeks),
    calendar: CalendarProvider | None = Depends(get_calendar),
) -> ReminderBuilder:
    return ReminderBuilder(goals, clock, weeks, calendar)

