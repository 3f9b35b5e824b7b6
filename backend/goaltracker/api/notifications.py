from typing import Literal

from fastapi import APIRouter, Depends

from goaltracker.api.deps import get_reminders
from goaltracker.schemas.notification import ReminderContent, ScheduledReminder
from goaltracker.services.reminders import ReminderBuilder


router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/schedule", response_model=list[ScheduledReminder])
def get_daily_schedule():
    return ReminderBuilder.daily_schedule()


@router.get("/events", response_model=list[ReminderContent])
def get_event_reminders(reminders: ReminderBuilder = Depends(get_reminders)):
    return reminders.event_reminders()


@router.get("/{kind}", response_model=ReminderContent)
def get_reminder(
    kind: Literal["morning", "midday", "end-of-day", "due-today"],
    reminders: ReminderBuilder = Depends(get_reminders),
):
    """Current content of one reminder, for the notification scheduler to deliver."""
    builders = {
        "morning": reminders.morning_briefing,
        "midday": reminders.midday_checkin,
        "end-of-day": reminders.end_of_day_review,
        "due-today": reminders.due_today_reminder,
    }
    return builders[kind]()
