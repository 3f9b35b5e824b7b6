from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ReminderContent(BaseModel):
    identifier: str
    title: str
    body: str
    # Set for one-off reminders (calendar events); None means "deliver now"
    fire_at: Optional[datetime] = None


class ScheduledReminder(BaseModel):
    """A reminder that repeats every day at hour:minute."""

    identifier: str
    hour: int
    minute: int
    time: str  # 'HH:MM'
    title: str
    body: str
