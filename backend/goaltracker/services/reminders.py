"""Text for the daily reminder notifications.

Only the content is built here. Scheduling and delivery belong to whatever
notification system the app runs under; it polls these builders.
"""
from datetime import datetime, timedelta
from typing import Optional

from goaltracker.core.clock import Clock
from goaltracker.core.constants import (
    DAILY_REMINDERS,
    EVENT_REMINDER_HORIZON_DAYS,
    EVENT_REMINDER_LEAD_MIN,
)
from goaltracker.core.time_utils import format_clock_time, hhmm, start_of_day
from goaltracker.schemas.notification import ReminderContent, ScheduledReminder
from goaltracker.services.calendar import CalendarEvent, CalendarProvider
from goaltracker.services.goal_store import GoalStore
from goaltracker.services.week_calculator import WeekCalculator


def _titles(goals, limit: int) -> str:
    shown = ", ".join(g.title for g in goals[:limit])
    if len(goals) > limit:
        shown += f" +{len(goals) - limit} more"
    return shown


def _event_time(event: CalendarEvent) -> str:
    return "All day" if event.is_all_day else format_clock_time(event.start)


class ReminderBuilder:
    def __init__(
        self,
        goals: GoalStore,
        clock: Clock,
        weeks: Optional[WeekCalculator] = None,
        calendar: Optional[CalendarProvider] = None,
    ):
        self.goals = goals
        self.clock = clock
        self.weeks = weeks or WeekCalculator(clock)
        self.calendar = calendar

    def _content(self, slot: str, title: str, lines: list[str]) -> ReminderContent:
        stamp = self.clock.now().strftime("%Y%m%d%H%M")
        return ReminderContent(identifier=f"{slot}-{stamp}", title=title, body="\n".join(lines))

    # --------- calendar helpers --------- #

    def _events(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        if self.calendar is None:
            return []
        return sorted(self.calendar.fetch_events(start, end), key=lambda e: e.start)

    def today_events(self) -> list[CalendarEvent]:
        today = start_of_day(self.clock.now())
        return self._events(today, today + timedelta(days=1))

    def rest_of_day_events(self) -> list[CalendarEvent]:
        now = self.clock.now()
        end = start_of_day(now) + timedelta(days=1)
        return [e for e in self._events(now, end) if not e.is_all_day]

    def tomorrow_events(self) -> list[CalendarEvent]:
        tomorrow = start_of_day(self.clock.now()) + timedelta(days=1)
        return self._events(tomorrow, tomorrow + timedelta(days=1))

    # --------- content --------- #

    def morning_briefing(self) -> ReminderContent:
        week = self.weeks.current_week_start
        stats = self.goals.week_stats(week)
        lines = [f"📋 Goals: {stats.completed}/{stats.total} complete"]

        due_today = self.goals.get_all_goals_due_today()
        if due_today:
            lines.append(f"⏰ {len(due_today)} goal(s) due today")

        overdue = self.goals.get_all_overdue_goals()
        if overdue:
            lines.append(f"⚠️ {len(overdue)} overdue goal(s)")

        focused = self.goals.todays_focused_goals(week)
        if focused:
            lines.append(f"🎯 Focus: {_titles(focused, 2)}")

        events = self.today_events()
        if events:
            first = events[0]
            lines.append(f"📅 {len(events)} event(s) • Next: {_event_time(first)} {first.title}")
        else:
            lines.append("📅 No events today")

        return self._content("morning-briefing", "☀️ Morning Briefing", lines)

    def midday_checkin(self) -> ReminderContent:
        week = self.weeks.current_week_start
        stats = self.goals.week_stats(week)
        lines = [f"📋 Progress: {stats.progress_percent}% ({stats.completed}/{stats.total})"]

        due_today = self.goals.get_all_goals_due_today()
        if due_today:
            lines.append(f"⏰ {len(due_today)} goal(s) still due today")

        focused = self.goals.todays_focused_goals(week)
        if focused:
            lines.append(f"🎯 {len(focused)} focus item(s) remaining")

        events = self.rest_of_day_events()
        if events:
            upcoming = ", ".join(f"{_event_time(e)}: {e.title}" for e in events[:2])
            lines.append(f"📅 Coming up: {upcoming}")
        else:
            lines.append("📅 No more events today")

        return self._content("midday-checkin", "🔄 Mid-day Check-in", lines)

    def end_of_day_review(self) -> ReminderContent:
        week = self.weeks.current_week_start
        stats = self.goals.week_stats(week)
        lines = [f"📋 Week progress: {stats.progress_percent}% ({stats.completed}/{stats.total})"]

        due_today = self.goals.get_all_goals_due_today()
        if due_today:
            lines.append(f"⚠️ {len(due_today)} goal(s) still due today!")

        due_tomorrow = self.goals.due_tomorrow(week)
        if due_tomorrow:
            lines.append(f"⏰ {len(due_tomorrow)} goal(s) due tomorrow")

        remaining = stats.total - stats.completed
        if remaining > 0:
            lines.append(f"⏳ {remaining} goal(s) remaining this week")
        else:
            lines.append("✅ All goals complete!")

        events = self.tomorrow_events()
        if events:
            lines.append(f"📅 Tomorrow: {len(events)} event(s)")
        else:
            lines.append("📅 Tomorrow: No events scheduled")

        return self._content("end-of-day", "🌙 End of Day Review", lines)

    def due_today_reminder(self) -> ReminderContent:
        due_today = self.goals.get_all_goals_due_today()
        overdue = self.goals.get_all_overdue_goals()

        lines = []
        if overdue:
            lines.append(f"⚠️ {len(overdue)} overdue goal(s)")
        if due_today:
            lines.append(f"📋 Due today: {_titles(due_today, 3)}")
        elif not overdue:
            lines.append("✅ No goals due today")

        return self._content("due-today", "⏰ Goals Due Today", lines)

    # --------- schedules --------- #

    @staticmethod
    def daily_schedule() -> list[ScheduledReminder]:
        return [
            ScheduledReminder(
                identifier=identifier,
                hour=hour,
                minute=minute,
                time=hhmm(hour, minute),
                title=title,
                body=body,
            )
            for identifier, hour, minute, title, body in DAILY_REMINDERS
        ]

    def event_reminders(self, days: int = EVENT_REMINDER_HORIZON_DAYS) -> list[ReminderContent]:
        """One reminder shortly before each timed event in the next `days` days."""
        now = self.clock.now()
        reminders = []
        for event in self._events(now, now + timedelta(days=days)):
            if event.is_all_day:
                continue
            fire_at = event.start - timedelta(minutes=EVENT_REMINDER_LEAD_MIN)
            if fire_at <= now:
                continue
            reminders.append(
                ReminderContent(
                    identifier=f"event-{event.identifier}",
                    title=f"⏰ Starting in {EVENT_REMINDER_LEAD_MIN} minutes",
                    body=event.title,
                    fire_at=fire_at,
                )
            )
        return reminders
