from datetime import date, datetime, timedelta

import pytest

from goaltracker.core.errors import NotFoundError
from goaltracker.services.calendar import CalendarEvent, InMemoryCalendar
from goaltracker.services.reminders import ReminderBuilder


@pytest.fixture
def calendar(clock):
    today = clock.today()

    def at(hour, minute=0, days=0):
        return datetime(today.year, today.month, today.day, hour, minute) + timedelta(days=days)

    return InMemoryCalendar(
        [
            CalendarEvent("Standup", at(10, 10), at(10, 25), identifier="standup"),
            CalendarEvent("Design review", at(14), at(15), location="Room 4", identifier="review"),
            CalendarEvent("Offsite", at(0), at(0, days=1), is_all_day=True, identifier="offsite"),
            CalendarEvent("Dentist", at(9, days=1), at(10, days=1), identifier="dentist"),
            CalendarEvent("Conference", at(9, days=8), at(17, days=8), identifier="conf"),
        ]
    )


@pytest.fixture
def reminders(goal_store, clock, weeks, calendar):
    return ReminderBuilder(goal_store, clock, weeks, calendar)


def _seed(goal_store, clock):
    goal_store.create("Report", "Work", due_date=clock.today())
    run = goal_store.create("Run 5k", "Health")
    goal_store.toggle_completion(run)
    deep = goal_store.create("Deep work", "Work")
    goal_store.toggle_focus_today(deep)


def test_morning_briefing(goal_store, clock, reminders):
    _seed(goal_store, clock)

    content = reminders.morning_briefing()

    assert content.identifier == "morning-briefing-202601141000"
    assert content.title == "☀️ Morning Briefing"
    assert content.body.splitlines() == [
        "📋 Goals: 1/3 complete",
        "⏰ 1 goal(s) due today",
        "🎯 Focus: Deep work",
        "📅 3 event(s) • Next: All day Offsite",
    ]
    assert content.fire_at is None


def test_morning_briefing_mentions_overdue_and_trims_focus_list(goal_store, clock):
    goal_store.create("Old", "Work", due_date=clock.today() - timedelta(days=2))
    for title in ["a", "b", "c"]:
        goal_store.toggle_focus_today(goal_store.create(title, "Personal"))

    content = ReminderBuilder(goal_store, clock).morning_briefing()

    lines = content.body.splitlines()
    assert "⚠️ 1 overdue goal(s)" in lines
    assert "🎯 Focus: a, b +1 more" in lines
    assert lines[-1] == "📅 No events today"


def test_midday_checkin_lists_rest_of_day(goal_store, clock, reminders):
    _seed(goal_store, clock)

    content = reminders.midday_checkin()

    assert content.title == "🔄 Mid-day Check-in"
    assert content.body.splitlines() == [
        "📋 Progress: 33% (1/3)",
        "⏰ 1 goal(s) still due today",
        "🎯 1 focus item(s) remaining",
        "📅 Coming up: 10:10 AM: Standup, 2:00 PM: Design review",
    ]


def test_end_of_day_review(goal_store, clock, reminders):
    _seed(goal_store, clock)
    goal_store.create("Slides", "Work", due_date=clock.today() + timedelta(days=1))

    content = reminders.end_of_day_review()

    assert content.identifier.startswith("end-of-day-")
    assert content.body.splitlines() == [
        "📋 Week progress: 25% (1/4)",
        "⚠️ 1 goal(s) still due today!",
        "⏰ 1 goal(s) due tomorrow",
        "⏳ 3 goal(s) remaining this week",
        "📅 Tomorrow: 1 event(s)",
    ]


def test_end_of_day_review_when_all_done(goal_store, clock):
    goal_store.toggle_completion(goal_store.create("Only", "Work"))

    lines = ReminderBuilder(goal_store, clock).end_of_day_review().body.splitlines()

    assert "✅ All goals complete!" in lines
    assert lines[-1] == "📅 Tomorrow: No events scheduled"


def test_due_today_reminder(goal_store, clock, reminders):
    assert reminders.due_today_reminder().body == "✅ No goals due today"

    for title in ["A", "B", "C", "D"]:
        goal_store.create(title, "Work", due_date=clock.today())
        clock.advance(seconds=1)
    goal_store.create("Late", "Work", due_date=clock.today() - timedelta(days=1))

    content = reminders.due_today_reminder()
    assert content.title == "⏰ Goals Due Today"
    assert content.body.splitlines() == [
        "⚠️ 1 overdue goal(s)",
        "📋 Due today: A, B, C +1 more",
    ]


def test_daily_schedule():
    schedule = ReminderBuilder.daily_schedule()

    assert [r.identifier for r in schedule] == [
        "morning-briefing",
        "due-today-morning",
        "midday-checkin",
        "due-today-afternoon",
        "end-of-day",
    ]
    assert [r.time for r in schedule] == ["08:00", "09:00", "12:00", "14:00", "18:00"]


def test_event_reminders_fire_fifteen_minutes_before(reminders):
    upcoming = reminders.event_reminders()

    # Standup starts too soon, Offsite is all-day, Conference is beyond a week
    assert [r.identifier for r in upcoming] == ["event-review", "event-dentist"]
    assert upcoming[0].fire_at == datetime(2026, 1, 14, 13, 45)
    assert upcoming[0].body == "Design review"
    assert upcoming[0].title == "⏰ Starting in 15 minutes"


def test_builders_without_calendar(goal_store, clock):
    builder = ReminderBuilder(goal_store, clock)
    assert builder.today_events() == []
    assert builder.event_reminders() == []


def test_calendar_create_update_delete(clock):
    cal = InMemoryCalendar()
    start = datetime(2026, 1, 15, 9, 0)

    event = cal.create_event("Call", start, start + timedelta(hours=1), location="Zoom")
    assert cal.fetch_events(start, start + timedelta(days=1)) == [event]

    cal.update_event(event.identifier, title="Call with Sam")
    assert event.title == "Call with Sam"

    cal.delete_event(event.identifier)
    assert cal.fetch_events(start, start + timedelta(days=1)) == []


def test_calendar_rejects_bad_input():
    cal = InMemoryCalendar()
    start = datetime(2026, 1, 15, 9, 0)

    with pytest.raises(ValueError):
        cal.create_event("Backwards", start, start - timedelta(minutes=1))

    event = cal.create_event("Call", start, start)
    with pytest.raises(ValueError):
        cal.update_event(event.identifier, colour="red")
    with pytest.raises(NotFoundError):
        cal.update_event("missing", title="x")
    with pytest.raises(NotFoundError):
        cal.delete_event("missing")


def test_fetch_events_uses_overlap(clock):
    cal = InMemoryCalendar()
    day = date(2026, 1, 15)
    late = cal.create_event("Late", datetime(2026, 1, 14, 23, 0), datetime(2026, 1, 15, 1, 0))

    found = cal.fetch_events(datetime.combine(day, datetime.min.time()), datetime(2026, 1, 16))
    assert found == [late]
