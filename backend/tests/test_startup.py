from datetime import date, datetime

from sqlalchemy import text

from goaltracker.core.constants import LAST_LAUNCH_WEEK_KEY
from goaltracker.core.errors import PersistenceError
from goaltracker.models.goal import Goal
from goaltracker.repositories.preference_repository import PreferenceRepository
from goaltracker.services.startup import run_startup_jobs

W1 = date(2026, 1, 5)
W2 = date(2026, 1, 12)


def test_first_launch_records_week_without_rollover(db, goal_store, clock):
    goal_store.create("Open", "Work", week_start=W1)

    report = run_startup_jobs(db, clock)

    assert report.rolled_over == 0
    assert PreferenceRepository(db).get_date(LAST_LAUNCH_WEEK_KEY) == W2
    assert goal_store.list(W2) == []


def test_rollover_happens_once_per_week(db, goal_store, clock):
    PreferenceRepository(db).set_date(LAST_LAUNCH_WEEK_KEY, W1)
    goal_store.create("Finish report", "Work", week_start=W1)

    first = run_startup_jobs(db, clock)
    clock.advance(hours=3)
    second = run_startup_jobs(db, clock)

    assert first.rolled_over == 1
    assert second.rolled_over == 0
    assert [g.title for g in goal_store.list(W2)] == ["Finish report"]
    assert PreferenceRepository(db).get_date(LAST_LAUNCH_WEEK_KEY) == W2


def test_startup_archives_goals_completed_before_today(db, goal_store, clock):
    goal = goal_store.create("Ship v1", "Work")
    clock.set(datetime(2026, 1, 13, 17, 0))
    goal_store.toggle_completion(goal)
    clock.set(datetime(2026, 1, 14, 8, 0))

    report = run_startup_jobs(db, clock)

    assert report.archived == 1
    assert not report.archival_failed
    assert goal_store.list(W2) == []


def test_unreadable_marker_counts_as_first_launch(db, clock):
    PreferenceRepository(db).set(LAST_LAUNCH_WEEK_KEY, "not-a-date")
    report = run_startup_jobs(db, clock)
    assert report.rolled_over == 0
    assert PreferenceRepository(db).get_date(LAST_LAUNCH_WEEK_KEY) == W2


def test_failed_rollover_keeps_marker(engine, session_factory, clock):
    db = session_factory()
    try:
        PreferenceRepository(db).set_date(LAST_LAUNCH_WEEK_KEY, W1)
        with engine.begin() as conn:
            conn.execute(text("DROP TABLE goals"))

        report = run_startup_jobs(db, clock)

        assert report.rollover_failed
        assert report.archival_failed
        assert PreferenceRepository(db).get_date(LAST_LAUNCH_WEEK_KEY) == W1
    finally:
        db.close()


def test_startup_publishes_to_bus(db, goal_store, clock, bus, published):
    PreferenceRepository(db).set_date(LAST_LAUNCH_WEEK_KEY, W1)
    goal_store.create("Open", "Work", week_start=W1)
    published.clear()

    run_startup_jobs(db, clock, bus)

    assert published == ["goals.rolled_over"]
    assert db.query(Goal).filter(Goal.rolled_over_from.isnot(None)).count() == 1


def test_failed_marker_write_does_not_duplicate_rollover(db, goal_store, clock, monkeypatch):
    PreferenceRepository(db).set_date(LAST_LAUNCH_WEEK_KEY, W1)
    goal_store.create("Finish report", "Work", week_start=W1)

    original = PreferenceRepository.set_date
    calls = []

    def fail_once(self, key, value):
        calls.append(key)
        if len(calls) == 1:
            raise PersistenceError("Failed to write preference")
        return original(self, key, value)

    monkeypatch.setattr(PreferenceRepository, "set_date", fail_once)

    first = run_startup_jobs(db, clock)
    assert first.rollover_failed
    assert PreferenceRepository(db).get_date(LAST_LAUNCH_WEEK_KEY) == W1

    second = run_startup_jobs(db, clock)
    assert not second.rollover_failed
    assert second.rolled_over == 0
    assert [g.title for g in goal_store.list(W2)] == ["Finish report"]
    assert PreferenceRepository(db).get_date(LAST_LAUNCH_WEEK_KEY) == W2
