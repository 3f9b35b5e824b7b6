from datetime import date, datetime, timedelta

from goaltracker.core.constants import UNKNOWN_WEEK
from goaltracker.models.archived_goal import ArchivedGoal
from goaltracker.models.goal import Goal

W1 = date(2026, 1, 5)


def _complete_at(goal_store, clock, goal, when):
    saved = clock.now()
    clock.set(when)
    goal_store.toggle_completion(goal)
    clock.set(saved)
    return goal


def test_archive_round_trip(goal_store, archival, clock, db):
    goal = goal_store.create("Ship v1", "Work", week_start=W1, notes="tag release")
    goal_id = goal.id
    _complete_at(goal_store, clock, goal, datetime(2026, 1, 7, 16, 30))

    archived = archival.archive_completed_before(W1 + timedelta(days=8))

    assert len(archived) == 1
    snapshot = archived[0]
    assert snapshot.original_goal_id == goal_id
    assert snapshot.title == "Ship v1"
    assert snapshot.category == "Work"
    assert snapshot.notes == "tag release"
    assert snapshot.week_start == W1
    assert snapshot.completed_at == datetime(2026, 1, 7, 16, 30)
    assert snapshot.archived_at == clock.now()
    assert snapshot.has_notes

    assert goal_store.list(W1) == []
    assert db.get(Goal, goal_id) is None
    assert [a.id for a in archival.list_archived()] == [snapshot.id]


def test_cutoff_is_exclusive(goal_store, archival, clock):
    goal = goal_store.create("Edge", "Work", week_start=W1)
    _complete_at(goal_store, clock, goal, datetime(2026, 1, 8, 0, 0))

    assert archival.archive_completed_before(datetime(2026, 1, 8, 0, 0)) == []
    assert len(archival.archive_completed_before(datetime(2026, 1, 8, 0, 1))) == 1


def test_date_cutoff_means_start_of_day(goal_store, archival, clock):
    goal = goal_store.create("Late night", "Work", week_start=W1)
    _complete_at(goal_store, clock, goal, datetime(2026, 1, 8, 23, 0))

    assert archival.archive_completed_before(date(2026, 1, 8)) == []
    assert len(archival.archive_completed_before(date(2026, 1, 9))) == 1


def test_incomplete_goals_are_never_archived(goal_store, archival):
    goal_store.create("Open", "Work", week_start=W1)
    assert archival.archive_completed_before(datetime(2030, 1, 1)) == []
    assert len(goal_store.list(W1)) == 1


def test_archive_completed_before_today_keeps_todays_completions(goal_store, archival, clock):
    yesterday = goal_store.create("Yesterday", "Work")
    today = goal_store.create("Today", "Work")
    _complete_at(goal_store, clock, yesterday, clock.now() - timedelta(days=1))
    goal_store.toggle_completion(today)

    archived = archival.archive_completed_before_today()

    assert [a.title for a in archived] == ["Yesterday"]
    assert [g.title for g in goal_store.list(clock.today())] == ["Today"]


def test_nothing_to_archive_publishes_nothing(archival, published):
    assert archival.archive_completed_before_today() == []
    assert published == []


def test_list_archived_newest_completion_first(goal_store, archival, clock):
    for day, title in [(6, "first"), (8, "second"), (7, "middle")]:
        goal = goal_store.create(title, "Work", week_start=W1)
        _complete_at(goal_store, clock, goal, datetime(2026, 1, day, 12, 0))
    archival.archive_completed_before_today()

    assert [a.title for a in archival.list_archived()] == ["second", "middle", "first"]


def test_list_archived_by_week(goal_store, archival, clock, db):
    older = goal_store.create("Older", "Health", week_start=date(2025, 12, 29))
    newer = goal_store.create("Newer", "Work", week_start=W1)
    _complete_at(goal_store, clock, older, datetime(2026, 1, 1, 9, 0))
    _complete_at(goal_store, clock, newer, datetime(2026, 1, 6, 9, 0))
    archival.archive_completed_before_today()

    db.add(ArchivedGoal(title="Imported", category="Personal", archived_at=clock.now()))
    db.commit()

    grouped = archival.list_archived_by_week()

    assert list(grouped) == [W1, date(2025, 12, 29), UNKNOWN_WEEK]
    assert [a.title for a in grouped[W1]] == ["Newer"]
    assert [a.title for a in grouped[UNKNOWN_WEEK]] == ["Imported"]


def test_delete_and_clear(goal_store, archival, clock, published):
    for title in ["a", "b", "c"]:
        goal = goal_store.create(title, "Work", week_start=W1)
        _complete_at(goal_store, clock, goal, datetime(2026, 1, 6, 9, 0))
    archived = archival.archive_completed_before_today()
    published.clear()

    archival.delete(archived[0])
    assert len(archival.list_archived()) == 2

    assert archival.clear_all() == 2
    assert archival.list_archived() == []
    assert archival.clear_all() == 0
    assert published == ["archive.deleted", "archive.cleared", "archive.cleared"]
