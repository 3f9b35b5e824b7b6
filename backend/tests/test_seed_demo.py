import random

from goaltracker.models.goal import Goal
from goaltracker.models.weekly_recap import WeeklyRecap
from scripts.seed_demo_goals import DEMO_GOALS, clear_recent_goals, seed_demo_goals


def test_seed_and_clear(db):
    random.seed(7)
    per_week = sum(len(titles) for titles in DEMO_GOALS.values())

    seed_demo_goals(db, weeks=3)

    assert db.query(Goal).count() == 3 * per_week
    # Only past weeks get a recap
    assert db.query(WeeklyRecap).count() == 2
    # The current week is left open
    current = max(g.week_start for g in db.query(Goal).all())
    assert db.query(Goal).filter(Goal.week_start == current, Goal.is_completed.is_(True)).count() == 0

    clear_recent_goals(db, weeks=3)
    assert db.query(Goal).count() == 0
