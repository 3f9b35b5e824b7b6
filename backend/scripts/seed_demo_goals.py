"""Seed a few weeks of demo goals and recaps into the local database.

Run from the backend directory:
    python -m scripts.seed_demo_goals
"""
import random
from datetime import timedelta

from goaltracker.core.clock import SystemClock
from goaltracker.core.config import settings
from goaltracker.db import SessionLocal, init_db
from goaltracker.models.goal import Goal
from goaltracker.schemas.goal import GoalCategory
from goaltracker.services.goal_store import GoalStore
from goaltracker.services.recap_store import RecapStore
from goaltracker.services.week_calculator import WeekCalculator


DEMO_GOALS = {
    GoalCategory.work: ["Ship weekly release", "Review open PRs", "Write design notes"],
    GoalCategory.health: ["Run 3 times", "Sleep by 11pm", "Meal prep Sunday"],
    GoalCategory.personal: ["Call family", "Read 50 pages", "Plan weekend trip"],
}


def clear_recent_goals(db, weeks: int) -> None:
    """Delete goals in the seeded range so we can reseed cleanly."""
    weeks_calc = WeekCalculator(SystemClock(settings.timezone))
    cutoff = weeks_calc.current_week_start - timedelta(weeks=weeks)
    db.query(Goal).filter(Goal.week_start >= cutoff).delete()
    db.commit()


def seed_demo_goals(db, weeks: int = 4) -> None:
    """Create goals for the last `weeks` weeks; past weeks are mostly done."""
    clock = SystemClock(settings.timezone)
    goals = GoalStore(db, clock)
    recaps = RecapStore(db, clock, goals.weeks)
    current = goals.weeks.current_week_start

    created = 0
    for offset in range(weeks - 1, -1, -1):
        week = current - timedelta(weeks=offset)
        for category, titles in DEMO_GOALS.items():
            for title in titles:
                goal = goals.create(title, category, week_start=week)
                created += 1
                # Past weeks: most goals finished
                if offset > 0 and random.random() < 0.75:
                    goals.toggle_completion(goal)
        if offset > 0:
            recap = recaps.get_or_create(week)
            recaps.update(recap, overview="Demo week", wins="Kept the streak going")

    print(f"Seeded {created} demo goals")


def main():
    init_db()
    db = SessionLocal()
    try:
        clear_recent_goals(db, weeks=4)
        seed_demo_goals(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
