"""Goal persistence.

Every mutating method commits before returning, so a read never sees a
change that is not stored yet.
"""
from datetime import date, datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from goaltracker.db import persistence_guard
from goaltracker.models.goal import Goal


class GoalRepository:
    def __init__(self, db: Session):
        self.db = db

    def _ordered(self, query):
        return query.order_by(Goal.category, Goal.sort_order, Goal.created_at)

    # --------- reads --------- #

    def get(self, goal_id: str) -> Optional[Goal]:
        with persistence_guard(self.db, "load goal"):
            return self.db.get(Goal, goal_id)

    def get_many(self, goal_ids: list[str]) -> list[Goal]:
        """Goals for the given ids, in the order of `goal_ids`; unknown ids are skipped."""
        if not goal_ids:
            return []
        with persistence_guard(self.db, "load goals"):
            rows = self.db.query(Goal).filter(Goal.id.in_(goal_ids)).all()
        by_id = {g.id: g for g in rows}
        return [by_id[i] for i in goal_ids if i in by_id]

    def list_for_week(self, week_start: date) -> list[Goal]:
        query = self.db.query(Goal).filter(Goal.week_start == week_start)
        with persistence_guard(self.db, "fetch goals"):
            return self._ordered(query).all()

    def list_incomplete_for_week(self, week_start: date) -> list[Goal]:
        query = (
            self.db.query(Goal)
            .filter(Goal.week_start == week_start)
            .filter(Goal.is_completed.is_(False))
        )
        with persistence_guard(self.db, "fetch incomplete goals"):
            return self._ordered(query).all()

    def rolled_over_source_ids(self, week_start: date) -> set[str]:
        """Ids of the goals already copied into `week_start`."""
        query = (
            self.db.query(Goal.rolled_over_from)
            .filter(Goal.week_start == week_start)
            .filter(Goal.rolled_over_from.isnot(None))
        )
        with persistence_guard(self.db, "fetch rolled over goals"):
            return {row[0] for row in query.all()}

    def list_completed_before(self, cutoff: datetime) -> list[Goal]:
        query = (
            self.db.query(Goal)
            .filter(Goal.is_completed.is_(True))
            .filter(Goal.completed_at < cutoff)
            .order_by(Goal.completed_at)
        )
        with persistence_guard(self.db, "fetch completed goals"):
            return query.all()

    def list_due(
        self,
        on: Optional[date] = None,
        before: Optional[date] = None,
        week_start: Optional[date] = None,
    ) -> list[Goal]:
        """Incomplete goals due on a day, or due before a day."""
        query = (
            self.db.query(Goal)
            .filter(Goal.is_completed.is_(False))
            .filter(Goal.due_date.isnot(None))
        )
        if on is not None:
            query = query.filter(Goal.due_date == on)
        if before is not None:
            query = query.filter(Goal.due_date < before)
        if week_start is not None:
            query = query.filter(Goal.week_start == week_start)
        with persistence_guard(self.db, "fetch due goals"):
            return query.order_by(Goal.due_date, Goal.created_at).all()

    def list_focused_between(
        self,
        start: datetime,
        end: datetime,
        week_start: Optional[date] = None,
    ) -> list[Goal]:
        """Incomplete goals whose focus_date falls in [start, end)."""
        query = (
            self.db.query(Goal)
            .filter(Goal.is_completed.is_(False))
            .filter(Goal.focus_date >= start)
            .filter(Goal.focus_date < end)
        )
        if week_start is not None:
            query = query.filter(Goal.week_start == week_start)
        with persistence_guard(self.db, "fetch focused goals"):
            return self._ordered(query).all()

    def max_sort_order(self, week_start: date, category: str) -> Optional[int]:
        with persistence_guard(self.db, "read sort order"):
            return (
                self.db.query(func.max(Goal.sort_order))
                .filter(Goal.week_start == week_start)
                .filter(Goal.category == category)
                .scalar()
            )

    # --------- writes --------- #

    def add(self, goal: Goal) -> Goal:
        with persistence_guard(self.db, "create goal"):
            self.db.add(goal)
            self.db.commit()
            self.db.refresh(goal)
        return goal

    def add_all(self, goals: list[Goal]) -> list[Goal]:
        """Insert a batch in one transaction: all rows are stored or none."""
        if not goals:
            return []
        with persistence_guard(self.db, "create goals"):
            self.db.add_all(goals)
            self.db.commit()
            for goal in goals:
                self.db.refresh(goal)
        return goals

    def save(self, *goals: Goal) -> None:
        """Commit pending field changes on the given goals."""
        with persistence_guard(self.db, "save goal"):
            for goal in goals:
                self.db.add(goal)
            self.db.commit()

    def delete(self, goal: Goal) -> None:
        with persistence_guard(self.db, "delete goal"):
            self.db.delete(goal)
            self.db.commit()
