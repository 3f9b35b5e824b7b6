"""Weekly goals: creation, ordering, completion, focus and due dates."""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional, Union

from sqlalchemy.orm import Session

from goaltracker.core import events
from goaltracker.core.clock import Clock
from goaltracker.core.errors import NotFoundError, ValidationError
from goaltracker.core.events import EventBus
from goaltracker.core.time_utils import as_date, start_of_day
from goaltracker.models.goal import Goal
from goaltracker.repositories.goal_repository import GoalRepository
from goaltracker.schemas.goal import CategoryStats, GoalCategory, WeekStats
from goaltracker.services.week_calculator import WeekCalculator

logger = logging.getLogger(__name__)

CategoryLike = Union[GoalCategory, str, None]


def _clean_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("Goal title must not be empty")
    return cleaned


def _clean_notes(notes: Optional[str]) -> Optional[str]:
    # Empty notes mean "no notes"
    if notes is None or notes == "":
        return None
    return notes


class GoalStore:
    def __init__(
        self,
        db: Session,
        clock: Clock,
        weeks: Optional[WeekCalculator] = None,
        bus: Optional[EventBus] = None,
    ):
        self.repo = GoalRepository(db)
        self.clock = clock
        self.weeks = weeks or WeekCalculator(clock)
        self.bus = bus or EventBus()

    def _publish(self, event: str, goal: Goal) -> None:
        self.bus.publish(event, {"goal_id": goal.id, "week_start": goal.week_start})

    def next_sort_order(self, week_start: date, category: GoalCategory) -> int:
        current = self.repo.max_sort_order(week_start, category.value)
        return 0 if current is None else current + 1

    # --------- create / read --------- #

    def create(
        self,
        title: str,
        category: CategoryLike = GoalCategory.personal,
        week_start: Optional[date] = None,
        notes: Optional[str] = None,
        due_date: Optional[date] = None,
    ) -> Goal:
        """Create a goal at the end of its (week, category) bucket.

        `category` may be any string; unrecognized values become Personal.
        `week_start` may be any day of the target week and defaults to the
        current week.
        """
        title = _clean_title(title)
        cat = GoalCategory.parse(category)
        week = self.weeks.week_start(week_start) if week_start else self.weeks.current_week_start

        goal = Goal(
            title=title,
            category=cat.value,
            is_completed=False,
            week_start=week,
            created_at=self.clock.now(),
            notes=_clean_notes(notes),
            sort_order=self.next_sort_order(week, cat),
            due_date=as_date(due_date) if due_date else None,
        )
        self.repo.add(goal)
        logger.debug("Created goal %s in %s/%s", goal.id, week, cat.value)
        self._publish(events.GOAL_CREATED, goal)
        return goal

    def get(self, goal_id: str) -> Goal:
        goal = self.repo.get(goal_id)
        if not goal:
            raise NotFoundError("Goal not found")
        return goal

    def get_many(self, goal_ids: list[str]) -> list[Goal]:
        """Load goals in the given order; every id must exist."""
        goals = self.repo.get_many(goal_ids)
        if len(goals) != len(goal_ids):
            raise NotFoundError("Goal not found")
        return goals

    def list(self, week_start: date) -> list[Goal]:
        """Goals of a week ordered by (category, sort_order, created_at)."""
        return self.repo.list_for_week(self.weeks.week_start(week_start))

    def list_by_category(self, week_start: date) -> dict[GoalCategory, list[Goal]]:
        grouped: dict[GoalCategory, list[Goal]] = {c: [] for c in GoalCategory}
        for goal in self.list(week_start):
            grouped[goal.goal_category].append(goal)
        return grouped

    # --------- mutations --------- #

    def toggle_completion(self, goal: Goal) -> Goal:
        goal.is_completed = not goal.is_completed
        if goal.is_completed:
            goal.completed_at = self.clock.now()
            # A completed goal is no longer today's focus
            goal.focus_date = None
        else:
            goal.completed_at = None
        self.repo.save(goal)
        self._publish(events.GOAL_UPDATED, goal)
        return goal

    def update_title(self, goal: Goal, title: str) -> Goal:
        goal.title = _clean_title(title)
        self.repo.save(goal)
        self._publish(events.GOAL_UPDATED, goal)
        return goal

    def update_notes(self, goal: Goal, notes: Optional[str]) -> Goal:
        goal.notes = _clean_notes(notes)
        self.repo.save(goal)
        self._publish(events.GOAL_UPDATED, goal)
        return goal

    def update_due_date(self, goal: Goal, due_date: Optional[date]) -> Goal:
        goal.due_date = as_date(due_date) if due_date else None
        self.repo.save(goal)
        self._publish(events.GOAL_UPDATED, goal)
        return goal

    def is_focused_today(self, goal: Goal) -> bool:
        # Checked against today on every read; stale flags simply stop matching
        return goal.is_focused_on(self.clock.today())

    def toggle_focus_today(self, goal: Goal) -> Goal:
        if goal.is_completed:
            raise ValidationError("A completed goal cannot be today's focus")
        if self.is_focused_today(goal):
            goal.focus_date = None
        else:
            goal.focus_date = self.clock.now()
        self.repo.save(goal)
        self._publish(events.GOAL_UPDATED, goal)
        return goal

    def reorder(self, goals: list[Goal], category: CategoryLike = None) -> list[Goal]:
        """Renumber sort_order 0..n-1 following the order of `goals`.

        When `category` is given every goal must belong to it.
        """
        if category is not None:
            cat = GoalCategory.parse(category)
            if any(g.goal_category != cat for g in goals):
                raise ValidationError(f"All goals must be in category {cat.value}")
        for index, goal in enumerate(goals):
            goal.sort_order = index
        if goals:
            self.repo.save(*goals)
            self.bus.publish(
                events.GOALS_REORDERED,
                {"goal_ids": [g.id for g in goals], "week_start": goals[0].week_start},
            )
        return goals

    def move(self, goal: Goal, from_index: int, to_index: int, goals: list[Goal]) -> list[Goal]:
        """Move `goal` from `from_index` to `to_index` within `goals` and renumber.

        Returns the list in its new order. `to_index` is the goal's position
        in the resulting list and is clamped to the end.
        """
        if not 0 <= from_index < len(goals):
            raise ValidationError(f"from_index {from_index} out of range")
        if goals[from_index].id != goal.id:
            raise ValidationError("Goal is not at from_index")
        if to_index < 0:
            raise ValidationError(f"to_index {to_index} out of range")

        reordered = list(goals)
        moved = reordered.pop(from_index)
        reordered.insert(min(to_index, len(reordered)), moved)
        return self.reorder(reordered)

    def delete(self, goal: Goal) -> None:
        goal_id, week = goal.id, goal.week_start
        self.repo.delete(goal)
        self.bus.publish(events.GOAL_DELETED, {"goal_id": goal_id, "week_start": week})

    # --------- due dates --------- #

    def is_due_today(self, goal: Goal) -> bool:
        return goal.is_due_on(self.clock.today())

    def is_due_tomorrow(self, goal: Goal) -> bool:
        return goal.is_due_on(self.clock.today() + timedelta(days=1))

    def is_overdue(self, goal: Goal) -> bool:
        return goal.is_overdue_on(self.clock.today())

    def _week_filter(self, week_start: Optional[date]) -> Optional[date]:
        return self.weeks.week_start(week_start) if week_start else None

    def due_today(self, week_start: Optional[date] = None) -> list[Goal]:
        return self.repo.list_due(on=self.clock.today(), week_start=self._week_filter(week_start))

    def due_tomorrow(self, week_start: Optional[date] = None) -> list[Goal]:
        tomorrow = self.clock.today() + timedelta(days=1)
        return self.repo.list_due(on=tomorrow, week_start=self._week_filter(week_start))

    def overdue(self, week_start: Optional[date] = None) -> list[Goal]:
        return self.repo.list_due(before=self.clock.today(), week_start=self._week_filter(week_start))

    def get_all_goals_due_today(self) -> list[Goal]:
        return self.due_today()

    def get_all_overdue_goals(self) -> list[Goal]:
        return self.overdue()

    def todays_focused_goals(self, week_start: Optional[date] = None) -> list[Goal]:
        """Incomplete goals flagged as today's focus (current week by default)."""
        week = self.weeks.week_start(week_start) if week_start else self.weeks.current_week_start
        today = start_of_day(self.clock.now())
        return self.repo.list_focused_between(today, today + timedelta(days=1), week_start=week)

    # --------- stats --------- #

    def week_stats(self, week_start: date) -> WeekStats:
        week = self.weeks.week_start(week_start)
        goals = self.list(week)
        by_category = {c: CategoryStats() for c in GoalCategory}
        for goal in goals:
            bucket = by_category[goal.goal_category]
            bucket.total += 1
            if goal.is_completed:
                bucket.completed += 1
        return WeekStats(
            week_start=week,
            total=len(goals),
            completed=sum(1 for g in goals if g.is_completed),
            by_category=by_category,
        )
