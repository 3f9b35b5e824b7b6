"""Carry unfinished goals into the new week."""
import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from goaltracker.core import events
from goaltracker.core.clock import Clock
from goaltracker.core.events import EventBus
from goaltracker.models.goal import Goal
from goaltracker.repositories.goal_repository import GoalRepository
from goaltracker.services.week_calculator import WeekCalculator

logger = logging.getLogger(__name__)


class RolloverEngine:
    """Copies last week's incomplete goals into the current week.

    Rollover is an additive copy: the source goals stay in their week
    untouched and each copy points back at its source via rolled_over_from.
    Callers persist the new "last launch week" after calling `perform`, which
    is what keeps a second launch in the same week from rolling over again.
    """

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

    def perform(self, last_launch_week_start: Optional[date]) -> list[Goal]:
        if not self.weeks.should_perform_rollover(last_launch_week_start):
            return []
        return self.rollover()

    def rollover(self) -> list[Goal]:
        now = self.clock.now()
        previous_week = self.weeks.previous_week_start(now)
        current_week = self.weeks.current_week_start

        # Skip sources copied by an earlier run whose marker write failed
        copied = self.repo.rolled_over_source_ids(current_week)
        sources = [
            g for g in self.repo.list_incomplete_for_week(previous_week) if g.id not in copied
        ]
        copies = [
            Goal(
                title=source.title,
                category=source.category,
                is_completed=False,
                week_start=current_week,
                created_at=now,
                rolled_over_from=source.id,
                notes=source.notes,
                # Kept as-is; may tie with goals already created this week
                sort_order=source.sort_order,
                due_date=source.due_date,
            )
            for source in sources
        ]
        # One transaction: either every copy lands or none does
        self.repo.add_all(copies)

        if copies:
            logger.info(
                "Rolled over %d goal(s) from %s to %s", len(copies), previous_week, current_week
            )
            self.bus.publish(
                events.GOALS_ROLLED_OVER,
                {"week_start": current_week, "goal_ids": [g.id for g in copies]},
            )
        return copies
