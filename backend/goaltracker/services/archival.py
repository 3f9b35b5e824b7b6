"""Move completed goals out of the active lists into the archive."""
import logging
from datetime import date, datetime
from typing import Optional, Union

from sqlalchemy.orm import Session

from goaltracker.core import events
from goaltracker.core.clock import Clock
from goaltracker.core.constants import UNKNOWN_WEEK
from goaltracker.core.errors import NotFoundError
from goaltracker.core.events import EventBus
from goaltracker.core.time_utils import start_of_day
from goaltracker.models.archived_goal import ArchivedGoal
from goaltracker.models.goal import Goal
from goaltracker.repositories.archive_repository import ArchiveRepository
from goaltracker.repositories.goal_repository import GoalRepository

logger = logging.getLogger(__name__)


def snapshot_of(goal: Goal, archived_at: datetime) -> ArchivedGoal:
    return ArchivedGoal(
        original_goal_id=goal.id,
        title=goal.title,
        category=goal.category,
        notes=goal.notes,
        week_start=goal.week_start,
        created_at=goal.created_at,
        completed_at=goal.completed_at,
        due_date=goal.due_date,
        archived_at=archived_at,
    )


class ArchivalEngine:
    def __init__(self, db: Session, clock: Clock, bus: Optional[EventBus] = None):
        self.goals = GoalRepository(db)
        self.archive = ArchiveRepository(db)
        self.clock = clock
        self.bus = bus or EventBus()

    def archive_completed_before(self, cutoff: Union[date, datetime]) -> list[ArchivedGoal]:
        """Archive every goal completed strictly before `cutoff`.

        A plain date means midnight at the start of that day.
        """
        if not isinstance(cutoff, datetime):
            cutoff = start_of_day(cutoff)

        sources = self.goals.list_completed_before(cutoff)
        if not sources:
            return []

        now = self.clock.now()
        snapshots = [snapshot_of(goal, now) for goal in sources]
        self.archive.archive(snapshots, sources)

        logger.info("Archived %d goal(s) completed before %s", len(snapshots), cutoff)
        self.bus.publish(
            events.GOALS_ARCHIVED,
            {"archived_ids": [s.id for s in snapshots], "cutoff": cutoff},
        )
        return snapshots

    def archive_completed_before_today(self) -> list[ArchivedGoal]:
        # Today's completions stay visible in the active view until tomorrow
        return self.archive_completed_before(start_of_day(self.clock.now()))

    def get(self, archived_id: str) -> ArchivedGoal:
        archived = self.archive.get(archived_id)
        if not archived:
            raise NotFoundError("Archived goal not found")
        return archived

    def list_archived(self) -> list[ArchivedGoal]:
        return self.archive.list_all()

    def list_archived_by_week(self) -> dict[Union[date, str], list[ArchivedGoal]]:
        """Archived goals grouped by week, newest week first.

        Goals without a week_start are grouped under UNKNOWN_WEEK, last.
        """
        grouped: dict[Union[date, str], list[ArchivedGoal]] = {}
        unknown: list[ArchivedGoal] = []
        for archived in self.list_archived():
            if archived.week_start is None:
                unknown.append(archived)
            else:
                grouped.setdefault(archived.week_start, []).append(archived)

        ordered: dict[Union[date, str], list[ArchivedGoal]] = {
            week: grouped[week] for week in sorted(grouped, reverse=True)
        }
        if unknown:
            ordered[UNKNOWN_WEEK] = unknown
        return ordered

    def delete(self, archived: ArchivedGoal) -> None:
        archived_id = archived.id
        self.archive.delete(archived)
        self.bus.publish(events.ARCHIVE_DELETED, {"archived_id": archived_id})

    def clear_all(self) -> int:
        count = self.archive.delete_all()
        logger.info("Cleared %d archived goal(s)", count)
        self.bus.publish(events.ARCHIVE_CLEARED, {"deleted": count})
        return count
