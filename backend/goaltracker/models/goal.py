import uuid

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String

from goaltracker.core.time_utils import as_date, is_same_day
from goaltracker.db import Base
from goaltracker.schemas.goal import GoalCategory


def new_id() -> str:
    return str(uuid.uuid4())


class Goal(Base):
    __tablename__ = "goals"

    id = Column(String(36), primary_key=True, default=new_id)

    title = Column(String, nullable=False)

    # Work, Health or Personal (GoalCategory values)
    category = Column(
        String(20),
        nullable=False,
        server_default=GoalCategory.personal.value,
    )

    is_completed = Column(Boolean, nullable=False, default=False)

    # Monday of the week the goal belongs to
    week_start = Column(Date, nullable=False, index=True)

    created_at = Column(DateTime, nullable=False)
    completed_at = Column(DateTime, nullable=True, index=True)

    # Id of the goal this one was copied from during rollover (no FK, the
    # source may be archived or deleted later)
    rolled_over_from = Column(String(36), nullable=True)

    # Day-scoped "today's focus" flag, read against today's date
    focus_date = Column(DateTime, nullable=True)

    notes = Column(String, nullable=True)

    # Manual order within (week_start, category)
    sort_order = Column(Integer, nullable=False, default=0)

    due_date = Column(Date, nullable=True, index=True)

    @property
    def goal_category(self) -> GoalCategory:
        return GoalCategory.parse(self.category)

    def is_focused_on(self, day) -> bool:
        return is_same_day(self.focus_date, day)

    def is_due_on(self, day) -> bool:
        return self.due_date is not None and self.due_date == as_date(day)

    def is_overdue_on(self, day) -> bool:
        # Completed goals are never overdue
        if self.is_completed or self.due_date is None:
            return False
        return self.due_date < as_date(day)

    def __repr__(self) -> str:
        return f"<Goal {self.id} {self.title!r} {self.week_start}>"
