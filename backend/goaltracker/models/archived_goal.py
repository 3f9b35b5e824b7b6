import uuid

from sqlalchemy import Column, Date, DateTime, String

from goaltracker.db import Base
from goaltracker.schemas.goal import GoalCategory


class ArchivedGoal(Base):
    """Snapshot of a completed goal, taken when the goal left the active list."""

    __tablename__ = "archived_goals"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Lookup only; the original goal row is deleted on archival
    original_goal_id = Column(String(36), nullable=True, index=True)

    title = Column(String, nullable=False)
    category = Column(String(20), nullable=False, server_default=GoalCategory.personal.value)
    notes = Column(String, nullable=True)

    week_start = Column(Date, nullable=True, index=True)
    created_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True, index=True)
    due_date = Column(Date, nullable=True)

    archived_at = Column(DateTime, nullable=False)

    @property
    def goal_category(self) -> GoalCategory:
        return GoalCategory.parse(self.category)

    @property
    def has_notes(self) -> bool:
        return bool(self.notes)
