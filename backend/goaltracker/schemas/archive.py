from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from goaltracker.schemas.goal import GoalCategory


class ArchivedGoalRead(BaseModel):
    id: str
    original_goal_id: Optional[str] = None
    title: str
    category: GoalCategory
    notes: Optional[str] = None
    week_start: Optional[date] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    due_date: Optional[date] = None
    archived_at: datetime
    has_notes: bool = False

    model_config = ConfigDict(from_attributes=True)


class ArchiveWeekGroup(BaseModel):
    week_start: Optional[date] = None  # None for the "unknown" bucket
    label: str
    goals: list[ArchivedGoalRead]


class ArchiveRunResult(BaseModel):
    archived: int
    cutoff: datetime


class ArchiveClearResult(BaseModel):
    deleted: int
