from datetime import date, datetime
from typing import Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field


class GoalCategory(str, Enum):
    work = "Work"
    health = "Health"
    personal = "Personal"

    @classmethod
    def parse(cls, value) -> "GoalCategory":
        """Map any stored or incoming value to a category; unknown -> Personal."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.personal


class GoalCreate(BaseModel):
    """Schema for creating a new goal."""

    title: str
    # Any string is accepted; unrecognized values fall back to Personal
    category: str = GoalCategory.personal.value
    week_start: Optional[date] = None  # any day of the week; defaults to current week
    notes: Optional[str] = None
    due_date: Optional[date] = None


class GoalUpdate(BaseModel):
    """Schema for editing a goal (all fields optional).

    Send `"due_date": null` to clear the due date; omit it to leave it alone.
    """

    title: Optional[str] = None
    notes: Optional[str] = None
    due_date: Optional[date] = None

    model_config = ConfigDict(extra="ignore")


class GoalRead(BaseModel):
    """Schema returned to the client when reading a goal."""

    id: str
    title: str
    category: GoalCategory
    is_completed: bool
    week_start: date
    created_at: datetime
    completed_at: Optional[datetime] = None
    rolled_over_from: Optional[str] = None
    focus_date: Optional[datetime] = None
    notes: Optional[str] = None
    sort_order: int
    due_date: Optional[date] = None

    # Derived against "today" at read time
    is_focused_today: bool = False
    is_due_today: bool = False
    is_due_tomorrow: bool = False
    is_overdue: bool = False

    model_config = ConfigDict(from_attributes=True)


class GoalReorder(BaseModel):
    """Full list of goal ids in their new order."""

    goal_ids: list[str]


class GoalMove(BaseModel):
    from_index: int
    to_index: int
    # The list the indexes refer to, in its current order
    goal_ids: list[str]


class CategoryStats(BaseModel):
    total: int = 0
    completed: int = 0


class WeekStats(BaseModel):
    week_start: date
    total: int
    completed: int
    by_category: dict[GoalCategory, CategoryStats]

    @computed_field
    @property
    def progress_percent(self) -> int:
        if self.total == 0:
            return 0
        return int(self.completed / self.total * 100)
