from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class WeeklyRecapRead(BaseModel):
    id: str
    week_start: date
    overview: Optional[str] = None
    wins: Optional[str] = None
    challenges: Optional[str] = None
    grateful_for: Optional[str] = None
    song_of_week: Optional[str] = None
    lessons: Optional[str] = None
    next_week_focus: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    has_content: bool = False

    model_config = ConfigDict(from_attributes=True)


class WeeklyRecapUpdate(BaseModel):
    """Only the fields sent are written."""

    overview: Optional[str] = None
    wins: Optional[str] = None
    challenges: Optional[str] = None
    grateful_for: Optional[str] = None
    song_of_week: Optional[str] = None
    lessons: Optional[str] = None
    next_week_focus: Optional[str] = None

    model_config = ConfigDict(extra="forbid")
