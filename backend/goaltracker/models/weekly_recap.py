import uuid

from sqlalchemy import Column, Date, DateTime, String, Text

from goaltracker.db import Base


class WeeklyRecap(Base):
    __tablename__ = "weekly_recaps"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Monday of the week; one recap per week is kept by get-or-create,
    # not by a unique constraint
    week_start = Column(Date, nullable=False, index=True)

    overview = Column(Text, nullable=True)
    wins = Column(Text, nullable=True)
    challenges = Column(Text, nullable=True)
    grateful_for = Column(Text, nullable=True)
    song_of_week = Column(String, nullable=True)
    lessons = Column(Text, nullable=True)
    next_week_focus = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
