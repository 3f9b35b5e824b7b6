from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from goaltracker.db import persistence_guard
from goaltracker.models.weekly_recap import WeeklyRecap


class RecapRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_for_week(self, week_start: date) -> Optional[WeeklyRecap]:
        with persistence_guard(self.db, "fetch recap"):
            return (
                self.db.query(WeeklyRecap)
                .filter(WeeklyRecap.week_start == week_start)
                .order_by(WeeklyRecap.created_at)
                .first()
            )

    def add(self, recap: WeeklyRecap) -> WeeklyRecap:
        with persistence_guard(self.db, "create recap"):
            self.db.add(recap)
            self.db.commit()
            self.db.refresh(recap)
        return recap

    def save(self, recap: WeeklyRecap) -> None:
        with persistence_guard(self.db, "save recap"):
            self.db.add(recap)
            self.db.commit()
