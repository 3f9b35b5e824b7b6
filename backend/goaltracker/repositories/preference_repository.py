from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from goaltracker.db import persistence_guard
from goaltracker.models.preference import AppPreference


class PreferenceRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        with persistence_guard(self.db, f"read preference {key}"):
            row = self.db.get(AppPreference, key)
        return row.value if row else None

    def set(self, key: str, value: Optional[str]) -> None:
        with persistence_guard(self.db, f"write preference {key}"):
            row = self.db.get(AppPreference, key)
            if not row:
                row = AppPreference(key=key, value=value)
                self.db.add(row)
            else:
                row.value = value
            self.db.commit()

    def get_date(self, key: str) -> Optional[date]:
        raw = self.get(key)
        if not raw:
            return None
        try:
            return date.fromisoformat(raw)
        except ValueError:
            return None

    def set_date(self, key: str, value: Optional[date]) -> None:
        self.set(key, value.isoformat() if value else None)
