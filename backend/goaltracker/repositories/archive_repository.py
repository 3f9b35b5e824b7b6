from typing import Optional

from sqlalchemy.orm import Session

from goaltracker.db import persistence_guard
from goaltracker.models.archived_goal import ArchivedGoal
from goaltracker.models.goal import Goal


class ArchiveRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, archived_id: str) -> Optional[ArchivedGoal]:
        with persistence_guard(self.db, "load archived goal"):
            return self.db.get(ArchivedGoal, archived_id)

    def list_all(self) -> list[ArchivedGoal]:
        """Newest completion first."""
        with persistence_guard(self.db, "fetch archived goals"):
            return (
                self.db.query(ArchivedGoal)
                .order_by(ArchivedGoal.completed_at.desc(), ArchivedGoal.archived_at.desc())
                .all()
            )

    def archive(self, snapshots: list[ArchivedGoal], sources: list[Goal]) -> list[ArchivedGoal]:
        """Store snapshots and delete their source goals in one transaction."""
        if not snapshots and not sources:
            return []
        with persistence_guard(self.db, "archive goals"):
            self.db.add_all(snapshots)
            for goal in sources:
                self.db.delete(goal)
            self.db.commit()
            for snapshot in snapshots:
                self.db.refresh(snapshot)
        return snapshots

    def delete(self, archived: ArchivedGoal) -> None:
        with persistence_guard(self.db, "delete archived goal"):
            self.db.delete(archived)
            self.db.commit()

    def delete_all(self) -> int:
        with persistence_guard(self.db, "clear archive"):
            count = self.db.query(ArchivedGoal).delete()
            self.db.commit()
        return count
