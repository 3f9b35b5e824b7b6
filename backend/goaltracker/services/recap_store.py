"""Weekly reflection records, one per week."""
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from goaltracker.core import events
from goaltracker.core.clock import Clock
from goaltracker.core.constants import RECAP_FIELDS, RECAP_SECTIONS
from goaltracker.core.errors import ValidationError
from goaltracker.core.events import EventBus
from goaltracker.models.weekly_recap import WeeklyRecap
from goaltracker.repositories.recap_repository import RecapRepository
from goaltracker.services.week_calculator import WeekCalculator


class RecapStore:
    def __init__(
        self,
        db: Session,
        clock: Clock,
        weeks: Optional[WeekCalculator] = None,
        bus: Optional[EventBus] = None,
    ):
        self.repo = RecapRepository(db)
        self.clock = clock
        self.weeks = weeks or WeekCalculator(clock)
        self.bus = bus or EventBus()

    def get(self, week_start: date) -> Optional[WeeklyRecap]:
        return self.repo.get_for_week(self.weeks.week_start(week_start))

    def get_or_create(self, week_start: date) -> WeeklyRecap:
        week = self.weeks.week_start(week_start)
        existing = self.repo.get_for_week(week)
        if existing:
            return existing

        now = self.clock.now()
        recap = WeeklyRecap(week_start=week, created_at=now, updated_at=now)
        self.repo.add(recap)
        self.bus.publish(events.RECAP_CREATED, {"recap_id": recap.id, "week_start": week})
        return recap

    def update(self, recap: WeeklyRecap, **fields: Optional[str]) -> WeeklyRecap:
        """Overwrite the given fields; fields passed as None are left unchanged."""
        unknown = set(fields) - set(RECAP_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown recap field(s): {', '.join(sorted(unknown))}")

        for name, value in fields.items():
            if value is not None:
                setattr(recap, name, value)
        recap.updated_at = self.clock.now()
        self.repo.save(recap)
        self.bus.publish(
            events.RECAP_UPDATED, {"recap_id": recap.id, "week_start": recap.week_start}
        )
        return recap

    @staticmethod
    def has_content(recap: WeeklyRecap) -> bool:
        return any(getattr(recap, name) for name in RECAP_FIELDS)

    def export_text(self, recap: WeeklyRecap) -> str:
        """Plain-text export with one section per non-empty field."""
        output = f"Weekly Recap - {self.weeks.format_week_range(recap.week_start)}\n"
        output += "=" * 40 + "\n\n"
        for name, heading in RECAP_SECTIONS:
            value = getattr(recap, name)
            if value:
                output += f"{heading}\n{value}\n\n"
        return output
