"""Jobs that run once when the app starts, before goal data is served."""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from goaltracker.core.clock import Clock
from goaltracker.core.constants import LAST_LAUNCH_WEEK_KEY
from goaltracker.core.errors import PersistenceError
from goaltracker.core.events import EventBus
from goaltracker.repositories.preference_repository import PreferenceRepository
from goaltracker.services.archival import ArchivalEngine
from goaltracker.services.rollover import RolloverEngine
from goaltracker.services.week_calculator import WeekCalculator

logger = logging.getLogger(__name__)


@dataclass
class StartupReport:
    rolled_over: int = 0
    archived: int = 0
    rollover_failed: bool = False
    archival_failed: bool = False


def run_startup_jobs(db: Session, clock: Clock, bus: Optional[EventBus] = None) -> StartupReport:
    """Roll over last week's unfinished goals (once per week), then archive.

    Failures are logged and do not stop the app. A failed rollover does not
    advance the last-launch marker, so the next start tries again.
    """
    report = StartupReport()
    weeks = WeekCalculator(clock)
    prefs = PreferenceRepository(db)

    try:
        last_launch = prefs.get_date(LAST_LAUNCH_WEEK_KEY)
        copies = RolloverEngine(db, clock, weeks, bus).perform(last_launch)
        report.rolled_over = len(copies)
        prefs.set_date(LAST_LAUNCH_WEEK_KEY, weeks.current_week_start)
    except PersistenceError:
        report.rollover_failed = True
        logger.error("Rollover failed; will retry on next start")

    try:
        archived = ArchivalEngine(db, clock, bus).archive_completed_before_today()
        report.archived = len(archived)
    except PersistenceError:
        report.archival_failed = True
        logger.error("Archival of completed goals failed")

    logger.info(
        "Startup jobs done: %d rolled over, %d archived", report.rolled_over, report.archived
    )
    return report
