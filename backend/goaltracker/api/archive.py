from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from goaltracker.api.deps import get_archival, get_weeks
from goaltracker.core.constants import UNKNOWN_WEEK
from goaltracker.core.time_utils import start_of_day
from goaltracker.schemas.archive import (
    ArchiveClearResult,
    ArchivedGoalRead,
    ArchiveRunResult,
    ArchiveWeekGroup,
)
from goaltracker.services.archival import ArchivalEngine
from goaltracker.services.week_calculator import WeekCalculator


router = APIRouter(prefix="/archive", tags=["archive"])


@router.get("/", response_model=list[ArchivedGoalRead])
def list_archived(engine: ArchivalEngine = Depends(get_archival)):
    """Archived goals, most recently completed first."""
    return engine.list_archived()


@router.get("/by-week", response_model=list[ArchiveWeekGroup])
def list_archived_by_week(
    engine: ArchivalEngine = Depends(get_archival),
    weeks: WeekCalculator = Depends(get_weeks),
):
    groups = []
    for week, goals in engine.list_archived_by_week().items():
        rows = [ArchivedGoalRead.model_validate(g) for g in goals]
        if week == UNKNOWN_WEEK:
            groups.append(ArchiveWeekGroup(week_start=None, label="Unknown week", goals=rows))
        else:
            groups.append(
                ArchiveWeekGroup(week_start=week, label=weeks.format_week_range(week), goals=rows)
            )
    return groups


@router.post("/run", response_model=ArchiveRunResult)
def run_archival(
    before: Optional[date] = Query(None, description="Archive goals completed before this day; default today"),
    engine: ArchivalEngine = Depends(get_archival),
):
    cutoff = start_of_day(before or engine.clock.today())
    archived = engine.archive_completed_before(cutoff)
    return ArchiveRunResult(archived=len(archived), cutoff=cutoff)


@router.delete("/{archived_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_archived(archived_id: str, engine: ArchivalEngine = Depends(get_archival)):
    engine.delete(engine.get(archived_id))


@router.delete("/", response_model=ArchiveClearResult)
def clear_archive(engine: ArchivalEngine = Depends(get_archival)):
    return ArchiveClearResult(deleted=engine.clear_all())
