from datetime import date

from fastapi import APIRouter, Depends

from goaltracker.api.deps import get_goal_store
from goaltracker.schemas.week import WeekDay, WeekInfo
from goaltracker.services.goal_store import GoalStore


router = APIRouter(prefix="/weeks", tags=["weeks"])


def week_info(day: date, store: GoalStore) -> WeekInfo:
    weeks = store.weeks
    start = weeks.week_start(day)
    days = []
    for d in weeks.days_of_week(start):
        weekday, number = weeks.format_day(d)
        days.append(WeekDay(day=d, weekday=weekday, day_number=number, is_today=weeks.is_today(d)))
    return WeekInfo(
        week_start=start,
        week_end=weeks.week_end(start),
        label=weeks.format_week_range(start),
        days=days,
        is_current=weeks.is_current_week(start),
        is_past=weeks.is_past_week(start),
        previous_week_start=weeks.previous_week_start(start),
        next_week_start=weeks.next_week_start(start),
        stats=store.week_stats(start),
    )


@router.get("/current", response_model=WeekInfo)
def get_current_week(store: GoalStore = Depends(get_goal_store)):
    return week_info(store.weeks.current_week_start, store)


@router.get("/{day}", response_model=WeekInfo)
def get_week(day: date, store: GoalStore = Depends(get_goal_store)):
    """Bounds, label and stats of the week containing `day`."""
    return week_info(day, store)
