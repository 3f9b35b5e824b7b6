from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from goaltracker.api.deps import get_recap_store
from goaltracker.models.weekly_recap import WeeklyRecap
from goaltracker.schemas.recap import WeeklyRecapRead, WeeklyRecapUpdate
from goaltracker.services.recap_store import RecapStore


router = APIRouter(prefix="/recaps", tags=["recaps"])


def to_read(recap: WeeklyRecap, store: RecapStore) -> WeeklyRecapRead:
    return WeeklyRecapRead.model_validate(recap).model_copy(
        update={"has_content": store.has_content(recap)}
    )


@router.get("/{week_start}", response_model=WeeklyRecapRead)
def get_recap(week_start: date, store: RecapStore = Depends(get_recap_store)):
    """Recap of the week containing `week_start`; created empty on first access."""
    return to_read(store.get_or_create(week_start), store)


@router.patch("/{week_start}", response_model=WeeklyRecapRead)
def update_recap(
    week_start: date,
    payload: WeeklyRecapUpdate,
    store: RecapStore = Depends(get_recap_store),
):
    recap = store.get_or_create(week_start)
    store.update(recap, **payload.model_dump(exclude_unset=True))
    return to_read(recap, store)


@router.get("/{week_start}/export", response_class=PlainTextResponse)
def export_recap(week_start: date, store: RecapStore = Depends(get_recap_store)):
    return store.export_text(store.get_or_create(week_start))
