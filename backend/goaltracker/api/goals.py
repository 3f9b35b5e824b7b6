from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from goaltracker.api.deps import get_goal_store
from goaltracker.models.goal import Goal
from goaltracker.schemas.goal import (
    GoalCategory,
    GoalCreate,
    GoalMove,
    GoalRead,
    GoalReorder,
    GoalUpdate,
    WeekStats,
)
from goaltracker.services.goal_store import GoalStore


router = APIRouter(prefix="/goals", tags=["goals"])


def to_read(goal: Goal, store: GoalStore) -> GoalRead:
    """Serialize a goal with its today-relative flags filled in."""
    return GoalRead.model_validate(goal).model_copy(
        update={
            "is_focused_today": store.is_focused_today(goal),
            "is_due_today": store.is_due_today(goal),
            "is_due_tomorrow": store.is_due_tomorrow(goal),
            "is_overdue": store.is_overdue(goal),
        }
    )


def _week(store: GoalStore, week_start: Optional[date]) -> date:
    return store.weeks.week_start(week_start) if week_start else store.weeks.current_week_start


@router.post("/", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
def create_goal(payload: GoalCreate, store: GoalStore = Depends(get_goal_store)):
    goal = store.create(
        title=payload.title,
        category=payload.category,
        week_start=payload.week_start,
        notes=payload.notes,
        due_date=payload.due_date,
    )
    return to_read(goal, store)


@router.get("/", response_model=list[GoalRead])
def list_goals(
    week_start: Optional[date] = Query(None),
    store: GoalStore = Depends(get_goal_store),
):
    """
    Goals of one week (current week by default), ordered by category,
    manual order and creation time.

      GET /goals?week_start=2026-01-05
    """
    return [to_read(g, store) for g in store.list(_week(store, week_start))]


@router.get("/by-category", response_model=dict[GoalCategory, list[GoalRead]])
def list_goals_by_category(
    week_start: Optional[date] = Query(None),
    store: GoalStore = Depends(get_goal_store),
):
    grouped = store.list_by_category(_week(store, week_start))
    return {cat: [to_read(g, store) for g in goals] for cat, goals in grouped.items()}


@router.get("/stats", response_model=WeekStats)
def get_week_stats(
    week_start: Optional[date] = Query(None),
    store: GoalStore = Depends(get_goal_store),
):
    return store.week_stats(_week(store, week_start))


@router.get("/due", response_model=list[GoalRead])
def list_due_goals(
    kind: Literal["today", "tomorrow", "overdue"] = Query("today"),
    week_start: Optional[date] = Query(None, description="Limit to one week; all weeks if omitted"),
    store: GoalStore = Depends(get_goal_store),
):
    if kind == "today":
        goals = store.due_today(week_start)
    elif kind == "tomorrow":
        goals = store.due_tomorrow(week_start)
    else:
        goals = store.overdue(week_start)
    return [to_read(g, store) for g in goals]


@router.get("/focus", response_model=list[GoalRead])
def list_focused_goals(
    week_start: Optional[date] = Query(None),
    store: GoalStore = Depends(get_goal_store),
):
    return [to_read(g, store) for g in store.todays_focused_goals(week_start)]


@router.post("/reorder", response_model=list[GoalRead])
def reorder_goals(
    payload: GoalReorder,
    category: Optional[GoalCategory] = Query(None),
    store: GoalStore = Depends(get_goal_store),
):
    goals = store.reorder(store.get_many(payload.goal_ids), category)
    return [to_read(g, store) for g in goals]


@router.get("/{goal_id}", response_model=GoalRead)
def get_goal(goal_id: str, store: GoalStore = Depends(get_goal_store)):
    return to_read(store.get(goal_id), store)


@router.patch("/{goal_id}", response_model=GoalRead)
def update_goal(goal_id: str, payload: GoalUpdate, store: GoalStore = Depends(get_goal_store)):
    goal = store.get(goal_id)
    update_data = payload.model_dump(exclude_unset=True)

    if "title" in update_data:
        store.update_title(goal, update_data["title"])
    if "notes" in update_data:
        store.update_notes(goal, update_data["notes"])
    if "due_date" in update_data:
        store.update_due_date(goal, update_data["due_date"])

    return to_read(goal, store)


@router.post("/{goal_id}/toggle", response_model=GoalRead)
def toggle_goal_completion(goal_id: str, store: GoalStore = Depends(get_goal_store)):
    return to_read(store.toggle_completion(store.get(goal_id)), store)


@router.post("/{goal_id}/focus", response_model=GoalRead)
def toggle_goal_focus(goal_id: str, store: GoalStore = Depends(get_goal_store)):
    return to_read(store.toggle_focus_today(store.get(goal_id)), store)


@router.post("/{goal_id}/move", response_model=list[GoalRead])
def move_goal(goal_id: str, payload: GoalMove, store: GoalStore = Depends(get_goal_store)):
    goal = store.get(goal_id)
    goals = store.move(goal, payload.from_index, payload.to_index, store.get_many(payload.goal_ids))
    return [to_read(g, store) for g in goals]


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(goal_id: str, store: GoalStore = Depends(get_goal_store)):
    store.delete(store.get(goal_id))
