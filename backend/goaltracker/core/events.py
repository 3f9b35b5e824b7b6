"""In-process change notifications.

Stores publish after each successful mutation so that other parts of the app
(API caches, reminder scheduling) can refresh without the stores knowing who
is listening.
"""
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

GOAL_CREATED = "goal.created"
GOAL_UPDATED = "goal.updated"
GOAL_DELETED = "goal.deleted"
GOALS_REORDERED = "goals.reordered"
GOALS_ROLLED_OVER = "goals.rolled_over"
GOALS_ARCHIVED = "goals.archived"
ARCHIVE_DELETED = "archive.deleted"
ARCHIVE_CLEARED = "archive.cleared"
RECAP_CREATED = "recap.created"
RECAP_UPDATED = "recap.updated"

Subscriber = Callable[[str, dict[str, Any]], None]


class EventBus:
    def __init__(self):
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback(event, payload)`. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event: str, payload: dict[str, Any] | None = None) -> None:
        payload = payload or {}
        for callback in list(self._subscribers):
            try:
                callback(event, payload)
            except Exception:
                # The mutation is already committed; a broken listener must not undo it.
                logger.exception("Subscriber failed for event %s", event)
