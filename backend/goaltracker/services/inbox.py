"""Goal inbox: JSON files dropped into a folder become goals.

Each file holds `{"title": ..., "category": ..., "notes": ...}`. Imported
files are deleted; files that cannot be read or validated are renamed to
`*.bad.json` so they are not retried on every poll.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import pydantic

from goaltracker.core.clock import Clock
from goaltracker.core.constants import BAD_INBOX_SUFFIX
from goaltracker.core.errors import PersistenceError, ValidationError
from goaltracker.core.events import EventBus
from goaltracker.db import persistence_guard
from goaltracker.models.goal import Goal
from goaltracker.schemas.inbox import IncomingGoal
from goaltracker.services.goal_store import GoalStore

logger = logging.getLogger(__name__)


class InboxImporter:
    def __init__(
        self,
        inbox_dir,
        session_factory,
        clock: Clock,
        bus: Optional[EventBus] = None,
        poll_seconds: float = 5.0,
    ):
        self.inbox_dir = Path(inbox_dir).expanduser()
        self.session_factory = session_factory
        self.clock = clock
        self.bus = bus
        self.poll_seconds = poll_seconds

    def ensure_inbox(self) -> None:
        if not self.inbox_dir.exists():
            self.inbox_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Created inbox folder at %s", self.inbox_dir)

    def pending_files(self) -> list[Path]:
        if not self.inbox_dir.is_dir():
            return []
        return sorted(
            p
            for p in self.inbox_dir.iterdir()
            if p.is_file()
            and p.suffix == ".json"
            and not p.name.startswith(".")
            and not p.name.endswith(BAD_INBOX_SUFFIX)
        )

    def _mark_bad(self, path: Path) -> None:
        bad = path.with_name(path.name[: -len(".json")] + BAD_INBOX_SUFFIX)
        try:
            path.rename(bad)
        except OSError as exc:
            logger.warning("Could not rename %s: %s", path.name, exc)

    def poll_once(self) -> list[Goal]:
        """Import every pending file. Returns the created goals."""
        self.ensure_inbox()
        files = self.pending_files()
        if not files:
            return []

        created = []
        db = self.session_factory()
        try:
            store = GoalStore(db, self.clock, bus=self.bus)
            for path in files:
                try:
                    incoming = IncomingGoal.model_validate_json(path.read_bytes())
                    goal = store.create(
                        title=incoming.title,
                        category=incoming.category,
                        notes=incoming.notes,
                    )
                except (OSError, UnicodeDecodeError, pydantic.ValidationError, ValidationError) as exc:
                    logger.warning("Failed to process %s: %s", path.name, exc)
                    self._mark_bad(path)
                    continue
                except PersistenceError:
                    # Leave the file in place; the next poll retries it
                    logger.error("Could not store goal from %s; will retry", path.name)
                    break

                path.unlink(missing_ok=True)
                created.append(goal)
                logger.info("Imported goal: %s", goal.title)

            # Later commits expired the earlier goals; load them before the session closes
            with persistence_guard(db, "load imported goals"):
                for goal in created:
                    db.refresh(goal)
        finally:
            db.close()
        return created

    async def watch(self, stop: asyncio.Event) -> None:
        """Poll until `stop` is set. Runs on the app's event loop."""
        logger.info("Watching inbox %s every %.1fs", self.inbox_dir, self.poll_seconds)
        while not stop.is_set():
            try:
                self.poll_once()
            except Exception:
                # Folder unavailable or store down; try again next tick
                logger.exception("Inbox poll failed")
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.poll_seconds)
            except asyncio.TimeoutError:
                pass
