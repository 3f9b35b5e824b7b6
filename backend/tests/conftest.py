"""Shared test fixtures: a throwaway SQLite database and a fixed clock."""
import os
from datetime import datetime

# Use an in-memory database for the module-level engine; tests get their own
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest  # noqa: E402

from goaltracker.core.clock import FixedClock  # noqa: E402
from goaltracker.core.events import EventBus  # noqa: E402
from goaltracker.db import init_db, make_engine, make_session_factory  # noqa: E402
from goaltracker.services.archival import ArchivalEngine  # noqa: E402
from goaltracker.services.goal_store import GoalStore  # noqa: E402
from goaltracker.services.recap_store import RecapStore  # noqa: E402
from goaltracker.services.rollover import RolloverEngine  # noqa: E402
from goaltracker.services.week_calculator import WeekCalculator  # noqa: E402

# Wednesday of the week starting Monday 2026-01-12
NOW = datetime(2026, 1, 14, 10, 0)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'goals.db'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def published(bus):
    """Names of events published on `bus`, in order."""
    seen = []
    bus.subscribe(lambda event, payload: seen.append(event))
    return seen


@pytest.fixture
def weeks(clock):
    return WeekCalculator(clock)


@pytest.fixture
def goal_store(db, clock, weeks, bus):
    return GoalStore(db, clock, weeks, bus)


@pytest.fixture
def rollover(db, clock, weeks, bus):
    return RolloverEngine(db, clock, weeks, bus)


@pytest.fixture
def archival(db, clock, bus):
    return ArchivalEngine(db, clock, bus)


@pytest.fixture
def recap_store(db, clock, weeks, bus):
    return RecapStore(db, clock, weeks, bus)


@pytest.fixture
def client(session_factory, clock):
    """API client bound to the test database and clock."""
    from fastapi.testclient import TestClient
    from goaltracker.api.deps import get_clock
    from goaltracker.db import get_db
    from goaltracker.main import app

    def override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()
