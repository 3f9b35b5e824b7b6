import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from goaltracker.core.config import settings
from goaltracker.core.errors import PersistenceError

logger = logging.getLogger(__name__)

# SQLAlchemy Base class for models to inherit
Base = declarative_base()


def make_engine(database_url: str):
    kwargs = {"pool_pre_ping": True}  # helps avoid stale connections
    if database_url.startswith("sqlite"):
        # Sessions are used from FastAPI's threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url:
            # One shared connection, otherwise every connection gets its own empty db
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def make_session_factory(bind):
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


# Create SQLAlchemy engine (local SQLite file by default)
engine = make_engine(settings.database_url)

# Factory that creates DB sessions
SessionLocal = make_session_factory(engine)


# Dependency we will use in FastAPI routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """Create all tables that do not exist yet."""
    # import ensures tables are registered
    from goaltracker.models import archived_goal, goal, preference, weekly_recap  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


@contextmanager
def persistence_guard(db: Session, action: str):
    """Translate storage failures into PersistenceError.

    The session is rolled back so that prior committed state stays intact
    and the caller can retry.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to %s: %s", action, exc)
        raise PersistenceError(f"Failed to {action}") from exc
