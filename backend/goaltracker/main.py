import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from goaltracker.api.archive import router as archive_router
from goaltracker.api.goals import router as goals_router
from goaltracker.api.notifications import router as notifications_router
from goaltracker.api.recaps import router as recaps_router
from goaltracker.api.weeks import router as weeks_router
from goaltracker.core.clock import SystemClock
from goaltracker.core.config import settings
from goaltracker.core.errors import NotFoundError, PersistenceError, ValidationError
from goaltracker.core.events import EventBus
from goaltracker.db import SessionLocal, init_db
from goaltracker.services.inbox import InboxImporter
from goaltracker.services.startup import run_startup_jobs

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    clock = SystemClock(settings.timezone)

    # Create DB tables on startup
    init_db()

    # Rollover/archival must finish before goal data is served
    if settings.run_startup_jobs:
        db = SessionLocal()
        try:
            run_startup_jobs(db, clock, app.state.events)
        finally:
            db.close()

    stop = asyncio.Event()
    watcher = None
    if settings.inbox_dir:
        importer = InboxImporter(
            settings.inbox_dir,
            SessionLocal,
            clock,
            bus=app.state.events,
            poll_seconds=settings.inbox_poll_seconds,
        )
        watcher = asyncio.create_task(importer.watch(stop))

    yield

    stop.set()
    if watcher is not None:
        await watcher


app = FastAPI(title="GoalTracker API", lifespan=lifespan)
app.state.events = EventBus()

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(goals_router)
app.include_router(archive_router)
app.include_router(recaps_router)
app.include_router(weeks_router)
app.include_router(notifications_router)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(PersistenceError)
async def persistence_handler(request: Request, exc: PersistenceError):
    logger.error("Request %s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/")
def root():
    return {"message": "GoalTracker backend is running"}
