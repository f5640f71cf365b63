"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from showsync.api.routes import health, shows, sync
from showsync.config import settings
from showsync.database import engine
from showsync.tasks.sync_job import run_scheduled_sync

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler: AsyncIOScheduler | None = None
    if settings.sync_schedule_enabled:
        scheduler = AsyncIOScheduler()
        scheduler.add_job(
            run_scheduled_sync,
            trigger=CronTrigger.from_crontab(settings.sync_cron),
            id="scheduled_sync",
            name="Stage and reconcile shows",
            replace_existing=True,
        )
        scheduler.start()
        logger.info(f"Scheduler started: sync registered for cron {settings.sync_cron!r}")

    yield

    if scheduler is not None:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler shut down")

    # Release pooled connections held by the process-wide engine
    await engine.dispose()
    logger.info("Database engine disposed")


# Create FastAPI app
app = FastAPI(
    title="ShowSync API",
    description="Cinema showtime staging, reconciliation and query service",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(shows.router, tags=["shows"])
app.include_router(sync.router, tags=["sync"])
