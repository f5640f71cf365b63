"""Sync job: stage the source snapshot, then reconcile into canonical shows."""

import asyncio
import logging
from dataclasses import dataclass

from showsync.config import settings
from showsync.database import AsyncSessionLocal, SessionFactory
from showsync.exceptions import SyncAlreadyRunning, SyncError
from showsync.services.reconciler import Reconciler, ReconcileResult
from showsync.services.staging_loader import StagingLoader, StagingResult
from showsync.sources import ShowSource, get_source

logger = logging.getLogger(__name__)

# Single-flight guard: at most one sync run per process
_sync_lock = asyncio.Lock()


@dataclass
class SyncResult:
    staging: StagingResult
    reconcile: ReconcileResult


def sync_in_progress() -> bool:
    return _sync_lock.locked()


async def run_sync(
    session_factory: SessionFactory,
    source: ShowSource,
    batch_size: int | None = None,
) -> SyncResult:
    """
    Run the staging loader and then the reconciler.

    Raises:
        SyncAlreadyRunning: If another run is in progress in this process
        SyncError: If either phase fails
        ValueError: If batch_size is not positive
    """
    if _sync_lock.locked():
        raise SyncAlreadyRunning("A sync run is already in progress")

    if batch_size is None:
        batch_size = settings.sync_batch_size
    async with _sync_lock:
        staging = await StagingLoader(session_factory, source, batch_size).load()
        reconcile = await Reconciler(session_factory, batch_size).reconcile()

    return SyncResult(staging=staging, reconcile=reconcile)


async def run_scheduled_sync() -> None:
    """Sync entry point for the scheduler.

    Uses the process-wide session factory and the configured source so it
    can run without a request context.
    """
    logger.info("Starting scheduled sync")
    source = get_source(settings.show_source, settings)
    try:
        result = await run_sync(AsyncSessionLocal, source)
    except SyncAlreadyRunning:
        logger.warning("Scheduled sync skipped: a sync run is already in progress")
        return
    except SyncError as e:
        logger.error(f"Scheduled sync failed ({e.code}): {e}", exc_info=True)
        return

    logger.info(
        f"Scheduled sync complete: {result.staging.staged} staged, "
        f"{result.reconcile.inserted} inserted, {result.reconcile.updated} updated, "
        f"{result.reconcile.unchanged} unchanged"
    )
