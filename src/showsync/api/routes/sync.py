"""Sync API endpoint."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from showsync.config import settings
from showsync.database import SessionFactory, get_session_factory
from showsync.exceptions import SyncAlreadyRunning, SyncError
from showsync.schemas import SyncErrorResponse, SyncResponse
from showsync.sources import ShowSource, get_source
from showsync.tasks.sync_job import run_sync

logger = logging.getLogger(__name__)
router = APIRouter()


def get_show_source() -> ShowSource:
    """Dependency providing the configured show source."""
    return get_source(settings.show_source, settings)


@router.post(
    "/sync",
    response_model=SyncResponse,
    responses={409: {"model": SyncErrorResponse}, 500: {"model": SyncErrorResponse}},
)
async def trigger_sync(
    session_factory: SessionFactory = Depends(get_session_factory),
    source: ShowSource = Depends(get_show_source),
) -> SyncResponse | JSONResponse:
    """
    Stage the source snapshot and reconcile it into canonical shows.

    Runs to completion before responding. Failures report an error code but
    no partial counts.
    """
    try:
        result = await run_sync(session_factory, source)
    except SyncAlreadyRunning as e:
        logger.warning(f"Sync rejected: {e}")
        return JSONResponse(
            status_code=409,
            content=SyncErrorResponse(error=e.code, message=str(e)).model_dump(),
        )
    except SyncError as e:
        logger.error(f"Sync failed ({e.code}): {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=SyncErrorResponse(error=e.code, message="Sync failed").model_dump(),
        )

    return SyncResponse(
        staged=result.staging.staged,
        inserted=result.reconcile.inserted,
        updated=result.reconcile.updated,
        unchanged=result.reconcile.unchanged,
    )
