"""Tests for the sync API endpoint."""

from unittest.mock import AsyncMock, MagicMock, patch

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from showsync.api.routes.sync import get_show_source
from showsync.database import get_session_factory
from showsync.exceptions import (
    MalformedRecord,
    SourceUnavailable,
    StorageFailure,
    SyncAlreadyRunning,
)
from showsync.services.reconciler import ReconcileResult
from showsync.services.staging_loader import StagingResult
from showsync.tasks.sync_job import SyncResult


async def post_sync(app: FastAPI, run_sync: AsyncMock):
    session_factory = MagicMock()
    source = MagicMock()
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_show_source] = lambda: source
    try:
        with patch("showsync.api.routes.sync.run_sync", run_sync):
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as client:
                response = await client.post("/sync")
    finally:
        app.dependency_overrides.clear()

    run_sync.assert_awaited_once_with(session_factory, source)
    return response


async def test_sync_reports_counts(test_app: FastAPI) -> None:
    result = SyncResult(
        staging=StagingResult(fetched=4, staged=4, batches=1),
        reconcile=ReconcileResult(inserted=2, updated=1, unchanged=1),
    )

    response = await post_sync(test_app, AsyncMock(return_value=result))

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "message": "Sync completed",
        "staged": 4,
        "inserted": 2,
        "updated": 1,
        "unchanged": 1,
    }


async def test_source_failure_returns_500_with_code(test_app: FastAPI) -> None:
    response = await post_sync(test_app, AsyncMock(side_effect=SourceUnavailable("down")))

    assert response.status_code == 500
    assert response.json() == {
        "status": "error",
        "error": "source_unavailable",
        "message": "Sync failed",
    }


async def test_malformed_record_returns_500_with_code(test_app: FastAPI) -> None:
    response = await post_sync(
        test_app, AsyncMock(side_effect=MalformedRecord(3, "movie_showTime: invalid"))
    )

    assert response.status_code == 500
    assert response.json()["error"] == "malformed_record"


async def test_storage_failure_returns_500_with_code(test_app: FastAPI) -> None:
    response = await post_sync(test_app, AsyncMock(side_effect=StorageFailure("batch 2")))

    assert response.status_code == 500
    assert response.json()["status"] == "error"
    assert response.json()["error"] == "storage_failure"


async def test_concurrent_sync_returns_409(test_app: FastAPI) -> None:
    response = await post_sync(
        test_app, AsyncMock(side_effect=SyncAlreadyRunning("A sync run is already in progress"))
    )

    assert response.status_code == 409
    assert response.json()["error"] == "sync_in_progress"
