"""Liveness endpoint tests."""

from unittest.mock import MagicMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from showsync.database import get_db


async def test_health_reports_ok_without_a_database(test_app: FastAPI) -> None:
    db = MagicMock()

    async def override_get_db():
        yield db

    test_app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert db.mock_calls == []


async def test_health_rejects_post(test_app: FastAPI) -> None:
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/health")

    assert response.status_code == 405
