"""Shared test fixtures."""

from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from showsync.api.routes import health, shows, sync
from showsync.database import SessionFactory, create_session_factory
from showsync.models import Base
from showsync.sources import ShowSource


class StaticShowSource(ShowSource):
    """In-memory show source returning a fixed list of raw records."""

    name = "static"

    def __init__(self, records: list[dict[str, Any]]) -> None:
        self.records = records
        self.calls = 0

    async def fetch_shows(self) -> list[dict[str, Any]]:
        self.calls += 1
        return list(self.records)


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app without the scheduler lifespan, for API tests."""
    app = FastAPI()
    app.include_router(health.router)
    app.include_router(shows.router)
    app.include_router(sync.router)
    return app


@pytest.fixture
async def sqlite_engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'showsync.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine: AsyncEngine) -> SessionFactory:
    return create_session_factory(sqlite_engine)


@pytest.fixture
def make_source() -> Callable[[list[dict[str, Any]]], StaticShowSource]:
    return StaticShowSource
