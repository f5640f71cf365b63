"""Tests for the shows API endpoint."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from showsync.database import get_db
from showsync.models import CanonicalShow

# ---------------------------------------------------------------------------
# Test data helpers
# ---------------------------------------------------------------------------


def make_show(
    show_id: int = 1,
    title: str = "Nosferatu",
    show_time: datetime | None = None,
) -> CanonicalShow:
    return CanonicalShow(
        id=show_id,
        movie_id=f"M{show_id}",
        cinema_id=7,
        screen_name="Audi 1",
        show_time=show_time or datetime(2030, 5, 1, 18, 30, tzinfo=timezone.utc),
        title=title,
        rating="A",
        length=132,
        format="2D",
        genre="Horror",
        is_active="Y",
        image_url="https://example.com/nosferatu.jpg",
    )


def make_db_override(shows: list[CanonicalShow], total: int | None = None, calls: list | None = None):
    """Mock session: first execute returns the page rows, second the count."""

    async def override():
        rows_result = MagicMock()
        rows_result.scalars.return_value.all.return_value = shows
        count_result = MagicMock()
        count_result.scalar_one.return_value = len(shows) if total is None else total

        db = AsyncMock()
        db.execute = AsyncMock(side_effect=[rows_result, count_result])
        if calls is not None:
            calls.append(db)
        yield db

    return override


async def get(app: FastAPI, url: str):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        return await client.get(url)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


async def test_returns_page_envelope_with_camel_case_shows(test_app: FastAPI) -> None:
    test_app.dependency_overrides[get_db] = make_db_override([make_show()])
    try:
        response = await get(test_app, "/shows")
    finally:
        test_app.dependency_overrides.clear()

    assert response.status_code == 200
    data = response.json()
    assert (data["page"], data["limit"], data["total"], data["total_pages"]) == (1, 20, 1, 1)
    show = data["data"][0]
    assert show["id"] == 1
    assert show["movieID"] == "M1"
    assert show["cinemaId"] == 7
    assert show["screenName"] == "Audi 1"
    assert show["showTime"].startswith("2030-05-01T18:30:00")
    assert show["genre"] == "Horror"
    assert show["isActive"] == "Y"
    assert show["imageUrl"] == "https://example.com/nosferatu.jpg"


async def test_reports_total_independent_of_page(test_app: FastAPI) -> None:
    shows = [make_show(show_id=i) for i in range(41, 46)]
    test_app.dependency_overrides[get_db] = make_db_override(shows, total=45)
    try:
        response = await get(test_app, "/shows?page=3&limit=20")
    finally:
        test_app.dependency_overrides.clear()

    data = response.json()
    assert data["page"] == 3
    assert data["total"] == 45
    assert data["total_pages"] == 3
    assert len(data["data"]) == 5


async def test_empty_result(test_app: FastAPI) -> None:
    test_app.dependency_overrides[get_db] = make_db_override([])
    try:
        response = await get(test_app, "/shows?title=nothing")
    finally:
        test_app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["data"] == []
    assert response.json()["total"] == 0


async def test_accepts_date_bounds(test_app: FastAPI) -> None:
    calls: list = []
    test_app.dependency_overrides[get_db] = make_db_override([], calls=calls)
    try:
        response = await get(test_app, "/shows?from=2030-05-01&to=2030-05-03T23:00:00Z")
    finally:
        test_app.dependency_overrides.clear()

    assert response.status_code == 200
    assert calls[0].execute.await_count == 2


async def test_malformed_date_returns_400(test_app: FastAPI) -> None:
    test_app.dependency_overrides[get_db] = make_db_override([])
    try:
        response = await get(test_app, "/shows?from=yesterday")
    finally:
        test_app.dependency_overrides.clear()

    assert response.status_code == 400
    assert "Invalid 'from' value" in response.json()["detail"]


async def test_from_after_to_returns_400(test_app: FastAPI) -> None:
    test_app.dependency_overrides[get_db] = make_db_override([])
    try:
        response = await get(test_app, "/shows?from=2030-05-03&to=2030-05-01")
    finally:
        test_app.dependency_overrides.clear()

    assert response.status_code == 400


async def test_invalid_pagination_returns_422(test_app: FastAPI) -> None:
    test_app.dependency_overrides[get_db] = make_db_override([])
    try:
        for query in ("page=0", "page=abc", "limit=0", "limit=101"):
            response = await get(test_app, f"/shows?{query}")
            assert response.status_code == 422, query
    finally:
        test_app.dependency_overrides.clear()
