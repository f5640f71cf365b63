"""Shows API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from showsync.config import settings
from showsync.database import get_db
from showsync.exceptions import ClientInputError
from showsync.schemas import ShowPage
from showsync.services.show_query import ShowFilter, find_shows, parse_time_bound

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/shows", response_model=ShowPage)
async def get_shows(
    title: str | None = Query(None, description="Case-insensitive title substring"),
    time_from: str | None = Query(
        None, alias="from", description="Earliest show time (YYYY-MM-DD or ISO datetime)"
    ),
    time_to: str | None = Query(
        None, alias="to", description="Latest show time, inclusive (YYYY-MM-DD or ISO datetime)"
    ),
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(
        settings.default_page_size, ge=1, le=settings.max_page_size, description="Page size"
    ),
    db: AsyncSession = Depends(get_db),
) -> ShowPage:
    """
    List upcoming canonical shows, paginated and ordered by show time.

    Without an explicit `from`, shows that have already started are excluded.
    """
    try:
        filters = ShowFilter(
            title=title,
            time_from=parse_time_bound(time_from, "from"),
            time_to=parse_time_bound(time_to, "to", end_of_day=True),
        )
        return await find_shows(db, filters, page=page, limit=limit)
    except ClientInputError as e:
        logger.info(f"Rejected shows query: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
