"""Filtered, paginated read access to canonical shows."""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from showsync.exceptions import ClientInputError
from showsync.models import CanonicalShow
from showsync.schemas import ShowPage, ShowResponse


@dataclass
class ShowFilter:
    """Query filters; unset bounds fall back to the defaults in build_conditions."""

    title: str | None = None
    time_from: datetime | None = None
    time_to: datetime | None = None


def parse_time_bound(value: str | None, param: str, end_of_day: bool = False) -> datetime | None:
    """
    Parse a from/to query value into an aware UTC datetime.

    A bare date (YYYY-MM-DD) means the start of that day, or its end when
    end_of_day is set. Values without an offset are taken as UTC.

    Raises:
        ClientInputError: If the value is not an ISO 8601 date or datetime
    """
    if value is None or not value.strip():
        return None
    value = value.strip()

    try:
        if len(value) == 10:
            day = date.fromisoformat(value)
            return datetime.combine(day, time.max if end_of_day else time.min, tzinfo=timezone.utc)
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise ClientInputError(f"Invalid '{param}' value: {value!r}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def build_conditions(filters: ShowFilter, now: datetime) -> list:
    """WHERE conditions for a filter; shows before now are hidden unless from is given."""
    conditions = [CanonicalShow.show_time >= (filters.time_from or now)]
    if filters.time_to is not None:
        conditions.append(CanonicalShow.show_time <= filters.time_to)
    if filters.title:
        conditions.append(CanonicalShow.title.icontains(filters.title, autoescape=True))
    return conditions


async def find_shows(
    db: AsyncSession,
    filters: ShowFilter,
    page: int = 1,
    limit: int = 20,
    now: datetime | None = None,
) -> ShowPage:
    """
    Fetch one page of canonical shows ordered by show time.

    The total is counted with a separate query over the same conditions, so it
    does not depend on the page window.
    """
    if filters.time_from and filters.time_to and filters.time_from > filters.time_to:
        raise ClientInputError("'from' must not be later than 'to'")

    conditions = build_conditions(filters, now or datetime.now(timezone.utc))

    stmt = (
        select(CanonicalShow)
        .where(*conditions)
        .order_by(CanonicalShow.show_time, CanonicalShow.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    result = await db.execute(stmt)
    shows = result.scalars().all()

    count_stmt = select(func.count()).select_from(CanonicalShow).where(*conditions)
    total = (await db.execute(count_stmt)).scalar_one()

    return ShowPage(
        page=page,
        limit=limit,
        total=total,
        total_pages=max(1, math.ceil(total / limit)),
        data=[ShowResponse.model_validate(show) for show in shows],
    )
