"""Pydantic schemas for canonical show responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ShowResponse(BaseModel):
    """Canonical show as served to the browsing UI (camelCase keys)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    movie_id: str = Field(alias="movieID")
    cinema_id: int = Field(alias="cinemaId")
    screen_name: str = Field(alias="screenName")
    show_time: datetime = Field(alias="showTime")
    title: str
    rating: str | None = None
    length: int | None = None
    format: str | None = None
    genre: str | None = None
    is_active: str | None = Field(default=None, alias="isActive")
    image_url: str | None = Field(default=None, alias="imageUrl")


class ShowPage(BaseModel):
    """One page of canonical shows plus the total match count."""

    page: int
    limit: int
    total: int
    total_pages: int
    data: list[ShowResponse]
