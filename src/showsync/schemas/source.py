"""Pydantic schema for raw show records from the external source."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from showsync.exceptions import MalformedRecord


class ApiShow(BaseModel):
    """
    A single entry of the source's ``data.allShows`` list.

    Source fields are loosely typed; validation coerces them into the types
    stored in the staging table.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    show_time: datetime = Field(alias="movie_showTime")
    screen_name: str
    is_active: str | None = None
    movie_id: str = Field(alias="movie_ID")
    title: str = Field(alias="movie_title")
    rating: str | None = Field(default=None, alias="movie_rating")
    length: int | None = Field(default=None, alias="movie_length")
    format: str | None = Field(default=None, alias="movie_format")
    cinema_id: int
    genre: str | None = Field(default=None, alias="movie_genere")
    image_url: str | None = Field(default=None, alias="movie_image_new")

    @field_validator("length", mode="before")
    @classmethod
    def blank_length_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("is_active", mode="before")
    @classmethod
    def boolean_flag_to_yn(cls, value: Any) -> Any:
        # The flag is stored as the source's Y/N string
        if isinstance(value, bool):
            return "Y" if value else "N"
        return value

    @field_validator("show_time")
    @classmethod
    def normalise_to_utc(cls, value: datetime) -> datetime:
        # Timestamps without an offset are taken as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def to_row(self) -> dict[str, Any]:
        """Column values for the staging table."""
        return self.model_dump(by_alias=False)


def parse_shows(records: list[Any]) -> list[ApiShow]:
    """
    Validate every raw record before anything is written.

    Raises:
        MalformedRecord: on the first record that fails validation
    """
    shows: list[ApiShow] = []
    for index, record in enumerate(records):
        try:
            shows.append(ApiShow.model_validate(record))
        except ValidationError as e:
            reason = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'record'}: {error['msg']}"
                for error in e.errors()
            )
            raise MalformedRecord(index, reason) from e
    return shows
