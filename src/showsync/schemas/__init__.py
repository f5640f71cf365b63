"""Pydantic schemas for API requests, responses and source records."""

from showsync.schemas.show import ShowPage, ShowResponse
from showsync.schemas.source import ApiShow, parse_shows
from showsync.schemas.sync import SyncErrorResponse, SyncResponse

__all__ = [
    "ApiShow",
    "parse_shows",
    "ShowPage",
    "ShowResponse",
    "SyncErrorResponse",
    "SyncResponse",
]
