"""Pydantic schemas for the sync endpoint."""

from typing import Literal

from pydantic import BaseModel


class SyncResponse(BaseModel):
    """Successful sync run summary."""

    status: Literal["ok"] = "ok"
    message: str = "Sync completed"
    staged: int
    inserted: int
    updated: int
    unchanged: int


class SyncErrorResponse(BaseModel):
    """Failed or rejected sync run."""

    status: Literal["error"] = "error"
    error: str
    message: str
