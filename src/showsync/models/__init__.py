"""SQLAlchemy ORM models."""

from showsync.models.base import Base
from showsync.models.show import (
    COMPARED_FIELDS,
    NATURAL_KEY_FIELDS,
    CanonicalShow,
    StagedShow,
)

__all__ = ["Base", "CanonicalShow", "StagedShow", "COMPARED_FIELDS", "NATURAL_KEY_FIELDS"]
