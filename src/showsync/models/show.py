"""Show models for the staging buffer and the canonical table."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from showsync.models.base import Base, TimestampMixin

# Identity of a show instance across syncs
NATURAL_KEY_FIELDS: tuple[str, ...] = ("movie_id", "cinema_id", "screen_name", "show_time")

# Payload compared field-by-field to detect changes
COMPARED_FIELDS: tuple[str, ...] = (
    "title",
    "rating",
    "length",
    "format",
    "genre",
    "is_active",
    "image_url",
)


class ShowColumnsMixin:
    """Natural key and payload columns shared by staged and canonical shows."""

    movie_id: Mapped[str] = mapped_column(String(100), nullable=False)
    cinema_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    screen_name: Mapped[str] = mapped_column(String(200), nullable=False)
    show_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    rating: Mapped[str | None] = mapped_column(String(50), nullable=True)
    length: Mapped[int | None] = mapped_column(Integer, nullable=True)
    format: Mapped[str | None] = mapped_column(String(100), nullable=True)
    genre: Mapped[str | None] = mapped_column(String(200), nullable=True)
    is_active: Mapped[str | None] = mapped_column(String(20), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    def natural_key(self) -> tuple[str, int, str, datetime]:
        return (self.movie_id, self.cinema_id, self.screen_name, self.show_time)

    def payload(self) -> dict[str, object]:
        """Return the mutable attributes as a plain dict."""
        return {name: getattr(self, name) for name in COMPARED_FIELDS}


class StagedShow(Base, ShowColumnsMixin, TimestampMixin):
    """
    Staged show model.

    Holds the latest raw snapshot per natural key. Rows are overwritten on
    every sync and never deleted.
    """

    __tablename__ = "staged_shows"
    __table_args__ = (
        UniqueConstraint(*NATURAL_KEY_FIELDS, name="uq_staged_show_natural_key"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        return (
            f"<StagedShow(movie_id={self.movie_id!r}, "
            f"cinema_id={self.cinema_id!r}, "
            f"screen_name={self.screen_name!r}, "
            f"show_time={self.show_time})>"
        )


class CanonicalShow(Base, ShowColumnsMixin, TimestampMixin):
    """
    Canonical show model.

    The authoritative, queryable record set. Only the reconciler writes here;
    the surrogate id addresses updates and is never used for identity.
    """

    __tablename__ = "canonical_shows"
    __table_args__ = (
        UniqueConstraint(*NATURAL_KEY_FIELDS, name="uq_canonical_show_natural_key"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        return (
            f"<CanonicalShow(id={self.id!r}, "
            f"movie_id={self.movie_id!r}, "
            f"cinema_id={self.cinema_id!r}, "
            f"show_time={self.show_time})>"
        )
