"""Staging loader: snapshot of external shows -> staged_shows."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from showsync.database import SessionFactory
from showsync.exceptions import StorageFailure
from showsync.models import COMPARED_FIELDS, NATURAL_KEY_FIELDS, StagedShow
from showsync.schemas.source import ApiShow, parse_shows
from showsync.sources.base import ShowSource
from showsync.utils.batching import chunk

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100

# Dialects with native INSERT ... ON CONFLICT support
UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@dataclass
class StagingResult:
    """Counts reported by one staging run."""

    fetched: int
    staged: int
    batches: int


def dedupe_batch(shows: list[ApiShow]) -> list[dict[str, Any]]:
    """
    Collapse records sharing a natural key, keeping the last one.

    A single ON CONFLICT statement may not touch the same row twice.
    """
    rows: dict[tuple, dict[str, Any]] = {}
    for show in shows:
        row = show.to_row()
        rows[tuple(row[name] for name in NATURAL_KEY_FIELDS)] = row
    return list(rows.values())


def build_upsert(session: AsyncSession, rows: list[dict[str, Any]]):
    """Build an INSERT ... ON CONFLICT DO UPDATE for staged rows."""
    dialect = session.get_bind().dialect.name
    insert = UPSERT_DIALECTS.get(dialect)
    if insert is None:
        raise StorageFailure(f"Staging upsert is not supported on {dialect!r}")

    stmt = insert(StagedShow).values(rows)
    update_columns = {name: stmt.excluded[name] for name in COMPARED_FIELDS}
    update_columns["updated_at"] = func.now()
    # Rows whose payload already matches are left alone, updated_at included
    changed = or_(
        *(getattr(StagedShow, name).is_distinct_from(stmt.excluded[name]) for name in COMPARED_FIELDS)
    )
    return stmt.on_conflict_do_update(
        index_elements=list(NATURAL_KEY_FIELDS),
        set_=update_columns,
        where=changed,
    )


class StagingLoader:
    """
    Loads the current show snapshot into the staging table.

    Each batch is upserted in its own transaction; a failed batch is rolled
    back and aborts the run. Running twice with the same input leaves the
    staging table unchanged.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        source: ShowSource,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self.session_factory = session_factory
        self.source = source
        self.batch_size = batch_size

    async def load(self) -> StagingResult:
        """
        Fetch, normalize and upsert every show record.

        Raises:
            SourceUnavailable: If the source cannot be read
            MalformedRecord: If any record fails normalization
            StorageFailure: If a batch transaction fails
        """
        logger.info(f"Loading shows from {self.source.name} source...")
        records = await self.source.fetch_shows()
        logger.info(f"Loaded {len(records)} shows")

        shows = parse_shows(records)
        batches = chunk(shows, self.batch_size)

        staged = 0
        for index, batch in enumerate(batches, start=1):
            rows = dedupe_batch(batch)
            await self._upsert_batch(rows, index)
            staged += len(rows)
            logger.info(f"Staged batch {index}/{len(batches)} ({len(rows)} rows)")

        logger.info(f"Sync table updated successfully. {staged} rows staged")
        return StagingResult(fetched=len(records), staged=staged, batches=len(batches))

    async def _upsert_batch(self, rows: list[dict[str, Any]], index: int) -> None:
        async with self.session_factory() as session:
            try:
                async with session.begin():
                    await session.execute(build_upsert(session, rows))
            except SQLAlchemyError as e:
                raise StorageFailure(f"Staging batch {index} rolled back: {e}") from e
