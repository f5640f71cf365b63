"""Reconciler: staged_shows -> canonical_shows."""

import enum
import logging
from dataclasses import dataclass

from sqlalchemy import and_, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from showsync.database import SessionFactory
from showsync.exceptions import StorageFailure
from showsync.models import COMPARED_FIELDS, NATURAL_KEY_FIELDS, CanonicalShow, StagedShow
from showsync.models.show import ShowColumnsMixin
from showsync.utils.batching import chunk

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


class Outcome(enum.Enum):
    INSERT = "insert"
    UPDATE = "update"
    UNCHANGED = "unchanged"


@dataclass
class ReconcileResult:
    """Aggregate classification counts for one reconcile run."""

    inserted: int = 0
    updated: int = 0
    unchanged: int = 0

    def add(self, other: "ReconcileResult") -> None:
        self.inserted += other.inserted
        self.updated += other.updated
        self.unchanged += other.unchanged


def diff_show(staged: ShowColumnsMixin, canonical: ShowColumnsMixin) -> list[str]:
    """Names of compared fields whose values differ (strict equality)."""
    return [
        name for name in COMPARED_FIELDS if getattr(staged, name) != getattr(canonical, name)
    ]


def classify(staged: StagedShow, canonical: CanonicalShow | None) -> Outcome:
    if canonical is None:
        return Outcome.INSERT
    if diff_show(staged, canonical):
        return Outcome.UPDATE
    return Outcome.UNCHANGED


class Reconciler:
    """
    Brings the canonical table in line with the staging table.

    Every staged row is classified as INSERT, UPDATE or UNCHANGED. Each batch's
    writes run in one transaction; a failed batch is rolled back while earlier
    batches stay committed, so re-running after a failure is safe.
    """

    def __init__(self, session_factory: SessionFactory, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        self.session_factory = session_factory
        self.batch_size = batch_size

    async def reconcile(self) -> ReconcileResult:
        """
        Reconcile all staged rows.

        Raises:
            StorageFailure: If reading staging or a batch transaction fails
        """
        logger.info("Reconciling staged shows into canonical shows...")

        staged_rows = await self._read_staged()
        batches = chunk(staged_rows, self.batch_size)
        totals = ReconcileResult()

        for index, batch in enumerate(batches, start=1):
            batch_result = await self._reconcile_batch(batch, index)
            totals.add(batch_result)
            logger.info(
                f"Committed batch {index}/{len(batches)}: "
                f"{batch_result.inserted} inserted, {batch_result.updated} updated, "
                f"{batch_result.unchanged} unchanged"
            )

        logger.info(
            f"Done. Inserted: {totals.inserted}, Updated: {totals.updated}, "
            f"Unchanged: {totals.unchanged}"
        )
        return totals

    async def _read_staged(self) -> list[StagedShow]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(StagedShow).order_by(StagedShow.id))
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StorageFailure(f"Could not read staged shows: {e}") from e

    async def _reconcile_batch(self, batch: list[StagedShow], index: int) -> ReconcileResult:
        result = ReconcileResult()
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    existing = await self._find_canonical(session, batch)

                    for staged in batch:
                        canonical = existing.get(staged.natural_key())
                        outcome = classify(staged, canonical)

                        if outcome is Outcome.INSERT:
                            session.add(
                                CanonicalShow(
                                    movie_id=staged.movie_id,
                                    cinema_id=staged.cinema_id,
                                    screen_name=staged.screen_name,
                                    show_time=staged.show_time,
                                    **staged.payload(),
                                )
                            )
                            result.inserted += 1
                        elif outcome is Outcome.UPDATE:
                            logger.debug(
                                f"Updating canonical show {canonical.id}: "
                                f"{', '.join(diff_show(staged, canonical))} changed"
                            )
                            updated = await session.execute(self._build_update(canonical.id, staged))
                            if updated.rowcount:
                                result.updated += 1
                            else:
                                result.unchanged += 1
                        else:
                            result.unchanged += 1
        except SQLAlchemyError as e:
            raise StorageFailure(f"Reconcile batch {index} rolled back: {e}") from e

        return result

    async def _find_canonical(
        self, session: AsyncSession, batch: list[StagedShow]
    ) -> dict[tuple, CanonicalShow]:
        """Load canonical rows matching the batch's natural keys in one query.

        Joins on the staged rows' ids so the predicate size does not grow
        with the batch.
        """
        same_key = and_(
            *(getattr(CanonicalShow, name) == getattr(StagedShow, name) for name in NATURAL_KEY_FIELDS)
        )
        stmt = (
            select(CanonicalShow)
            .join(StagedShow, same_key)
            .where(StagedShow.id.in_([staged.id for staged in batch]))
        )
        result = await session.execute(stmt)
        return {row.natural_key(): row for row in result.scalars().all()}

    def _build_update(self, canonical_id: int, staged: StagedShow):
        """Targeted update by surrogate id, guarded so an already-equal row is not rewritten."""
        payload = staged.payload()
        changed = or_(
            *(getattr(CanonicalShow, name).is_distinct_from(value) for name, value in payload.items())
        )
        return (
            update(CanonicalShow)
            .where(CanonicalShow.id == canonical_id, changed)
            .values(**payload)
            .execution_options(synchronize_session=False)
        )
