"""Run the sync pipeline from the command line.

Usage:
    python -m showsync.scripts.run_sync                   # stage + reconcile
    python -m showsync.scripts.run_sync --stage-only
    python -m showsync.scripts.run_sync --reconcile-only
    python -m showsync.scripts.run_sync --source file --snapshot data/allShows.json
"""

import argparse
import asyncio
import logging
import sys

from showsync.config import settings
from showsync.database import AsyncSessionLocal, engine
from showsync.exceptions import SyncError
from showsync.services.reconciler import Reconciler
from showsync.services.staging_loader import StagingLoader
from showsync.sources import SOURCE_REGISTRY, SnapshotShowSource, get_source
from showsync.tasks.sync_job import run_sync

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stage and reconcile cinema shows")
    phase = parser.add_mutually_exclusive_group()
    phase.add_argument("--stage-only", action="store_true", help="Only load the staging table")
    phase.add_argument(
        "--reconcile-only", action="store_true", help="Only reconcile staging into canonical"
    )
    parser.add_argument(
        "--source",
        choices=sorted(SOURCE_REGISTRY),
        default=settings.show_source,
        help="Where to read shows from (default: %(default)s)",
    )
    parser.add_argument("--snapshot", help="Snapshot path, implies --source file")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=settings.sync_batch_size,
        help="Rows per transaction (default: %(default)s)",
    )
    return parser


async def main(args: argparse.Namespace) -> int:
    if args.batch_size <= 0:
        logger.error("--batch-size must be positive")
        return 2

    if args.snapshot:
        source = SnapshotShowSource(args.snapshot)
    else:
        source = get_source(args.source, settings)

    try:
        if args.stage_only:
            await StagingLoader(AsyncSessionLocal, source, args.batch_size).load()
        elif args.reconcile_only:
            await Reconciler(AsyncSessionLocal, args.batch_size).reconcile()
        else:
            await run_sync(AsyncSessionLocal, source, args.batch_size)
    except SyncError as e:
        logger.error(f"Sync failed ({e.code}): {e}")
        return 1
    finally:
        await engine.dispose()

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(build_parser().parse_args())))
