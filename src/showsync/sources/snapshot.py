"""Show source backed by a local JSON snapshot."""

import json
import logging
from pathlib import Path
from typing import Any

from showsync.config import Settings
from showsync.exceptions import SourceUnavailable
from showsync.sources.base import ShowSource

logger = logging.getLogger(__name__)


class SnapshotShowSource(ShowSource):
    """Reads the show snapshot from a file with the same shape as the API."""

    name = "file"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SnapshotShowSource":
        return cls(path=settings.show_snapshot_path)

    async def fetch_shows(self) -> list[dict[str, Any]]:
        logger.info(f"Loading shows from {self.path}")
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise SourceUnavailable(f"Could not read snapshot {self.path}: {e}") from e
        except ValueError as e:
            raise SourceUnavailable(f"Snapshot {self.path} is not valid JSON") from e

        return self.extract_shows(payload)
