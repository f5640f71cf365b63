"""Show source backed by the remote all-shows endpoint."""

import logging
from typing import Any

import httpx

from showsync.config import Settings
from showsync.exceptions import SourceUnavailable
from showsync.sources.base import ShowSource

logger = logging.getLogger(__name__)


class ApiShowSource(ShowSource):
    """Fetches the show snapshot over HTTP."""

    name = "api"

    def __init__(self, url: str, timeout: float = 30) -> None:
        self.url = url
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApiShowSource":
        return cls(url=settings.show_source_url, timeout=settings.source_timeout)

    async def fetch_shows(self) -> list[dict[str, Any]]:
        logger.info(f"Fetching shows from {self.url}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as e:
            raise SourceUnavailable(f"Could not fetch shows from {self.url}: {e}") from e
        except ValueError as e:
            raise SourceUnavailable(f"Response from {self.url} is not valid JSON") from e

        return self.extract_shows(payload)
