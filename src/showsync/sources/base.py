"""Base interface for show sources."""

from abc import ABC, abstractmethod
from typing import Any

from showsync.exceptions import SourceUnavailable


class ShowSource(ABC):
    """
    Abstract base class for providers of raw show records.

    A source yields the current snapshot of ``allShows`` entries. Records are
    returned untouched; normalization happens in the staging loader.
    """

    name: str = "source"

    @abstractmethod
    async def fetch_shows(self) -> list[dict[str, Any]]:
        """
        Fetch the current snapshot of raw show records.

        Raises:
            SourceUnavailable: If the source cannot be reached or read
        """

    def extract_shows(self, payload: Any) -> list[dict[str, Any]]:
        """
        Pull the show list out of the ``{"data": {"allShows": [...]}}`` envelope.

        Raises:
            SourceUnavailable: If the envelope is missing or has the wrong shape
        """
        try:
            shows = payload["data"]["allShows"]
        except (KeyError, TypeError) as e:
            raise SourceUnavailable(f"{self.name} payload has no data.allShows list") from e

        if not isinstance(shows, list):
            raise SourceUnavailable(f"{self.name} data.allShows is not a list")
        return shows
