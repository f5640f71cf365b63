"""Source registry mapping configured source types to show sources."""

from collections.abc import Callable

from showsync.config import Settings
from showsync.sources.api import ApiShowSource
from showsync.sources.base import ShowSource
from showsync.sources.snapshot import SnapshotShowSource

# Registry mapping source type names to factories
SOURCE_REGISTRY: dict[str, Callable[[Settings], ShowSource]] = {
    "api": ApiShowSource.from_settings,
    "file": SnapshotShowSource.from_settings,
}


def get_source(source_type: str, settings: Settings) -> ShowSource:
    """
    Build a show source by type.

    Args:
        source_type: The source type ("api" or "file")
        settings: Settings providing the source's URL, path and timeout

    Raises:
        ValueError: If the type is not registered
    """
    factory = SOURCE_REGISTRY.get(source_type)
    if factory is None:
        raise ValueError(f"Unknown show source: {source_type!r}")
    return factory(settings)


__all__ = [
    "SOURCE_REGISTRY",
    "get_source",
    "ShowSource",
    "ApiShowSource",
    "SnapshotShowSource",
]
