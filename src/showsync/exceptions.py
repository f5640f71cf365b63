"""Error taxonomy for the sync pipeline and the query API."""


class SyncError(Exception):
    """Base class for failures that abort a sync run."""

    code = "sync_error"


class SourceUnavailable(SyncError):
    """The show source could not be reached or read."""

    code = "source_unavailable"


class MalformedRecord(SyncError):
    """A raw record could not be normalized."""

    code = "malformed_record"

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Record {index} is malformed: {reason}")


class StorageFailure(SyncError):
    """A batch transaction failed and was rolled back."""

    code = "storage_failure"


class SyncAlreadyRunning(SyncError):
    """Another sync run holds the single-flight guard."""

    code = "sync_in_progress"


class ClientInputError(ValueError):
    """A query parameter could not be interpreted."""
