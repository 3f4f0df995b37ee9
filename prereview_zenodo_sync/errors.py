"""Exception types raised across the sync pipeline."""

from __future__ import annotations


class SyncError(Exception):
    """Base class for every recoverable failure in a sync run."""


class ConfigError(SyncError):
    """Raised when required configuration is missing or malformed."""


class NetworkError(SyncError):
    """Raised when a request never produced an HTTP response."""


class HttpStatusError(SyncError):
    """Raised when an API answers with a non-success status code."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"Unexpected HTTP status {status_code} from {url}")
        self.status_code = status_code
        self.url = url


class DecodeError(SyncError):
    """Raised when a payload does not have the expected shape."""


class MissingDoiError(SyncError):
    """Raised when a review has no DOI linking it to an archive record."""


class RecordIdError(SyncError):
    """Raised when a DOI does not carry a Zenodo record ID."""


class PrereviewError(SyncError):
    """Raised when data cannot be read from PREreview."""


class ZenodoError(SyncError):
    """Raised when data cannot be read from Zenodo."""
