"""Read-only Zenodo API client: single records and one-page searches."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urljoin

from prereview_zenodo_sync.config import Settings
from prereview_zenodo_sync.errors import RecordIdError, SyncError, ZenodoError
from prereview_zenodo_sync.http_client import get_json
from prereview_zenodo_sync.models import ZenodoRecord
from prereview_zenodo_sync.record_codec import decode_record, decode_records

LOGGER = logging.getLogger(__name__)

# 10.5281 is the production prefix, 10.5072 the sandbox one.
_ZENODO_DOI_RE = re.compile(r"^10\.(?:5072|5281)/zenodo\.([1-9][0-9]*)\Z")


def record_id_from_doi(doi: str) -> int:
    """Extract the numeric record ID from a Zenodo-minted DOI."""
    match = _ZENODO_DOI_RE.match(doi)
    if not match:
        raise RecordIdError(f"Expected a DOI with a Zenodo record ID, got {doi!r}")
    return int(match.group(1))


def get_record(settings: Settings, record_id: int) -> ZenodoRecord:
    """Fetch and decode one record by its numeric ID."""
    url = urljoin(settings.zenodo_api_url, f"records/{record_id}")
    try:
        payload = get_json(url, headers=_auth_headers(settings), timeout=settings.http_timeout_seconds)
        return decode_record(payload)
    except SyncError as exc:
        LOGGER.error("Unable to fetch record from Zenodo record_id=%s: %s", record_id, exc)
        raise ZenodoError("Unable to read from Zenodo") from exc


def search(settings: Settings, query: dict[str, Any]) -> list[ZenodoRecord]:
    """Run a records search and return the hits on the first page only.

    Args:
        settings: Runtime settings carrying the API key and base URL.
        query: Query-string parameters, e.g. ``{"q": "...", "size": 25}``.
    """
    url = urljoin(settings.zenodo_api_url, "records/")
    try:
        payload = get_json(
            url,
            headers=_auth_headers(settings),
            params=query,
            timeout=settings.http_timeout_seconds,
        )
        return decode_records(payload)
    except SyncError as exc:
        LOGGER.error("Unable to search Zenodo query=%s: %s", query, exc)
        raise ZenodoError("Unable to read from Zenodo") from exc


def _auth_headers(settings: Settings) -> dict[str, str]:
    return {"Authorization": f"Bearer {settings.zenodo_api_key}"}
