"""PREreview API client for published full reviews and author personas."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urljoin

from prereview_zenodo_sync.config import Settings
from prereview_zenodo_sync.decoders import (
    decode_items,
    require_bool,
    require_datetime,
    require_dict,
    require_refined,
    require_str,
)
from prereview_zenodo_sync.errors import DecodeError, PrereviewError, SyncError
from prereview_zenodo_sync.http_client import get_json
from prereview_zenodo_sync.identifiers import is_arxiv_id, is_doi, is_orcid, is_uuid
from prereview_zenodo_sync.models import FullReview, Handle, Persona, Preprint

LOGGER = logging.getLogger(__name__)

_HANDLE_RE = re.compile(r"^(.+?):(.+)\Z")


def get_full_reviews(settings: Settings) -> list[FullReview]:
    """Fetch every published full review, in the order PREreview returns them."""
    url = urljoin(settings.prereview_api_url, "full-reviews")
    try:
        payload = get_json(url, params={"is_published": "true"}, timeout=settings.http_timeout_seconds)
        return _parse_full_reviews_payload(payload)
    except SyncError as exc:
        LOGGER.error("Unable to fetch full reviews from PREreview: %s", exc)
        raise PrereviewError("Unable to read from PREreview") from exc


def get_persona(settings: Settings, persona_uuid: str) -> Persona:
    """Fetch the persona for one review author."""
    url = urljoin(settings.prereview_api_url, f"personas/{persona_uuid}")
    try:
        payload = get_json(url, timeout=settings.http_timeout_seconds)
        return _parse_personas_payload(payload)
    except SyncError as exc:
        LOGGER.error("Unable to fetch persona from PREreview persona_id=%s: %s", persona_uuid, exc)
        raise PrereviewError("Unable to read from PREreview") from exc


def _parse_full_reviews_payload(payload: Any) -> list[FullReview]:
    data = require_dict(payload, "full_reviews")
    return list(decode_items(data.get("data"), _decode_full_review, "full_reviews.data"))


def _parse_personas_payload(payload: Any) -> Persona:
    data = require_dict(payload, "personas")
    personas = decode_items(data.get("data"), _decode_persona, "personas.data")
    if not personas:
        raise DecodeError("personas.data: expected at least one persona")
    return personas[0]


def _decode_full_review(value: Any, path: str) -> FullReview:
    data = require_dict(value, path)
    preprint = require_dict(data.get("preprint"), f"{path}.preprint")

    raw_doi = data.get("doi")
    doi = None if raw_doi is None else require_refined(raw_doi, is_doi, "a DOI", f"{path}.doi")

    return FullReview(
        uuid=require_refined(data.get("uuid"), is_uuid, "a UUID", f"{path}.uuid"),
        preprint=Preprint(
            handle=_decode_handle(preprint.get("handle"), f"{path}.preprint.handle"),
            title=require_str(preprint.get("title"), f"{path}.preprint.title"),
        ),
        authors=decode_items(data.get("authors"), _decode_author, f"{path}.authors"),
        doi=doi,
        updated_at=require_datetime(data.get("updatedAt"), f"{path}.updatedAt"),
        drafts=decode_items(data.get("drafts"), _decode_draft, f"{path}.drafts", non_empty=True),
    )


def _decode_handle(value: Any, path: str) -> Handle:
    """Split ``scheme:identifier``; arXiv identifiers gain the ``arXiv:`` prefix."""
    text = require_str(value, path)
    match = _HANDLE_RE.match(text)
    if not match:
        raise DecodeError(f"{path}: expected scheme:identifier, got {text!r}")

    scheme, identifier = match.groups()
    if scheme == "arxiv":
        return Handle(scheme, require_refined(f"arXiv:{identifier}", is_arxiv_id, "an arXiv ID", path))
    if scheme == "doi":
        return Handle(scheme, require_refined(identifier, is_doi, "a DOI", path))
    raise DecodeError(f"{path}: unsupported handle scheme {scheme!r}")


def _decode_author(value: Any, path: str) -> str:
    data = require_dict(value, path)
    return require_refined(data.get("uuid"), is_uuid, "a UUID", f"{path}.uuid")


def _decode_draft(value: Any, path: str) -> str:
    data = require_dict(value, path)
    return require_str(data.get("contents"), f"{path}.contents")


def _decode_persona(value: Any, path: str) -> Persona:
    data = require_dict(value, path)
    raw_orcid = data.get("orcid")
    return Persona(
        name=require_str(data.get("name"), f"{path}.name"),
        is_anonymous=require_bool(data.get("isAnonymous"), f"{path}.isAnonymous"),
        orcid=None if raw_orcid is None else require_refined(raw_orcid, is_orcid, "an ORCID iD", f"{path}.orcid"),
    )
