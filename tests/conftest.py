from __future__ import annotations

import copy
from datetime import UTC, datetime
from typing import Any

import pytest

from prereview_zenodo_sync.config import Settings
from prereview_zenodo_sync.models import FullReview, Handle, Persona, Preprint

REVIEW_UUID = "6f8c0d5a-3b1e-4c2a-9d7f-1a2b3c4d5e6f"
AUTHOR_UUID = "0b9e5c2d-7a4f-4e1b-8c3d-2f1e0d9c8b7a"
ORCID = "0000-0002-1825-0097"

RECORD_PAYLOAD: dict[str, Any] = {
    "conceptdoi": "10.5281/zenodo.1000000",
    "doi": "10.5281/zenodo.1000001",
    "id": 1000001,
    "links": {
        "latest": "https://zenodo.org/api/records/1000001",
        "latest_html": "https://zenodo.org/records/1000001",
        "self": "https://zenodo.org/api/records/1000001",
    },
    "metadata": {
        "access_right": "open",
        "access_right_category": "success",
        "creators": [{"name": "Josiah Carberry", "orcid": ORCID, "affiliation": "Brown University"}],
        "description": "<p>This preprint is well argued.</p>",
        "language": "eng",
        "license": {"id": "CC-BY-4.0"},
        "related_identifiers": [
            {"scheme": "doi", "identifier": "10.5281/zenodo.1000000", "relation": "isVersionOf"},
        ],
        "resource_type": {"type": "publication", "subtype": "article", "title": "Journal article"},
        "title": "Review of The Effect of Sleep on Memory",
        "publication_date": "2022-03-01",
    },
    "stats": {"downloads": 12, "views": 40},
}


@pytest.fixture
def settings() -> Settings:
    return Settings(zenodo_api_key="test-zenodo-key")


@pytest.fixture
def record_payload() -> dict[str, Any]:
    return copy.deepcopy(RECORD_PAYLOAD)


def make_review(
    *,
    doi: str | None = "10.5281/zenodo.1000001",
    title: str = "The Effect of Sleep on Memory",
    authors: tuple[str, ...] = (AUTHOR_UUID,),
    review_uuid: str = REVIEW_UUID,
) -> FullReview:
    return FullReview(
        uuid=review_uuid,
        preprint=Preprint(
            handle=Handle(scheme="doi", identifier="10.1101/2022.01.13.476201"),
            title=title,
        ),
        authors=authors,
        doi=doi,
        updated_at=datetime(2022, 3, 1, 12, 0, tzinfo=UTC),
        drafts=("<p>This preprint is well argued.</p>",),
    )


def make_persona(name: str = "Josiah Carberry", *, is_anonymous: bool = False, orcid: str | None = ORCID) -> Persona:
    return Persona(name=name, is_anonymous=is_anonymous, orcid=orcid)
