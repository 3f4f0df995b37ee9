"""Shared typed models for PREreview reviews and Zenodo records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Handle:
    """Scheme-tagged preprint identifier, e.g. ``doi`` / ``10.1101/2022.01.01.123456``."""

    scheme: str
    identifier: str


@dataclass(frozen=True, slots=True)
class Preprint:
    handle: Handle
    title: str


@dataclass(frozen=True, slots=True)
class FullReview:
    """Published full review as returned by the PREreview API."""

    uuid: str
    preprint: Preprint
    authors: tuple[str, ...]
    doi: str | None
    updated_at: datetime
    drafts: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Persona:
    """Public display identity of a review author."""

    name: str
    is_anonymous: bool
    orcid: str | None = None


@dataclass(frozen=True, slots=True)
class Creator:
    name: str
    orcid: str | None = None


@dataclass(frozen=True, slots=True)
class License:
    id: str


@dataclass(frozen=True, slots=True)
class RelatedIdentifier:
    scheme: str
    identifier: str
    relation: str
    resource_type: str | None = None


@dataclass(frozen=True, slots=True)
class ResourceType:
    type: str
    subtype: str | None = None


@dataclass(frozen=True, slots=True)
class RecordLinks:
    latest: str
    latest_html: str


@dataclass(frozen=True, slots=True)
class RecordMetadata:
    access_right: str
    access_right_category: str
    creators: tuple[Creator, ...]
    description: str
    resource_type: ResourceType
    title: str
    language: str | None = None
    license: License | None = None
    related_identifiers: tuple[RelatedIdentifier, ...] | None = None


@dataclass(frozen=True, slots=True)
class ZenodoRecord:
    """Versioned Zenodo record, reduced to the fields the sync compares."""

    id: int
    doi: str
    links: RecordLinks
    metadata: RecordMetadata
    conceptdoi: str | None = None
