"""Decode and encode Zenodo record JSON.

Decoding validates the subset of a record the sync cares about and drops
every other key; encoding is the exact inverse, so ``encode_record`` of a
decoded record is the normalized form used for diffing.
"""

from __future__ import annotations

import json
import re
from typing import Any

from prereview_zenodo_sync.decoders import (
    decode_items,
    optional,
    require_dict,
    require_literal,
    require_positive_int,
    require_refined,
    require_str,
)
from prereview_zenodo_sync.errors import DecodeError
from prereview_zenodo_sync.identifiers import is_arxiv_id, is_doi, is_orcid
from prereview_zenodo_sync.models import (
    Creator,
    License,
    RecordLinks,
    RecordMetadata,
    RelatedIdentifier,
    ResourceType,
    ZenodoRecord,
)

ACCESS_RIGHTS = ("open", "embargoed", "restricted", "closed")
ACCESS_RIGHT_CATEGORIES = ("danger", "success", "warning")
LANGUAGES = ("eng",)

# DataCite relation types as accepted by Zenodo. "isOrignialFormOf" is the
# spelling Zenodo itself uses.
RELATIONS = (
    "isCitedBy",
    "cites",
    "isSupplementTo",
    "isSupplementedBy",
    "isContinuedBy",
    "continues",
    "isDescribedBy",
    "describes",
    "hasMetadata",
    "isMetadataFor",
    "isNewVersionOf",
    "isPreviousVersionOf",
    "isPartOf",
    "hasPart",
    "isReferencedBy",
    "references",
    "isDocumentedBy",
    "documents",
    "isCompiledBy",
    "compiles",
    "isVariantFormOf",
    "isOrignialFormOf",
    "isIdenticalTo",
    "isAlternateIdentifier",
    "isReviewedBy",
    "reviews",
    "isDerivedFrom",
    "isSourceOf",
    "requires",
    "isRequiredBy",
    "isObsoletedBy",
    "obsoletes",
    "isPublishedIn",
    "isVersionOf",
)
RELATION_RESOURCE_TYPES = ("publication-preprint",)
RELATED_IDENTIFIER_SCHEMES = ("arxiv", "doi", "issn", "pmid", "url")

# Resource types keyed by ``type``; None means the type takes no subtype.
RESOURCE_SUBTYPES: dict[str, tuple[str, ...] | None] = {
    "dataset": None,
    "figure": None,
    "image": ("figure", "plot", "drawing", "diagram", "photo", "other"),
    "lesson": None,
    "other": None,
    "poster": None,
    "physicalobject": None,
    "presentation": None,
    "publication": (
        "annotationcollection",
        "book",
        "section",
        "conferencepaper",
        "datamanagementplan",
        "article",
        "patent",
        "preprint",
        "deliverable",
        "milestone",
        "proposal",
        "report",
        "softwaredocumentation",
        "taxonomictreatment",
        "technicalnote",
        "thesis",
        "workingpaper",
        "other",
    ),
    "software": None,
    "video": None,
}

_URL_RE = re.compile(r"^https?://\S+\Z")


def decode_record(payload: Any, path: str = "record") -> ZenodoRecord:
    """Validate a Zenodo record payload and return a ZenodoRecord."""
    data = require_dict(payload, path)
    links = require_dict(data.get("links"), f"{path}.links")

    return ZenodoRecord(
        id=require_positive_int(data.get("id"), f"{path}.id"),
        doi=require_refined(data.get("doi"), is_doi, "a DOI", f"{path}.doi"),
        conceptdoi=optional(data, "conceptdoi", _decode_doi, path),
        links=RecordLinks(
            latest=_decode_url(links.get("latest"), f"{path}.links.latest"),
            latest_html=_decode_url(links.get("latest_html"), f"{path}.links.latest_html"),
        ),
        metadata=_decode_metadata(data.get("metadata"), f"{path}.metadata"),
    )


def decode_records(payload: Any) -> list[ZenodoRecord]:
    """Decode a search response of the form ``{"hits": {"hits": [...]}}``."""
    data = require_dict(payload, "records")
    hits = require_dict(data.get("hits"), "records.hits")
    return list(decode_items(hits.get("hits"), decode_record, "records.hits.hits"))


def encode_record(record: ZenodoRecord) -> dict[str, Any]:
    """Turn a ZenodoRecord back into JSON-ready data, omitting absent optionals."""
    encoded: dict[str, Any] = {}
    if record.conceptdoi is not None:
        encoded["conceptdoi"] = record.conceptdoi
    encoded["doi"] = record.doi
    encoded["id"] = record.id
    encoded["links"] = {
        "latest": record.links.latest,
        "latest_html": record.links.latest_html,
    }
    encoded["metadata"] = _encode_metadata(record.metadata)
    return encoded


def record_to_text(record: ZenodoRecord) -> str:
    """Render a record as pretty-printed JSON, one field per line."""
    return json.dumps(encode_record(record), indent=2, ensure_ascii=False) + "\n"


def _decode_metadata(value: Any, path: str) -> RecordMetadata:
    data = require_dict(value, path)
    return RecordMetadata(
        access_right=require_literal(data.get("access_right"), ACCESS_RIGHTS, f"{path}.access_right"),
        access_right_category=require_literal(
            data.get("access_right_category"),
            ACCESS_RIGHT_CATEGORIES,
            f"{path}.access_right_category",
        ),
        creators=decode_items(data.get("creators"), _decode_creator, f"{path}.creators", non_empty=True),
        description=require_str(data.get("description"), f"{path}.description"),
        language=optional(data, "language", lambda value, p: require_literal(value, LANGUAGES, p), path),
        license=optional(data, "license", _decode_license, path),
        related_identifiers=optional(
            data,
            "related_identifiers",
            lambda value, p: decode_items(value, _decode_related_identifier, p, non_empty=True),
            path,
        ),
        resource_type=_decode_resource_type(data.get("resource_type"), f"{path}.resource_type"),
        title=require_str(data.get("title"), f"{path}.title"),
    )


def _decode_creator(value: Any, path: str) -> Creator:
    data = require_dict(value, path)
    return Creator(
        name=require_str(data.get("name"), f"{path}.name"),
        orcid=optional(data, "orcid", lambda v, p: require_refined(v, is_orcid, "an ORCID iD", p), path),
    )


def _decode_license(value: Any, path: str) -> License:
    data = require_dict(value, path)
    return License(id=require_str(data.get("id"), f"{path}.id"))


def _decode_related_identifier(value: Any, path: str) -> RelatedIdentifier:
    data = require_dict(value, path)
    scheme = require_literal(data.get("scheme"), RELATED_IDENTIFIER_SCHEMES, f"{path}.scheme")
    identifier_path = f"{path}.identifier"
    raw_identifier = data.get("identifier")

    if scheme == "arxiv":
        identifier = require_refined(raw_identifier, is_arxiv_id, "an arXiv ID", identifier_path)
    elif scheme == "doi":
        identifier = _decode_doi(raw_identifier, identifier_path)
    elif scheme == "url":
        identifier = _decode_url(raw_identifier, identifier_path)
    else:
        identifier = require_str(raw_identifier, identifier_path)

    return RelatedIdentifier(
        scheme=scheme,
        identifier=identifier,
        relation=require_literal(data.get("relation"), RELATIONS, f"{path}.relation"),
        resource_type=optional(
            data,
            "resource_type",
            lambda v, p: require_literal(v, RELATION_RESOURCE_TYPES, p),
            path,
        ),
    )


def _decode_resource_type(value: Any, path: str) -> ResourceType:
    data = require_dict(value, path)
    type_ = require_literal(data.get("type"), RESOURCE_SUBTYPES, f"{path}.type")
    subtypes = RESOURCE_SUBTYPES[type_]
    if subtypes is None:
        return ResourceType(type=type_)
    return ResourceType(
        type=type_,
        subtype=require_literal(data.get("subtype"), subtypes, f"{path}.subtype"),
    )


def _decode_doi(value: Any, path: str) -> str:
    return require_refined(value, is_doi, "a DOI", path)


def _decode_url(value: Any, path: str) -> str:
    text = require_str(value, path)
    if not _URL_RE.match(text):
        raise DecodeError(f"{path}: expected an http(s) URL, got {text!r}")
    return text


def _encode_metadata(metadata: RecordMetadata) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "access_right": metadata.access_right,
        "access_right_category": metadata.access_right_category,
        "creators": [_encode_creator(creator) for creator in metadata.creators],
        "description": metadata.description,
    }
    if metadata.language is not None:
        encoded["language"] = metadata.language
    if metadata.license is not None:
        encoded["license"] = {"id": metadata.license.id}
    if metadata.related_identifiers is not None:
        encoded["related_identifiers"] = [
            _encode_related_identifier(related) for related in metadata.related_identifiers
        ]
    encoded["resource_type"] = _encode_resource_type(metadata.resource_type)
    encoded["title"] = metadata.title
    return encoded


def _encode_creator(creator: Creator) -> dict[str, str]:
    encoded = {"name": creator.name}
    if creator.orcid is not None:
        encoded["orcid"] = creator.orcid
    return encoded


def _encode_related_identifier(related: RelatedIdentifier) -> dict[str, str]:
    encoded = {
        "identifier": related.identifier,
        "scheme": related.scheme,
        "relation": related.relation,
    }
    if related.resource_type is not None:
        encoded["resource_type"] = related.resource_type
    return encoded


def _encode_resource_type(resource_type: ResourceType) -> dict[str, str]:
    if resource_type.subtype is None:
        return {"type": resource_type.type}
    return {"subtype": resource_type.subtype, "type": resource_type.type}
