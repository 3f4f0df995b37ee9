"""Format checks for the identifier schemes used by PREreview and Zenodo."""

from __future__ import annotations

import re
import uuid

_DOI_RE = re.compile(r"^10[.][0-9]{2,}(?:[.][0-9]+)*/\S+\Z")
_ORCID_RE = re.compile(r"^\d{4}-\d{4}-\d{4}-\d{3}[\dX]\Z")
_MAX_UUID_INT = (1 << 128) - 1

# New-style ids (2007 onwards) and the older archive/number form.
_ARXIV_NEW_RE = re.compile(r"^arXiv:\d{4}\.\d{4,5}(?:v\d+)?\Z")
_ARXIV_OLD_RE = re.compile(r"^arXiv:[a-z]+(?:-[a-z]+)*(?:\.[A-Z]{2})?/\d{7}(?:v\d+)?\Z")


def is_uuid(value: object) -> bool:
    """Return True for a hyphenated RFC 4122 UUID string.

    The version must be 1 to 8 with the RFC 4122 variant; the nil and max
    UUIDs are also accepted.
    """
    if not isinstance(value, str) or len(value) != 36:
        return False
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        return False
    if str(parsed) != value.lower():
        return False
    if parsed.int in (0, _MAX_UUID_INT):
        return True
    return parsed.variant == uuid.RFC_4122 and parsed.version is not None and 1 <= parsed.version <= 8


def is_doi(value: object) -> bool:
    return isinstance(value, str) and bool(_DOI_RE.match(value))


def is_orcid(value: object) -> bool:
    """Return True for a dash-formatted ORCID iD with a valid check digit.

    The check digit is ISO 7064 MOD 11-2 over the first fifteen digits.
    """
    if not isinstance(value, str) or not _ORCID_RE.match(value):
        return False

    digits = value.replace("-", "")
    total = 0
    for char in digits[:-1]:
        total = (total + int(char)) * 2
    remainder = (12 - total % 11) % 11
    expected = "X" if remainder == 10 else str(remainder)
    return digits[-1] == expected


def is_arxiv_id(value: object) -> bool:
    """Return True for an ``arXiv:``-prefixed arXiv identifier."""
    if not isinstance(value, str):
        return False
    return bool(_ARXIV_NEW_RE.match(value) or _ARXIV_OLD_RE.match(value))
