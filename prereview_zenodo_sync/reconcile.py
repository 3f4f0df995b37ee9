"""Compare each published PREreview review with its Zenodo record."""

from __future__ import annotations

import difflib
import logging
from dataclasses import replace
from urllib.parse import urljoin

from prereview_zenodo_sync.config import Settings
from prereview_zenodo_sync.errors import MissingDoiError, RecordIdError, SyncError
from prereview_zenodo_sync.models import Creator, FullReview, License, RelatedIdentifier, ResourceType, ZenodoRecord
from prereview_zenodo_sync.prereview_client import get_full_reviews, get_persona
from prereview_zenodo_sync.record_codec import record_to_text
from prereview_zenodo_sync.zenodo_client import get_record, record_id_from_doi

LOGGER = logging.getLogger(__name__)

ANONYMOUS_CREATOR_NAME = "PREreview.org community member"

# UTF-8 curly quotes that were decoded as cp1252 somewhere upstream.
_MOJIBAKE_APOSTROPHES = ("â€™", "â€˜")


def normalize_title(text: str) -> str:
    """Replace mis-encoded single quotation marks with a plain apostrophe."""
    for sequence in _MOJIBAKE_APOSTROPHES:
        text = text.replace(sequence, "'")
    return text


def get_record_id(review: FullReview) -> int | None:
    """Return the Zenodo record ID for a review, or None when it has no DOI."""
    try:
        doi = _require_doi(review)
    except MissingDoiError:
        LOGGER.warning(
            "No DOI preprint_id=%s review_id=%s",
            review.preprint.handle.identifier,
            review.uuid,
        )
        return None

    try:
        return record_id_from_doi(doi)
    except RecordIdError as exc:
        LOGGER.warning("Unable to turn DOI into Zenodo record ID review_id=%s: %s", review.uuid, exc)
        raise


def _require_doi(review: FullReview) -> str:
    if review.doi is None:
        raise MissingDoiError(f"Full review {review.uuid} has no DOI")
    return review.doi


def create_expected_record(settings: Settings, review: FullReview, actual: ZenodoRecord) -> ZenodoRecord:
    """Derive the record a review should have by overlaying its metadata onto ``actual``.

    Only creators, license, language, related identifiers, resource type and
    title are replaced; everything else is carried over from ``actual``.
    Author personas are fetched one at a time, in author order.
    """
    personas = [get_persona(settings, author) for author in review.authors]

    if personas:
        creators = tuple(
            Creator(
                name=ANONYMOUS_CREATOR_NAME if persona.is_anonymous else persona.name,
                orcid=persona.orcid,
            )
            for persona in personas
        )
    else:
        creators = (Creator(name=ANONYMOUS_CREATOR_NAME),)

    related_identifiers = None
    if actual.conceptdoi is not None:
        related_identifiers = (
            RelatedIdentifier(scheme="doi", identifier=actual.conceptdoi, relation="isVersionOf"),
        )

    metadata = replace(
        actual.metadata,
        creators=creators,
        license=License(id="CC-BY-4.0"),
        language="eng",
        related_identifiers=related_identifiers,
        resource_type=ResourceType(type="publication", subtype="article"),
        title=f"Review of {normalize_title(review.preprint.title)}",
    )
    return replace(actual, metadata=metadata)


def diff_records(actual: ZenodoRecord, expected: ZenodoRecord, *, from_label: str, to_label: str) -> str:
    """Return a unified diff between the JSON renderings of two records."""
    return "".join(
        difflib.unified_diff(
            record_to_text(actual).splitlines(keepends=True),
            record_to_text(expected).splitlines(keepends=True),
            fromfile=from_label,
            tofile=to_label,
        )
    )


def count_hunks(diff: str) -> int:
    return sum(1 for line in diff.splitlines() if line.startswith("@@"))


def process_full_review(settings: Settings, review: FullReview) -> str | None:
    """Check one review; return its UUID when its Zenodo record needs changes.

    A review without a DOI always needs changes and is not looked up on
    Zenodo. When a diff is found it is printed to stdout.
    """
    record_id = get_record_id(review)
    if record_id is None:
        LOGGER.warning(
            "Skipped processing full review preprint_id=%s review_id=%s changes_needed=%s",
            review.preprint.handle.identifier,
            review.uuid,
            True,
        )
        return review.uuid

    actual = get_record(settings, record_id)
    expected = create_expected_record(settings, review, actual)
    diff = diff_records(
        actual,
        expected,
        from_label=actual.links.latest,
        to_label=urljoin(settings.prereview_api_url, f"full-reviews/{review.uuid}"),
    )

    changes_needed = count_hunks(diff) > 0
    if changes_needed:
        print(diff, end="")

    LOGGER.debug(
        "Processed full review preprint_id=%s review_id=%s changes_needed=%s",
        review.preprint.handle.identifier,
        review.uuid,
        changes_needed,
    )
    return review.uuid if changes_needed else None


def find_changes_required(settings: Settings) -> list[str]:
    """Process every published review in order and collect those needing changes.

    Failing to list the reviews is fatal; a failure on a single review is
    logged and that review is skipped.
    """
    reviews = get_full_reviews(settings)
    LOGGER.debug("Found full reviews number=%s", len(reviews))

    changes_required: list[str] = []
    unchanged = 0
    skipped = 0

    for review in reviews:
        try:
            review_id = process_full_review(settings, review)
        except SyncError as exc:
            skipped += 1
            LOGGER.warning(
                "Unable to process full review preprint_id=%s review_id=%s: %s",
                review.preprint.handle.identifier,
                review.uuid,
                exc,
            )
            continue

        if review_id is None:
            unchanged += 1
        else:
            changes_required.append(review_id)

    LOGGER.info(
        "Run complete. reviews=%s changes_needed=%s unchanged=%s skipped=%s",
        len(reviews),
        len(changes_required),
        unchanged,
        skipped,
    )
    return changes_required


def run_program(settings: Settings) -> list[str]:
    """Run one reconciliation pass and log the verdict."""
    changes_required = find_changes_required(settings)
    if not changes_required:
        LOGGER.info("Nothing to do")
    else:
        LOGGER.info("Changes needed full_reviews=%s", changes_required)
    return changes_required
