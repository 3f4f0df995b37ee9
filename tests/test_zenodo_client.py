from __future__ import annotations

from typing import Any
from unittest.mock import patch

import pytest

from prereview_zenodo_sync.config import Settings
from prereview_zenodo_sync.errors import HttpStatusError, RecordIdError, ZenodoError
from prereview_zenodo_sync.zenodo_client import get_record, record_id_from_doi, search


@pytest.mark.parametrize("doi, expected", [
    ("10.5281/zenodo.1000001", 1000001),
    ("10.5072/zenodo.1005912", 1005912),
    ("10.5281/zenodo.7", 7),
])
def test_record_id_from_doi(doi: str, expected: int) -> None:
    assert record_id_from_doi(doi) == expected


@pytest.mark.parametrize("doi", [
    "10.1101/2022.01.13.476201",
    "10.5281/zenodo.0123",
    "10.5281/zenodo.abc",
    "10.5281/zenodo.1000001.v2",
    "10.9999/zenodo.1000001",
])
def test_record_id_from_doi_rejects_other_dois(doi: str) -> None:
    with pytest.raises(RecordIdError):
        record_id_from_doi(doi)


def test_get_record_sends_bearer_token(settings: Settings, record_payload: dict[str, Any]) -> None:
    with patch("prereview_zenodo_sync.zenodo_client.get_json", return_value=record_payload) as mock_get:
        record = get_record(settings, 1000001)

    assert record.id == 1000001
    mock_get.assert_called_once_with(
        "https://zenodo.org/api/records/1000001",
        headers={"Authorization": "Bearer test-zenodo-key"},
        timeout=None,
    )


def test_get_record_uses_configured_base_url(record_payload: dict[str, Any]) -> None:
    sandbox = Settings(zenodo_api_key="k", zenodo_api_url="https://sandbox.zenodo.org/api/")

    with patch("prereview_zenodo_sync.zenodo_client.get_json", return_value=record_payload) as mock_get:
        get_record(sandbox, 1005912)

    assert mock_get.call_args.args[0] == "https://sandbox.zenodo.org/api/records/1005912"


def test_get_record_wraps_http_errors(settings: Settings) -> None:
    error = HttpStatusError(410, "https://zenodo.org/api/records/1000001")

    with patch("prereview_zenodo_sync.zenodo_client.get_json", side_effect=error):
        with pytest.raises(ZenodoError, match="Unable to read from Zenodo") as excinfo:
            get_record(settings, 1000001)

    assert excinfo.value.__cause__ is error


def test_get_record_wraps_decode_errors(settings: Settings, record_payload: dict[str, Any]) -> None:
    record_payload["metadata"]["access_right"] = "public"

    with patch("prereview_zenodo_sync.zenodo_client.get_json", return_value=record_payload):
        with pytest.raises(ZenodoError):
            get_record(settings, 1000001)


def test_search_requests_a_single_page(settings: Settings, record_payload: dict[str, Any]) -> None:
    query = {"q": "conceptdoi:\"10.5281/zenodo.1000000\"", "size": "10"}

    with patch("prereview_zenodo_sync.zenodo_client.get_json", return_value={"hits": {"hits": [record_payload]}}) as mock_get:
        records = search(settings, query)

    assert [record.doi for record in records] == ["10.5281/zenodo.1000001"]
    mock_get.assert_called_once_with(
        "https://zenodo.org/api/records/",
        headers={"Authorization": "Bearer test-zenodo-key"},
        params=query,
        timeout=None,
    )


def test_search_wraps_errors(settings: Settings) -> None:
    with patch("prereview_zenodo_sync.zenodo_client.get_json", return_value={"hits": []}):
        with pytest.raises(ZenodoError):
            search(settings, {"q": "prereview"})


def test_record_id_from_doi_rejects_trailing_newline() -> None:
    with pytest.raises(RecordIdError):
        record_id_from_doi("10.5281/zenodo.123\n")
