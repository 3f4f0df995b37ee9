from unittest.mock import MagicMock, patch

import pytest
import requests

from prereview_zenodo_sync.errors import DecodeError, HttpStatusError, NetworkError
from prereview_zenodo_sync.http_client import get_json, send


def _mock_resp(status_code: int = 200, payload: object = None) -> MagicMock:
    mock = MagicMock()
    mock.status_code = status_code
    mock.json.return_value = payload
    return mock


def test_send_passes_request_through() -> None:
    with patch("prereview_zenodo_sync.http_client.requests.request", return_value=_mock_resp()) as mock_request:
        send("GET", "https://example.org/x", headers={"A": "b"}, params={"q": "1"}, timeout=5)

    mock_request.assert_called_once_with(
        method="GET",
        url="https://example.org/x",
        headers={"A": "b"},
        params={"q": "1"},
        timeout=5,
    )


@pytest.mark.parametrize("error", [
    requests.ConnectionError("connection refused"),
    requests.Timeout("read timed out"),
])
def test_send_normalizes_transport_failures(error: Exception) -> None:
    with patch("prereview_zenodo_sync.http_client.requests.request", side_effect=error):
        with pytest.raises(NetworkError, match="GET https://example.org/x failed"):
            send("GET", "https://example.org/x")


def test_get_json_returns_parsed_body() -> None:
    with patch("prereview_zenodo_sync.http_client.requests.request", return_value=_mock_resp(payload={"data": []})):
        assert get_json("https://example.org/x") == {"data": []}


def test_get_json_rejects_non_ok_status() -> None:
    with patch("prereview_zenodo_sync.http_client.requests.request", return_value=_mock_resp(status_code=404)):
        with pytest.raises(HttpStatusError) as excinfo:
            get_json("https://example.org/missing")

    assert excinfo.value.status_code == 404
    assert excinfo.value.url == "https://example.org/missing"


def test_get_json_rejects_invalid_json() -> None:
    response = _mock_resp()
    response.json.side_effect = ValueError("Expecting value")

    with patch("prereview_zenodo_sync.http_client.requests.request", return_value=response):
        with pytest.raises(DecodeError, match="not valid JSON"):
            get_json("https://example.org/x")
