"""Thin HTTP transport over requests with normalized failures."""

from __future__ import annotations

import logging
from typing import Any

import requests

from prereview_zenodo_sync.errors import DecodeError, HttpStatusError, NetworkError

LOGGER = logging.getLogger(__name__)


def send(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    timeout: float | None = None,
) -> requests.Response:
    """Send one request; any transport failure is raised as NetworkError."""
    LOGGER.debug("HTTP %s %s params=%s", method, url, params)
    try:
        return requests.request(
            method=method,
            url=url,
            headers=headers,
            params=params,
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise NetworkError(f"{method} {url} failed: {exc}") from exc


def get_json(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    timeout: float | None = None,
) -> Any:
    """GET a URL and return its parsed JSON body.

    Raises:
        NetworkError: the request never got a response.
        HttpStatusError: the response status was not 200 OK.
        DecodeError: the body was not valid JSON.
    """
    response = send("GET", url, headers=headers, params=params, timeout=timeout)
    if response.status_code != requests.codes.ok:
        raise HttpStatusError(response.status_code, url)

    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError(f"Response from {url} is not valid JSON") from exc
