"""Runtime configuration read from the process environment."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from prereview_zenodo_sync.errors import ConfigError

DEFAULT_PREREVIEW_API_URL = "https://www.prereview.org/api/v2/"
DEFAULT_ZENODO_API_URL = "https://zenodo.org/api/"


@dataclass(frozen=True, slots=True)
class Settings:
    zenodo_api_key: str
    prereview_api_url: str = DEFAULT_PREREVIEW_API_URL
    zenodo_api_url: str = DEFAULT_ZENODO_API_URL
    http_timeout_seconds: float | None = None


def read_settings() -> Settings:
    """Build Settings from environment variables.

    ZENODO_API_KEY is required. PREREVIEW_API_URL and ZENODO_API_URL override
    the production endpoints (point the latter at https://sandbox.zenodo.org/api/
    for the sandbox). HTTP_TIMEOUT_SECONDS is unset by default, which means
    requests wait for a response indefinitely.
    """
    api_key = os.getenv("ZENODO_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("Unable to read environment variables: ZENODO_API_KEY is required")

    raw_timeout = os.getenv("HTTP_TIMEOUT_SECONDS", "").strip()
    timeout: float | None = None
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigError(f"HTTP_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}") from exc
        if not math.isfinite(timeout) or timeout <= 0:
            raise ConfigError(f"HTTP_TIMEOUT_SECONDS must be a positive number of seconds, got {raw_timeout!r}")

    return Settings(
        zenodo_api_key=api_key,
        prereview_api_url=_with_trailing_slash(os.getenv("PREREVIEW_API_URL") or DEFAULT_PREREVIEW_API_URL),
        zenodo_api_url=_with_trailing_slash(os.getenv("ZENODO_API_URL") or DEFAULT_ZENODO_API_URL),
        http_timeout_seconds=timeout,
    )


def _with_trailing_slash(url: str) -> str:
    url = url.strip()
    return url if url.endswith("/") else f"{url}/"
