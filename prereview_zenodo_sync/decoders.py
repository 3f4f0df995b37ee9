"""Field validators for decoding API payloads into typed models.

Every helper takes the raw value plus a dotted ``path`` used in the error
message, and raises DecodeError when the value does not fit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any, TypeVar

from prereview_zenodo_sync.errors import DecodeError

T = TypeVar("T")


def require_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"{path}: expected an object, got {type(value).__name__}")
    return value


def require_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"{path}: expected a string, got {type(value).__name__}")
    return value


def require_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise DecodeError(f"{path}: expected a boolean, got {type(value).__name__}")
    return value


def require_positive_int(value: Any, path: str) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise DecodeError(f"{path}: expected a positive integer, got {value!r}")
    return value


def require_literal(value: Any, allowed: Iterable[str], path: str) -> str:
    allowed = tuple(allowed)
    if value not in allowed:
        raise DecodeError(f"{path}: expected one of {', '.join(allowed)}, got {value!r}")
    return value


def require_refined(value: Any, predicate: Callable[[Any], bool], name: str, path: str) -> str:
    """Require a string for which ``predicate`` holds, e.g. a DOI or ORCID iD."""
    text = require_str(value, path)
    if not predicate(text):
        raise DecodeError(f"{path}: expected {name}, got {text!r}")
    return text


def require_list(value: Any, path: str, *, non_empty: bool = False) -> list[Any]:
    if not isinstance(value, list):
        raise DecodeError(f"{path}: expected an array, got {type(value).__name__}")
    if non_empty and not value:
        raise DecodeError(f"{path}: expected a non-empty array")
    return value


def decode_items(value: Any, decode: Callable[[Any, str], T], path: str, *, non_empty: bool = False) -> tuple[T, ...]:
    """Decode every element of an array with ``decode(item, item_path)``."""
    items = require_list(value, path, non_empty=non_empty)
    return tuple(decode(item, f"{path}[{index}]") for index, item in enumerate(items))


def optional(data: dict[str, Any], key: str, decode: Callable[[Any, str], T], path: str) -> T | None:
    """Decode ``data[key]`` when the key is present and not null."""
    value = data.get(key)
    if value is None:
        return None
    return decode(value, f"{path}.{key}")


def require_datetime(value: Any, path: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    text = require_str(value, path)
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise DecodeError(f"{path}: expected an ISO-8601 date, got {text!r}") from exc

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
