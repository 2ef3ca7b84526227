from __future__ import annotations

# travel_planner/services/utils.py
import json
import math
from datetime import date, datetime
from typing import Any, Iterable

from ..errors import ValidationError

UNKNOWN_COORDINATE = 0.0


def to_float_safe(x, default=None):
    try:
        return float(x)
    except (TypeError, ValueError):
        return default


def to_coordinate(x) -> float:
    """Parse a latitude/longitude; anything unusable becomes the 0 sentinel."""
    v = to_float_safe(x, UNKNOWN_COORDINATE)
    if math.isnan(v) or math.isinf(v):
        return UNKNOWN_COORDINATE
    return v


def is_known_point(latitude, longitude) -> bool:
    return bool(latitude) and bool(longitude)


def require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be non-empty text")
    return value


def optional_text(value: Any, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be text")
    return value


def require_date(value: Any, field: str) -> str:
    require_text(value, field)
    try:
        date.fromisoformat(value)
        ok = len(value) == 10
    except ValueError:
        ok = False
    if not ok:
        raise ValidationError(f"{field} must be a YYYY-MM-DD date")
    return value


def require_timestamp(value: Any, field: str) -> str:
    """ISO-8601 instant with a timezone designator, e.g. 2025-07-15T10:00:00Z."""
    require_text(value, field)
    raw = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    try:
        ts = datetime.fromisoformat(raw)
    except ValueError:
        ts = None
    if ts is None or ts.tzinfo is None or "T" not in value.upper():
        raise ValidationError(f"{field} must be an ISO-8601 timestamp with a timezone")
    return value


def require_int(value: Any, field: str, minimum: int | None = None, maximum: int | None = None) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer")
    if minimum is not None and value < minimum:
        raise ValidationError(f"{field} must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field} must be <= {maximum}")
    return value


def encode_media_urls(value: Any) -> str:
    """
    Normalise media_urls to the stored JSON text.

    Accepts a list of strings (serialised compactly) or the JSON text of one
    (kept as given). None means no media.
    Anything else (including "") is rejected.
    """
    if value is None:
        return "[]"
    text = value if isinstance(value, str) else None
    if text is not None:
        try:
            value = json.loads(text)
        except ValueError:
            raise ValidationError("media_urls must be a JSON array of strings")
    if not isinstance(value, (list, tuple)) or not all(isinstance(u, str) for u in value):
        raise ValidationError("media_urls must be a JSON array of strings")
    if text is not None:
        return text
    return json.dumps(list(value), ensure_ascii=False, separators=(",", ":"))


def decode_media_urls(text: str | None) -> list[str]:
    if not text:
        return []
    value = json.loads(text)
    if not isinstance(value, list) or not all(isinstance(u, str) for u in value):
        raise ValueError(f"stored media_urls is not a JSON array of strings: {text!r}")
    return value


def is_permutation(candidate: Iterable[int], current: Iterable[int]) -> bool:
    cand = list(candidate)
    return len(cand) == len(set(cand)) and set(cand) == set(current)
