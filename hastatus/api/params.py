"""Query parameter parsing for the image endpoints."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Optional

from ..render.layout import MAX_DIMENSION, MIN_DIMENSION
from .exceptions import RequestValidationError

# <domain>.<object_id>; Home Assistant ids are lowercase but ids are passed
# through verbatim so upstream decides what exists.
_ENTITY_ID_RE = re.compile(r"^[A-Za-z0-9_]+\.[A-Za-z0-9_\-]+$")

MAX_TITLE_LENGTH = 100


def validate_entity_id(entity_id: str) -> str:
    """Return the stripped entity id or raise RequestValidationError."""
    candidate = entity_id.strip()
    if not _ENTITY_ID_RE.match(candidate):
        raise RequestValidationError(
            f"Invalid entity id {entity_id!r}; expected <domain>.<object_id>"
        )
    return candidate


def parse_sensor_list(raw: Optional[str], max_count: int) -> tuple[str, ...]:
    """Split a comma separated sensor list.

    Items are trimmed and empty items dropped, so ``"a.b, ,c.d,"`` yields two
    ids. Order is preserved.

    Args:
        raw: Value of the ``sensors`` query parameter
        max_count: Largest number of sensors the endpoint accepts

    Returns:
        Tuple of entity ids

    Raises:
        RequestValidationError: If the list is empty, too long, or holds a malformed id
    """
    items = [item.strip() for item in (raw or "").split(",")]
    sensor_ids = [item for item in items if item]

    if not sensor_ids:
        raise RequestValidationError("No sensors provided. Use ?sensors=sensor1,sensor2")
    if len(sensor_ids) > max_count:
        raise RequestValidationError(f"Too many sensors (max {max_count} allowed)")

    return tuple(validate_entity_id(sensor_id) for sensor_id in sensor_ids)


def parse_dimension(query: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    """Read an optional integer canvas dimension.

    Args:
        query: Request query mapping
        name: Parameter name (``width`` or ``height``)
        default: Value used when the parameter is absent or empty

    Returns:
        Parsed dimension, or the default

    Raises:
        RequestValidationError: If the value is not an integer within bounds
    """
    raw = query.get(name, "").strip()
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError:
        raise RequestValidationError(f"{name} must be an integer, got {raw!r}") from None

    if not MIN_DIMENSION <= value <= MAX_DIMENSION:
        raise RequestValidationError(
            f"{name} must be between {MIN_DIMENSION} and {MAX_DIMENSION}, got {value}"
        )
    return value


def parse_title(query: Mapping[str, str], default: str) -> str:
    """Optional title; blank values fall back to the default."""
    title = query.get("title", "").strip()
    if not title:
        return default
    return title[:MAX_TITLE_LENGTH]
