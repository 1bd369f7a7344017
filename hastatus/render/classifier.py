"""Status classification for entity records.

The rules run in order and the first match wins. Every record maps to
exactly one category; nothing here raises.
"""

from __future__ import annotations

from .models import EntityRecord, StatusCategory

UNAVAILABLE_TOKENS = frozenset({"unavailable", "unknown", ""})
TOGGLE_DOMAINS = frozenset({"binary_sensor", "switch", "light", "input_boolean"})
BATTERY_WARNING_LEVEL = 20.0


def classify(record: EntityRecord) -> StatusCategory:
    """Classify a record into one of the five status categories.

    Args:
        record: Entity record to classify

    Returns:
        StatusCategory for the record
    """
    if record.is_unavailable_sentinel:
        return StatusCategory.UNAVAILABLE

    token = record.raw_state.strip().lower()
    if token in UNAVAILABLE_TOKENS:
        return StatusCategory.UNAVAILABLE

    if record.domain in TOGGLE_DOMAINS:
        if token == "on":
            return StatusCategory.ACTIVE
        if token == "off":
            return StatusCategory.INACTIVE

    value = record.numeric_state

    if (
        record.domain == "sensor"
        and record.device_class == "battery"
        and value is not None
        and value < BATTERY_WARNING_LEVEL
    ):
        return StatusCategory.WARNING

    # Numeric or free-text states are both neutral; the value drives the text only.
    return StatusCategory.NEUTRAL
