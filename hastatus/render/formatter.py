"""Text formatting for entity values, names and text slots."""

from __future__ import annotations

from .models import EntityRecord

ELLIPSIS = "…"
MIN_TRUNCATED_LENGTH = 3
PLACEHOLDER = "N/A"
UNAVAILABLE_TEXT = "Unavailable"

# Single-word toggle tokens that get a capitalized first letter.
TOGGLE_TOKENS = frozenset({"on", "off"})

# (attribute key, label) pairs shown on the single-status card, in display order.
ATTRIBUTE_LABELS: tuple[tuple[str, str], ...] = (
    ("device_class", "Type"),
    ("unit_of_measurement", "Unit"),
    ("temperature", "Temp"),
    ("humidity", "Humidity"),
    ("battery_level", "Battery"),
    ("battery", "Battery"),
    ("brightness", "Brightness"),
    ("last_changed", "Changed"),
)
ATTRIBUTE_VALUE_LIMIT = 25


def format_number(value: float) -> str:
    """Render a number with at most one decimal place.

    Integral results drop the decimal, so 45.0 renders as "45" and 21.74
    renders as "21.7".
    """
    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    if text == "-0":
        text = "0"
    return text


def format_value(record: EntityRecord) -> str:
    """Turn a record's state and unit into display text.

    Args:
        record: Entity record to format

    Returns:
        Human readable value, e.g. "21.7 °C", "On" or the raw state
    """
    if record.is_unavailable_sentinel:
        return UNAVAILABLE_TEXT

    value = record.numeric_state
    if value is not None:
        text = format_number(value)
        unit = record.unit.strip()
        if unit:
            text = f"{text} {unit}"
        return text

    raw = record.raw_state
    if raw.strip().lower() in TOGGLE_TOKENS:
        stripped = raw.strip()
        return stripped[:1].upper() + stripped[1:]
    return raw


def format_percent(percent: float) -> str:
    """Readout used when a gauge is too small to draw."""
    clamped = min(max(percent, 0.0), 100.0)
    return f"{clamped:.0f}%"


def display_name(record: EntityRecord) -> str:
    """Friendly name when present and non-empty, else the entity id."""
    if record.friendly_name and record.friendly_name.strip():
        return record.friendly_name
    return record.entity_id


def truncate(text: str, max_chars: int) -> str:
    """Fit text into a character budget.

    Cuts on a whitespace boundary where possible and appends a single
    ellipsis. The result is never shorter than MIN_TRUNCATED_LENGTH
    characters; when the budget is below that the text comes back whole and
    the caller clips it to its slot instead.

    Args:
        text: Text to fit
        max_chars: Character budget for the slot

    Returns:
        Text that fits the budget, or the original text when the budget is too small
    """
    if len(text) <= max_chars or max_chars < MIN_TRUNCATED_LENGTH:
        return text

    keep = max_chars - 1
    head = text[:keep]
    boundary = head.rfind(" ")
    if boundary >= MIN_TRUNCATED_LENGTH - 1:
        candidate = head[:boundary].rstrip()
        if len(candidate) >= MIN_TRUNCATED_LENGTH - 1:
            head = candidate
    return head + ELLIPSIS


def _format_attribute(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return truncate(str(value), ATTRIBUTE_VALUE_LIMIT)


def attribute_lines(record: EntityRecord) -> list[str]:
    """Labelled attribute lines for the single-status card.

    The first line is always the entity id; labels already used (battery and
    battery_level share one) are skipped.
    """
    lines = [f"Entity: {record.entity_id}"]
    seen_labels: set[str] = set()
    for key, label in ATTRIBUTE_LABELS:
        if label in seen_labels or key not in record.attributes:
            continue
        seen_labels.add(label)
        lines.append(f"{label}: {_format_attribute(record.attributes[key])}")
    return lines


# Domain-specific headline words for the single-status card, keyed by lowercased state.
HEADLINE_STATES: dict[str, dict[str, str]] = {
    "switch": {"on": "ON", "off": "OFF"},
    "light": {"on": "ON", "off": "OFF"},
    "fan": {"on": "ON", "off": "OFF"},
    "binary_sensor": {"on": "DETECTED", "off": "CLEAR"},
    "device_tracker": {"home": "AT HOME", "not_home": "AWAY"},
    "person": {"home": "AT HOME", "not_home": "AWAY"},
    "media_player": {"playing": "PLAYING", "paused": "PAUSED", "idle": "IDLE", "off": "OFF"},
}

# Prefix for states a domain has no headline word for.
_HEADLINE_FALLBACK_LABELS = {"device_tracker": "Location", "person": "Location"}

DEFAULT_TEMPERATURE_UNIT = "°C"


def _numeric_attribute(record: EntityRecord, key: str) -> float | None:
    value = record.attributes.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _text_attribute(record: EntityRecord, key: str, default: str) -> str:
    value = record.attributes.get(key)
    return value if isinstance(value, str) and value.strip() else default


def status_headline(record: EntityRecord) -> str:
    """Headline shown in the status strip of a single-status card.

    Toggle-like domains get an uppercase word (binary sensors read DETECTED
    or CLEAR, trackers AT HOME or AWAY). Climate entities show their current
    temperature and weather entities their condition plus temperature.
    Everything else falls back to format_value.

    Args:
        record: Entity record to describe

    Returns:
        Headline text, never empty
    """
    if record.is_unavailable_sentinel:
        return UNAVAILABLE_TEXT

    state = record.raw_state.strip()
    if not state:
        return PLACEHOLDER
    domain = record.domain

    if domain == "climate":
        temperature = _numeric_attribute(record, "current_temperature")
        if temperature is None:
            return f"Mode: {state.upper()}"
        unit = _text_attribute(record, "unit_of_measurement", DEFAULT_TEMPERATURE_UNIT)
        return f"Temp: {format_number(temperature)}{unit}"

    if domain == "weather":
        temperature = _numeric_attribute(record, "temperature")
        if temperature is None:
            return f"Weather: {state.upper()}"
        unit = _text_attribute(record, "temperature_unit", DEFAULT_TEMPERATURE_UNIT)
        return f"{state.upper()} - {format_number(temperature)}{unit}"

    words = HEADLINE_STATES.get(domain)
    if words is None:
        return format_value(record)
    headline = words.get(state.lower())
    if headline is not None:
        return headline
    label = _HEADLINE_FALLBACK_LABELS.get(domain, "State")
    return f"{label}: {state.upper()}"
