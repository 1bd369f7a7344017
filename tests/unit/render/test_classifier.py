"""Tests for status classification."""

import pytest

from hastatus.render import EntityRecord, StatusCategory, classify

pytestmark = pytest.mark.unit


class TestClassify:
    """Test suite for classify()."""

    @pytest.mark.parametrize(
        ("state", "expected"),
        [
            ("on", StatusCategory.ACTIVE),
            ("off", StatusCategory.INACTIVE),
            ("unavailable", StatusCategory.UNAVAILABLE),
        ],
    )
    def test_classify_when_binary_sensor_then_maps_toggle_states(self, make_record, state, expected) -> None:
        """Door sensor states map to active, inactive and unavailable."""
        # Arrange
        record = make_record("binary_sensor.front_door", state)

        # Act
        result = classify(record)

        # Assert
        assert result == expected

    def test_classify_when_sentinel_then_unavailable(self) -> None:
        """Records built for failed fetches are unavailable."""
        # Arrange
        record = EntityRecord.unavailable("sensor.garage")

        # Act & Assert
        assert classify(record) == StatusCategory.UNAVAILABLE

    @pytest.mark.parametrize("state", ["unknown", "", "  ", "UNAVAILABLE", " Unknown "])
    def test_classify_when_unavailable_tokens_then_unavailable(self, make_record, state) -> None:
        """Unavailable tokens match case-insensitively after trimming."""
        # Arrange
        record = make_record("sensor.temperature", state)

        # Act & Assert
        assert classify(record) == StatusCategory.UNAVAILABLE

    def test_classify_when_numeric_sensor_then_neutral(self, make_record) -> None:
        """A plain temperature reading is neutral."""
        # Arrange
        record = make_record("sensor.temperature", "21.7", unit="°C")

        # Act & Assert
        assert classify(record) == StatusCategory.NEUTRAL

    def test_classify_when_low_battery_then_warning(self, make_record) -> None:
        """Battery sensors below the warning level are flagged."""
        # Arrange
        low = make_record("sensor.phone_battery", "15", unit="%", device_class="battery")
        ok = make_record("sensor.phone_battery", "20", unit="%", device_class="battery")

        # Act & Assert
        assert classify(low) == StatusCategory.WARNING
        assert classify(ok) == StatusCategory.NEUTRAL

    def test_classify_when_toggle_token_outside_toggle_domain_then_neutral(self, make_record) -> None:
        """'on' only means active for toggle domains."""
        # Arrange
        record = make_record("sensor.mode", "on")

        # Act & Assert
        assert classify(record) == StatusCategory.NEUTRAL

    @pytest.mark.parametrize("domain", ["switch", "light", "input_boolean"])
    def test_classify_when_other_toggle_domains_then_active(self, make_record, domain) -> None:
        """Switches, lights and input booleans follow the on/off rule."""
        # Arrange
        record = make_record(f"{domain}.thing", "ON")

        # Act & Assert
        assert classify(record) == StatusCategory.ACTIVE

    def test_classify_when_free_text_then_neutral(self, make_record) -> None:
        """Free-text states fall through to neutral."""
        # Arrange
        record = make_record("sensor.washer_status", "rinsing")

        # Act & Assert
        assert classify(record) == StatusCategory.NEUTRAL

    @pytest.mark.parametrize(
        "state",
        ["nan", "inf", "-inf", "1e309", "on", "off", "open", "42", "-3.5", " ", "☃"],
    )
    @pytest.mark.parametrize(
        "entity_id",
        ["sensor.x", "binary_sensor.x", "light.x", "weather.x", "nodomain"],
    )
    def test_classify_when_any_input_then_returns_single_category(self, entity_id, state) -> None:
        """Every record maps to exactly one category without raising."""
        # Arrange
        record = EntityRecord(
            entity_id=entity_id,
            state=state,
            attributes={"device_class": "battery", "unit_of_measurement": "%"},
        )

        # Act
        result = classify(record)

        # Assert
        assert isinstance(result, StatusCategory)
