"""Tests for the composer and the engine entry point."""

import pytest

from hastatus.render import (
    Canvas,
    EntityRecord,
    FixedDisplayRequest,
    LayoutRegion,
    MonoCanvas,
    MultiStatusRequest,
    RenderContractError,
    RenderMode,
    SingleStatusRequest,
    StatusCategory,
    check_request,
    render,
    resolve,
)
from hastatus.render import composer
from hastatus.render.colors import MONO_BLACK, MONO_WHITE
from hastatus.render.layout import MULTI_ROW_HEIGHT, MULTI_TITLE_BAND_HEIGHT

pytestmark = pytest.mark.unit


@pytest.fixture
def drawn_texts(monkeypatch) -> list:
    """Record every text the composer draws, in drawing order."""
    texts: list = []
    original = composer._draw_slot_text

    def _recording(canvas, slot, text, tier, color, align="left"):
        texts.append(text)
        original(canvas, slot, text, tier, color, align)

    monkeypatch.setattr(composer, "_draw_slot_text", _recording)
    return texts


@pytest.fixture
def drawn_slots(monkeypatch) -> list:
    """Record (text, slot width) for every text the composer draws."""
    slots: list = []
    original = composer._draw_slot_text

    def _recording(canvas, slot, text, tier, color, align="left"):
        slots.append((text, slot.width))
        original(canvas, slot, text, tier, color, align)

    monkeypatch.setattr(composer, "_draw_slot_text", _recording)
    return slots


def _slot_width(slots: list, text: str) -> int:
    return next(width for drawn, width in slots if drawn == text)


class TestRenderSingleStatus:
    """Test suite for single status cards."""

    def test_render_when_default_request_then_rgb_canvas(self, resources, make_record) -> None:
        """Single cards render at the requested size in full color."""
        # Arrange
        request = SingleStatusRequest(make_record("sensor.temperature", "21.7", unit="°C"))

        # Act
        canvas = render(request, resources)

        # Assert
        assert isinstance(canvas, Canvas)
        assert not isinstance(canvas, MonoCanvas)
        assert canvas.size == (400, 200)
        assert canvas.image.mode == "RGB"

    def test_render_when_temperature_then_draws_value_and_entity_id(self, resources, make_record, drawn_texts) -> None:
        """Without a friendly name the entity id is the title."""
        # Arrange
        request = SingleStatusRequest(make_record("sensor.temperature", "21.7", unit="°C"))

        # Act
        render(request, resources)

        # Assert
        assert "21.7 °C" in drawn_texts
        assert drawn_texts[-1] == "sensor.temperature"

    def test_render_when_on_and_off_then_cards_differ(self, resources, make_record) -> None:
        """Active and inactive entities get different colors."""
        # Act
        on = render(SingleStatusRequest(make_record("binary_sensor.front_door", "on")), resources)
        off = render(SingleStatusRequest(make_record("binary_sensor.front_door", "off")), resources)

        # Assert
        assert on.image.tobytes() != off.image.tobytes()

    def test_render_when_percentage_then_gauge_tracks_value(self, resources, make_record) -> None:
        """Percentage sensors show a gauge that changes with the value."""
        # Act
        low = render(SingleStatusRequest(make_record("sensor.humidity", "10", unit="%")), resources)
        high = render(SingleStatusRequest(make_record("sensor.humidity", "90", unit="%")), resources)

        # Assert
        assert low.image.tobytes() != high.image.tobytes()

    @pytest.mark.parametrize(("width", "height"), [(64, 64), (2000, 64), (64, 2000)])
    def test_render_when_extreme_sizes_then_renders(self, resources, make_record, width, height) -> None:
        """Every accepted size renders without error."""
        # Arrange
        record = make_record("sensor.a_very_long_entity_name_that_will_not_fit", "42", unit="%")

        # Act
        canvas = render(SingleStatusRequest(record, width=width, height=height), resources)

        # Assert
        assert canvas.size == (width, height)

    def test_render_when_unavailable_then_placeholder_value(self, resources, drawn_texts) -> None:
        """Failed fetches still render a card."""
        # Act
        render(SingleStatusRequest(EntityRecord.unavailable("sensor.garage")), resources)

        # Assert
        assert "Unavailable" in drawn_texts

    @pytest.mark.parametrize("width", [64, 80, 90, 96])
    def test_render_when_narrow_canvas_then_value_keeps_a_slot(self, resources, make_record, drawn_slots, width) -> None:
        """Narrow cards drop the status circle instead of the value."""
        # Arrange
        request = SingleStatusRequest(make_record("sensor.temperature", "21.7", unit="°C"), width=width)

        # Act
        render(request, resources)

        # Assert
        assert _slot_width(drawn_slots, "21.7 °C") > 0
        assert _slot_width(drawn_slots, "sensor.temperature") > 0

    @pytest.mark.parametrize(
        ("entity_id", "state", "headline"),
        [
            ("binary_sensor.motion", "on", "DETECTED"),
            ("person.alex", "not_home", "AWAY"),
            ("media_player.tv", "paused", "PAUSED"),
        ],
    )
    def test_render_when_domain_headline_then_drawn_in_status_strip(
        self, resources, make_record, drawn_texts, entity_id, state, headline
    ) -> None:
        """The status strip shows the domain-specific headline."""
        # Act
        render(SingleStatusRequest(make_record(entity_id, state)), resources)

        # Assert
        assert headline in drawn_texts


class TestRenderMultiStatus:
    """Test suite for multi status dashboards."""

    def test_render_when_three_entities_no_height_then_band_plus_rows(self, resources, make_record) -> None:
        """Default height is the title band plus one row per entity."""
        # Arrange
        entities = tuple(make_record(f"sensor.s{i}", str(i)) for i in range(3))

        # Act
        canvas = render(MultiStatusRequest(entities), resources)

        # Assert
        assert canvas.size == (500, MULTI_TITLE_BAND_HEIGHT + 3 * MULTI_ROW_HEIGHT)

    def test_render_when_title_given_then_title_drawn_last(self, resources, make_record, drawn_texts) -> None:
        """The title is painted after every row."""
        # Arrange
        entities = (
            make_record("sensor.temperature", "21.7", unit="°C", friendly_name="Living Room"),
            make_record("binary_sensor.front_door", "on"),
        )

        # Act
        render(MultiStatusRequest(entities, title="Home"), resources)

        # Assert
        assert drawn_texts[-1] == "Home"
        assert "21.7 °C" in drawn_texts
        assert "On" in drawn_texts

    def test_render_when_ten_rows_at_minimum_height_then_renders(self, resources, make_record) -> None:
        """Cramped rows degrade instead of failing."""
        # Arrange
        entities = tuple(make_record(f"sensor.battery_{i}", "55", unit="%") for i in range(10))

        # Act
        canvas = render(MultiStatusRequest(entities, width=64, height=180), resources)

        # Assert
        assert canvas.size == (64, 180)

    @pytest.mark.parametrize("width", [64, 80, 120])
    def test_render_when_narrow_canvas_then_name_and_value_drawn(
        self, resources, make_record, drawn_slots, width
    ) -> None:
        """Narrow rows drop the indicator so both text slots survive."""
        # Arrange
        entities = (
            make_record("sensor.temperature", "21.7", unit="°C", friendly_name="Living Room"),
            make_record("binary_sensor.front_door", "off", friendly_name="Door"),
        )

        # Act
        render(MultiStatusRequest(entities, width=width), resources)

        # Assert
        for text in ("Living Room", "21.7 °C", "Door", "Off"):
            assert _slot_width(drawn_slots, text) > 0


class TestRenderFixedDisplay:
    """Test suite for the fixed e-ink display."""

    def test_render_when_fixed_then_two_level_native_resolution(self, resources, make_record) -> None:
        """Fixed display output is 800x480 with two luminance levels."""
        # Arrange
        entities = tuple(make_record(f"sensor.s{i}", str(i * 10), unit="%") for i in range(5))

        # Act
        canvas = render(FixedDisplayRequest(entities), resources)

        # Assert
        assert isinstance(canvas, MonoCanvas)
        assert canvas.size == (800, 480)
        assert canvas.luminance_levels() == {MONO_BLACK, MONO_WHITE}

    def test_render_when_zero_and_full_percent_then_distinguishable(self, resources, make_record) -> None:
        """Gauges at 0 % and 100 % differ after 1-bit reduction."""
        # Arrange
        empty = FixedDisplayRequest((make_record("sensor.tank", "0", unit="%"),))
        full = FixedDisplayRequest((make_record("sensor.tank", "100", unit="%"),))

        # Act
        empty_canvas = render(empty, resources)
        full_canvas = render(full, resources)

        # Assert
        assert empty_canvas.image.tobytes() != full_canvas.image.tobytes()

    def test_render_when_unavailable_entity_then_placeholder_slot(self, resources, make_record, drawn_texts) -> None:
        """Unavailable entities keep their slot with a placeholder value."""
        # Arrange
        entities = (
            EntityRecord.unavailable("sensor.garage"),
            make_record("sensor.empty", ""),
            make_record("sensor.temperature", "21.7", unit="°C"),
        )

        # Act
        render(FixedDisplayRequest(entities, title="STATUS"), resources)

        # Assert
        assert "Unavailable" in drawn_texts
        assert "N/A" in drawn_texts
        assert "sensor.garage" in drawn_texts
        assert drawn_texts[-1] == "STATUS"

    @pytest.mark.parametrize("count", [1, 2, 4, 9, 15])
    def test_render_when_grid_sizes_then_renders(self, resources, make_record, count) -> None:
        """Every grid shape renders."""
        # Arrange
        entities = tuple(make_record(f"light.l{i}", "on" if i % 2 else "off") for i in range(count))

        # Act
        canvas = render(FixedDisplayRequest(entities), resources)

        # Assert
        assert canvas.size == (800, 480)


class TestPatternSwatch:
    """Test suite for draw_pattern_swatch()."""

    def test_draw_pattern_swatch_when_each_category_then_distinct_black_and_white(self, resources) -> None:
        """Each category's swatch differs and uses only black and white."""
        # Arrange
        region = LayoutRegion(2, 2, 16, 16)
        images = []

        # Act
        for category in StatusCategory:
            canvas = Canvas(20, 20, resources)
            composer.draw_pattern_swatch(canvas, region, resolve(category, RenderMode.FIXED_DISPLAY))
            images.append(canvas.image)

        # Assert
        assert len({image.tobytes() for image in images}) == len(StatusCategory)
        for image in images:
            assert {color for _count, color in image.getcolors()} <= {(0, 0, 0), (255, 255, 255)}

    def test_draw_pattern_swatch_when_hatched_then_stays_inside_region(self, resources) -> None:
        """Hatching is clipped to the swatch."""
        # Arrange
        canvas = Canvas(40, 40, resources)
        region = LayoutRegion(10, 10, 16, 16)

        # Act
        composer.draw_pattern_swatch(canvas, region, resolve(StatusCategory.WARNING, RenderMode.FIXED_DISPLAY))

        # Assert
        for x in range(40):
            for y in range(40):
                if not region.contains_point(x, y):
                    assert canvas.image.getpixel((x, y)) == (255, 255, 255)


class TestCheckRequest:
    """Test suite for check_request()."""

    def test_check_request_when_too_many_entities_then_contract_error(self, make_record) -> None:
        """Counts above the mode's limit are contract violations."""
        # Arrange
        entities = tuple(make_record(f"sensor.s{i}", "1") for i in range(11))

        # Act & Assert
        with pytest.raises(RenderContractError):
            check_request(MultiStatusRequest(entities))

    def test_check_request_when_no_entities_then_contract_error(self) -> None:
        """Empty requests are rejected."""
        with pytest.raises(RenderContractError):
            check_request(FixedDisplayRequest(()))

    def test_check_request_when_unknown_type_then_contract_error(self) -> None:
        """Only the three request types are accepted."""
        with pytest.raises(RenderContractError):
            check_request("single")  # type: ignore[arg-type]

    def test_render_when_invalid_request_then_raises_before_drawing(self, resources, make_record, drawn_texts) -> None:
        """The engine never produces partial output."""
        # Arrange
        request = SingleStatusRequest(make_record("sensor.x", "1"), width=10, height=10)

        # Act & Assert
        with pytest.raises(RenderContractError):
            render(request, resources)
        assert drawn_texts == []
