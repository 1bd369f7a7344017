"""Horizontal bar gauge for percentage-valued entities."""

from __future__ import annotations

from .canvas import Canvas
from .colors import Palette
from .formatter import format_percent
from .models import EntityRecord
from .region import LayoutRegion
from .resources import FontTier

# Legibility floor; smaller regions get a numeric readout instead of a bar.
GAUGE_MIN_WIDTH = 40
GAUGE_MIN_HEIGHT = 8

GAUGE_BORDER = 2
GAUGE_PADDING = 1
TICK_LENGTH = 4
TICK_PERCENTS = (25, 50, 75)


def is_percentage(record: EntityRecord) -> bool:
    """Gauges apply only to entities measured in percent."""
    return record.unit.strip() == "%"


def clamp_percent(percent: float) -> float:
    if percent != percent:  # NaN
        return 0.0
    return min(max(percent, 0.0), 100.0)


def draw_gauge(canvas: Canvas, region: LayoutRegion, percent: float, palette: Palette) -> bool:
    """Draw a bar whose filled fraction is percent/100.

    Out-of-range percentages are clamped to 0..100. Tick marks at 25/50/75 %
    are drawn above the bar when the region leaves room for them.

    Args:
        canvas: Canvas to draw on
        region: Area reserved for the gauge
        percent: Value to display
        palette: Palette supplying accent (fill), track (remainder) and text colors

    Returns:
        True if a bar was drawn, False if the region was below the legibility
        floor and a numeric readout was drawn instead
    """
    value = clamp_percent(percent)

    if region.width < GAUGE_MIN_WIDTH or region.height < GAUGE_MIN_HEIGHT:
        canvas.text_clipped(region, format_percent(value), FontTier.SMALL, palette.text)
        return False

    show_ticks = region.height >= GAUGE_MIN_HEIGHT + TICK_LENGTH + 1
    top = region.y + (TICK_LENGTH + 1 if show_ticks else 0)
    bar = LayoutRegion(region.x, top, region.width, region.bottom - top)

    canvas.fill_rect(bar, palette.track)
    canvas.stroke_rect(bar, palette.accent, width=GAUGE_BORDER)

    inner = bar.inset(GAUGE_BORDER + GAUGE_PADDING)
    fill_width = int(round(inner.width * value / 100.0))
    if fill_width > 0:
        canvas.fill_rect(LayoutRegion(inner.x, inner.y, fill_width, inner.height), palette.accent)

    if show_ticks:
        for tick in TICK_PERCENTS:
            x = inner.x + inner.width * tick // 100
            canvas.line([(x, region.y), (x, region.y + TICK_LENGTH - 1)], palette.accent)

    return True
