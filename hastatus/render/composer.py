"""Card composer: paints complete scenes for each render mode.

Drawing order is always back to front: background, decorative elements
(border, title band), per-entity regions, then the title text so nothing can
occlude it. The composer touches nothing but the canvas it creates.
"""

from __future__ import annotations

import logging
from typing import Literal

from .canvas import Canvas
from .classifier import classify
from .colors import Palette, Pattern, StatusColors, background_gradient, blend_colors, resolve
from .exceptions import RenderContractError
from .formatter import (
    PLACEHOLDER,
    attribute_lines,
    display_name,
    format_percent,
    format_value,
    status_headline,
    truncate,
)
from .gauge import GAUGE_MIN_HEIGHT, GAUGE_MIN_WIDTH, draw_gauge, is_percentage
from .layout import LayoutPlan, multi_status_height, solve, text_budget
from .models import (
    EntityRecord,
    FixedDisplayRequest,
    MultiStatusRequest,
    RenderMode,
    RenderRequest,
    SingleStatusRequest,
    StatusCategory,
)
from .region import LayoutRegion
from .resources import FontTier, RenderResources

logger = logging.getLogger(__name__)

BORDER_WIDTH = 3
HEADER_INSET = 8
STATUS_STRIP_HEIGHT = 36
INFO_LINE_SPACING = 5
SINGLE_GAUGE_HEIGHT = 20
ROW_INDICATOR_WIDTH = 20
ROW_PADDING = 6
CELL_PADDING = 6
SWATCH_SIZE = 16
PATTERN_SPACING = 4
MIN_TEXT_SLOT_WIDTH = 24
NARROW_PADDING = 2

Align = Literal["left", "right", "center"]


def _draw_slot_text(
    canvas: Canvas,
    slot: LayoutRegion,
    text: str,
    tier: FontTier,
    color: tuple[int, int, int],
    align: Align = "left",
) -> None:
    """Truncate text to the slot's character budget and draw it vertically centered."""
    if slot.width <= 0 or slot.height <= 0:
        return
    fitted = truncate(text, text_budget(slot.width, canvas.resources.glyph_width(tier)))
    width, height = canvas.text_size(fitted, tier)

    if align == "right":
        x = slot.x + max(slot.width - width, 0)
    elif align == "center":
        x = slot.x + max((slot.width - width) // 2, 0)
    else:
        x = slot.x
    y = slot.y + max((slot.height - height) // 2, 0)
    canvas.text_clipped(LayoutRegion(x, y, slot.right - x, slot.bottom - y), fitted, tier, color)


def _value_text(record: EntityRecord) -> str:
    return format_value(record) or PLACEHOLDER


def _gauge_percent(record: EntityRecord, category: StatusCategory) -> float | None:
    """Percentage to gauge for a record, or None when no gauge applies."""
    if category == StatusCategory.UNAVAILABLE or not is_percentage(record):
        return None
    return record.numeric_state


def _draw_percent_slot(
    canvas: Canvas,
    slot: LayoutRegion,
    percent: float,
    palette: Palette,
    tier: FontTier,
    bar_height: int,
) -> None:
    """Gauge bar followed by its readout; falls back to the readout alone when cramped."""
    readout = format_percent(percent)
    readout_width = canvas.text_size(readout, tier)[0] + ROW_PADDING
    bar_height = min(bar_height, slot.height)
    bar = LayoutRegion(
        slot.x,
        slot.y + (slot.height - bar_height) // 2,
        slot.width - readout_width,
        bar_height,
    )

    if bar.width < GAUGE_MIN_WIDTH or bar.height < GAUGE_MIN_HEIGHT:
        draw_gauge(canvas, slot, percent, palette)
        return

    draw_gauge(canvas, bar, percent, palette)
    readout_slot = LayoutRegion(bar.right, slot.y, slot.right - bar.right, slot.height)
    _draw_slot_text(canvas, readout_slot, readout, tier, palette.text, align="right")


def _draw_status_circle(canvas: Canvas, cx: int, cy: int, radius: int, palette: Palette) -> None:
    border = blend_colors(palette.accent, StatusColors.BLACK, 0.3)
    canvas.fill_circle(cx, cy, radius, fill=palette.accent, outline=border, width=2)
    if radius >= 8:
        highlight = max(radius // 4, 2)
        canvas.fill_circle(
            cx - radius // 3, cy - radius // 3, highlight, fill=StatusColors.WHITE
        )


def draw_pattern_swatch(canvas: Canvas, region: LayoutRegion, palette: Palette) -> None:
    """Draw the black/white pattern that stands for a category on e-ink.

    Every pattern only uses the palette's accent and background colors, so it
    survives 1-bit reduction unchanged.
    """
    ink = palette.accent
    paper = palette.background
    canvas.fill_rect(region, paper)

    if palette.pattern == Pattern.SOLID:
        canvas.fill_rect(region, ink)
        return

    if palette.pattern == Pattern.HATCHED:
        # Anti-diagonals x + y = c, clipped to the swatch.
        last_x, last_y = region.width - 1, region.height - 1
        for c in range(0, last_x + last_y + 1, PATTERN_SPACING):
            x_start = max(0, c - last_y)
            x_end = min(c, last_x)
            canvas.line(
                [
                    (region.x + x_start, region.y + c - x_start),
                    (region.x + x_end, region.y + c - x_end),
                ],
                ink,
            )
    elif palette.pattern == Pattern.CROSSED:
        x0, y0, x1, y1 = region.corners
        canvas.line([(x0, y0), (x1, y1)], ink, width=2)
        canvas.line([(x0, y1), (x1, y0)], ink, width=2)
    elif palette.pattern == Pattern.DOTTED:
        inner = region.inset(3)
        for y in range(inner.y, inner.bottom, 3):
            for x in range(inner.x, inner.right, 3):
                canvas.fill_rect(LayoutRegion(x, y, 1, 1), ink)

    outline_width = 2 if palette.pattern in (Pattern.OUTLINE, Pattern.CROSSED) else 1
    canvas.stroke_rect(region, ink, width=outline_width)


def _draw_title_band(
    canvas: Canvas, band: LayoutRegion, start: tuple[int, int, int], end: tuple[int, int, int]
) -> None:
    canvas.linear_gradient(band, start, end)
    canvas.stroke_rect(band, StatusColors.HEADER_BORDER)


# ----- single status -----


def _compose_single(request: SingleStatusRequest, resources: RenderResources) -> Canvas:
    record = request.entity
    category = classify(record)
    palette = resolve(category, RenderMode.SINGLE_STATUS)
    plan = solve(RenderMode.SINGLE_STATUS, 1, request.width, request.height)

    canvas = Canvas(request.width, request.height, resources)
    top, bottom = background_gradient(category)
    canvas.linear_gradient(canvas.bounds, top, bottom)
    canvas.stroke_rect(canvas.bounds, StatusColors.BORDER, width=BORDER_WIDTH)

    band = LayoutRegion(
        HEADER_INSET,
        HEADER_INSET,
        request.width - 2 * HEADER_INSET,
        plan.title_band_height - HEADER_INSET - 4,
    )
    _draw_title_band(canvas, band, StatusColors.HEADER_START, StatusColors.HEADER_END)

    _draw_single_region(canvas, plan.regions[0], record, category, palette)

    _draw_slot_text(
        canvas,
        band.inset(6, 0),
        display_name(record),
        FontTier.LARGE,
        StatusColors.TEXT_INVERSE,
        align="center",
    )
    return canvas


def _draw_single_region(
    canvas: Canvas,
    region: LayoutRegion,
    record: EntityRecord,
    category: StatusCategory,
    palette: Palette,
) -> None:
    strip = LayoutRegion(region.x, region.y, region.width, min(STATUS_STRIP_HEIGHT, region.height))
    canvas.linear_gradient(strip, palette.accent, blend_colors(palette.accent, StatusColors.BLACK, 0.15))
    canvas.stroke_rect(strip, StatusColors.BORDER_LIGHT)

    radius = max(min(12, strip.height // 2 - 3), 0)
    indicator_space = 2 * radius + 16
    if strip.width - 2 * indicator_space >= MIN_TEXT_SLOT_WIDTH:
        _draw_status_circle(
            canvas, strip.right - radius - 8, strip.y + strip.height // 2, radius, palette
        )
        value_slot = LayoutRegion(
            strip.x + indicator_space, strip.y, strip.width - 2 * indicator_space, strip.height
        )
    else:
        # Narrow strip: the headline takes the whole strip and the circle is dropped.
        value_slot = strip.inset(NARROW_PADDING, 0)
    _draw_slot_text(
        canvas, value_slot, status_headline(record), FontTier.MEDIUM, StatusColors.TEXT_INVERSE, "center"
    )

    info = LayoutRegion(
        region.x, strip.bottom + 4, region.width, region.bottom - strip.bottom - 4
    )
    if info.height <= 0:
        return
    canvas.fill_rect(info, StatusColors.INFO_BACKGROUND)
    canvas.stroke_rect(info, StatusColors.BORDER_LIGHT)

    text_area = info.inset(7, 4)
    percent = _gauge_percent(record, category)
    if percent is not None and text_area.height >= SINGLE_GAUGE_HEIGHT + GAUGE_MIN_HEIGHT:
        gauge_slot = LayoutRegion(
            text_area.x,
            text_area.bottom - SINGLE_GAUGE_HEIGHT,
            text_area.width,
            SINGLE_GAUGE_HEIGHT,
        )
        _draw_percent_slot(canvas, gauge_slot, percent, palette, FontTier.SMALL, SINGLE_GAUGE_HEIGHT)
        text_area = LayoutRegion(
            text_area.x, text_area.y, text_area.width, text_area.height - SINGLE_GAUGE_HEIGHT - 4
        )

    line_height = canvas.text_size("Ag", FontTier.SMALL)[1] + INFO_LINE_SPACING
    y = text_area.y
    for index, line in enumerate(attribute_lines(record)):
        if y + line_height > text_area.bottom:
            break
        color = StatusColors.TEXT_PRIMARY if index == 0 else StatusColors.TEXT_SECONDARY
        _draw_slot_text(
            canvas, LayoutRegion(text_area.x, y, text_area.width, line_height), line, FontTier.SMALL, color
        )
        y += line_height


# ----- multi status -----


def _multi_height(request: MultiStatusRequest) -> int:
    if request.height is not None:
        return request.height
    return multi_status_height(len(request.entities))


def _compose_multi(request: MultiStatusRequest, resources: RenderResources) -> Canvas:
    height = _multi_height(request)
    plan = solve(RenderMode.MULTI_STATUS, len(request.entities), request.width, height)

    canvas = Canvas(request.width, height, resources)
    canvas.linear_gradient(canvas.bounds, StatusColors.PAGE_START, StatusColors.PAGE_END)
    canvas.stroke_rect(canvas.bounds, StatusColors.BORDER, width=BORDER_WIDTH)

    band = LayoutRegion(
        HEADER_INSET,
        HEADER_INSET,
        request.width - 2 * HEADER_INSET,
        plan.title_band_height - HEADER_INSET - 10,
    )
    _draw_title_band(canvas, band, StatusColors.MULTI_HEADER_START, StatusColors.MULTI_HEADER_END)

    for record, region in zip(request.entities, plan.regions):
        _draw_multi_row(canvas, region, record)

    _draw_slot_text(
        canvas, band.inset(6, 0), request.title, FontTier.LARGE, StatusColors.TEXT_INVERSE, "center"
    )
    return canvas


def _draw_multi_row(canvas: Canvas, region: LayoutRegion, record: EntityRecord) -> None:
    category = classify(record)
    palette = resolve(category, RenderMode.MULTI_STATUS)

    canvas.fill_rect(region, palette.background)
    canvas.line([(region.x, region.y), (region.right - 1, region.y)], StatusColors.BORDER_LIGHT)
    canvas.line(
        [(region.x, region.bottom - 1), (region.right - 1, region.bottom - 1)],
        StatusColors.BORDER_LIGHT,
    )

    indicator_width = ROW_INDICATOR_WIDTH
    padding = ROW_PADDING
    if region.width - indicator_width - 3 * padding < 2 * MIN_TEXT_SLOT_WIDTH:
        # Narrow row: drop the indicator so name and value keep their slots.
        indicator_width = 0
        padding = NARROW_PADDING
    else:
        radius = max(min(5, region.height // 2 - 1), 0)
        _draw_status_circle(
            canvas, region.right - indicator_width // 2, region.y + region.height // 2, radius, palette
        )

    usable = region.width - indicator_width - 3 * padding
    name_slot = LayoutRegion(region.x + padding, region.y, usable // 2, region.height)
    value_slot = LayoutRegion(
        name_slot.right + padding,
        region.y,
        region.right - indicator_width - padding - name_slot.right - padding,
        region.height,
    )

    _draw_slot_text(canvas, name_slot, display_name(record), FontTier.MEDIUM, palette.text)

    percent = _gauge_percent(record, category)
    if percent is not None:
        bar_height = max(region.height // 3, GAUGE_MIN_HEIGHT)
        _draw_percent_slot(canvas, value_slot, percent, palette, FontTier.MEDIUM, bar_height)
    else:
        _draw_slot_text(
            canvas, value_slot, _value_text(record), FontTier.MEDIUM, palette.accent, "right"
        )


# ----- fixed display -----


def _compose_fixed(request: FixedDisplayRequest, resources: RenderResources) -> Canvas:
    plan = solve(RenderMode.FIXED_DISPLAY, len(request.entities), request.width, request.height)
    white = StatusColors.WHITE
    black = StatusColors.BLACK

    canvas = Canvas(request.width, request.height, resources, background=white)
    canvas.stroke_rect(canvas.bounds, black, width=BORDER_WIDTH)
    canvas.fill_rect(LayoutRegion(20, 5, request.width - 40, 10), black)
    separator_y = plan.title_band_height - 14
    canvas.fill_rect(LayoutRegion(40, separator_y, request.width - 80, 2), black)

    for record, cell in zip(request.entities, plan.regions):
        _draw_fixed_cell(canvas, cell, record)

    title_slot = LayoutRegion(30, 18, request.width - 60, separator_y - 20)
    _draw_slot_text(canvas, title_slot, request.title, FontTier.XLARGE, black, "center")
    return canvas


def _draw_fixed_cell(canvas: Canvas, cell: LayoutRegion, record: EntityRecord) -> None:
    category = classify(record)
    palette = resolve(category, RenderMode.FIXED_DISPLAY)
    roomy = cell.height >= 120

    canvas.stroke_rect(cell, palette.accent)
    inner = cell.inset(CELL_PADDING)
    name_tier = FontTier.LARGE if roomy else FontTier.MEDIUM
    value_tier = FontTier.XLARGE if roomy else FontTier.LARGE

    name_height = max(canvas.text_size("Ag", name_tier)[1] + 4, SWATCH_SIZE)
    swatch = LayoutRegion(
        inner.x, inner.y + (name_height - SWATCH_SIZE) // 2, SWATCH_SIZE, SWATCH_SIZE
    )
    draw_pattern_swatch(canvas, swatch, palette)

    name_slot = LayoutRegion(
        swatch.right + CELL_PADDING, inner.y, inner.right - swatch.right - CELL_PADDING, name_height
    )
    _draw_slot_text(canvas, name_slot, display_name(record), name_tier, palette.text)

    value_area = LayoutRegion(
        inner.x, inner.y + name_height + 2, inner.width, inner.bottom - inner.y - name_height - 2
    )
    percent = _gauge_percent(record, category)
    if percent is not None:
        bar_height = max(min(value_area.height // 2, 24), GAUGE_MIN_HEIGHT)
        _draw_percent_slot(canvas, value_area, percent, palette, value_tier, bar_height)
    else:
        _draw_slot_text(canvas, value_area, _value_text(record), value_tier, palette.text)


def compose(request: RenderRequest, resources: RenderResources) -> Canvas:
    """Paint a complete scene for a render request.

    Args:
        request: Validated render request
        resources: Shared font resources

    Returns:
        Full-color canvas (fixed display scenes only use black and white)

    Raises:
        RenderContractError: If the request violates layout bounds or has an unknown type
    """
    if isinstance(request, SingleStatusRequest):
        canvas = _compose_single(request, resources)
    elif isinstance(request, MultiStatusRequest):
        canvas = _compose_multi(request, resources)
    elif isinstance(request, FixedDisplayRequest):
        canvas = _compose_fixed(request, resources)
    else:
        raise RenderContractError(f"Unsupported render request: {type(request).__name__}")

    logger.debug("Composed %s scene at %dx%d", request.mode.value, *canvas.size)
    return canvas


def resolved_plan(request: RenderRequest) -> LayoutPlan:
    """Layout plan the composer uses for a request; exposed for diagnostics and tests."""
    if isinstance(request, SingleStatusRequest):
        return solve(RenderMode.SINGLE_STATUS, 1, request.width, request.height)
    if isinstance(request, MultiStatusRequest):
        return solve(
            RenderMode.MULTI_STATUS, len(request.entities), request.width, _multi_height(request)
        )
    return solve(RenderMode.FIXED_DISPLAY, len(request.entities), request.width, request.height)
