"""Layout solver for the status rendering engine.

Computes the title band and one LayoutRegion per entity for each render mode.
Regions never overlap and always lie inside the content area below the title
band; whatever the regions do not cover is margin.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .exceptions import RenderContractError
from .models import RenderMode
from .region import LayoutRegion

logger = logging.getLogger(__name__)

# Canvas bounds accepted for caller-sized modes
MIN_DIMENSION = 64
MAX_DIMENSION = 2000

# Single status card
SINGLE_TITLE_BAND_HEIGHT = 44
SINGLE_MARGIN = 8

# Multi status dashboard
MULTI_TITLE_BAND_HEIGHT = 60
MULTI_ROW_HEIGHT = 40
MULTI_MIN_ROW_HEIGHT = 12
MULTI_SIDE_MARGIN = 15
MULTI_ROW_GAP = 4
MULTI_MAX_ENTITIES = 10

# Fixed e-ink display
FIXED_WIDTH = 800
FIXED_HEIGHT = 480
FIXED_TITLE_BAND_HEIGHT = 80
FIXED_MARGIN = 16
FIXED_CELL_GAP = 8
FIXED_MAX_ENTITIES = 15

# (max item count, columns, rows); first entry that fits wins.
_FIXED_GRIDS: tuple[tuple[int, int, int], ...] = (
    (1, 1, 1),
    (2, 2, 1),
    (4, 2, 2),
    (9, 3, 3),
    (15, 3, 5),
)


@dataclass(frozen=True)
class LayoutPlan:
    """Geometry for one render: title band plus per-item regions."""

    title_band_height: int
    content: LayoutRegion
    regions: tuple[LayoutRegion, ...]
    columns: int = 1
    rows: int = 1

    @property
    def capacity(self) -> int:
        """Number of cells in the grid, including blank trailing cells."""
        return self.columns * self.rows

    @property
    def blank_cells(self) -> int:
        return self.capacity - len(self.regions)


def entity_bounds(mode: RenderMode) -> tuple[int, int]:
    """Inclusive (min, max) entity count accepted by a render mode."""
    if mode == RenderMode.SINGLE_STATUS:
        return (1, 1)
    if mode == RenderMode.MULTI_STATUS:
        return (1, MULTI_MAX_ENTITIES)
    return (1, FIXED_MAX_ENTITIES)


def multi_status_height(item_count: int) -> int:
    """Canvas height used when a multi-status caller gives no height."""
    return MULTI_TITLE_BAND_HEIGHT + item_count * MULTI_ROW_HEIGHT


def multi_status_min_height(item_count: int) -> int:
    """Smallest explicit height that still fits every row."""
    return MULTI_TITLE_BAND_HEIGHT + item_count * MULTI_MIN_ROW_HEIGHT


def grid_shape(item_count: int) -> tuple[int, int]:
    """Pick (columns, rows) of the fixed display grid for an item count.

    Args:
        item_count: Number of entities, 1..FIXED_MAX_ENTITIES

    Returns:
        Tuple of (columns, rows)

    Raises:
        RenderContractError: If item_count is out of range
    """
    for max_items, columns, rows in _FIXED_GRIDS:
        if 1 <= item_count <= max_items:
            return (columns, rows)
    raise RenderContractError(
        f"Fixed display supports 1..{FIXED_MAX_ENTITIES} entities, got {item_count}"
    )


def text_budget(slot_width: int, glyph_width: float) -> int:
    """Number of average-width glyphs that fit a text slot."""
    if glyph_width <= 0 or slot_width <= 0:
        return 0
    return int(slot_width // glyph_width)


def _check_dimensions(mode: RenderMode, item_count: int, canvas_w: int, canvas_h: int) -> None:
    low, high = entity_bounds(mode)
    if not low <= item_count <= high:
        raise RenderContractError(
            f"{mode.value} supports {low}..{high} entities, got {item_count}"
        )

    if mode == RenderMode.FIXED_DISPLAY:
        if (canvas_w, canvas_h) != (FIXED_WIDTH, FIXED_HEIGHT):
            raise RenderContractError(
                f"Fixed display canvas must be {FIXED_WIDTH}x{FIXED_HEIGHT}, "
                f"got {canvas_w}x{canvas_h}"
            )
        return

    for name, value in (("width", canvas_w), ("height", canvas_h)):
        if not MIN_DIMENSION <= value <= MAX_DIMENSION:
            raise RenderContractError(
                f"Canvas {name} must be within {MIN_DIMENSION}..{MAX_DIMENSION}, got {value}"
            )

    if mode == RenderMode.MULTI_STATUS and canvas_h < multi_status_min_height(item_count):
        raise RenderContractError(
            f"Canvas height {canvas_h} cannot fit {item_count} rows "
            f"(minimum {multi_status_min_height(item_count)})"
        )


def _solve_single(canvas_w: int, canvas_h: int) -> LayoutPlan:
    band = SINGLE_TITLE_BAND_HEIGHT
    content = LayoutRegion(
        SINGLE_MARGIN, band, canvas_w - 2 * SINGLE_MARGIN, canvas_h - band - SINGLE_MARGIN
    )
    return LayoutPlan(title_band_height=band, content=content, regions=(content,))


def _solve_multi(item_count: int, canvas_w: int, canvas_h: int) -> LayoutPlan:
    band = MULTI_TITLE_BAND_HEIGHT
    content = LayoutRegion(
        MULTI_SIDE_MARGIN, band, canvas_w - 2 * MULTI_SIDE_MARGIN, canvas_h - band
    )
    row_height = content.height // item_count
    regions = tuple(
        LayoutRegion(
            content.x,
            content.y + index * row_height,
            content.width,
            row_height - MULTI_ROW_GAP,
        )
        for index in range(item_count)
    )
    return LayoutPlan(
        title_band_height=band, content=content, regions=regions, columns=1, rows=item_count
    )


def _solve_fixed(item_count: int) -> LayoutPlan:
    band = FIXED_TITLE_BAND_HEIGHT
    content = LayoutRegion(
        FIXED_MARGIN,
        band,
        FIXED_WIDTH - 2 * FIXED_MARGIN,
        FIXED_HEIGHT - band - FIXED_MARGIN,
    )
    columns, rows = grid_shape(item_count)
    cell_w = (content.width - (columns - 1) * FIXED_CELL_GAP) // columns
    cell_h = (content.height - (rows - 1) * FIXED_CELL_GAP) // rows

    regions = []
    for index in range(item_count):
        row, column = divmod(index, columns)
        regions.append(
            LayoutRegion(
                content.x + column * (cell_w + FIXED_CELL_GAP),
                content.y + row * (cell_h + FIXED_CELL_GAP),
                cell_w,
                cell_h,
            )
        )
    return LayoutPlan(
        title_band_height=band,
        content=content,
        regions=tuple(regions),
        columns=columns,
        rows=rows,
    )


def solve(mode: RenderMode, item_count: int, canvas_w: int, canvas_h: int) -> LayoutPlan:
    """Compute the title band and per-item regions for a render.

    Args:
        mode: Render mode
        item_count: Number of entities to place
        canvas_w: Canvas width in pixels
        canvas_h: Canvas height in pixels

    Returns:
        LayoutPlan with regions in input order (row-major for grids)

    Raises:
        RenderContractError: If the count or dimensions are outside the mode's bounds
    """
    _check_dimensions(mode, item_count, canvas_w, canvas_h)

    if mode == RenderMode.SINGLE_STATUS:
        plan = _solve_single(canvas_w, canvas_h)
    elif mode == RenderMode.MULTI_STATUS:
        plan = _solve_multi(item_count, canvas_w, canvas_h)
    else:
        plan = _solve_fixed(item_count)

    logger.debug(
        "Layout %s: %d items in %dx%d grid on %dx%d canvas",
        mode.value,
        item_count,
        plan.columns,
        plan.rows,
        canvas_w,
        canvas_h,
    )
    return plan
