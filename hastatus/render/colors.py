"""
Color and style constants for status rendering.

Color modes use RGB hues per status category. The fixed e-ink display mode
only ever paints pure black and white and distinguishes categories by fill
pattern, since hue information does not survive 1-bit reduction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .models import RenderMode, StatusCategory

RGB = tuple[int, int, int]


class Pattern(str, Enum):
    """Fill pattern tags used by the monochrome display mode."""

    SOLID = "solid"
    OUTLINE = "outline"
    HATCHED = "hatched"
    CROSSED = "crossed"
    DOTTED = "dotted"


class StatusColors:
    """RGB constants shared by the color layouts."""

    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)

    # Accent hues per category
    GREEN = (50, 180, 50)
    GRAY = (140, 140, 140)
    AMBER = (230, 160, 20)
    RED = (200, 50, 50)
    BLUE = (30, 120, 220)

    # Text
    TEXT_PRIMARY = (40, 40, 40)
    TEXT_SECONDARY = (70, 70, 70)
    TEXT_MUTED = (120, 120, 120)
    TEXT_INVERSE = WHITE

    # Surfaces
    SURFACE = (248, 248, 252)
    SURFACE_MUTED = (240, 240, 240)
    INFO_BACKGROUND = (245, 245, 250)
    TRACK = (215, 215, 222)

    # Borders
    BORDER = (80, 80, 80)
    BORDER_LIGHT = (200, 200, 210)
    HEADER_BORDER = (100, 100, 120)

    # Title band gradients
    HEADER_START = (60, 60, 80)
    HEADER_END = (40, 40, 60)
    MULTI_HEADER_START = (70, 70, 90)
    MULTI_HEADER_END = (50, 50, 70)

    # Dashboard page gradient
    PAGE_START = (250, 250, 255)
    PAGE_END = (240, 240, 250)


# Luminance levels of the fixed display palette.
MONO_BLACK = 0
MONO_WHITE = 255


@dataclass(frozen=True)
class Palette:
    """Concrete colors for one status category in one render mode."""

    background: RGB
    accent: RGB
    text: RGB
    track: RGB
    pattern: Pattern


_ACCENTS: dict[StatusCategory, RGB] = {
    StatusCategory.ACTIVE: StatusColors.GREEN,
    StatusCategory.INACTIVE: StatusColors.GRAY,
    StatusCategory.WARNING: StatusColors.AMBER,
    StatusCategory.UNAVAILABLE: StatusColors.RED,
    StatusCategory.NEUTRAL: StatusColors.BLUE,
}

_PATTERNS: dict[StatusCategory, Pattern] = {
    StatusCategory.ACTIVE: Pattern.SOLID,
    StatusCategory.INACTIVE: Pattern.OUTLINE,
    StatusCategory.WARNING: Pattern.HATCHED,
    StatusCategory.UNAVAILABLE: Pattern.CROSSED,
    StatusCategory.NEUTRAL: Pattern.DOTTED,
}

# Gradient pairs for the single-status card background.
_BACKGROUND_GRADIENTS: dict[StatusCategory, tuple[RGB, RGB]] = {
    StatusCategory.ACTIVE: ((230, 255, 230), (200, 245, 200)),
    StatusCategory.INACTIVE: ((242, 242, 242), (225, 225, 228)),
    StatusCategory.WARNING: ((255, 248, 225), (255, 235, 190)),
    StatusCategory.UNAVAILABLE: ((255, 232, 232), (250, 210, 210)),
    StatusCategory.NEUTRAL: ((245, 248, 255), (230, 238, 255)),
}

_MONO_BLACK_RGB: RGB = (MONO_BLACK, MONO_BLACK, MONO_BLACK)
_MONO_WHITE_RGB: RGB = (MONO_WHITE, MONO_WHITE, MONO_WHITE)


def resolve(category: StatusCategory, mode: RenderMode) -> Palette:
    """Map a status category and render mode to a palette.

    Args:
        category: Status category of the entity
        mode: Render mode the palette is used in

    Returns:
        Palette for the category; FIXED_DISPLAY palettes are pure black and white
    """
    if mode == RenderMode.FIXED_DISPLAY:
        return Palette(
            background=_MONO_WHITE_RGB,
            accent=_MONO_BLACK_RGB,
            text=_MONO_BLACK_RGB,
            track=_MONO_WHITE_RGB,
            pattern=_PATTERNS[category],
        )

    if category == StatusCategory.UNAVAILABLE:
        background = StatusColors.SURFACE_MUTED
        text = StatusColors.TEXT_MUTED
    else:
        background = StatusColors.SURFACE
        text = StatusColors.TEXT_PRIMARY

    return Palette(
        background=background,
        accent=_ACCENTS[category],
        text=text,
        track=StatusColors.TRACK,
        pattern=Pattern.SOLID,
    )


def background_gradient(category: StatusCategory) -> tuple[RGB, RGB]:
    """Top and bottom colors of the single-status card background."""
    return _BACKGROUND_GRADIENTS[category]


def blend_colors(start: RGB, end: RGB, factor: float) -> RGB:
    """Linear blend between two colors; factor 0 gives start, 1 gives end."""
    factor = min(max(factor, 0.0), 1.0)
    return (
        int(start[0] * (1.0 - factor) + end[0] * factor),
        int(start[1] * (1.0 - factor) + end[1] * factor),
        int(start[2] * (1.0 - factor) + end[2] * factor),
    )


def luminance(color: RGB) -> float:
    """ITU-R 601-2 luma, matching Pillow's RGB to L conversion."""
    r, g, b = color
    return 0.299 * r + 0.587 * g + 0.114 * b
