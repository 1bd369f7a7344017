"""1-bit reduction for the fixed e-ink display mode."""

from __future__ import annotations

import logging

from .canvas import Canvas, MonoCanvas
from .colors import MONO_BLACK, MONO_WHITE

logger = logging.getLogger(__name__)

# Midpoint of the two luminance levels the fixed display palette paints with.
MONO_THRESHOLD = (MONO_BLACK + MONO_WHITE + 1) // 2

_LOOKUP = [MONO_WHITE if value >= MONO_THRESHOLD else MONO_BLACK for value in range(256)]


def reduce_to_1bit(canvas: Canvas) -> MonoCanvas:
    """Threshold a canvas to exactly two luminance levels.

    Luminance is Pillow's ITU-R 601-2 RGB to L conversion. Pixels at or above
    MONO_THRESHOLD become white, everything else black. No dithering is
    applied, so reducing an already reduced canvas returns the same pixels.

    Args:
        canvas: Canvas (or MonoCanvas) to reduce

    Returns:
        MonoCanvas backed by a new mode "1" image
    """
    gray = canvas.image.convert("L")
    mono = gray.point(_LOOKUP, mode="1")
    logger.debug("Reduced %dx%d canvas to 1-bit at threshold %d", *mono.size, MONO_THRESHOLD)
    return MonoCanvas(mono, canvas.resources)
