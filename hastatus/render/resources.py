"""Read-only font resources shared by every render.

Built once at startup and passed into the engine explicitly; nothing in the
engine loads fonts on its own.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from PIL import ImageFont
from PIL.ImageFont import FreeTypeFont
from PIL.ImageFont import ImageFont as BuiltinFont

logger = logging.getLogger(__name__)

Font = Union[FreeTypeFont, BuiltinFont]

# Sample used to measure the average glyph width of a font tier.
_GLYPH_SAMPLE = "abcdefghijklmnopqrstuvwxyz ABCDEFGHIJKLMNOPQRSTUVWXYZ 0123456789"


class FontTier(str, Enum):
    """Named font sizes used by the composer."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XLARGE = "xlarge"


DEFAULT_TIER_SIZES: dict[FontTier, int] = {
    FontTier.SMALL: 12,
    FontTier.MEDIUM: 15,
    FontTier.LARGE: 18,
    FontTier.XLARGE: 30,
}


def _load_font(font_path: Optional[Path], size: int) -> Font:
    if font_path is not None:
        return ImageFont.truetype(str(font_path), size)
    return ImageFont.load_default(size)


class RenderResources:
    """Font tiers and glyph metrics for the rendering engine."""

    def __init__(self, fonts: dict[FontTier, Font]) -> None:
        """Initialize resources from already loaded fonts.

        Args:
            fonts: One font per FontTier

        Raises:
            ValueError: If a tier is missing
        """
        missing = [tier.value for tier in FontTier if tier not in fonts]
        if missing:
            raise ValueError(f"Missing font tiers: {', '.join(missing)}")
        self._fonts = dict(fonts)
        self._glyph_widths = {
            tier: font.getlength(_GLYPH_SAMPLE) / len(_GLYPH_SAMPLE)
            for tier, font in self._fonts.items()
        }

    @classmethod
    def load(
        cls,
        font_path: Optional[Union[str, Path]] = None,
        sizes: Optional[dict[FontTier, int]] = None,
    ) -> RenderResources:
        """Load every font tier.

        Args:
            font_path: Optional TrueType font file; Pillow's bundled font when None
            sizes: Optional size override per tier

        Returns:
            RenderResources ready to share across renders

        Raises:
            OSError: If font_path cannot be read as a font
        """
        tier_sizes = {**DEFAULT_TIER_SIZES, **(sizes or {})}
        path = Path(font_path) if font_path else None
        fonts = {tier: _load_font(path, size) for tier, size in tier_sizes.items()}
        logger.info(
            "Loaded font tiers from %s: %s",
            path or "bundled default font",
            ", ".join(f"{tier.value}={size}px" for tier, size in tier_sizes.items()),
        )
        return cls(fonts)

    def font(self, tier: FontTier) -> Font:
        return self._fonts[tier]

    def glyph_width(self, tier: FontTier) -> float:
        """Average glyph advance of a tier in pixels."""
        return self._glyph_widths[tier]
