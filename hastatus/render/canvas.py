"""Pillow-backed drawing surface used by the composer.

A canvas is owned by exactly one render call. All coordinates are in pixels
with the origin at the top-left corner.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from PIL import Image, ImageDraw

from .colors import MONO_BLACK, MONO_WHITE, RGB, blend_colors
from .region import LayoutRegion
from .resources import FontTier, RenderResources

Color = Union[RGB, int]


class Canvas:
    """Mutable RGB pixel surface with the primitives the composer needs."""

    def __init__(
        self,
        width: int,
        height: int,
        resources: RenderResources,
        background: RGB = (255, 255, 255),
    ) -> None:
        """Create a blank canvas.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            resources: Font tiers used by text operations
            background: Initial fill color
        """
        self.resources = resources
        self.image = Image.new("RGB", (width, height), background)
        self.draw = ImageDraw.Draw(self.image)

    @classmethod
    def from_image(cls, image: Image.Image, resources: RenderResources) -> Canvas:
        """Wrap an existing image without copying it."""
        canvas = cls.__new__(cls)
        canvas.resources = resources
        canvas.image = image
        canvas.draw = ImageDraw.Draw(image)
        return canvas

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    @property
    def bounds(self) -> LayoutRegion:
        return LayoutRegion(0, 0, self.width, self.height)

    def fill_rect(self, region: LayoutRegion, color: Color) -> None:
        if region.width <= 0 or region.height <= 0:
            return
        self.draw.rectangle(region.corners, fill=color)

    def stroke_rect(self, region: LayoutRegion, color: Color, width: int = 1) -> None:
        if region.width <= 0 or region.height <= 0:
            return
        self.draw.rectangle(region.corners, outline=color, width=width)

    def line(self, points: Sequence[tuple[int, int]], color: Color, width: int = 1) -> None:
        self.draw.line(list(points), fill=color, width=width)

    def fill_circle(
        self,
        cx: int,
        cy: int,
        radius: int,
        fill: Optional[Color],
        outline: Optional[Color] = None,
        width: int = 1,
    ) -> None:
        if radius <= 0:
            return
        box = (cx - radius, cy - radius, cx + radius, cy + radius)
        self.draw.ellipse(box, fill=fill, outline=outline, width=width)

    def linear_gradient(self, region: LayoutRegion, start: RGB, end: RGB) -> None:
        """Vertical gradient from start (top row) to end (bottom row)."""
        if region.width <= 0 or region.height <= 0:
            return
        span = max(region.height - 1, 1)
        x0, x1 = region.x, region.right - 1
        for offset in range(region.height):
            color = blend_colors(start, end, offset / span)
            y = region.y + offset
            self.draw.line([(x0, y), (x1, y)], fill=color)

    def text_size(self, text: str, tier: FontTier) -> tuple[int, int]:
        """Rendered (width, height) of text in a font tier."""
        if not text:
            return (0, 0)
        left, top, right, bottom = self.draw.textbbox((0, 0), text, font=self.resources.font(tier))
        return (int(right - left), int(bottom - top))

    def text(self, x: int, y: int, text: str, tier: FontTier, color: Color) -> None:
        """Draw text with its top-left ink corner at (x, y)."""
        if not text:
            return
        font = self.resources.font(tier)
        left, top, _right, _bottom = self.draw.textbbox((0, 0), text, font=font)
        self.draw.text((x - left, y - top), text, font=font, fill=color)

    def text_clipped(self, region: LayoutRegion, text: str, tier: FontTier, color: Color) -> None:
        """Draw text at the region's top-left corner, clipping whatever overflows it."""
        if not text or region.width <= 0 or region.height <= 0:
            return
        width, height = self.text_size(text, tier)
        if width <= region.width and height <= region.height:
            self.text(region.x, region.y, text, tier, color)
            return

        box = (region.x, region.y, region.right, region.bottom)
        tile = self.image.crop(box)
        tile_canvas = Canvas.from_image(tile, self.resources)
        tile_canvas.text(0, 0, text, tier, color)
        self.image.paste(tile, box[:2])


class MonoCanvas(Canvas):
    """Canvas holding a 1-bit image: every pixel is MONO_BLACK or MONO_WHITE."""

    LEVELS = (MONO_BLACK, MONO_WHITE)

    def __init__(self, image: Image.Image, resources: RenderResources) -> None:
        if image.mode != "1":
            raise ValueError(f"MonoCanvas needs a mode '1' image, got {image.mode!r}")
        self.resources = resources
        self.image = image
        self.draw = ImageDraw.Draw(image)

    def luminance_levels(self) -> set[int]:
        """Distinct luminance values present in the image."""
        colors = self.image.convert("L").getcolors(maxcolors=256) or []
        return {value for _count, value in colors}
