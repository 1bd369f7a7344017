"""Layout region model."""

from __future__ import annotations


class LayoutRegion:
    """A rectangle assigned to one entity (or one content area) on a canvas."""

    __slots__ = ("x", "y", "width", "height")

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        """Initialize a region.

        Args:
            x: X-coordinate of top-left corner
            y: Y-coordinate of top-left corner
            width: Width of region in pixels
            height: Height of region in pixels
        """
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    def __repr__(self) -> str:
        return f"LayoutRegion(x={self.x}, y={self.y}, width={self.width}, height={self.height})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayoutRegion):
            return NotImplemented
        return self.box == other.box

    def __hash__(self) -> int:
        return hash(self.box)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def box(self) -> tuple[int, int, int, int]:
        """Tuple of (x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)

    @property
    def corners(self) -> tuple[int, int, int, int]:
        """Inclusive pixel corners (x0, y0, x1, y1) as Pillow expects them."""
        return (self.x, self.y, self.right - 1, self.bottom - 1)

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains_point(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    def contains(self, other: LayoutRegion) -> bool:
        """Check whether another region lies entirely inside this one."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def overlaps(self, other: LayoutRegion) -> bool:
        """Check if region overlaps with another region.

        Args:
            other: Other region

        Returns:
            True if regions share at least one pixel, False otherwise
        """
        return not (
            self.right <= other.x
            or other.right <= self.x
            or self.bottom <= other.y
            or other.bottom <= self.y
        )

    def inset(self, dx: int, dy: int | None = None) -> LayoutRegion:
        """Shrink the region on every side; never goes below zero size."""
        if dy is None:
            dy = dx
        width = max(self.width - 2 * dx, 0)
        height = max(self.height - 2 * dy, 0)
        return LayoutRegion(self.x + dx, self.y + dy, width, height)
