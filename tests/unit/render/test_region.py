"""Tests for LayoutRegion."""

import pytest

from hastatus.render import LayoutRegion

pytestmark = pytest.mark.unit


class TestLayoutRegion:
    """Test suite for LayoutRegion class."""

    def test_init_when_valid_parameters_then_exposes_edges(self) -> None:
        """Edges and area derive from position and size."""
        # Arrange & Act
        region = LayoutRegion(x=10, y=20, width=100, height=200)

        # Assert
        assert (region.right, region.bottom) == (110, 220)
        assert region.area == 20000
        assert region.corners == (10, 20, 109, 219)

    def test_repr_when_called_then_returns_string_representation(self) -> None:
        """repr lists every field."""
        # Arrange
        region = LayoutRegion(x=10, y=20, width=100, height=200)

        # Act
        result = repr(region)

        # Assert
        assert result == "LayoutRegion(x=10, y=20, width=100, height=200)"

    def test_eq_when_same_box_then_equal_and_hashable(self) -> None:
        """Regions compare by value."""
        assert LayoutRegion(1, 2, 3, 4) == LayoutRegion(1, 2, 3, 4)
        assert len({LayoutRegion(1, 2, 3, 4), LayoutRegion(1, 2, 3, 4)}) == 1

    def test_contains_point_when_on_edges_then_right_and_bottom_exclusive(self) -> None:
        """The right and bottom edges are outside the region."""
        # Arrange
        region = LayoutRegion(x=10, y=20, width=100, height=200)

        # Act & Assert
        assert region.contains_point(10, 20) is True
        assert region.contains_point(109, 219) is True
        assert region.contains_point(110, 219) is False
        assert region.contains_point(109, 220) is False

    def test_overlaps_when_adjacent_then_false(self) -> None:
        """Regions sharing only an edge do not overlap."""
        # Arrange
        left = LayoutRegion(0, 0, 50, 50)
        right = LayoutRegion(50, 0, 50, 50)

        # Act & Assert
        assert left.overlaps(right) is False
        assert left.overlaps(LayoutRegion(49, 49, 10, 10)) is True

    def test_contains_when_nested_then_true(self) -> None:
        """A region contains regions lying fully inside it."""
        # Arrange
        outer = LayoutRegion(0, 0, 100, 100)

        # Act & Assert
        assert outer.contains(LayoutRegion(10, 10, 90, 90)) is True
        assert outer.contains(LayoutRegion(10, 10, 91, 90)) is False

    def test_inset_when_larger_than_region_then_zero_size(self) -> None:
        """Insets never produce negative sizes."""
        # Act
        result = LayoutRegion(0, 0, 10, 30).inset(8, 4)

        # Assert
        assert result == LayoutRegion(8, 4, 0, 22)
