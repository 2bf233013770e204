"""Tests for geometry primitives."""

import pytest
from term_widgets.geometry import (
    Area,
    Dimensions,
    OffsetDimensions,
    Pos,
    area_conflicts,
    rects_conflict,
)


class TestDimensions:
    """Tests for the Dimensions dataclass."""

    def test_default_initialization(self):
        """Test that all fields default to zero."""
        dims = Dimensions()
        assert dims.x == 0
        assert dims.y == 0
        assert dims.width == 0
        assert dims.height == 0
        assert dims.is_empty

    def test_edges(self):
        """Test exclusive right and bottom edges."""
        dims = Dimensions(x=10, y=20, width=100, height=50)
        assert dims.right == 110
        assert dims.bottom == 70
        assert not dims.is_empty

    def test_contains(self):
        """Test containment of one rectangle in another."""
        outer = Dimensions(0, 0, 80, 24)
        assert outer.contains(Dimensions(0, 0, 80, 24))
        assert outer.contains(Dimensions(10, 5, 20, 10))
        assert not outer.contains(Dimensions(70, 5, 20, 10))
        assert not outer.contains(Dimensions(-1, 0, 5, 5))

    def test_translated(self):
        """Test that translation returns a moved copy."""
        dims = Dimensions(1, 2, 3, 4)
        moved = dims.translated(10, 20)
        assert moved == Dimensions(11, 22, 3, 4)
        assert dims == Dimensions(1, 2, 3, 4)


class TestOffsetDimensions:
    """Tests for OffsetDimensions class."""

    def test_apply_offsets(self):
        """Test that offsets are added to the base."""
        base = Dimensions(x=10, y=5, width=20, height=10)
        offsets = Dimensions(x=1, y=1, width=-2, height=-2)
        content = OffsetDimensions(base, offsets)

        assert content.x == 11
        assert content.y == 6
        assert content.width == 18
        assert content.height == 8

    def test_size_never_negative(self):
        """Test that a large negative offset clamps the size to zero."""
        content = OffsetDimensions(Dimensions(0, 0, 4, 4), Dimensions(2, 2, -10, -10))
        assert content.width == 0
        assert content.height == 0

    def test_follows_base_changes(self):
        """Test that offset dimensions reflect later changes to the base."""
        base = Dimensions(0, 0, 10, 10)
        content = OffsetDimensions(base, Dimensions(1, 1, -2, -2))
        base.x = 5
        assert content.x == 6
        assert content.resolve() == Dimensions(6, 1, 8, 8)


class TestPos:
    """Tests for anchor resolution."""

    def test_start(self):
        assert Pos.start().resolve(80, 20) == 0
        assert Pos() == Pos.start()

    def test_center(self):
        """Test centering, rounding toward the start."""
        assert Pos.center().resolve(80, 20) == 30
        assert Pos.center().resolve(81, 20) == 30

    def test_end(self):
        """Test that END puts the far edge on the axis end."""
        assert Pos.end().resolve(80, 20) == 60

    def test_value(self):
        assert Pos.at(7).resolve(80, 20) == 7

    def test_oversized_resolves_out_of_range(self):
        """Test that an oversized widget resolves outside the axis."""
        assert Pos.end().resolve(10, 20) == -10


class TestArea:
    """Tests for size requests."""

    def test_zero(self):
        assert Area.zero().resolve(80, 24) == (0, 0)
        assert Area() == Area.zero()

    def test_fill(self):
        area = Area.fill()
        assert area.is_fill
        assert area.resolve(80, 24) == (80, 24)

    def test_values(self):
        area = Area.values(10, 3)
        assert not area.is_fill
        assert area.resolve(80, 24) == (10, 3)

    def test_negative_values_clamped(self):
        """Test that negative sizes clamp to zero."""
        assert Area.values(-1, 5).resolve(80, 24) == (0, 5)


class TestConflict:
    """Tests for the rectangle conflict test."""

    def test_area_conflicts_margins(self):
        """Test the signed margins between two rectangles."""
        a = Dimensions(0, 0, 10, 10)
        b = Dimensions(5, 5, 10, 10)
        assert area_conflicts(a, b) == (-15, -5, -5, -15)

    def test_overlapping(self):
        assert rects_conflict(Dimensions(0, 0, 10, 10), Dimensions(5, 5, 10, 10))

    def test_contained(self):
        """Test that a rectangle inside another conflicts with it."""
        assert rects_conflict(Dimensions(0, 0, 10, 10), Dimensions(2, 2, 2, 2))
        assert rects_conflict(Dimensions(2, 2, 2, 2), Dimensions(0, 0, 10, 10))

    def test_adjacent_do_not_conflict(self):
        """Test that touching edges are not an overlap."""
        assert not rects_conflict(Dimensions(0, 0, 10, 10), Dimensions(10, 0, 5, 5))
        assert not rects_conflict(Dimensions(0, 0, 10, 10), Dimensions(0, 10, 5, 5))

    def test_disjoint(self):
        assert not rects_conflict(Dimensions(0, 0, 5, 5), Dimensions(20, 20, 5, 5))

    def test_horizontal_overlap_only(self):
        """Test that overlap on one axis alone is not a conflict."""
        assert not rects_conflict(Dimensions(0, 0, 10, 2), Dimensions(5, 5, 10, 2))

    def test_empty_never_conflicts(self):
        assert not rects_conflict(Dimensions(0, 0, 0, 5), Dimensions(0, 0, 10, 10))
        assert not rects_conflict(Dimensions(0, 0, 10, 10), Dimensions(3, 3, 4, 0))

    @pytest.mark.parametrize("a,b", [
        (Dimensions(0, 0, 10, 10), Dimensions(5, 5, 10, 10)),
        (Dimensions(0, 0, 10, 10), Dimensions(10, 0, 5, 5)),
        (Dimensions(3, 1, 4, 4), Dimensions(0, 0, 10, 2)),
    ])
    def test_symmetric(self, a, b):
        """Test that the conflict test does not depend on argument order."""
        assert rects_conflict(a, b) == rects_conflict(b, a)
