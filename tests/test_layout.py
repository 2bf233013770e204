"""Tests for layout strategies."""

import pytest
from term_widgets.errors import BoundsNotRespected
from term_widgets.layout import (
    Align,
    Canvas,
    Direction,
    Flex,
    Grid,
    LayoutMode,
    layout_from_char,
    place_child,
)


class TestCanvas:
    """Tests for Canvas placement."""

    def test_keeps_origin(self):
        """Test that canvas children keep their own origin."""
        assert Canvas().place(0, [], (4, 1), (20, 5)) is None
        assert place_child(Canvas(), 3, [], (4, 1), (20, 5), (7, 2)) == (7, 2)
        assert Canvas().mode is LayoutMode.CANVAS


class TestFlex:
    """Tests for Flex placement."""

    def test_row_packs_with_margin(self):
        """Test that rows place each child after the previous one."""
        flex = Flex()
        assert flex.place(0, [], (3, 1), (20, 5)) == (0, 2)
        assert flex.place(1, [(3, 1)], (4, 1), (20, 5)) == (4, 2)

    def test_row_alignment(self):
        assert Flex(v_align=Align.START).place(0, [], (3, 1), (20, 5)) == (0, 0)
        assert Flex(v_align=Align.END).place(0, [], (3, 1), (20, 5)) == (0, 4)

    def test_column(self):
        """Test that columns stack downward, aligned horizontally."""
        flex = Flex(direction=Direction.COLUMN)
        assert flex.place(0, [], (4, 2), (10, 10)) == (3, 0)
        assert flex.place(1, [(4, 2)], (4, 2), (10, 10)) == (3, 3)

    def test_invert(self):
        """Test that invert packs from the far edge."""
        flex = Flex(invert=True)
        assert flex.place(0, [], (4, 1), (20, 5)) == (16, 2)
        assert flex.place(1, [(4, 1)], (4, 1), (20, 5)) == (11, 2)

    def test_wrap(self):
        """Test that wrapping starts a new line below the thickest child."""
        flex = Flex(wrap=True)
        siblings = [(6, 1), (3, 2)]
        assert flex.place(1, siblings, (3, 2), (10, 6)) == (7, 0)
        assert flex.place(2, siblings, (4, 1), (10, 6)) == (0, 3)

    def test_no_wrap_overflows(self):
        """Test that without wrapping a child may land past the edge."""
        assert Flex().place(1, [(8, 1)], (4, 1), (10, 1)) == (9, 0)

    def test_mode(self):
        assert Flex().mode is LayoutMode.FLEX


class TestGrid:
    """Tests for Grid placement."""

    def test_cells(self):
        grid = Grid(cols=2, rows=2)
        parent = (20, 10)
        assert grid.place(0, [], (1, 1), parent) == (0, 0)
        assert grid.place(1, [], (1, 1), parent) == (10, 0)
        assert grid.place(2, [], (1, 1), parent) == (0, 5)
        assert grid.place(3, [], (1, 1), parent) == (10, 5)

    def test_full(self):
        """Test that a child past the last cell is rejected."""
        with pytest.raises(BoundsNotRespected):
            Grid(cols=2, rows=2).place(4, [], (1, 1), (20, 10))

    def test_mode(self):
        assert Grid().mode is LayoutMode.GRID


class TestLayoutFromChar:
    """Tests for the layout shorthand."""

    @pytest.mark.parametrize("char,kind", [("c", Canvas), ("f", Flex), ("g", Grid)])
    def test_known(self, char, kind):
        assert isinstance(layout_from_char(char), kind)

    def test_unknown(self):
        with pytest.raises(ValueError):
            layout_from_char("x")
