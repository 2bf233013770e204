"""
Layout strategies applied by a parent to its direct children.

``Canvas`` keeps every child where its own anchors put it. ``Flex`` and
``Grid`` compute a child's origin from its index among its siblings; the
result is then validated exactly like a canvas placement, so a layout can
never place a child out of bounds or on top of a sibling.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from . import config
from .errors import BoundsNotRespected


class LayoutMode(Enum):
    CANVAS = "canvas"
    FLEX = "flex"
    GRID = "grid"


class Direction(Enum):
    ROW = "row"
    COLUMN = "column"


class Align(Enum):
    START = "start"
    CENTER = "center"
    END = "end"

    def offset(self, available: int, size: int) -> int:
        match self:
            case Align.START:
                return 0
            case Align.CENTER:
                return (available - size) // 2
            case _:
                return available - size


Size = Tuple[int, int]


@dataclass(frozen=True)
class Canvas:
    """No recalculation: children keep their resolved geometry."""

    @property
    def mode(self) -> LayoutMode:
        return LayoutMode.CANVAS

    def place(self, index: int, siblings: Sequence[Size], size: Size, parent: Size) -> Optional[Size]:
        return None


@dataclass(frozen=True)
class Flex:
    """Flex placement.

    Attributes:
        direction: ROW puts each new child to the right, COLUMN below
        invert: pack from the far edge (right for rows, bottom for columns)
        margin: cells between consecutive children
        h_align: cross-axis alignment for columns
        v_align: cross-axis alignment for rows
        wrap: start a new line when the main axis is full
    """
    direction: Direction = Direction.ROW
    invert: bool = False
    margin: int = config.FLEX_DEFAULT_MARGIN
    h_align: Align = Align.CENTER
    v_align: Align = Align.CENTER
    wrap: bool = False

    @property
    def mode(self) -> LayoutMode:
        return LayoutMode.FLEX

    def place(self, index: int, siblings: Sequence[Size], size: Size, parent: Size) -> Optional[Size]:
        """Origin of child ``index`` given the decorated sizes before it.

        Args:
            index: Position of the child among its siblings
            siblings: Decorated ``(w, h)`` of the siblings in order
            size: Decorated ``(w, h)`` of the child being placed
            parent: Interior ``(w, h)`` of the parent
        """
        row = self.direction is Direction.ROW
        main_len, cross_len = parent if row else (parent[1], parent[0])

        sizes: List[Size] = list(siblings[:index]) + [size]
        cursor = 0
        line_offset = 0
        line_thickness = 0
        pos_main = 0
        for w, h in sizes:
            main, cross = (w, h) if row else (h, w)
            if self.wrap and cursor > 0 and cursor + main > main_len:
                line_offset += line_thickness + self.margin
                cursor = 0
                line_thickness = 0
            pos_main = cursor
            cursor += main + self.margin
            line_thickness = max(line_thickness, cross)

        main, cross = size if row else (size[1], size[0])
        if self.invert:
            pos_main = main_len - pos_main - main
        if self.wrap:
            pos_cross = line_offset
        else:
            align = self.v_align if row else self.h_align
            pos_cross = align.offset(cross_len, cross)

        return (pos_main, pos_cross) if row else (pos_cross, pos_main)


@dataclass(frozen=True)
class Grid:
    """Grid placement: the parent is split into ``cols x rows`` equal cells."""
    cols: int = 1
    rows: int = 1

    @property
    def mode(self) -> LayoutMode:
        return LayoutMode.GRID

    def place(self, index: int, siblings: Sequence[Size], size: Size, parent: Size) -> Optional[Size]:
        cols = max(1, self.cols)
        rows = max(1, self.rows)
        if index >= cols * rows:
            raise BoundsNotRespected(f"grid of {cols}x{rows} cells has no cell {index}")
        cell_w = parent[0] // cols
        cell_h = parent[1] // rows
        return (index % cols) * cell_w, (index // cols) * cell_h


Layout = Union[Canvas, Flex, Grid]


def layout_from_char(value: str) -> Layout:
    """Map ``c``/``f``/``g`` to a default Canvas, Flex or Grid."""
    match value:
        case "c":
            return Canvas()
        case "f":
            return Flex()
        case "g":
            return Grid()
    raise ValueError(f"unknown layout {value!r}")


def place_child(
    layout: Layout,
    index: int,
    siblings: Sequence[Size],
    size: Size,
    parent: Size,
    origin: Size,
) -> Size:
    """Apply ``layout`` to a child, falling back to ``origin`` for Canvas."""
    placed = layout.place(index, siblings, size, parent)
    return origin if placed is None else placed
