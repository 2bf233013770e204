"""
Geometry primitives for terminal components.

This module provides the rectangle value used for every resolved widget box,
the anchor (``Pos``) and area (``Area``) rules a caller uses to request a
position and size, and the rectangle conflict test used to keep siblings
from overlapping.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass
class Dimensions:
    """Represents a resolved rectangle (position and size) in cells.

    Coordinates are relative to whatever parent the rectangle lives in.
    The right and bottom edges are exclusive.
    """
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        """Whether the rectangle covers no cells."""
        return self.width <= 0 or self.height <= 0

    def contains(self, other: "Dimensions") -> bool:
        """Whether ``other`` (in the same coordinates) lies entirely inside."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersects(self, other: "Dimensions") -> bool:
        """Whether the two rectangles share at least one cell."""
        return rects_conflict(self, other)

    def translated(self, dx: int, dy: int) -> "Dimensions":
        """Return a copy moved by ``(dx, dy)``."""
        return Dimensions(self.x + dx, self.y + dy, self.width, self.height)


class OffsetDimensions:
    """Dimensions offset from a base rectangle.

    This is used to calculate the content area of a component (accounting
    for border and padding) without copying the base values.

    Attributes:
        base: The base dimensions
        offsets: The offset to apply to each dimension
    """

    def __init__(self, base: Dimensions, offsets: Dimensions):
        self.base = base
        self.offsets = offsets

    @property
    def x(self) -> int:
        """X position with offset applied."""
        return self.base.x + self.offsets.x

    @property
    def y(self) -> int:
        """Y position with offset applied."""
        return self.base.y + self.offsets.y

    @property
    def width(self) -> int:
        """Width with offset applied, never negative."""
        return max(0, self.base.width + self.offsets.width)

    @property
    def height(self) -> int:
        """Height with offset applied, never negative."""
        return max(0, self.base.height + self.offsets.height)

    def resolve(self) -> Dimensions:
        """Snapshot the offset rectangle as plain Dimensions."""
        return Dimensions(self.x, self.y, self.width, self.height)


class Anchor(Enum):
    """How a coordinate is resolved along one axis."""
    START = "start"
    CENTER = "center"
    END = "end"
    VALUE = "value"


@dataclass(frozen=True)
class Pos:
    """Anchor rule for one axis.

    ``Pos.start()`` resolves to 0, ``Pos.center()`` to the centered origin,
    ``Pos.end()`` to the origin that makes the decorated box touch the far
    edge, and ``Pos.at(n)`` to the literal ``n``.
    """
    anchor: Anchor = Anchor.START
    value: int = 0

    @classmethod
    def start(cls) -> "Pos":
        return cls(Anchor.START)

    @classmethod
    def center(cls) -> "Pos":
        return cls(Anchor.CENTER)

    @classmethod
    def end(cls) -> "Pos":
        return cls(Anchor.END)

    @classmethod
    def at(cls, value: int) -> "Pos":
        return cls(Anchor.VALUE, value)

    def resolve(self, axis_len: int, size: int) -> int:
        """Resolve the coordinate.

        Args:
            axis_len: Length available along the axis
            size: Decorated size of the widget along the axis

        Returns:
            The origin coordinate; may be negative or past the axis when the
            widget cannot fit, which bounds validation then rejects.
        """
        match self.anchor:
            case Anchor.START:
                return 0
            case Anchor.CENTER:
                return (axis_len - size) // 2
            case Anchor.END:
                return axis_len - size
            case _:
                return self.value


class AreaKind(Enum):
    """How a size request is resolved."""
    ZERO = "zero"
    FILL = "fill"
    VALUES = "values"


@dataclass(frozen=True)
class Area:
    """Size request for a component.

    ``Area.zero()`` requests nothing, ``Area.fill()`` the parent's whole
    interior (decoration included), ``Area.values(w, h)`` a literal content
    size.
    """
    kind: AreaKind = AreaKind.ZERO
    width: int = 0
    height: int = 0

    @classmethod
    def zero(cls) -> "Area":
        return cls(AreaKind.ZERO)

    @classmethod
    def fill(cls) -> "Area":
        return cls(AreaKind.FILL)

    @classmethod
    def values(cls, width: int, height: int) -> "Area":
        return cls(AreaKind.VALUES, max(0, width), max(0, height))

    @property
    def is_fill(self) -> bool:
        return self.kind is AreaKind.FILL

    def resolve(self, parent_width: int, parent_height: int) -> Tuple[int, int]:
        """Return ``(width, height)`` for the given parent interior size."""
        match self.kind:
            case AreaKind.ZERO:
                return 0, 0
            case AreaKind.FILL:
                return max(0, parent_width), max(0, parent_height)
            case _:
                return max(0, self.width), max(0, self.height)


def area_conflicts(a: Dimensions, b: Dimensions) -> Tuple[int, int, int, int]:
    """Signed margins between two rectangles on the same parent.

    Each margin is the free distance from ``a`` to ``b`` on one side; a
    negative value means ``a`` reaches past ``b``'s opposite edge on that
    side.

    Returns:
        ``(top, right, bottom, left)`` where
        ``top = a.y - b.bottom``, ``right = b.x - a.right``,
        ``bottom = b.y - a.bottom`` and ``left = a.x - b.right``
    """
    top = a.y - b.bottom
    right = b.x - a.right
    bottom = b.y - a.bottom
    left = a.x - b.right
    return top, right, bottom, left


def rects_conflict(a: Dimensions, b: Dimensions) -> bool:
    """Whether two rectangles overlap.

    They conflict iff their horizontal extents overlap and their vertical
    extents overlap. Rectangles covering no cells never conflict.
    """
    if a.is_empty or b.is_empty:
        return False
    top, right, bottom, left = area_conflicts(a, b)
    return left < 0 and right < 0 and top < 0 and bottom < 0
