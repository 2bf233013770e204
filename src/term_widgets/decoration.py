"""
Border and padding decoration.

A component's stored width/height is its content size. Border and padding
wrap that content, from the inside out: inner padding, border, outer
padding. The helpers here convert between content size and the outer
(decorated) size that is validated against the parent.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from .errors import BorderMisconfigured


@dataclass(frozen=True)
class Sides:
    """Per-side cell counts."""
    top: int = 0
    bottom: int = 0
    right: int = 0
    left: int = 0

    @property
    def horizontal(self) -> int:
        return self.left + self.right

    @property
    def vertical(self) -> int:
        return self.top + self.bottom

    def __add__(self, other: "Sides") -> "Sides":
        return Sides(
            self.top + other.top,
            self.bottom + other.bottom,
            self.right + other.right,
            self.left + other.left,
        )


class BorderKind(Enum):
    NONE = "none"
    UNIFORM = "uniform"
    POLYFORM = "polyform"
    MANUAL = "manual"


@dataclass(frozen=True)
class Border:
    """Border glyph table.

    ``Border.none()`` draws nothing, ``Border.uniform(g)`` uses one glyph
    everywhere, ``Border.polyform(...)`` one glyph per edge plus a shared
    corner glyph, and ``Border.manual(...)`` an explicit table in which any
    edge may be left out. Every present edge takes one cell on its side.
    """
    kind: BorderKind = BorderKind.NONE
    top: Optional[str] = None
    bottom: Optional[str] = None
    left: Optional[str] = None
    right: Optional[str] = None
    top_left: Optional[str] = None
    top_right: Optional[str] = None
    bottom_left: Optional[str] = None
    bottom_right: Optional[str] = None

    @classmethod
    def none(cls) -> "Border":
        return cls()

    @classmethod
    def uniform(cls, glyph: str) -> "Border":
        return cls(BorderKind.UNIFORM, glyph, glyph, glyph, glyph, glyph, glyph, glyph, glyph)

    @classmethod
    def polyform(cls, top: str, bottom: str, left: str, right: str, corner: str) -> "Border":
        return cls(BorderKind.POLYFORM, top, bottom, left, right, corner, corner, corner, corner)

    @classmethod
    def manual(
        cls,
        top: Optional[str] = None,
        bottom: Optional[str] = None,
        left: Optional[str] = None,
        right: Optional[str] = None,
        top_left: Optional[str] = None,
        top_right: Optional[str] = None,
        bottom_left: Optional[str] = None,
        bottom_right: Optional[str] = None,
    ) -> "Border":
        return cls(
            BorderKind.MANUAL,
            top, bottom, left, right,
            top_left, top_right, bottom_left, bottom_right,
        )

    @property
    def is_manual(self) -> bool:
        return self.kind is BorderKind.MANUAL

    @property
    def sides(self) -> Sides:
        """Cells taken by the border on each side."""
        if self.kind is BorderKind.NONE:
            return Sides()
        return Sides(
            int(self.top is not None),
            int(self.bottom is not None),
            int(self.right is not None),
            int(self.left is not None),
        )


class PaddingKind(Enum):
    NONE = "none"
    INNER = "inner"
    OUTER = "outer"
    IN_OUT = "in_out"


@dataclass(frozen=True)
class Padding:
    """Padding around a component.

    ``inside`` sits between the content and the border, ``outside`` around
    the border. The constructors take sides in top, bottom, right, left
    order.
    """
    kind: PaddingKind = PaddingKind.NONE
    inside: Sides = Sides()
    outside: Sides = Sides()

    @classmethod
    def none(cls) -> "Padding":
        return cls()

    @classmethod
    def inner(cls, top: int, bottom: int, right: int, left: int) -> "Padding":
        return cls(PaddingKind.INNER, inside=Sides(top, bottom, right, left))

    @classmethod
    def outer(cls, top: int, bottom: int, right: int, left: int) -> "Padding":
        return cls(PaddingKind.OUTER, outside=Sides(top, bottom, right, left))

    @classmethod
    def in_out(
        cls,
        inner_top: int, inner_bottom: int, inner_right: int, inner_left: int,
        outer_top: int, outer_bottom: int, outer_right: int, outer_left: int,
    ) -> "Padding":
        return cls(
            PaddingKind.IN_OUT,
            inside=Sides(inner_top, inner_bottom, inner_right, inner_left),
            outside=Sides(outer_top, outer_bottom, outer_right, outer_left),
        )

    @property
    def is_null(self) -> bool:
        """Whether the padding takes no cells at all."""
        return self.inside == Sides() and self.outside == Sides()

    def with_side(self, name: str, value: int) -> "Padding":
        """Return a copy with one side changed.

        ``name`` is ``top``/``bottom``/``right``/``left`` for inner or outer
        padding, and ``inner_<side>``/``outer_<side>`` for in-out padding.
        Names that do not apply to this variant leave it unchanged.
        """
        match self.kind:
            case PaddingKind.INNER if name in ("top", "bottom", "right", "left"):
                return replace(self, inside=replace(self.inside, **{name: value}))
            case PaddingKind.OUTER if name in ("top", "bottom", "right", "left"):
                return replace(self, outside=replace(self.outside, **{name: value}))
            case PaddingKind.IN_OUT:
                layer, _, side = name.partition("_")
                if side in ("top", "bottom", "right", "left"):
                    if layer == "inner":
                        return replace(self, inside=replace(self.inside, **{side: value}))
                    if layer == "outer":
                        return replace(self, outside=replace(self.outside, **{side: value}))
        return self


def decoration_sides(border: Border, padding: Padding) -> Sides:
    """Total cells consumed on each side by padding and border."""
    return padding.inside + border.sides + padding.outside


def resolve_wh(border: Border, padding: Padding) -> Tuple[int, int]:
    """Extra width and height added by the decoration."""
    sides = decoration_sides(border, padding)
    return sides.horizontal, sides.vertical


def decoration_offsets(border: Border, padding: Padding) -> Tuple[int, int]:
    """Offset from the decorated box origin to the content origin."""
    sides = decoration_sides(border, padding)
    return sides.left, sides.top


def decorate(width: int, height: int, border: Border, padding: Padding) -> Tuple[int, int]:
    """Outer size of a box whose content is ``width x height``."""
    wextra, hextra = resolve_wh(border, padding)
    return width + wextra, height + hextra


def undecorate(width: int, height: int, border: Border, padding: Padding) -> Tuple[int, int]:
    """Content size left inside an outer box of ``width x height``."""
    wextra, hextra = resolve_wh(border, padding)
    return max(0, width - wextra), max(0, height - hextra)


def border_fit(border: Border, padding: Padding, width: int, height: int) -> bool:
    """Whether a manual glyph table fits the content and padding.

    Non-manual borders always fit. A manual table fits when every glyph is a
    single character, a corner glyph is present wherever two edges meet,
    and every present edge spans at least one cell of the bordered area
    (content plus inner padding).
    """
    if not border.is_manual:
        return True

    glyphs = (
        border.top, border.bottom, border.left, border.right,
        border.top_left, border.top_right, border.bottom_left, border.bottom_right,
    )
    if any(g is not None and len(g) != 1 for g in glyphs):
        return False

    corners = (
        (border.top, border.left, border.top_left),
        (border.top, border.right, border.top_right),
        (border.bottom, border.left, border.bottom_left),
        (border.bottom, border.right, border.bottom_right),
    )
    for edge_a, edge_b, corner in corners:
        if edge_a is not None and edge_b is not None and corner is None:
            return False

    span_h = width + padding.inside.horizontal
    span_v = height + padding.inside.vertical
    if (border.top is not None or border.bottom is not None) and span_h < 1:
        return False
    if (border.left is not None or border.right is not None) and span_v < 1:
        return False
    return True


def check_border_fit(border: Border, padding: Padding, width: int, height: int) -> None:
    """Raise :class:`BorderMisconfigured` when :func:`border_fit` fails."""
    if not border_fit(border, padding, width, height):
        raise BorderMisconfigured(
            f"manual border does not fit {width}x{height} content with {padding.kind.value} padding"
        )
