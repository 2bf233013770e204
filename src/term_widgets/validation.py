"""
Geometry resolution and validation for component insertion.

Every insertion runs the same protocol, whichever entry point it came
through (explicit fields, a builder, or an existing value):

    REQUESTED -> RESOLVED -> VALIDATED -> INSERTED
                                  \\-> REJECTED

:class:`Insertion` records that progress; the checks below raise the
:mod:`errors` taxonomy and never mutate anything, so a rejected insertion
leaves its parent untouched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Tuple

from .decoration import Border, Padding, check_border_fit, decoration_offsets, resolve_wh, undecorate
from .errors import (
    AreaOutOfBounds,
    BoundsNotRespected,
    OriginOutOfBounds,
    SiblingConflict,
    TreeError,
    ValueTooLong,
)
from .geometry import Area, Dimensions, Pos, rects_conflict
from .ids import format_id
from .telemetry import format_comp_log, get_logger

logger = get_logger(__name__)


class InsertionState(Enum):
    REQUESTED = "requested"
    RESOLVED = "resolved"
    VALIDATED = "validated"
    INSERTED = "inserted"
    REJECTED = "rejected"


class Insertion:
    """Progress record of one insertion into a parent.

    Used as a context manager around the insertion: an exception escaping
    the block marks the record REJECTED (attaching the entity being
    inserted when the error carries none) and propagates; a clean exit
    marks it INSERTED.

    Attributes:
        tag: Parent component kind for log lines
        component_id: Id of the component being inserted, once known
        state: Current state
        error: The rejection, if any
        entity: The entity being inserted, once materialised
    """

    def __init__(self, tag: str, component_id: Any = None):
        self.tag = tag
        self.component_id = component_id
        self.state = InsertionState.REQUESTED
        self.error: Optional[TreeError] = None
        self.entity: Any = None

    def advance(self, state: InsertionState) -> None:
        self.state = state

    def __enter__(self) -> "Insertion":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is None:
            self.state = InsertionState.INSERTED
            logger.debug(format_comp_log(self.tag, self.component_id, "inserted"))
            return False
        if isinstance(exc, TreeError):
            self.state = InsertionState.REJECTED
            self.error = exc
            if exc.entity is None:
                exc.entity = self.entity
            if exc.component_id is None:
                exc.component_id = self.component_id
            logger.debug(format_comp_log(
                self.tag, self.component_id, f"rejected: {type(exc).__name__}: {exc}"
            ))
        return False


@dataclass(frozen=True)
class Resolved:
    """Geometry resolved from a request.

    ``hpos``/``vpos`` locate the decorated box in the parent's interior;
    ``width``/``height`` are the content size.
    """
    hpos: int
    vpos: int
    width: int
    height: int
    outer_width: int
    outer_height: int

    @property
    def box(self) -> Dimensions:
        return Dimensions(self.hpos, self.vpos, self.outer_width, self.outer_height)


def resolve_geometry(
    area: Area,
    xpos: Pos,
    ypos: Pos,
    border: Border,
    padding: Padding,
    parent_width: int,
    parent_height: int,
) -> Resolved:
    """Resolve size and anchors against a parent interior.

    A ``Fill`` area takes the whole parent interior as the decorated size;
    any other area is a content size that the decoration is added to.
    Anchors are resolved with the decorated size, so ``Pos.end()`` puts the
    outer edge of the decoration on the parent's far edge.
    """
    wextra, hextra = resolve_wh(border, padding)
    if area.is_fill:
        outer_w, outer_h = area.resolve(parent_width, parent_height)
        width, height = undecorate(outer_w, outer_h, border, padding)
    else:
        width, height = area.resolve(parent_width, parent_height)
        outer_w, outer_h = width + wextra, height + hextra
    hpos = xpos.resolve(parent_width, outer_w)
    vpos = ypos.resolve(parent_height, outer_h)
    return Resolved(hpos, vpos, width, height, outer_w, outer_h)


def check_area(outer_width: int, outer_height: int, parent_width: int, parent_height: int) -> None:
    """Both decorated dimensions must fit the parent independently.

    Raises:
        AreaOutOfBounds: if either dimension exceeds the parent's
    """
    if outer_width > parent_width or outer_height > parent_height:
        raise AreaOutOfBounds(
            f"{outer_width}x{outer_height} does not fit in {parent_width}x{parent_height}"
        )


def check_origin(box: Dimensions, parent_width: int, parent_height: int) -> None:
    """The decorated box must lie inside the parent.

    Raises:
        OriginOutOfBounds: if the origin itself is outside the parent
        BoundsNotRespected: if the origin is inside but origin + size is not
    """
    if box.x < 0 or box.y < 0 or box.x > parent_width or box.y > parent_height:
        raise OriginOutOfBounds(
            f"origin ({box.x}, {box.y}) outside {parent_width}x{parent_height}"
        )
    if box.right > parent_width or box.bottom > parent_height:
        raise BoundsNotRespected(
            f"({box.x}, {box.y}) + {box.width}x{box.height} crosses {parent_width}x{parent_height}"
        )


def check_bounds(box: Dimensions, parent_width: int, parent_height: int) -> None:
    """Area check followed by origin check."""
    check_area(box.width, box.height, parent_width, parent_height)
    check_origin(box, parent_width, parent_height)


def check_overlap(box: Dimensions, siblings: Iterable[Tuple[Any, Dimensions]]) -> None:
    """Reject a box that conflicts with any sibling box.

    Args:
        box: Decorated box being inserted
        siblings: ``(id, decorated box)`` pairs in the same coordinates

    Raises:
        SiblingConflict: naming the first conflicting sibling
    """
    for sibling_id, other in siblings:
        if rects_conflict(box, other):
            raise SiblingConflict(f"overlaps {format_id(sibling_id)}")


def check_value_fits(length: int, width: int, height: int) -> None:
    """Raise :class:`ValueTooLong` when ``length`` exceeds ``width * height``."""
    if length > width * height:
        raise ValueTooLong(f"value of length {length} exceeds {width}x{height} = {width * height}")


def check_manual_border(border: Border, padding: Padding, width: int, height: int) -> None:
    check_border_fit(border, padding, width, height)


def content_origin(hpos: int, vpos: int, border: Border, padding: Padding) -> Tuple[int, int]:
    """Origin of the content area of a decorated box placed at ``(hpos, vpos)``."""
    left, top = decoration_offsets(border, padding)
    return hpos + left, vpos + top


def text_absolute_origin(
    container_hpos: int,
    container_vpos: int,
    container_border: Border,
    container_padding: Padding,
    text_hpos: int,
    text_vpos: int,
) -> Tuple[int, int]:
    """Window coordinates of a text's decorated box.

    The container's content origin (its window-relative origin plus its
    own top/left decoration) plus the text's relative origin.
    """
    cx, cy = content_origin(container_hpos, container_vpos, container_border, container_padding)
    return cx + text_hpos, cy + text_vpos
