"""
Component entities: windows, containers and text fields.

A Window owns its Containers and a Container owns its Texts, each through a
map keyed by the child's composite id. Nothing holds a reference to its
parent; the parent is found by slicing the child's id. Every way of adding
a child (explicit fields, a builder, an existing value) goes through the
same validated insertion, which either inserts the child or raises and
leaves the parent unchanged.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple, Union

from . import config
from .decoration import Border, Padding, decorate, decoration_offsets, resolve_wh, undecorate
from .errors import (
    BoundsNotRespected,
    ComponentNotFound,
    IdAlreadyInUse,
    IdKindMismatch,
    OriginOutOfBounds,
    ParentNotFound,
    ValueTooLong,
)
from .geometry import Area, Dimensions, OffsetDimensions, Pos
from .ids import (
    TEXT_KINDS,
    ContainerId,
    IdKind,
    TextId,
    WindowId,
    authorize_id,
    format_id,
    generate_container_id,
    generate_text_id,
    is_editable_id,
)
from .layout import Canvas, Layout, place_child
from .properties import Properties
from .telemetry import format_comp_log, get_logger
from .validation import (
    Insertion,
    InsertionState,
    check_bounds,
    check_manual_border,
    check_overlap,
    check_value_fits,
    resolve_geometry,
    text_absolute_origin,
)

if TYPE_CHECKING:
    from .builders import ContainerBuilder, TextBuilder

logger = get_logger(__name__)

Cell = Optional[str]
Coord = Union[Pos, int]


def _as_pos(value: Coord) -> Pos:
    return value if isinstance(value, Pos) else Pos.at(value)


@dataclass
class Style:
    """Style descriptor read by the render collaborator.

    Values are blessed formatting names (``"red"``, ``"on_black"``,
    ``"bold_white"``); the engine never turns them into escape sequences.
    """
    foreground: Optional[str] = None
    background: Optional[str] = None
    border_foreground: Optional[str] = None
    border_background: Optional[str] = None


class Component:
    """State shared by every entity.

    Attributes:
        attributes: Boolean flags by name (``"focused"``, ``"scrollable"``)
        properties: Typed values for extended behavior
        style: Style descriptor for the renderer
        built_on: Monotonic creation timestamp
    """

    def __init__(self):
        self.attributes: Set[str] = set()
        self.properties = Properties()
        self.style = Style()
        self.built_on = time.monotonic()

    def is_focused(self) -> bool:
        return config.FOCUSED_ATTRIBUTE in self.attributes

    def has_attribute(self, attr: str) -> bool:
        return attr in self.attributes

    def add_attribute(self, attr: str) -> None:
        self.attributes.add(attr)

    def remove_attribute(self, attr: str) -> None:
        self.attributes.discard(attr)


_MISSING = object()


class ParentComponent:
    """Queries over an id-keyed map of children."""

    _tag = "Parent"

    def _child_map(self) -> dict:
        raise NotImplementedError

    def child_count(self) -> int:
        return len(self._child_map())

    def children(self) -> Iterator:
        """Children in insertion order."""
        return iter(self._child_map().values())

    def __iter__(self) -> Iterator:
        return self.children()

    def child_ids(self) -> List:
        return list(self._child_map())

    def child_ref(self, comp_id):
        return self._child_map().get(comp_id)

    def has_child(self, comp_id) -> bool:
        return comp_id in self._child_map()

    def last(self):
        """The most recently built child, or None."""
        newest = None
        for child in self._child_map().values():
            if newest is None or child.built_on >= newest.built_on:
                newest = child
        return newest

    def count_with_property(self, key: str) -> int:
        return sum(1 for child in self.children() if key in child.properties)

    def count_with_attribute(self, attr: str) -> int:
        return sum(1 for child in self.children() if attr in child.attributes)

    def children_by_attribute(self, attr: str) -> List:
        return [child for child in self.children() if attr in child.attributes]

    def children_by_property(self, key: str, value=_MISSING) -> List:
        """Children carrying ``key``, optionally with a given plain value."""
        found = []
        for child in self.children():
            prop = child.properties.get(key)
            if prop is None:
                continue
            if value is _MISSING or prop.unwrap() == value:
                found.append(child)
        return found

    def children_by_layer(self, layer: int) -> List:
        return [child for child in self.children() if getattr(child, "layer", None) == layer]


class EditOp(Enum):
    """Edit operations the input collaborator can apply to a Text."""
    INSERT = "insert"
    BACKSPACE = "backspace"
    DELETE = "delete"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    COMMIT = "commit"
    HISTORY_PREV = "history_prev"
    HISTORY_NEXT = "history_next"
    CLEAR = "clear"


class Text(Component):
    """A leaf widget holding a fixed-capacity character buffer.

    Even text ids are editable inputs, odd ones read-only displays; the
    ``editable`` flag is derived from the id so the two can never disagree.

    Attributes:
        id: ``(window, container, text)`` id
        hpos, vpos: Decorated box origin relative to the container content area
        ahpos, avpos: Decorated box origin in window coordinates
        width, height: Content size in cells
        crsh, crsv: Cursor position inside the content area
        buffer: ``width * height`` cells, None where empty
        border, padding: Decoration
        layer: Z-order hint for the renderer
        history: Committed values, oldest first
    """

    def __init__(
        self,
        id: Sequence[int],
        hpos: int = 0,
        vpos: int = 0,
        ahpos: int = 0,
        avpos: int = 0,
        width: int = 0,
        height: int = 0,
        value: Union[str, Sequence[Cell]] = "",
        border: Optional[Border] = None,
        padding: Optional[Padding] = None,
        layer: int = 0,
    ):
        super().__init__()
        self.id: TextId = authorize_id(id, TEXT_KINDS)
        self.hpos = hpos
        self.vpos = vpos
        self.ahpos = ahpos
        self.avpos = avpos
        self.width = max(0, width)
        self.height = max(0, height)
        self.border = border or Border.none()
        self.padding = padding or Padding.none()
        self.layer = layer
        self.crsh = 0
        self.crsv = 0
        self.buffer: List[Cell] = [None] * self.capacity
        self.history: List[str] = []
        self._history_cursor: Optional[int] = None
        self._temp: Optional[List[Cell]] = None
        self.set_value(value)

    def __repr__(self) -> str:
        return f"Text(id={self.id}, pos=({self.hpos}, {self.vpos}), size={self.width}x{self.height})"

    @property
    def editable(self) -> bool:
        return is_editable_id(self.id)

    @property
    def capacity(self) -> int:
        return self.width * self.height

    @property
    def outer_size(self) -> Tuple[int, int]:
        return decorate(self.width, self.height, self.border, self.padding)

    @property
    def position(self) -> Dimensions:
        """Decorated box in container content coordinates."""
        w, h = self.outer_size
        return Dimensions(self.hpos, self.vpos, w, h)

    @property
    def absolute_position(self) -> Dimensions:
        """Decorated box in window coordinates."""
        w, h = self.outer_size
        return Dimensions(self.ahpos, self.avpos, w, h)

    @property
    def content(self) -> OffsetDimensions:
        """Content area in window coordinates."""
        left, top = decoration_offsets(self.border, self.padding)
        wextra, hextra = resolve_wh(self.border, self.padding)
        return OffsetDimensions(self.absolute_position, Dimensions(left, top, -wextra, -hextra))

    def parent(self) -> ContainerId:
        """Id of the container holding this text."""
        return self.id[0], self.id[1]

    # --- content ---

    @property
    def value(self) -> str:
        """Buffer contents up to the last filled cell, gaps as spaces."""
        cells = list(self.buffer)
        while cells and cells[-1] is None:
            cells.pop()
        return "".join(" " if cell is None else cell for cell in cells)

    def set_value(self, value: Union[str, Sequence[Cell]]) -> None:
        """Replace the buffer contents and put the cursor after them.

        Raises:
            ValueTooLong: if ``value`` exceeds ``width * height``
        """
        cells = list(value)
        check_value_fits(len(cells), self.width, self.height)
        self.buffer = cells + [None] * (self.capacity - len(cells))
        self._set_index(min(len(cells), max(0, self.capacity - 1)))

    def clear(self) -> None:
        self.buffer = [None] * self.capacity
        self.crsh = 0
        self.crsv = 0

    def _require_editable(self) -> None:
        if not self.editable:
            raise IdKindMismatch(f"{format_id(self.id)} is read-only", component_id=self.id)

    @property
    def cursor_index(self) -> int:
        return self.crsv * self.width + self.crsh

    def _set_index(self, index: int) -> None:
        if self.width == 0:
            self.crsh = self.crsv = 0
            return
        self.crsv, self.crsh = divmod(index, self.width)

    def set_cursor(self, crsh: int, crsv: int) -> None:
        """Place the cursor inside the content area.

        Raises:
            OriginOutOfBounds: if the position is outside the content area
        """
        if not (0 <= crsh < max(1, self.width) and 0 <= crsv < max(1, self.height)):
            raise OriginOutOfBounds(
                f"cursor ({crsh}, {crsv}) outside {self.width}x{self.height}", component_id=self.id
            )
        self.crsh = crsh
        self.crsv = crsv

    def insert(self, char: str) -> None:
        """Insert one character at the cursor, shifting the rest right.

        Raises:
            IdKindMismatch: if the text is read-only
            ValueTooLong: if the buffer is full
        """
        self._require_editable()
        if len(char) != 1:
            raise ValueError(f"insert takes one character, got {char!r}")
        if self.capacity == 0 or self.buffer[-1] is not None:
            raise ValueTooLong(f"{format_id(self.id)} is full", component_id=self.id)
        index = self.cursor_index
        self.buffer.insert(index, char)
        self.buffer.pop()
        self._set_index(min(index + 1, self.capacity - 1))

    def backspace(self) -> None:
        """Delete the character before the cursor."""
        self._require_editable()
        index = self.cursor_index
        if index == 0:
            return
        del self.buffer[index - 1]
        self.buffer.append(None)
        self._set_index(index - 1)

    def delete(self) -> None:
        """Delete the character under the cursor."""
        self._require_editable()
        index = self.cursor_index
        if index >= self.capacity:
            return
        del self.buffer[index]
        self.buffer.append(None)

    def cursor_left(self) -> None:
        if self.cursor_index > 0:
            self._set_index(self.cursor_index - 1)

    def cursor_right(self) -> None:
        if self.cursor_index < self.capacity - 1:
            self._set_index(self.cursor_index + 1)

    def cursor_up(self) -> None:
        if self.crsv > 0:
            self.crsv -= 1

    def cursor_down(self) -> None:
        if self.crsv < self.height - 1:
            self.crsv += 1

    def cursor_home(self) -> None:
        self.crsh = 0

    def cursor_end(self) -> None:
        """Move to just after the last character of the cursor's row."""
        start = self.crsv * self.width
        row = self.buffer[start:start + self.width]
        filled = [i for i, cell in enumerate(row) if cell is not None]
        self.crsh = min(filled[-1] + 1, self.width - 1) if filled else 0

    # --- history ---

    def commit(self) -> str:
        """Push the current value to history, clear the buffer and return it."""
        self._require_editable()
        value = self.value
        if value:
            self.history.append(value)
            del self.history[:-config.HISTORY_MAX_LENGTH]
        self._history_cursor = None
        self._temp = None
        self.clear()
        return value

    def _load(self, cells: Sequence[Cell]) -> None:
        self.buffer = list(cells)[:self.capacity]
        self.buffer += [None] * (self.capacity - len(self.buffer))
        used = len(self.value)
        self._set_index(min(used, max(0, self.capacity - 1)))

    def history_prev(self) -> Optional[str]:
        """Show the previous history entry; None when there is none."""
        self._require_editable()
        if not self.history:
            return None
        if self._history_cursor is None:
            self._temp = list(self.buffer)
            self._history_cursor = len(self.history) - 1
        elif self._history_cursor > 0:
            self._history_cursor -= 1
        self._load(self.history[self._history_cursor])
        return self.history[self._history_cursor]

    def history_next(self) -> Optional[str]:
        """Show the next history entry, restoring the in-progress value past the end."""
        self._require_editable()
        if self._history_cursor is None:
            return None
        self._history_cursor += 1
        if self._history_cursor >= len(self.history):
            self._load(self._temp or [])
            self._history_cursor = None
            self._temp = None
            return self.value
        self._load(self.history[self._history_cursor])
        return self.history[self._history_cursor]

    def apply(self, op: EditOp, char: Optional[str] = None) -> None:
        """Apply one edit operation."""
        match op:
            case EditOp.INSERT:
                if char is None:
                    raise ValueError("INSERT needs a character")
                self.insert(char)
            case EditOp.BACKSPACE:
                self.backspace()
            case EditOp.DELETE:
                self.delete()
            case EditOp.LEFT:
                self.cursor_left()
            case EditOp.RIGHT:
                self.cursor_right()
            case EditOp.UP:
                self.cursor_up()
            case EditOp.DOWN:
                self.cursor_down()
            case EditOp.HOME:
                self.cursor_home()
            case EditOp.END:
                self.cursor_end()
            case EditOp.COMMIT:
                self.commit()
            case EditOp.HISTORY_PREV:
                self.history_prev()
            case EditOp.HISTORY_NEXT:
                self.history_next()
            case EditOp.CLEAR:
                self._require_editable()
                self.clear()

    def _resize_buffer(self, width: int, height: int) -> None:
        cells = [cell for cell in self.buffer]
        while cells and cells[-1] is None:
            cells.pop()
        self.width = width
        self.height = height
        self.buffer = cells + [None] * (self.capacity - len(cells))
        self.crsh = min(self.crsh, max(0, width - 1))
        self.crsv = min(self.crsv, max(0, height - 1))


class Container(Component, ParentComponent):
    """A rectangular region of a Window grouping Text fields.

    Attributes:
        id: ``(window, container)`` id
        hpos, vpos: Decorated box origin in window coordinates
        width, height: Content size; texts must fit inside it
        border, padding: Decoration
        layout: Placement strategy for the texts
        layer: Z-order hint for the renderer
        texts: Child texts by id
        last_insertion: Record of the latest text insertion attempt
    """

    _tag = "Container"

    def __init__(
        self,
        id: Sequence[int],
        hpos: int = 0,
        vpos: int = 0,
        width: int = 0,
        height: int = 0,
        border: Optional[Border] = None,
        padding: Optional[Padding] = None,
        layout: Optional[Layout] = None,
        layer: int = 0,
    ):
        super().__init__()
        self.id: ContainerId = authorize_id(id, IdKind.CONTAINER)
        self.hpos = hpos
        self.vpos = vpos
        self.width = max(0, width)
        self.height = max(0, height)
        self.border = border or Border.none()
        self.padding = padding or Padding.none()
        self.layout: Layout = layout or Canvas()
        self.layer = layer
        self.texts: Dict[TextId, Text] = {}
        self.last_insertion: Optional[Insertion] = None

    def __repr__(self) -> str:
        return (
            f"Container(id={self.id}, pos=({self.hpos}, {self.vpos}), "
            f"size={self.width}x{self.height}, texts={len(self.texts)})"
        )

    def _child_map(self) -> dict:
        return self.texts

    @property
    def outer_size(self) -> Tuple[int, int]:
        return decorate(self.width, self.height, self.border, self.padding)

    @property
    def position(self) -> Dimensions:
        """Decorated box in window coordinates."""
        w, h = self.outer_size
        return Dimensions(self.hpos, self.vpos, w, h)

    @property
    def content(self) -> OffsetDimensions:
        """Content area in window coordinates."""
        left, top = decoration_offsets(self.border, self.padding)
        wextra, hextra = resolve_wh(self.border, self.padding)
        return OffsetDimensions(self.position, Dimensions(left, top, -wextra, -hextra))

    def parent(self) -> WindowId:
        return self.id[0]

    def text_ref(self, text_id: Sequence[int]) -> Optional[Text]:
        return self.texts.get(tuple(text_id))

    def focused(self) -> Optional[TextId]:
        for text_id, text in self.texts.items():
            if text.is_focused():
                return text_id
        return None

    def text_absolute_origin(self, hpos: int, vpos: int) -> Tuple[int, int]:
        return text_absolute_origin(self.hpos, self.vpos, self.border, self.padding, hpos, vpos)

    def refresh_absolute_origins(self) -> None:
        """Recompute every text's window coordinates after this container moved."""
        for text in self.texts.values():
            text.ahpos, text.avpos = self.text_absolute_origin(text.hpos, text.vpos)

    # --- validation ---

    def _check_new_text_id(self, text_id: TextId) -> None:
        if (text_id[0], text_id[1]) != self.id:
            raise ParentNotFound(
                f"{format_id(text_id)} does not belong to container {format_id(self.id)}",
                component_id=text_id,
            )
        if text_id in self.texts:
            raise IdAlreadyInUse(f"{format_id(text_id)} already in use", component_id=text_id)

    def _layout_origin(self, index: int, size: Tuple[int, int], origin: Tuple[int, int]) -> Tuple[int, int]:
        siblings = [text.outer_size for text in self.texts.values()]
        return place_child(self.layout, index, siblings, size, (self.width, self.height), origin)

    def validate_text_box(self, box: Dimensions, exclude: Optional[TextId] = None) -> None:
        """Check a decorated text box against this container's content area and texts."""
        check_bounds(box, self.width, self.height)
        check_overlap(box, ((tid, text.position) for tid, text in self.texts.items() if tid != exclude))

    def _insert_text(self, text: Text, insertion: Insertion, value: Optional[Sequence[Cell]] = None) -> TextId:
        insertion.entity = text
        insertion.component_id = text.id
        self._check_new_text_id(text.id)
        hpos, vpos = self._layout_origin(len(self.texts), text.outer_size, (text.hpos, text.vpos))
        insertion.advance(InsertionState.RESOLVED)
        w, h = text.outer_size
        self.validate_text_box(Dimensions(hpos, vpos, w, h))
        check_manual_border(text.border, text.padding, text.width, text.height)
        if value is not None:
            check_value_fits(len(value), text.width, text.height)
        insertion.advance(InsertionState.VALIDATED)
        if value is not None:
            text.set_value(value)
        if text.is_focused() and self.focused() is not None:
            text.remove_attribute(config.FOCUSED_ATTRIBUTE)
        text.hpos, text.vpos = hpos, vpos
        text.ahpos, text.avpos = self.text_absolute_origin(hpos, vpos)
        self.texts[text.id] = text
        return text.id

    # --- insertion entry points ---

    def push_text(self, text: Text) -> TextId:
        """Insert an existing Text, validating it as a fresh insertion.

        On failure the Text travels back on ``error.entity``.
        """
        insertion = Insertion(self._tag, text.id)
        self.last_insertion = insertion
        with insertion:
            return self._insert_text(text, insertion)

    def text(
        self,
        id: Optional[Sequence[int]] = None,
        xpos: Coord = Pos(),
        ypos: Coord = Pos(),
        area: Area = Area.zero(),
        border: Optional[Border] = None,
        padding: Optional[Padding] = None,
        value: Union[str, Sequence[Cell]] = "",
        editable: bool = True,
        layer: int = 0,
    ) -> TextId:
        """Create and insert a Text from explicit fields.

        Args:
            id: Full text id, or None to take the next free id of the
                requested kind
            xpos, ypos: Anchors inside the content area
            area: Content size request
            border, padding: Decoration
            value: Initial content
            editable: Kind of text; must agree with the id's parity
            layer: Z-order hint

        Returns:
            The id of the inserted text

        Raises:
            IdKindMismatch: if the id's parity disagrees with ``editable``
            IdAlreadyInUse: if the id is taken
            AreaOutOfBounds, OriginOutOfBounds, BoundsNotRespected:
                if the decorated box does not fit
            SiblingConflict: if it overlaps another text
            ValueTooLong: if ``value`` exceeds the content capacity
        """
        insertion = Insertion(self._tag, id)
        self.last_insertion = insertion
        with insertion:
            kind = IdKind.INPUT if editable else IdKind.NOEDIT
            if id is None:
                text_id = generate_text_id(self.id, self.texts, editable)
            else:
                text_id = authorize_id(id, kind)
            insertion.component_id = text_id
            self._check_new_text_id(text_id)
            border = border or Border.none()
            padding = padding or Padding.none()
            resolved = resolve_geometry(
                area, _as_pos(xpos), _as_pos(ypos), border, padding, self.width, self.height
            )
            text = Text(
                text_id,
                resolved.hpos,
                resolved.vpos,
                width=resolved.width,
                height=resolved.height,
                border=border,
                padding=padding,
                layer=layer,
            )
            return self._insert_text(text, insertion, list(value))

    def input(self, id: Optional[Sequence[int]] = None, *args, **kwargs) -> TextId:
        """Insert an editable Text; see :meth:`text`."""
        return self.text(id, *args, editable=True, **kwargs)

    def noedit(self, id: Optional[Sequence[int]] = None, *args, **kwargs) -> TextId:
        """Insert a read-only Text; see :meth:`text`."""
        return self.text(id, *args, editable=False, **kwargs)

    def text_from_builder(self, builder: "TextBuilder") -> TextId:
        """Build a Text from a builder and insert it.

        The builder does not validate; a badly configured builder is
        rejected here like any other insertion. Without a full id the
        builder takes the first free id of its kind in this container.
        """
        insertion = Insertion(self._tag)
        self.last_insertion = insertion
        with insertion:
            if not builder.has_full_id:
                builder.fill_id(generate_text_id(self.id, self.texts, builder.editable))
            text = builder.build((self.width, self.height))
            return self._insert_text(text, insertion)

    # --- mutation ---

    def _existing_text(self, text_id: Sequence[int]) -> Text:
        text = self.texts.get(tuple(text_id))
        if text is None:
            raise ComponentNotFound(f"no text {format_id(tuple(text_id))}", component_id=tuple(text_id))
        return text

    def move_text(self, text_id: Sequence[int], xpos: Coord, ypos: Coord) -> Tuple[int, int]:
        """Re-anchor a text and re-validate it against its siblings.

        Returns:
            The new relative origin
        """
        text = self._existing_text(text_id)
        w, h = text.outer_size
        hpos = _as_pos(xpos).resolve(self.width, w)
        vpos = _as_pos(ypos).resolve(self.height, h)
        self.validate_text_box(Dimensions(hpos, vpos, w, h), exclude=text.id)
        text.hpos, text.vpos = hpos, vpos
        text.ahpos, text.avpos = self.text_absolute_origin(hpos, vpos)
        return hpos, vpos

    def resize_text(self, text_id: Sequence[int], area: Area) -> Tuple[int, int]:
        """Change a text's content size, keeping its origin.

        Raises:
            ValueTooLong: if the current content no longer fits
        """
        text = self._existing_text(text_id)
        if area.is_fill:
            width, height = undecorate(self.width, self.height, text.border, text.padding)
        else:
            width, height = area.resolve(self.width, self.height)
        check_value_fits(len(text.value), width, height)
        check_manual_border(text.border, text.padding, width, height)
        ow, oh = decorate(width, height, text.border, text.padding)
        self.validate_text_box(Dimensions(text.hpos, text.vpos, ow, oh), exclude=text.id)
        text._resize_buffer(width, height)
        return width, height

    def remove_text(self, text_id: Sequence[int]) -> Optional[Text]:
        """Remove and return a text, or None if it does not exist."""
        return self.texts.pop(tuple(text_id), None)

    def input_count(self) -> int:
        return sum(1 for tid in self.texts if tid[2] % 2 == 0)

    def noedit_count(self) -> int:
        return sum(1 for tid in self.texts if tid[2] % 2 == 1)


class Window(Component, ParentComponent):
    """Top-level surface mapped to the terminal viewport.

    Attributes:
        id: Window id
        width, height: Size in cells
        area: Requested size, re-resolved when the terminal is resized
        crsh, crsv: Displayed cursor position
        layout: Placement strategy for the containers
        containers: Child containers by id
        last_insertion: Record of the latest container insertion attempt
    """

    _tag = "Window"

    def __init__(
        self,
        id: int,
        width: int = 0,
        height: int = 0,
        layout: Optional[Layout] = None,
        area: Optional[Area] = None,
    ):
        super().__init__()
        self.id: WindowId = authorize_id(id, IdKind.WINDOW)
        self.width = max(0, width)
        self.height = max(0, height)
        self.area = area if area is not None else Area.values(self.width, self.height)
        self.crsh = 0
        self.crsv = 0
        self.layout: Layout = layout or Canvas()
        self.containers: Dict[ContainerId, Container] = {}
        self.last_insertion: Optional[Insertion] = None

    def __repr__(self) -> str:
        return f"Window(id={self.id}, size={self.width}x{self.height}, containers={len(self.containers)})"

    def _child_map(self) -> dict:
        return self.containers

    @property
    def position(self) -> Dimensions:
        return Dimensions(0, 0, self.width, self.height)

    def container_ref(self, container_id: Sequence[int]) -> Optional[Container]:
        return self.containers.get(tuple(container_id))

    def container_of(self, comp_id: Sequence[int]) -> Container:
        """The container a container/text id lives in."""
        cid = (comp_id[0], comp_id[1])
        if cid[0] != self.id or cid not in self.containers:
            raise ParentNotFound(f"no container {format_id(cid)} in window {self.id}", component_id=tuple(comp_id))
        return self.containers[cid]

    def text_ref(self, text_id: Sequence[int]) -> Optional[Text]:
        container = self.containers.get((text_id[0], text_id[1]))
        return container.text_ref(text_id) if container else None

    # --- container validation and insertion ---

    def _check_new_container_id(self, container_id: ContainerId) -> None:
        if container_id[0] != self.id:
            raise ParentNotFound(
                f"{format_id(container_id)} does not belong to window {self.id}",
                component_id=container_id,
            )
        if container_id in self.containers:
            raise IdAlreadyInUse(f"{format_id(container_id)} already in use", component_id=container_id)

    def validate_container_box(self, box: Dimensions, exclude: Optional[ContainerId] = None) -> None:
        """Check a decorated container box against the window and the other containers."""
        check_bounds(box, self.width, self.height)
        check_overlap(box, ((cid, c.position) for cid, c in self.containers.items() if cid != exclude))

    def _insert_container(self, container: Container, insertion: Insertion) -> ContainerId:
        insertion.entity = container
        insertion.component_id = container.id
        self._check_new_container_id(container.id)
        siblings = [c.outer_size for c in self.containers.values()]
        hpos, vpos = place_child(
            self.layout, len(self.containers), siblings, container.outer_size,
            (self.width, self.height), (container.hpos, container.vpos),
        )
        insertion.advance(InsertionState.RESOLVED)
        w, h = container.outer_size
        self.validate_container_box(Dimensions(hpos, vpos, w, h))
        check_manual_border(container.border, container.padding, container.width, container.height)
        insertion.advance(InsertionState.VALIDATED)
        container.hpos, container.vpos = hpos, vpos
        container.refresh_absolute_origins()
        self.containers[container.id] = container
        return container.id

    def push_container(self, container: Container) -> ContainerId:
        """Insert an existing Container, validating it as a fresh insertion.

        Texts it already holds are kept and their window coordinates are
        recomputed. On failure the Container travels back on
        ``error.entity``.
        """
        previous = self.focused()
        insertion = Insertion(self._tag, container.id)
        self.last_insertion = insertion
        with insertion:
            container_id = self._insert_container(container, insertion)
        self._settle_focus(previous, container.texts.values())
        return container_id

    def container(
        self,
        id: Optional[Sequence[int]] = None,
        xpos: Coord = Pos(),
        ypos: Coord = Pos(),
        area: Area = Area.zero(),
        border: Optional[Border] = None,
        padding: Optional[Padding] = None,
        layout: Optional[Layout] = None,
        layer: int = 0,
    ) -> ContainerId:
        """Create and insert a Container from explicit fields.

        Args:
            id: ``(window, container)`` id, or None for the next free one
            xpos, ypos: Anchors inside the window
            area: Content size request (``Area.fill()`` takes the whole window)
            border, padding: Decoration
            layout: Placement strategy for the container's texts
            layer: Z-order hint

        Returns:
            The id of the inserted container

        Raises:
            IdAlreadyInUse: if the id is taken
            ParentNotFound: if the id names another window
            AreaOutOfBounds, OriginOutOfBounds, BoundsNotRespected:
                if the decorated box does not fit the window
            SiblingConflict: if it overlaps another container
        """
        insertion = Insertion(self._tag, id)
        self.last_insertion = insertion
        with insertion:
            if id is None:
                container_id = generate_container_id(self.id, self.containers)
            else:
                container_id = authorize_id(id, IdKind.CONTAINER)
            insertion.component_id = container_id
            self._check_new_container_id(container_id)
            border = border or Border.none()
            padding = padding or Padding.none()
            resolved = resolve_geometry(
                area, _as_pos(xpos), _as_pos(ypos), border, padding, self.width, self.height
            )
            container = Container(
                container_id,
                resolved.hpos,
                resolved.vpos,
                resolved.width,
                resolved.height,
                border,
                padding,
                layout,
                layer,
            )
            return self._insert_container(container, insertion)

    def container_from_builder(self, builder: "ContainerBuilder") -> ContainerId:
        """Build a Container from a builder and insert it.

        Without a full id the builder takes the first free container id of
        this window.
        """
        insertion = Insertion(self._tag)
        self.last_insertion = insertion
        with insertion:
            if not builder.has_full_id:
                builder.fill_id(generate_container_id(self.id, self.containers))
            container = builder.build((self.width, self.height))
            return self._insert_container(container, insertion)

    # --- texts, addressed through their container ---

    def text(self, id: Sequence[int], *args, **kwargs) -> TextId:
        """Insert a Text into the container named by ``id``.

        ``id`` is a full text id, or a container id to take the next free
        text id of the requested kind.
        """
        container = self.container_of(id)
        text_id = tuple(id) if len(id) == 3 else None
        return container.text(text_id, *args, **kwargs)

    def input(self, id: Sequence[int], *args, **kwargs) -> TextId:
        return self.text(id, *args, editable=True, **kwargs)

    def noedit(self, id: Sequence[int], *args, **kwargs) -> TextId:
        return self.text(id, *args, editable=False, **kwargs)

    def push_text(self, text: Text) -> TextId:
        try:
            container = self.container_of(text.id)
        except ParentNotFound as exc:
            exc.entity = text
            raise
        previous = self.focused()
        text_id = container.push_text(text)
        self._settle_focus(previous, [text])
        return text_id

    def text_from_builder(self, builder: "TextBuilder") -> TextId:
        return self.container_of(builder.parent_id()).text_from_builder(builder)

    # --- mutation ---

    def _existing_container(self, container_id: Sequence[int]) -> Container:
        container = self.containers.get(tuple(container_id))
        if container is None:
            raise ComponentNotFound(
                f"no container {format_id(tuple(container_id))}", component_id=tuple(container_id)
            )
        return container

    def move_container(self, container_id: Sequence[int], xpos: Coord, ypos: Coord) -> Tuple[int, int]:
        """Re-anchor a container, re-validate it and carry its texts along."""
        container = self._existing_container(container_id)
        w, h = container.outer_size
        hpos = _as_pos(xpos).resolve(self.width, w)
        vpos = _as_pos(ypos).resolve(self.height, h)
        self.validate_container_box(Dimensions(hpos, vpos, w, h), exclude=container.id)
        container.hpos, container.vpos = hpos, vpos
        container.refresh_absolute_origins()
        self._sync_if_inside(container.id)
        return hpos, vpos

    def resize_container(self, container_id: Sequence[int], area: Area) -> Tuple[int, int]:
        """Change a container's content size, keeping its origin.

        Raises:
            BoundsNotRespected: if one of its texts would no longer fit
        """
        container = self._existing_container(container_id)
        resolved = resolve_geometry(
            area, Pos.at(container.hpos), Pos.at(container.vpos),
            container.border, container.padding, self.width, self.height,
        )
        check_manual_border(container.border, container.padding, resolved.width, resolved.height)
        self.validate_container_box(resolved.box, exclude=container.id)
        interior = Dimensions(0, 0, resolved.width, resolved.height)
        for text in container.texts.values():
            if not interior.contains(text.position):
                raise BoundsNotRespected(
                    f"{format_id(text.id)} would not fit {resolved.width}x{resolved.height}",
                    component_id=container.id,
                )
        container.width, container.height = resolved.width, resolved.height
        return resolved.width, resolved.height

    def remove_container(self, container_id: Sequence[int]) -> Optional[Container]:
        """Remove and return a container with its texts, or None."""
        return self.containers.pop(tuple(container_id), None)

    def remove_text(self, text_id: Sequence[int]) -> Optional[Text]:
        container = self.containers.get((text_id[0], text_id[1]))
        return container.remove_text(text_id) if container else None

    # --- focus ---

    def focused(self) -> Optional[TextId]:
        """Id of the Text carrying the focused attribute, found by scanning."""
        for container in self.containers.values():
            text_id = container.focused()
            if text_id is not None:
                return text_id
        return None

    def focus(self, text_id: Sequence[int]) -> TextId:
        """Give focus to a Text and move the window cursor onto it.

        The previous holder keeps its focus if the target is rejected.

        Raises:
            IdKindMismatch: if ``text_id`` is not a text id
            ParentNotFound: if its container does not exist here
            ComponentNotFound: if the container has no such text
        """
        text_id = authorize_id(text_id, TEXT_KINDS)
        container = self.container_of(text_id)
        target = container.text_ref(text_id)
        if target is None:
            raise ComponentNotFound(f"no text {format_id(text_id)}", component_id=text_id)
        previous = self.focused()
        if previous is not None and previous != text_id:
            self.text_ref(previous).remove_attribute(config.FOCUSED_ATTRIBUTE)
        target.add_attribute(config.FOCUSED_ATTRIBUTE)
        logger.debug(format_comp_log(self._tag, self.id, f"focus {format_id(text_id)}"))
        self.sync_cursor()
        return text_id

    def blur(self) -> Optional[TextId]:
        """Drop focus from whichever Text holds it, returning its id."""
        previous = self.focused()
        if previous is not None:
            self.text_ref(previous).remove_attribute(config.FOCUSED_ATTRIBUTE)
        return previous

    def sync_cursor(self) -> Optional[Tuple[int, int]]:
        """Place the window cursor at the focused Text's cursor.

        The position is the Text's content origin in window coordinates plus
        its local cursor. Returns the new cursor, or None without a focused
        Text.
        """
        text_id = self.focused()
        if text_id is None:
            return None
        text = self.text_ref(text_id)
        content = text.content
        self.crsh = content.x + text.crsh
        self.crsv = content.y + text.crsv
        return self.crsh, self.crsv

    def _settle_focus(self, previous: Optional[TextId], incoming: Iterable[Text]) -> None:
        """Keep a single focused Text after texts arrived by value.

        An existing holder keeps the focus; otherwise the first focused
        newcomer takes it and the cursor moves onto it.
        """
        holder = previous
        for text in incoming:
            if not text.is_focused():
                continue
            if holder is None:
                holder = text.id
            elif text.id != holder:
                text.remove_attribute(config.FOCUSED_ATTRIBUTE)
        if holder is not None and holder != previous:
            self.sync_cursor()

    def _sync_if_inside(self, container_id: ContainerId) -> None:
        focused = self.focused()
        if focused is not None and (focused[0], focused[1]) == container_id:
            self.sync_cursor()

    # --- counts ---

    def text_count(self) -> int:
        return sum(len(c.texts) for c in self.containers.values())

    def input_count(self) -> int:
        return sum(c.input_count() for c in self.containers.values())

    def noedit_count(self) -> int:
        return sum(c.noedit_count() for c in self.containers.values())
