"""
Staged construction of windows, containers and texts.

A builder accumulates configuration through chained calls and materializes
an entity with ``build()``. Building never validates geometry against a
parent: a builder can produce an entity that does not fit, which is then
rejected when it is pushed, like any other insertion.

Ids are given piecewise with ``offset_id``. The high-order parts route the
built entity to its parent; when the last part is left out, the parent
fills in its first free id at push time.
"""

from typing import List, Optional, Sequence, Tuple, Union

from . import config
from .decoration import Border, Padding
from .errors import ConfigurationError, IdKindMismatch, IdSpaceExhausted, TooManyIdComponents
from .geometry import Area, Pos
from .ids import ContainerId, IdKind, TextId, WindowId, authorize_id, normalize_id
from .layout import Canvas, Layout, layout_from_char
from .components import Container, Text, Window
from .validation import resolve_geometry

Size = Tuple[int, int]


def _parts(parts: Sequence[int], limit: int, kind: str) -> List[int]:
    if len(parts) > limit:
        raise TooManyIdComponents(f"{kind} ids have {limit} components, got {len(parts)}")
    return [normalize_id(part) for part in parts]


class WindowBuilder:
    """Builder for :class:`Window`.

    Repeated ``build()`` calls without an id yield windows 0, 1, 2...
    """

    def __init__(self):
        self.clear()

    def clear(self) -> "WindowBuilder":
        """Reset every setting to its default."""
        self._layout: Layout = Canvas()
        self._area = Area.fill()
        self._next = 0
        self._explicit = False
        return self

    def layout(self, layout: Union[Layout, str]) -> "WindowBuilder":
        """Set the container layout, or pick a default one by ``c``/``f``/``g``."""
        self._layout = layout_from_char(layout) if isinstance(layout, str) else layout
        return self

    def area(self, area: Area) -> "WindowBuilder":
        self._area = area
        return self

    def offset_id(self, parts: Sequence[int] = ()) -> "WindowBuilder":
        """Set the window id, or with no parts go back to automatic ids.

        Raises:
            TooManyIdComponents: for more than one part
        """
        parts = _parts(parts, 1, "window")
        self._explicit = bool(parts)
        if parts:
            self._next = parts[0]
        return self

    @property
    def has_full_id(self) -> bool:
        return self._explicit

    def fill_id(self, window_id: WindowId) -> None:
        self._next = window_id

    def id(self) -> WindowId:
        return self._next

    def build(self, terminal_size: Size) -> Window:
        """Materialize a window sized against ``(columns, rows)``.

        Raises:
            IdSpaceExhausted: once the builder has handed out every id
        """
        if self._next > config.MAX_ID:
            raise IdSpaceExhausted("window builder has no ids left")
        width, height = self._area.resolve(*terminal_size)
        window = Window(self._next, width, height, self._layout, self._area)
        self._next += 1
        self._explicit = False
        return window


class ContainerBuilder:
    """Builder for :class:`Container`.

    Defaults: fill the window, centered, no decoration, canvas layout.
    """

    def __init__(self):
        self.clear()

    def clear(self) -> "ContainerBuilder":
        """Reset every setting to its default."""
        self._layer = 0
        self._window: Optional[WindowId] = None
        self._index = 0
        self._explicit = False
        self._border = Border.none()
        self._padding = Padding.none()
        self._area = Area.fill()
        self._hpos = Pos.center()
        self._vpos = Pos.center()
        self._layout: Layout = Canvas()
        return self

    def layer(self, layer: int) -> "ContainerBuilder":
        self._layer = layer
        return self

    def border(self, border: Border) -> "ContainerBuilder":
        self._border = border
        return self

    def padding(self, padding: Padding) -> "ContainerBuilder":
        self._padding = padding
        return self

    def area(self, area: Area) -> "ContainerBuilder":
        self._area = area
        return self

    def hpos(self, pos: Pos) -> "ContainerBuilder":
        self._hpos = pos
        return self

    def vpos(self, pos: Pos) -> "ContainerBuilder":
        self._vpos = pos
        return self

    def layout(self, layout: Union[Layout, str]) -> "ContainerBuilder":
        self._layout = layout_from_char(layout) if isinstance(layout, str) else layout
        return self

    def offset_id(self, parts: Sequence[int] = ()) -> "ContainerBuilder":
        """Set the window part, or the full ``(window, container)`` id.

        Raises:
            TooManyIdComponents: for more than two parts
        """
        parts = _parts(parts, 2, "container")
        self._window = parts[0] if parts else None
        self._explicit = len(parts) == 2
        if self._explicit:
            self._index = parts[1]
        return self

    @property
    def has_full_id(self) -> bool:
        return self._explicit

    def parent_id(self) -> WindowId:
        """The window the built container goes into.

        Raises:
            ConfigurationError: if no window part was given
        """
        if self._window is None:
            raise ConfigurationError("container builder has no window id")
        return self._window

    def fill_id(self, container_id: ContainerId) -> None:
        """Take the container part from a parent, keeping a window part already given."""
        if self._window is None:
            self._window = container_id[0]
        self._index = container_id[1]

    def id(self) -> ContainerId:
        return self.parent_id(), self._index

    def build(self, parent_size: Size) -> Container:
        """Materialize a container with geometry resolved against ``parent_size``."""
        resolved = resolve_geometry(
            self._area, self._hpos, self._vpos, self._border, self._padding, *parent_size
        )
        container = Container(
            self.id(),
            resolved.hpos,
            resolved.vpos,
            resolved.width,
            resolved.height,
            self._border,
            self._padding,
            self._layout,
            self._layer,
        )
        self._explicit = False
        return container


class TextBuilder:
    """Builder for :class:`Text`.

    Editable builders hand out even text ids (0, 2, 4...), read-only ones
    odd ids (1, 3, 5...). Use :class:`InputBuilder` or
    :class:`NoEditBuilder` rather than passing the flag.
    """

    def __init__(self, editable: bool = True):
        self.editable = editable
        self.clear()

    def clear(self) -> "TextBuilder":
        """Reset every setting to its default, keeping the kind."""
        self._layer = 0
        self._prefix: List[int] = []
        self._index = 0 if self.editable else 1
        self._explicit = False
        self._border = Border.none()
        self._padding = Padding.none()
        self._area = Area.fill()
        self._hpos = Pos.center()
        self._vpos = Pos.center()
        self._value = ""
        return self

    @property
    def kind(self) -> IdKind:
        return IdKind.INPUT if self.editable else IdKind.NOEDIT

    def layer(self, layer: int) -> "TextBuilder":
        self._layer = layer
        return self

    def border(self, border: Border) -> "TextBuilder":
        self._border = border
        return self

    def padding(self, padding: Padding) -> "TextBuilder":
        self._padding = padding
        return self

    def area(self, area: Area) -> "TextBuilder":
        self._area = area
        return self

    def hpos(self, pos: Pos) -> "TextBuilder":
        self._hpos = pos
        return self

    def vpos(self, pos: Pos) -> "TextBuilder":
        self._vpos = pos
        return self

    def value(self, value: str) -> "TextBuilder":
        self._value = value
        return self

    def offset_id(self, parts: Sequence[int] = ()) -> "TextBuilder":
        """Set up to three id parts.

        Raises:
            TooManyIdComponents: for more than three parts
            IdKindMismatch: if a full id has the wrong parity for this builder
        """
        parts = _parts(parts, 3, "text")
        if len(parts) == 3:
            authorize_id(parts, self.kind)
            self._index = parts[2]
        self._prefix = parts[:2]
        self._explicit = len(parts) == 3
        return self

    @property
    def has_full_id(self) -> bool:
        return self._explicit

    def parent_id(self) -> ContainerId:
        """The container the built text goes into.

        Raises:
            ConfigurationError: if the window and container parts are missing
        """
        if len(self._prefix) < 2:
            raise ConfigurationError("text builder needs window and container ids")
        return self._prefix[0], self._prefix[1]

    def fill_id(self, text_id: TextId) -> None:
        """Take the text part from a parent, keeping id parts already given."""
        if len(self._prefix) < 2:
            self._prefix = [text_id[0], text_id[1]]
        if text_id[2] % 2 != self._index % 2:
            raise IdKindMismatch(f"text id {text_id[2]} has the wrong parity", component_id=text_id)
        self._index = text_id[2]

    def id(self) -> TextId:
        window, container = self.parent_id()
        return window, container, self._index

    def build(self, parent_size: Size) -> Text:
        """Materialize a text with geometry resolved against the container's content size.

        Raises:
            ValueTooLong: if the configured value exceeds the resolved size
            IdSpaceExhausted: once the builder has handed out every id of its kind
        """
        if self._index > config.MAX_ID:
            raise IdSpaceExhausted("text builder has no ids left")
        resolved = resolve_geometry(
            self._area, self._hpos, self._vpos, self._border, self._padding, *parent_size
        )
        text = Text(
            self.id(),
            resolved.hpos,
            resolved.vpos,
            width=resolved.width,
            height=resolved.height,
            value=self._value,
            border=self._border,
            padding=self._padding,
            layer=self._layer,
        )
        self._index += 2
        self._explicit = False
        return text


class InputBuilder(TextBuilder):
    """Builder for editable texts."""

    def __init__(self):
        super().__init__(editable=True)


class NoEditBuilder(TextBuilder):
    """Builder for read-only texts."""

    def __init__(self):
        super().__init__(editable=False)
