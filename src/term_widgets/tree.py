"""
The component tree: windows keyed by id, each owning its containers and texts.

Creation goes through one entry point per level taking a component source:

    tree.window(ById(0))
    tree.container(ByBuilder(ContainerBuilder().offset_id([0]).area(Area.values(20, 5))))
    tree.text(ByValue(Text((0, 0, 1), width=4, height=1, value="name")))

Every source is validated the same way; a rejected request raises a
:class:`~term_widgets.errors.TreeError` and leaves the tree unchanged.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple, Union

from . import config
from .builders import ContainerBuilder, TextBuilder, WindowBuilder
from .components import Container, EditOp, ParentComponent, Text, Window
from .errors import ComponentNotFound, IdAlreadyInUse, ParentNotFound
from .geometry import Area, Pos
from .ids import (
    ContainerId,
    IdKind,
    TextId,
    WindowId,
    authorize_id,
    format_id,
    generate_window_id,
    is_editable_id,
)
from .layout import Layout
from .properties import Handlers
from .telemetry import format_comp_log, get_logger
from .terminal import terminal_size
from .validation import Insertion, InsertionState, check_area

if TYPE_CHECKING:
    from blessed import Terminal

logger = get_logger(__name__)


@dataclass(frozen=True)
class ById:
    """Create a default entity under an explicit id."""
    id: Union[int, Sequence[int]]


@dataclass(frozen=True)
class ByBuilder:
    """Create an entity from a builder."""
    builder: Union[WindowBuilder, ContainerBuilder, TextBuilder]


@dataclass(frozen=True)
class ByValue:
    """Insert an entity that already exists."""
    entity: Union[Window, Container, Text]


ComponentSource = Union[ById, ByBuilder, ByValue]


class Tree(ParentComponent):
    """Root of the component hierarchy.

    Holds the terminal size every window is checked against, the windows,
    and the named handlers table.

    Attributes:
        width, height: Terminal size in cells
        windows: Windows by id
        handlers: Named callbacks
        last_insertion: Record of the latest window insertion attempt
    """

    _tag = "Tree"

    def __init__(self, width: int = config.DEFAULT_COLUMNS, height: int = config.DEFAULT_ROWS):
        self.width = width
        self.height = height
        self.windows: Dict[WindowId, Window] = {}
        self.handlers = Handlers()
        self.last_insertion: Optional[Insertion] = None

    def __repr__(self) -> str:
        return f"Tree(size={self.width}x{self.height}, windows={len(self.windows)})"

    @classmethod
    def init(cls, width: int = config.DEFAULT_COLUMNS, height: int = config.DEFAULT_ROWS) -> "Tree":
        """A tree holding one focused full-size window with id 0."""
        tree = cls(width, height)
        tree.focus(tree.window(ById(0)))
        return tree

    @classmethod
    def from_terminal(cls, term: Optional["Terminal"] = None) -> "Tree":
        """Like :meth:`init`, sized from a blessed terminal."""
        return cls.init(*terminal_size(term))

    def _child_map(self) -> dict:
        return self.windows

    # --- lookup ---

    def window_ref(self, window_id: int) -> Optional[Window]:
        return self.windows.get(window_id)

    def container_ref(self, container_id: Sequence[int]) -> Optional[Container]:
        window = self.windows.get(container_id[0])
        return window.container_ref(container_id) if window else None

    def text_ref(self, text_id: Sequence[int]) -> Optional[Text]:
        window = self.windows.get(text_id[0])
        return window.text_ref(text_id) if window else None

    def window_of(self, comp_id: Union[int, Sequence[int]]) -> Window:
        """The window an id lives in.

        Raises:
            ParentNotFound: if that window does not exist
        """
        window_id = comp_id if isinstance(comp_id, int) else comp_id[0]
        window = self.windows.get(window_id)
        if window is None:
            raise ParentNotFound(f"no window {window_id}", component_id=comp_id)
        return window

    # --- windows ---

    def _insert_window(self, window: Window, insertion: Insertion) -> WindowId:
        insertion.entity = window
        insertion.component_id = window.id
        if window.id in self.windows:
            raise IdAlreadyInUse(f"window {window.id} already in use", component_id=window.id)
        insertion.advance(InsertionState.RESOLVED)
        check_area(window.width, window.height, self.width, self.height)
        insertion.advance(InsertionState.VALIDATED)
        if window.is_focused() and self.focused() is not None:
            window.remove_attribute(config.FOCUSED_ATTRIBUTE)
        self.windows[window.id] = window
        return window.id

    def window(self, source: ComponentSource) -> WindowId:
        """Create a window.

        ``ById`` creates a terminal-sized window; ``ByBuilder`` builds one
        against the terminal size; ``ByValue`` inserts an existing one.

        Raises:
            IdAlreadyInUse: if the id is taken
            IdKindMismatch: if the id is not a window id
            AreaOutOfBounds: if the window is larger than the terminal
        """
        insertion = Insertion(self._tag)
        self.last_insertion = insertion
        with insertion:
            match source:
                case ById(id=window_id):
                    window = Window(
                        authorize_id(window_id, IdKind.WINDOW), self.width, self.height, area=Area.fill()
                    )
                case ByBuilder(builder=builder):
                    if not builder.has_full_id:
                        builder.fill_id(generate_window_id(self.windows))
                    window = builder.build((self.width, self.height))
                case ByValue(entity=window):
                    pass
                case _:
                    raise TypeError(f"not a component source: {source!r}")
            return self._insert_window(window, insertion)

    def window_auto(self, layout: Optional[Layout] = None) -> WindowId:
        """Create a terminal-sized window under the first free id."""
        builder = WindowBuilder()
        if layout is not None:
            builder.layout(layout)
        return self.window(ByBuilder(builder))

    def push_window(self, window: Window) -> WindowId:
        return self.window(ByValue(window))

    def remove_window(self, window_id: int) -> Optional[Window]:
        """Remove and return a window with everything in it, or None."""
        return self.windows.pop(window_id, None)

    # --- containers ---

    def container(self, source: ComponentSource, **fields) -> ContainerId:
        """Create a container in the window named by its id.

        ``ById`` takes a ``(window, container)`` id, or a bare window id for
        the first free container id, plus the keyword fields of
        :meth:`Window.container`.

        Raises:
            ParentNotFound: if the window does not exist
        """
        match source:
            case ById(id=comp_id):
                if isinstance(comp_id, int):
                    return self.window_of(comp_id).container(None, **fields)
                return self.window_of(comp_id).container(comp_id, **fields)
            case ByBuilder(builder=builder):
                return self.window_of(builder.parent_id()).container_from_builder(builder)
            case ByValue(entity=container):
                try:
                    window = self.window_of(container.id)
                except ParentNotFound as exc:
                    exc.entity = container
                    raise
                return window.push_container(container)
            case _:
                raise TypeError(f"not a component source: {source!r}")

    def remove_container(self, container_id: Sequence[int]) -> Optional[Container]:
        window = self.windows.get(container_id[0])
        return window.remove_container(container_id) if window else None

    def move_container(self, container_id: Sequence[int], xpos: Union[Pos, int], ypos: Union[Pos, int]) -> Tuple[int, int]:
        return self.window_of(container_id).move_container(container_id, xpos, ypos)

    def resize_container(self, container_id: Sequence[int], area: Area) -> Tuple[int, int]:
        return self.window_of(container_id).resize_container(container_id, area)

    # --- texts ---

    def text(self, source: ComponentSource, **fields) -> TextId:
        """Create a text in the container named by its id.

        ``ById`` takes a full text id, whose parity picks an input or a
        read-only text, plus the keyword fields of :meth:`Container.text`.

        Raises:
            ParentNotFound: if the window or container does not exist
        """
        match source:
            case ById(id=text_id):
                text_id = tuple(text_id)
                window = self.window_of(text_id)
                if len(text_id) == 3:
                    fields.setdefault("editable", is_editable_id(text_id))
                return window.text(text_id, **fields)
            case ByBuilder(builder=builder):
                return self.window_of(builder.parent_id()).text_from_builder(builder)
            case ByValue(entity=text):
                try:
                    window = self.window_of(text.id)
                except ParentNotFound as exc:
                    exc.entity = text
                    raise
                return window.push_text(text)
            case _:
                raise TypeError(f"not a component source: {source!r}")

    def input(self, container_id: Sequence[int], **fields) -> TextId:
        """Create an editable text under the first free even id."""
        return self.window_of(container_id).input(container_id[:2], **fields)

    def noedit(self, container_id: Sequence[int], **fields) -> TextId:
        """Create a read-only text under the first free odd id."""
        return self.window_of(container_id).noedit(container_id[:2], **fields)

    def remove_text(self, text_id: Sequence[int]) -> Optional[Text]:
        window = self.windows.get(text_id[0])
        return window.remove_text(text_id) if window else None

    def move_text(self, text_id: Sequence[int], xpos: Union[Pos, int], ypos: Union[Pos, int]) -> Tuple[int, int]:
        window = self.window_of(text_id)
        result = window.container_of(text_id).move_text(text_id, xpos, ypos)
        if window.focused() == tuple(text_id):
            window.sync_cursor()
        return result

    def resize_text(self, text_id: Sequence[int], area: Area) -> Tuple[int, int]:
        window = self.window_of(text_id)
        result = window.container_of(text_id).resize_text(text_id, area)
        if window.focused() == tuple(text_id):
            window.sync_cursor()
        return result

    # --- focus ---

    def focused(self) -> Optional[WindowId]:
        """Id of the focused window, found by scanning."""
        for window_id, window in self.windows.items():
            if window.is_focused():
                return window_id
        return None

    def focus(self, window_id: int) -> WindowId:
        """Focus a window, unfocusing the previous one.

        Raises:
            ComponentNotFound: if the window does not exist
        """
        target = self.windows.get(window_id)
        if target is None:
            raise ComponentNotFound(f"no window {window_id}", component_id=window_id)
        previous = self.focused()
        if previous is not None and previous != window_id:
            self.windows[previous].remove_attribute(config.FOCUSED_ATTRIBUTE)
        target.add_attribute(config.FOCUSED_ATTRIBUTE)
        return window_id

    def focus_text(self, text_id: Sequence[int]) -> TextId:
        """Focus a text and the window it lives in."""
        window = self.window_of(text_id)
        focused = window.focus(text_id)
        self.focus(window.id)
        return focused

    def focused_text(self) -> Optional[TextId]:
        """The focused text of the focused window."""
        window_id = self.focused()
        if window_id is None:
            return None
        return self.windows[window_id].focused()

    def cursor(self) -> Optional[Tuple[int, int]]:
        """Displayed cursor of the focused window."""
        window_id = self.focused()
        if window_id is None:
            return None
        window = self.windows[window_id]
        return window.crsh, window.crsv

    # --- terminal ---

    def resize(self, width: int, height: int) -> List[ContainerId]:
        """Adopt a new terminal size.

        Every window re-resolves its requested area against the new size:
        full-size windows follow the terminal, smaller ones keep their size
        unless it no longer fits. Containers are not moved; the ids of those
        that no longer fit their window are returned so the caller can
        rearrange or remove them.
        """
        self.width = width
        self.height = height
        misfits = []
        for window in self.windows.values():
            wanted_w, wanted_h = window.area.resolve(width, height)
            window.width = min(wanted_w, width)
            window.height = min(wanted_h, height)
            bounds = window.position
            for container_id, container in window.containers.items():
                if not bounds.contains(container.position):
                    misfits.append(container_id)
        if misfits:
            logger.warning(format_comp_log(
                self._tag, None,
                f"{len(misfits)} containers no longer fit {width}x{height}: "
                + ", ".join(format_id(cid) for cid in misfits),
            ))
        return misfits

    # --- editing ---

    def edit(self, text_id: Sequence[int], op: EditOp, char: Optional[str] = None) -> Text:
        """Apply an edit operation to a text and resync its window's cursor.

        Raises:
            ParentNotFound: if the window or container does not exist
            ComponentNotFound: if the text does not exist
            IdKindMismatch: for content edits on a read-only text
            ValueTooLong: when inserting into a full text
        """
        window = self.window_of(text_id)
        text = window.container_of(text_id).text_ref(text_id)
        if text is None:
            raise ComponentNotFound(f"no text {format_id(tuple(text_id))}", component_id=tuple(text_id))
        text.apply(op, char)
        if window.focused() == text.id:
            window.sync_cursor()
        return text

    def text_count(self) -> int:
        return sum(window.text_count() for window in self.windows.values())
