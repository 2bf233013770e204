"""
Terminal Widgets Library

Geometry and identity engine for terminal UIs built on the Blessed library.
Keeps a tree of windows, containers and text fields, validates where each
one may go, and tracks focus and the cursor for a render loop to draw.
"""

from .builders import (
    ContainerBuilder,
    InputBuilder,
    NoEditBuilder,
    TextBuilder,
    WindowBuilder,
)
from .components import (
    Container,
    EditOp,
    Style,
    Text,
    Window,
)
from .decoration import Border, Padding
from .errors import (
    AreaOutOfBounds,
    BorderMisconfigured,
    BoundsNotRespected,
    ComponentNotFound,
    ConfigurationError,
    IdAlreadyInUse,
    IdKindMismatch,
    IdSpaceExhausted,
    OriginOutOfBounds,
    ParentNotFound,
    PropertyTypeError,
    SiblingConflict,
    TooManyIdComponents,
    TreeError,
    ValueTooLong,
)
from .geometry import Area, Dimensions, Pos
from .keys import edit_op_for, handle_key
from .layout import Align, Canvas, Direction, Flex, Grid
from .properties import Handlers, Properties, Property
from .terminal import terminal_size
from .tree import ByBuilder, ById, ByValue, Tree

__all__ = [
    'Align',
    'Area',
    'AreaOutOfBounds',
    'Border',
    'BorderMisconfigured',
    'BoundsNotRespected',
    'ByBuilder',
    'ById',
    'ByValue',
    'Canvas',
    'ComponentNotFound',
    'ConfigurationError',
    'Container',
    'ContainerBuilder',
    'Dimensions',
    'Direction',
    'EditOp',
    'Flex',
    'Grid',
    'Handlers',
    'IdAlreadyInUse',
    'IdKindMismatch',
    'IdSpaceExhausted',
    'InputBuilder',
    'NoEditBuilder',
    'OriginOutOfBounds',
    'Padding',
    'ParentNotFound',
    'Pos',
    'Properties',
    'Property',
    'PropertyTypeError',
    'SiblingConflict',
    'Style',
    'Text',
    'TextBuilder',
    'TooManyIdComponents',
    'Tree',
    'TreeError',
    'ValueTooLong',
    'Window',
    'WindowBuilder',
    'edit_op_for',
    'handle_key',
    'terminal_size',
]

__version__ = '0.1.0'
