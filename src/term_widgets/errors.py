"""Exceptions raised by the component tree.

Every validation failure is raised as a subclass of :class:`TreeError`.
A raised insertion or mutation leaves the tree exactly as it was; when the
rejected entity had already been materialised (a pushed value, a built
builder) it travels back on ``error.entity``.
"""

from typing import Any, Optional


class TreeError(Exception):
    """Base class for component tree failures.

    Attributes:
        component_id: The id the failing operation addressed, if any
        entity: The rejected entity, if one was materialised
    """

    def __init__(self, message: str = "", *, component_id: Any = None, entity: Any = None):
        super().__init__(message or self.__class__.__name__)
        self.component_id = component_id
        self.entity = entity


class IdAlreadyInUse(TreeError):
    """The id is already taken at its level."""


class IdKindMismatch(TreeError):
    """The id shape or parity does not match the operation."""


class IdSpaceExhausted(TreeError):
    """No free id is left at this level."""


class AreaOutOfBounds(TreeError):
    """The decorated size exceeds the parent on at least one axis."""


class OriginOutOfBounds(TreeError):
    """The origin places the rectangle outside the parent or onto a sibling."""


class SiblingConflict(OriginOutOfBounds):
    """The rectangle overlaps a sibling and overlay is not available."""


class BoundsNotRespected(TreeError):
    """Position and size together violate the parent's bounds."""


class ParentNotFound(TreeError):
    """The addressed Window or Container does not exist."""


class ComponentNotFound(TreeError):
    """The addressed entity does not exist under its parent."""


class ValueTooLong(TreeError):
    """Content exceeds the text's ``width * height`` capacity."""


class ConfigurationError(TreeError):
    """A builder or decoration was configured inconsistently."""


class TooManyIdComponents(ConfigurationError):
    """A builder was handed an id longer than its entity kind allows."""


class BorderMisconfigured(ConfigurationError, BoundsNotRespected):
    """A manual border glyph table does not fit its padding configuration."""


class PropertyTypeError(TypeError):
    """A property was read as a kind it does not hold."""

    def __init__(self, expected: str, actual: Optional[str]):
        super().__init__(f"property holds {actual}, not {expected}")
        self.expected = expected
        self.actual = actual
