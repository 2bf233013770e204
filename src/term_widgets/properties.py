"""Typed property values and named handlers.

Properties are data only: a closed set of value kinds carried by every
component for extended behavior (``"flex-direction": "row"``). Callbacks do
not live in properties; they are registered by name in a :class:`Handlers`
table and invoked explicitly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

from .errors import PropertyTypeError
from .telemetry import get_logger

logger = get_logger(__name__)


class PropertyKind(Enum):
    STR = "str"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    CHAR = "char"
    LIST = "list"
    MAP = "map"
    RANGE = "range"


@dataclass(frozen=True)
class Property:
    """A tagged property value.

    Build one with :meth:`of` (kind inferred from the Python value) or with
    :meth:`char` for single characters, which :meth:`of` reads as strings.
    """
    kind: PropertyKind
    value: Any

    @classmethod
    def of(cls, value: Any) -> "Property":
        """Wrap a plain Python value.

        Raises:
            PropertyTypeError: for values outside the supported kinds
        """
        if isinstance(value, Property):
            return value
        if isinstance(value, bool):
            return cls(PropertyKind.BOOL, value)
        if isinstance(value, int):
            return cls(PropertyKind.INT, value)
        if isinstance(value, float):
            return cls(PropertyKind.FLOAT, value)
        if isinstance(value, str):
            return cls(PropertyKind.STR, value)
        if isinstance(value, range):
            return cls(PropertyKind.RANGE, value)
        if isinstance(value, tuple) and len(value) == 2 and all(isinstance(v, int) for v in value):
            return cls(PropertyKind.RANGE, range(value[0], value[1]))
        if isinstance(value, (list, tuple)):
            return cls(PropertyKind.LIST, tuple(cls.of(v) for v in value))
        if isinstance(value, dict):
            return cls(PropertyKind.MAP, Properties(value))
        raise PropertyTypeError("a property value", type(value).__name__)

    @classmethod
    def char(cls, value: str) -> "Property":
        if len(value) != 1:
            raise PropertyTypeError("a single character", f"{len(value)} characters")
        return cls(PropertyKind.CHAR, value)

    def _expect(self, kind: PropertyKind) -> Any:
        if self.kind is not kind:
            raise PropertyTypeError(kind.value, self.kind.value)
        return self.value

    def as_str(self) -> str:
        return self._expect(PropertyKind.STR)

    def as_int(self) -> int:
        return self._expect(PropertyKind.INT)

    def as_float(self) -> float:
        if self.kind is PropertyKind.INT:
            return float(self.value)
        return self._expect(PropertyKind.FLOAT)

    def as_bool(self) -> bool:
        return self._expect(PropertyKind.BOOL)

    def as_char(self) -> str:
        return self._expect(PropertyKind.CHAR)

    def as_list(self) -> List["Property"]:
        return list(self._expect(PropertyKind.LIST))

    def as_map(self) -> "Properties":
        return self._expect(PropertyKind.MAP)

    def as_range(self) -> range:
        return self._expect(PropertyKind.RANGE)

    def unwrap(self) -> Any:
        """Return the plain Python value, recursively for lists and maps."""
        match self.kind:
            case PropertyKind.LIST:
                return [item.unwrap() for item in self.value]
            case PropertyKind.MAP:
                return {key: item.unwrap() for key, item in self.value.items()}
            case _:
                return self.value


class Properties:
    """String-keyed bag of :class:`Property` values."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Property] = {}
        for key, value in (values or {}).items():
            self.put(key, value)

    def put(self, key: str, value: Any) -> Optional[Property]:
        """Store a value, returning the one it replaced."""
        old = self._values.get(key)
        self._values[key] = Property.of(value)
        return old

    def get(self, key: str) -> Optional[Property]:
        return self._values.get(key)

    def remove(self, key: str) -> Optional[Property]:
        return self._values.pop(key, None)

    def items(self):
        return self._values.items()

    def __getitem__(self, key: str) -> Property:
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Properties):
            return NotImplemented
        return self._values == other._values

    __hash__ = None

    def __repr__(self) -> str:
        plain = {key: value.unwrap() for key, value in self._values.items()}
        return f"Properties({plain!r})"


Handler = Callable[..., Any]


class Handlers:
    """Named callbacks registered for extended component behavior."""

    def __init__(self):
        self._handlers: Dict[str, Handler] = {}

    def register(self, name: str, handler: Handler) -> Optional[Handler]:
        """Register ``handler`` under ``name``, returning the one it replaced."""
        old = self._handlers.get(name)
        self._handlers[name] = handler
        logger.debug(f"[Handlers] registered {name}")
        return old

    def unregister(self, name: str) -> Optional[Handler]:
        return self._handlers.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Call the handler registered under ``name``.

        Raises:
            KeyError: if nothing is registered under ``name``
        """
        try:
            handler = self._handlers[name]
        except KeyError:
            raise KeyError(f"no handler registered as {name!r}") from None
        return handler(*args, **kwargs)
