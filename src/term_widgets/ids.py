"""Hierarchical component ids.

Ids are fixed-length tuples of u8 components, validated top-down:

- window:    ``w``            (a plain int)
- container: ``(w, c)``
- text:      ``(w, c, t)``    even ``t`` = editable input, odd ``t`` = read-only

A child id always starts with its parent's id, so the tree never stores
back-references; a parent is found by slicing the id.
"""

from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple, Union

from . import config
from .errors import IdKindMismatch, IdSpaceExhausted

WindowId = int
ContainerId = Tuple[int, int]
TextId = Tuple[int, int, int]
ComponentId = Union[WindowId, ContainerId, TextId]


class IdKind(Enum):
    """Component id kind."""

    WINDOW = "window"
    CONTAINER = "container"
    INPUT = "input"
    NOEDIT = "noedit"

    @property
    def is_text(self) -> bool:
        return self in (IdKind.INPUT, IdKind.NOEDIT)


TEXT_KINDS = (IdKind.INPUT, IdKind.NOEDIT)


def _check_component(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise IdKindMismatch(f"id component {value!r} is not an int")
    if not 0 <= value <= config.MAX_ID:
        raise IdKindMismatch(f"id component {value} outside 0..{config.MAX_ID}")
    return value


def normalize_id(comp_id: Union[int, Sequence[int]]) -> ComponentId:
    """Normalize an id to an int (window) or a tuple (container/text).

    Lists are accepted and converted; a one-element sequence is a window id.

    Raises:
        IdKindMismatch: if the id has the wrong shape or out-of-range parts
    """
    if isinstance(comp_id, int) and not isinstance(comp_id, bool):
        return _check_component(comp_id)
    if isinstance(comp_id, (str, bytes)) or not isinstance(comp_id, Sequence):
        raise IdKindMismatch(f"{comp_id!r} is not a component id", component_id=comp_id)
    parts = tuple(_check_component(part) for part in comp_id)
    if len(parts) == 1:
        return parts[0]
    if len(parts) not in (2, 3):
        raise IdKindMismatch(f"{comp_id!r} has {len(parts)} components", component_id=comp_id)
    return parts


def id_kind(comp_id: Union[int, Sequence[int]]) -> IdKind:
    """Classify an id by its length and, for texts, its parity."""
    comp_id = normalize_id(comp_id)
    if isinstance(comp_id, int):
        return IdKind.WINDOW
    if len(comp_id) == 2:
        return IdKind.CONTAINER
    return IdKind.INPUT if comp_id[2] % 2 == 0 else IdKind.NOEDIT


def authorize_id(
    comp_id: Union[int, Sequence[int]],
    kind: Union[IdKind, Tuple[IdKind, ...]],
) -> ComponentId:
    """Check that an id is of the expected kind and return it normalized.

    Args:
        comp_id: The id to check
        kind: One kind, or a tuple of accepted kinds

    Raises:
        IdKindMismatch: if the id is malformed or of another kind, e.g. an
            odd text id used for an editable field
    """
    accepted = kind if isinstance(kind, tuple) else (kind,)
    normalized = normalize_id(comp_id)
    actual = id_kind(normalized)
    if actual not in accepted:
        names = "/".join(k.value for k in accepted)
        raise IdKindMismatch(
            f"{format_id(normalized)} is a {actual.value} id, expected {names}",
            component_id=normalized,
        )
    return normalized


def is_editable_id(text_id: Sequence[int]) -> bool:
    """Whether a text id names an editable input (even last component)."""
    return text_id[2] % 2 == 0


def parent_id(comp_id: ComponentId) -> Optional[ComponentId]:
    """Return the id of the parent component, or None for windows."""
    comp_id = normalize_id(comp_id)
    if isinstance(comp_id, int):
        return None
    if len(comp_id) == 2:
        return comp_id[0]
    return comp_id[0], comp_id[1]


def generate_id(taken: Iterable[int], start: int = 0, step: int = 1) -> int:
    """Return the first free id, scanning ``start, start + step, ...``.

    This fills gaps left by removed components before growing past the
    current maximum.

    Raises:
        IdSpaceExhausted: if every candidate up to ``config.MAX_ID`` is taken
    """
    used = set(taken)
    for candidate in range(start, config.MAX_ID + 1, step):
        if candidate not in used:
            return candidate
    raise IdSpaceExhausted(f"no free id from {start} step {step}")


def generate_window_id(taken: Iterable[WindowId]) -> WindowId:
    return generate_id(taken)


def generate_container_id(window_id: WindowId, taken: Iterable[ContainerId]) -> ContainerId:
    used = (cid[1] for cid in taken if cid[0] == window_id)
    return window_id, generate_id(used)


def generate_text_id(
    container_id: ContainerId,
    taken: Iterable[TextId],
    editable: bool,
) -> TextId:
    """Return the next free text id of the requested kind.

    Editable ids step through even values starting at 0, read-only ids
    through odd values starting at 1, so the two kinds never collide.
    """
    used = (tid[2] for tid in taken if (tid[0], tid[1]) == tuple(container_id))
    return container_id[0], container_id[1], generate_id(used, 0 if editable else 1, 2)


def format_id(comp_id: ComponentId) -> str:
    """Render an id for display, e.g. ``0``, ``0:3``, ``0:3:4``."""
    if isinstance(comp_id, int):
        return str(comp_id)
    return ":".join(str(part) for part in comp_id)
