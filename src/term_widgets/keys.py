"""
Mapping blessed keystrokes onto text edit operations.

The engine does not read the keyboard. The caller's loop reads a
:class:`blessed.keyboard.Keystroke` (``term.inkey()``) and hands it to
:func:`handle_key`, which edits the focused text of the focused window.
"""

from typing import Optional, Tuple

from blessed.keyboard import Keystroke

from .components import EditOp
from .telemetry import get_logger

logger = get_logger(__name__)


def edit_op_for(key: Keystroke) -> Optional[Tuple[EditOp, Optional[str]]]:
    """Translate a keystroke into an edit operation and its character.

    Returns:
        ``(op, char)``, with ``char`` set only for INSERT, or None for keys
        that do not edit text
    """
    match key.name:
        case 'KEY_LEFT':
            return EditOp.LEFT, None
        case 'KEY_RIGHT':
            return EditOp.RIGHT, None
        case 'KEY_UP':
            return EditOp.UP, None
        case 'KEY_DOWN':
            return EditOp.DOWN, None
        case 'KEY_HOME':
            return EditOp.HOME, None
        case 'KEY_END':
            return EditOp.END, None
        case 'KEY_BACKSPACE':
            return EditOp.BACKSPACE, None
        case 'KEY_DELETE':
            return EditOp.DELETE, None
        case 'KEY_ENTER':
            return EditOp.COMMIT, None
        case 'KEY_PGUP':
            return EditOp.HISTORY_PREV, None
        case 'KEY_PGDOWN':
            return EditOp.HISTORY_NEXT, None
        case None:
            char = str(key)
            if not key.is_sequence and len(char) == 1 and char.isprintable():
                return EditOp.INSERT, char
    return None


def handle_key(tree, key: Keystroke) -> bool:
    """Apply a keystroke to the focused text of the focused window.

    ``KEY_ESCAPE`` drops the text focus. Keys that do not map to an edit,
    and keystrokes arriving with nothing focused, are ignored.

    Args:
        tree: The :class:`~term_widgets.tree.Tree` to edit
        key: Blessed Keystroke object

    Returns:
        Whether the keystroke was consumed
    """
    window_id = tree.focused()
    if window_id is None:
        return False
    window = tree.window_ref(window_id)
    if key.name == 'KEY_ESCAPE':
        return window.blur() is not None
    text_id = window.focused()
    if text_id is None:
        return False
    mapped = edit_op_for(key)
    if mapped is None:
        logger.debug(f"[Keys] ignored {key.name or str(key)!r}")
        return False
    op, char = mapped
    tree.edit(text_id, op, char)
    return True
