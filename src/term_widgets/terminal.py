"""Terminal size source backed by blessed."""

from typing import Optional, Tuple

from blessed import Terminal

from . import config
from .telemetry import get_logger

logger = get_logger(__name__)


def terminal_size(term: Optional[Terminal] = None) -> Tuple[int, int]:
    """Return ``(columns, rows)`` reported by a blessed terminal.

    A terminal that reports no size (not attached to a tty) falls back to
    ``config.DEFAULT_COLUMNS`` x ``config.DEFAULT_ROWS``.

    Args:
        term: Terminal to query, a new one when omitted
    """
    term = term or Terminal()
    columns = term.width or config.DEFAULT_COLUMNS
    rows = term.height or config.DEFAULT_ROWS
    if not (term.width and term.height):
        logger.info(f"terminal reports no size, using {columns}x{rows}")
    return columns, rows
