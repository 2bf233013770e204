"""Logging entry points.

Log lines are tagged with the component kind and its id:

    [Window:0] container (0, 3) rejected: AreaOutOfBounds
"""

import logging
from typing import Optional, Sequence, Union

from . import config


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (normally called with ``__name__``)."""
    return logging.getLogger(name)


def configure(level: Optional[str] = None) -> None:
    """Attach a stream handler to the package logger.

    The library never does this on import; applications that want the
    engine's diagnostics call it once at startup.

    Args:
        level: Level name, defaults to ``config.LOG_LEVEL``
    """
    logger = logging.getLogger("term_widgets")
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel((level or config.LOG_LEVEL).upper())


def format_comp_log(tag: str, comp_id: Union[int, Sequence[int], None], msg: str) -> str:
    """Format a message carrying a component id.

    Args:
        tag: Component kind (``Tree``, ``Window``, ``Container``...)
        comp_id: Window id, container/text id tuple, or None
        msg: Message body

    Returns:
        ``[tag:id] msg``
    """
    if comp_id is None:
        return f"[{tag}] {msg}"
    if isinstance(comp_id, int):
        shown = str(comp_id)
    else:
        shown = ",".join(str(part) for part in comp_id)
    return f"[{tag}:{shown}] {msg}"


logging.getLogger("term_widgets").addHandler(logging.NullHandler())
