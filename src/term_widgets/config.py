"""term-widgets configuration

Settings fall into these groups:
- ids: size of the id space at each level
- attributes: reserved attribute names
- terminal: fallback size when no terminal reports one
- text: input history limits
- layout: flex defaults
- logging
"""

import os

# === Id configuration ===
MAX_ID = 255  # ids are u8 at every level

# === Attribute configuration ===
FOCUSED_ATTRIBUTE = "focused"  # at most one Text per Window, one Window per Tree

# === Terminal configuration ===
DEFAULT_COLUMNS = int(os.environ.get("TERM_WIDGETS_COLUMNS", "80"))
DEFAULT_ROWS = int(os.environ.get("TERM_WIDGETS_ROWS", "24"))

# === Text configuration ===
HISTORY_MAX_LENGTH = 30  # committed values kept per input Text

# === Layout configuration ===
FLEX_DEFAULT_MARGIN = 1  # cells between flex children

# === Logging configuration ===
LOG_LEVEL = os.environ.get("TERM_WIDGETS_LOG_LEVEL", "WARNING")
LOG_FORMAT = "[%(name)s] %(message)s"
