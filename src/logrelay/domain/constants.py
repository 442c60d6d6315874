from __future__ import annotations

"""
Domain Constants.

Default templates, caller-capture defaults and terminal color codes shared
by the formatter engine and the dispatch core.
"""

from typing import Dict

# -----------------------------------------------------------------------------
# Templates
# -----------------------------------------------------------------------------
DEFAULT_FMT: str = "%(color)[%(time)] [%(levelname)] [%(filename):%(lineno)]%(endColor) %(message)"
DEFAULT_DATE_FMT: str = "%Y-%m-%d %H:%M:%S"

# -----------------------------------------------------------------------------
# Logger defaults
# -----------------------------------------------------------------------------
ROOT_LOGGER_NAME: str = "root"

# Frames to ascend from Logger._log: the leveled method, then its caller
DEFAULT_FUNC_CALL_DEPTH: int = 2

UNKNOWN_CALLER_NAME: str = "??"
UNKNOWN_CALLER_LINE: int = 0

# -----------------------------------------------------------------------------
# ANSI colors
# -----------------------------------------------------------------------------
BLUE: int = 34
GREEN: int = 32
YELLOW: int = 33
RED: int = 31
DARK_GREEN: int = 36
WHITE: int = 37

RESET_COLOR: str = "\033[0m"

# Registered formatter names used as handler defaults
DEFAULT_FORMATTER_NAME: str = "default"
TERMINAL_FORMATTER_NAME: str = "terminal"
