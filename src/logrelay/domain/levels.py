from __future__ import annotations

"""
Severity Level System.

Levels are plain integers. The constants look like bit flags but are only
ever compared with ``<``: a record is suppressed when its level is strictly
below a logger's or handler's threshold. Name tables are process-wide and
may be extended at runtime.

Concurrency: writes go through ``_LOCK``; lookups read the tables without
locking and may observe a registration a moment late.
"""

import threading
from typing import Dict

from logrelay.domain.errors import UnknownLevelError

# -----------------------------------------------------------------------------
# Canonical levels
# -----------------------------------------------------------------------------
NOTHING: int = 0
DEBUG: int = 1
INFO: int = 2
WARN: int = 4
WARNING: int = WARN
ERROR: int = 8
NOTICE: int = 16
CRITICAL: int = 32
# Sentinel meaning "accept everything"
ALL: int = 255

_LOCK = threading.Lock()

_NAME_TO_LEVEL: Dict[str, int] = {
    "NOTHING": NOTHING,
    "DEBUG": DEBUG,
    "INFO": INFO,
    "WARN": WARN,
    "WARNING": WARNING,
    "ERROR": ERROR,
    "NOTICE": NOTICE,
    "CRITICAL": CRITICAL,
}

_LEVEL_TO_NAME: Dict[int, str] = {
    NOTHING: "NOTHING",
    DEBUG: "DEBUG",
    INFO: "INFO",
    WARN: "WARN",
    ERROR: "ERROR",
    NOTICE: "NOTICE",
    CRITICAL: "CRITICAL",
}


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
def level_name(level: int) -> str:
    """
    Return the display name of a level.

    Args:
        level: Numeric severity.

    Returns:
        str: The registered name, or ``"level <N>"`` for unregistered values.
    """
    name = _LEVEL_TO_NAME.get(level)
    if name is not None:
        return name
    return f"level {level}"


def level_by_name(name: str) -> int:
    """
    Resolve a registered level name.

    Args:
        name: Level name, e.g. ``"INFO"``.

    Returns:
        int: Numeric severity.

    Raises:
        UnknownLevelError: If the name was never registered.
    """
    try:
        return _NAME_TO_LEVEL[name]
    except KeyError:
        raise UnknownLevelError(name) from None


def register_level(level: int, name: str) -> None:
    """
    Register (or rename) a level in both lookup directions.

    Existing entries are overwritten silently.
    """
    with _LOCK:
        _NAME_TO_LEVEL[name] = level
        _LEVEL_TO_NAME[level] = name


def is_filtered(record_level: int, threshold: int) -> bool:
    """Return True when a record level falls below a threshold."""
    return record_level < threshold
