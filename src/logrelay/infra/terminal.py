from __future__ import annotations

"""
Terminal Capabilities and Null Sink.

Exposes the color capability consulted by ``TextFormatter`` and a writable
sink that discards everything.
"""

import os
import sys
from typing import Optional, TextIO


def is_color_terminal(stream: Optional[TextIO] = None) -> bool:
    """
    Report whether ANSI colors can be written to the diagnostic stream.

    Args:
        stream: Stream to probe; defaults to ``sys.stderr``.

    Returns:
        bool: True if the stream is a TTY and the platform is not Windows.
    """
    target = stream if stream is not None else sys.stderr
    if target is None or os.name == "nt":
        return False
    try:
        return bool(target.isatty())
    except (AttributeError, ValueError, OSError):
        return False


class DiscardOutput:
    """Writable, closable sink on which every call succeeds and does nothing."""

    closed = False

    def write(self, data: str) -> int:
        return len(data)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass

    def isatty(self) -> bool:
        return False


DISCARD = DiscardOutput()
