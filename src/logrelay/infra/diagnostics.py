from __future__ import annotations

"""
Fallback Diagnostic Channel.

Handlers must never raise into the application's logging call site. When
formatting, writing or closing fails, the failure is written here instead.
"""

import sys
from typing import Optional, TextIO


def report_error(message: str, stream: Optional[TextIO] = None) -> None:
    """
    Write a single diagnostic line to stderr (or the given stream).

    This function must never raise.

    Args:
        message: Diagnostic text without trailing newline.
        stream: Override target, mainly for tests.
    """
    target = stream if stream is not None else sys.stderr
    if target is None:
        return
    try:
        target.write(message + "\n")
        target.flush()
    except (OSError, ValueError):
        # Nowhere left to report to
        pass
