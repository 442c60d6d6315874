from __future__ import annotations

"""
Caller Capture.

Resolves the source location of a logging call. Capture is a capability
handed to each logger so it can be replaced (or disabled) without touching
the dispatch code; every resolver must return ``UNKNOWN_CALLER`` rather
than raise.
"""

import sys
from abc import ABC, abstractmethod
from typing import NamedTuple

from logrelay.domain.constants import UNKNOWN_CALLER_LINE, UNKNOWN_CALLER_NAME


class CallerInfo(NamedTuple):
    pathname: str
    func_name: str
    lineno: int


UNKNOWN_CALLER = CallerInfo(UNKNOWN_CALLER_NAME, UNKNOWN_CALLER_NAME, UNKNOWN_CALLER_LINE)


class CallerResolver(ABC):
    """Strategy interface for locating the caller of a logging method."""

    @abstractmethod
    def resolve(self, depth: int) -> CallerInfo:
        """
        Locate the frame ``depth`` levels above the frame calling ``resolve``.

        Args:
            depth: Frames to ascend; 0 is the direct caller of ``resolve``.

        Returns:
            CallerInfo: Location, or ``UNKNOWN_CALLER`` on failure.
        """


class FrameCallerResolver(CallerResolver):
    """Resolver backed by the interpreter's frame stack."""

    def resolve(self, depth: int) -> CallerInfo:
        if depth < 0:
            return UNKNOWN_CALLER
        try:
            # +1 skips this method's own frame
            frame = sys._getframe(depth + 1)
        except ValueError:
            return UNKNOWN_CALLER

        code = frame.f_code
        qualname = getattr(code, "co_qualname", code.co_name)
        module = frame.f_globals.get("__name__", "")
        func_name = f"{module}.{qualname}" if module else qualname
        return CallerInfo(code.co_filename, func_name, frame.f_lineno)


class NoCallerResolver(CallerResolver):
    """Resolver that never inspects the stack."""

    def resolve(self, depth: int) -> CallerInfo:
        return UNKNOWN_CALLER
