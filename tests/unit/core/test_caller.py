from __future__ import annotations

"""
Unit tests for caller capture resolvers.
"""

import sys

from logrelay.core.caller import UNKNOWN_CALLER, CallerInfo, FrameCallerResolver, NoCallerResolver


def _resolve_from_helper(depth: int) -> CallerInfo:
    return FrameCallerResolver().resolve(depth)


def test_depth_zero_is_direct_caller():
    line = sys._getframe().f_lineno + 1
    info = FrameCallerResolver().resolve(0)

    assert info.lineno == line
    assert info.pathname.endswith("test_caller.py")
    assert info.func_name.endswith(".test_depth_zero_is_direct_caller")


def test_depth_one_skips_a_frame():
    line = sys._getframe().f_lineno + 1
    info = _resolve_from_helper(1)

    assert info.lineno == line
    assert info.func_name.endswith("test_depth_one_skips_a_frame")


def test_function_name_includes_module():
    info = _resolve_from_helper(0)

    assert info.func_name == f"{__name__}._resolve_from_helper"


def test_unreachable_depth_is_unknown():
    assert FrameCallerResolver().resolve(10_000) == UNKNOWN_CALLER


def test_negative_depth_is_unknown():
    assert FrameCallerResolver().resolve(-1) == UNKNOWN_CALLER


def test_no_caller_resolver():
    assert NoCallerResolver().resolve(0) is UNKNOWN_CALLER
    assert UNKNOWN_CALLER == ("??", "??", 0)
