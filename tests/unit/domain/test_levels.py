from __future__ import annotations

"""
Unit tests for the Level System.

Verifies:
1. Name lookups in both directions for the canonical levels.
2. Synthesized names for unregistered levels.
3. Unknown names fail as programmer errors.
4. Runtime registration and renaming.
"""

import pytest

from logrelay.domain import levels
from logrelay.domain.errors import UnknownLevelError
from logrelay.domain.levels import (
    ALL,
    CRITICAL,
    DEBUG,
    ERROR,
    INFO,
    NOTHING,
    NOTICE,
    WARN,
    WARNING,
    is_filtered,
    level_by_name,
    level_name,
    register_level,
)


def test_canonical_levels_are_strictly_ordered():
    """The canonical constants form a strictly increasing sequence."""
    ordered = [NOTHING, DEBUG, INFO, WARN, ERROR, NOTICE, CRITICAL]
    assert ordered == sorted(ordered)
    assert len(set(ordered)) == len(ordered)
    assert WARNING == WARN
    assert ALL > CRITICAL


@pytest.mark.parametrize(
    "level, name",
    [
        (NOTHING, "NOTHING"),
        (DEBUG, "DEBUG"),
        (INFO, "INFO"),
        (WARN, "WARN"),
        (ERROR, "ERROR"),
        (NOTICE, "NOTICE"),
        (CRITICAL, "CRITICAL"),
    ],
)
def test_level_name_round_trip(level: int, name: str):
    assert level_name(level) == name
    assert level_by_name(name) == level


def test_warning_alias_resolves_to_warn():
    assert level_by_name("WARNING") == WARN
    assert level_name(WARNING) == "WARN"


def test_unregistered_level_gets_synthesized_name():
    """level_name never fails, even for values nobody registered."""
    assert level_name(3) == "level 3"
    assert level_name(ALL) == "level 255"


def test_unknown_level_name_raises():
    with pytest.raises(UnknownLevelError) as excinfo:
        level_by_name("VERBOSE")

    assert isinstance(excinfo.value, ValueError)
    assert "VERBOSE" in str(excinfo.value)


def test_register_level_adds_both_directions():
    register_level(64, "AUDIT")

    assert level_name(64) == "AUDIT"
    assert level_by_name("AUDIT") == 64


def test_register_level_overwrites_silently():
    """Re-registering a level renames it without complaint."""
    register_level(64, "AUDIT")
    register_level(64, "SECURITY")

    assert level_name(64) == "SECURITY"
    # The old name still resolves; only the display name changed
    assert level_by_name("AUDIT") == 64


def test_level_tables_are_isolated_per_test():
    """The autouse fixture restores the tables after registration tests."""
    assert 64 not in levels._LEVEL_TO_NAME


def test_is_filtered_uses_strict_less_than():
    assert is_filtered(DEBUG, INFO) is True
    assert is_filtered(INFO, INFO) is False
    assert is_filtered(CRITICAL, INFO) is False
    # No bitmask semantics: a higher threshold suppresses everything below it
    assert is_filtered(CRITICAL, ALL) is True
