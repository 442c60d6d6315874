from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A fresh default registry and level table for every test.
3. Shared fixtures for in-memory sinks and record-collecting handlers.
"""

import io
import os
import sys
from typing import Callable, Generator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from logrelay.core.handlers import Handler  # noqa: E402
from logrelay.core.registry import Registry, reset_registry  # noqa: E402
from logrelay.domain import levels  # noqa: E402
from logrelay.domain.levels import NOTHING  # noqa: E402
from logrelay.domain.record import LogRecord  # noqa: E402


class RecordingHandler(Handler):
    """Handler that keeps every emitted record in memory."""

    def __init__(self, name: str = "", level: int = NOTHING) -> None:
        super().__init__(name=name, level=level)
        self.records: List[LogRecord] = []

    def emit(self, record: LogRecord) -> None:
        self.records.append(record)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def fresh_default_registry() -> Generator[Registry, None, None]:
    """
    Install a brand new default registry for the duration of a test.

    Yields:
        Registry: The registry behind the module-level ``get_logger``.
    """
    yield reset_registry()
    reset_registry()


@pytest.fixture(autouse=True)
def isolated_level_tables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep runtime level registrations from leaking between tests."""
    monkeypatch.setattr(levels, "_NAME_TO_LEVEL", dict(levels._NAME_TO_LEVEL))
    monkeypatch.setattr(levels, "_LEVEL_TO_NAME", dict(levels._LEVEL_TO_NAME))


@pytest.fixture
def registry() -> Registry:
    """Return an independent registry with the built-in components installed."""
    return Registry()


@pytest.fixture
def sink() -> io.StringIO:
    """Return an in-memory text sink."""
    return io.StringIO()


@pytest.fixture
def make_recorder() -> Callable[..., RecordingHandler]:
    """
    Return a factory for record-collecting handlers.

    Returns:
        Callable[..., RecordingHandler]: Accepts ``name`` and ``level``.
    """
    return RecordingHandler
