# tests/test_imports_smoke.py
# -----------------------------------------------------------------------------
# Smoke tests for imports and the public API of the logrelay package.
#
# Goals:
# - Ensure every subpackage is importable on its own.
# - Validate the top-level package exposes the names applications use.
# -----------------------------------------------------------------------------

from __future__ import annotations

import importlib

import pytest

import logrelay


@pytest.mark.parametrize(
    "module",
    [
        "logrelay.domain.levels",
        "logrelay.domain.record",
        "logrelay.domain.config_models",
        "logrelay.core.caller",
        "logrelay.core.formatters",
        "logrelay.core.handlers",
        "logrelay.core.rotating",
        "logrelay.core.logger",
        "logrelay.core.options",
        "logrelay.core.registry",
        "logrelay.infra.dict_config",
        "logrelay.infra.diagnostics",
        "logrelay.infra.terminal",
    ],
)
def test_modules_importable(module: str):
    assert importlib.import_module(module) is not None


def test_public_api_contract():
    required = [
        "get_logger",
        "get_registry",
        "set_registry",
        "reset_registry",
        "disable_existing_loggers",
        "dict_config",
        "Logger",
        "Registry",
        "Fields",
        "LogRecord",
        "new_record",
        "TextFormatter",
        "JsonFormatter",
        "StreamHandler",
        "FileHandler",
        "RotatingFileHandler",
        "NullHandler",
        "register_level",
        "level_by_name",
        "level_name",
        "CriticalLogError",
    ]
    for name in required:
        assert hasattr(logrelay, name), f"logrelay missing: {name}"
    assert set(logrelay.__all__) >= set(required)

