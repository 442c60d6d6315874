from __future__ import annotations

"""
Unit tests for the Component Configuration Models.
"""

import pytest

from logrelay.domain.config_models import (
    FileHandlerConfig,
    HandlerConfig,
    JsonFormatterConfig,
    LoggerConfig,
    RotatingFileHandlerConfig,
    TextFormatterConfig,
)
from logrelay.domain.constants import DEFAULT_DATE_FMT, DEFAULT_FMT
from logrelay.domain.errors import ConfigurationError


def test_logger_config_defaults():
    cfg = LoggerConfig.from_mapping({})

    assert cfg.name == ""
    assert cfg.level == "NOTHING"
    assert cfg.enable_runtime_caller is False
    assert cfg.handlers == ()


def test_logger_config_reads_every_key():
    cfg = LoggerConfig.from_mapping(
        {
            "name": "api",
            "level": "INFO",
            "enable_runtime_caller": True,
            "handlers": ["console", "audit"],
            "unknown": "ignored",
        }
    )

    assert cfg == LoggerConfig("api", "INFO", True, ("console", "audit"))


def test_none_mapping_yields_defaults():
    assert HandlerConfig.from_mapping(None) == HandlerConfig()  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "config",
    [
        {"level": 2},
        {"enable_runtime_caller": "yes"},
        {"handlers": "console"},
        {"handlers": ["console", 3]},
    ],
)
def test_logger_config_rejects_wrong_types(config):
    with pytest.raises(ConfigurationError):
        LoggerConfig.from_mapping(config)


def test_non_mapping_config_is_rejected():
    with pytest.raises(ConfigurationError):
        LoggerConfig.from_mapping(["level", "INFO"])  # type: ignore[arg-type]


def test_handler_config_formatter_default_varies_per_variant():
    assert HandlerConfig.from_mapping({}).formatter == "terminal"
    assert FileHandlerConfig.from_mapping({"filename": "a.log"}).formatter == "default"


def test_file_handler_config_requires_filename():
    with pytest.raises(ConfigurationError, match="valid file path"):
        FileHandlerConfig.from_mapping({"level": "INFO"})

    with pytest.raises(ConfigurationError):
        FileHandlerConfig.from_mapping({"filename": "   "})


def test_rotating_config_reads_budgets():
    cfg = RotatingFileHandlerConfig.from_mapping(
        {"filename": "a.log", "max_bytes": 1024, "max_lines": 10, "backup_count": 3}
    )

    assert (cfg.max_bytes, cfg.max_lines, cfg.backup_count) == (1024, 10, 3)
    assert cfg.filename == "a.log"


@pytest.mark.parametrize("value", [-1, "10", True, 1.5])
def test_rotating_config_rejects_invalid_budgets(value):
    with pytest.raises(ConfigurationError):
        RotatingFileHandlerConfig.from_mapping({"filename": "a.log", "max_bytes": value})


def test_text_formatter_config_keeps_whitespace_in_templates():
    cfg = TextFormatterConfig.from_mapping({"fmt": "%(message) ", "enable_colors": True})

    assert cfg.fmt == "%(message) "
    assert cfg.datefmt == DEFAULT_DATE_FMT
    assert cfg.enable_colors is True


def test_formatter_config_defaults():
    assert TextFormatterConfig.from_mapping({}).fmt == DEFAULT_FMT
    assert JsonFormatterConfig.from_mapping({}).datefmt == DEFAULT_DATE_FMT
