from __future__ import annotations

"""
Component Configuration Models.

Dynamic configuration arrives as a plain string-keyed mapping. Each
component parses it into one of the frozen dataclasses below before
applying anything, so the set of recognized keys is explicit and a wrongly
typed value is rejected with ``ConfigurationError``. Unknown keys are
ignored.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

from logrelay.domain.constants import (
    DEFAULT_DATE_FMT,
    DEFAULT_FMT,
    DEFAULT_FORMATTER_NAME,
    TERMINAL_FORMATTER_NAME,
)
from logrelay.domain.errors import ConfigurationError

DEFAULT_LEVEL_NAME: str = "NOTHING"


# -----------------------------------------------------------------------------
# Logger
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class LoggerConfig:
    """
    Logger configuration.

    Attributes:
        name: Display name; empty keeps the registry name.
        level: Threshold level name.
        enable_runtime_caller: Capture caller file/line/function.
        handlers: Registered handler names to attach, in order.
    """
    name: str = ""
    level: str = DEFAULT_LEVEL_NAME
    enable_runtime_caller: bool = False
    handlers: Tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "LoggerConfig":
        config = _ensure_mapping(config)
        return cls(
            name=_as_str(config.get("name"), "", "name"),
            level=_as_str(config.get("level"), DEFAULT_LEVEL_NAME, "level"),
            enable_runtime_caller=_as_bool(
                config.get("enable_runtime_caller"), False, "enable_runtime_caller"
            ),
            handlers=tuple(_as_list_str(config.get("handlers"), "handlers")),
        )


# -----------------------------------------------------------------------------
# Handlers
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class HandlerConfig:
    """Configuration shared by every handler variant."""
    name: str = ""
    level: str = DEFAULT_LEVEL_NAME
    formatter: str = TERMINAL_FORMATTER_NAME

    @classmethod
    def from_mapping(
            cls,
            config: Mapping[str, Any],
            default_formatter: str = TERMINAL_FORMATTER_NAME,
    ) -> "HandlerConfig":
        config = _ensure_mapping(config)
        return cls(
            name=_as_str(config.get("name"), "", "name"),
            level=_as_str(config.get("level"), DEFAULT_LEVEL_NAME, "level"),
            formatter=_as_str(config.get("formatter"), default_formatter, "formatter"),
        )


@dataclass(frozen=True)
class FileHandlerConfig(HandlerConfig):
    """File sink configuration; ``filename`` is required."""
    formatter: str = DEFAULT_FORMATTER_NAME
    filename: str = ""

    @classmethod
    def from_mapping(
            cls,
            config: Mapping[str, Any],
            default_formatter: str = DEFAULT_FORMATTER_NAME,
    ) -> "FileHandlerConfig":
        config = _ensure_mapping(config)
        base = HandlerConfig.from_mapping(config, default_formatter)
        filename = _as_str(config.get("filename"), "", "filename")
        if not filename:
            raise ConfigurationError("Should provide a valid file path")
        return cls(
            name=base.name,
            level=base.level,
            formatter=base.formatter,
            filename=filename,
        )


@dataclass(frozen=True)
class RotatingFileHandlerConfig(FileHandlerConfig):
    """
    Rotating file sink configuration.

    Attributes:
        max_bytes: Roll over before the file reaches this size (0 disables).
        max_lines: Roll over before the file reaches this many lines (0 disables).
        backup_count: Number of rotated files to keep.
    """
    max_bytes: int = 0
    max_lines: int = 0
    backup_count: int = 1

    @classmethod
    def from_mapping(
            cls,
            config: Mapping[str, Any],
            default_formatter: str = DEFAULT_FORMATTER_NAME,
    ) -> "RotatingFileHandlerConfig":
        config = _ensure_mapping(config)
        base = FileHandlerConfig.from_mapping(config, default_formatter)
        return cls(
            name=base.name,
            level=base.level,
            formatter=base.formatter,
            filename=base.filename,
            max_bytes=_as_int(config.get("max_bytes"), 0, "max_bytes"),
            max_lines=_as_int(config.get("max_lines"), 0, "max_lines"),
            backup_count=_as_int(config.get("backup_count"), 1, "backup_count"),
        )


# -----------------------------------------------------------------------------
# Formatters
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextFormatterConfig:
    fmt: str = DEFAULT_FMT
    datefmt: str = DEFAULT_DATE_FMT
    enable_colors: bool = False

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "TextFormatterConfig":
        config = _ensure_mapping(config)
        return cls(
            fmt=_as_str(config.get("fmt"), DEFAULT_FMT, "fmt", strip=False),
            datefmt=_as_str(config.get("datefmt"), DEFAULT_DATE_FMT, "datefmt", strip=False),
            enable_colors=_as_bool(config.get("enable_colors"), False, "enable_colors"),
        )


@dataclass(frozen=True)
class JsonFormatterConfig:
    datefmt: str = DEFAULT_DATE_FMT

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "JsonFormatterConfig":
        config = _ensure_mapping(config)
        return cls(
            datefmt=_as_str(config.get("datefmt"), DEFAULT_DATE_FMT, "datefmt", strip=False),
        )


# -----------------------------------------------------------------------------
# Private helpers
# -----------------------------------------------------------------------------
def _ensure_mapping(config: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    if config is None:
        return {}
    if not isinstance(config, Mapping):
        raise ConfigurationError(
            f"Invalid config: expected a mapping, got {type(config).__name__}."
        )
    return config


def _as_str(value: Any, fallback: str, key: str, strip: bool = True) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip() if strip else value
        return v if v else fallback
    raise ConfigurationError(
        f"Field '{key}' is invalid: expected str, got {type(value).__name__}."
    )


def _as_bool(value: Any, fallback: bool, key: str) -> bool:
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    raise ConfigurationError(
        f"Field '{key}' is invalid: expected bool, got {type(value).__name__}."
    )


def _as_int(value: Any, fallback: int, key: str) -> int:
    if value is None:
        return fallback
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    raise ConfigurationError(
        f"Field '{key}' is invalid: expected a non-negative int, got {value!r}."
    )


def _as_list_str(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(
            f"Field '{key}' is invalid: expected a list, got {type(value).__name__}."
        )
    out: List[str] = []
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ConfigurationError(
                f"Field '{key}[{i}]' is invalid: expected str, got {type(item).__name__}."
            )
        out.append(item)
    return out
