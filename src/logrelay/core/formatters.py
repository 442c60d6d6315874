from __future__ import annotations

"""
Formatter Engine.

Renders a ``LogRecord`` into one output line. ``TextFormatter`` implements
the ``%(token)`` placeholder mini-language:

    %(name)       Name of the logger
    %(levelno)    Numeric level
    %(levelname)  Level name
    %(pathname)   Full source path of the caller, or ??
    %(filename)   Last segment of pathname
    %(funcname)   Short function name of the caller, or ??
    %(lineno)     Source line of the caller
    %(time)       Creation time rendered with the date template
    %(message)    Result of LogRecord.get_message()
    %(color)      Level color escape (when enabled)
    %(endColor)   Color reset escape (when enabled)

Unrecognized tokens are left verbatim. ``JsonFormatter`` emits one JSON
object per record and, unlike the text formatter, may raise ``FormatError``.
"""

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional

from logrelay.domain import levels
from logrelay.domain.config_models import JsonFormatterConfig, TextFormatterConfig
from logrelay.domain.constants import (
    BLUE,
    DARK_GREEN,
    DEFAULT_DATE_FMT,
    DEFAULT_FMT,
    GREEN,
    RED,
    RESET_COLOR,
    WHITE,
    YELLOW,
)
from logrelay.domain.errors import FormatError
from logrelay.domain.record import LogRecord
from logrelay.infra.terminal import is_color_terminal

# TODO: support %(name)[flags][width].[precision]typecode like the stdlib
RECORD_FIELD_PATTERN = re.compile(r"%\((\w+)\)")

# Colors per level; register a color here for custom levels
COLOR_BY_LEVEL: Dict[int, int] = {
    levels.DEBUG: BLUE,
    levels.INFO: GREEN,
    levels.WARN: YELLOW,
    levels.ERROR: RED,
    levels.NOTICE: DARK_GREEN,
    levels.CRITICAL: RED,
}


def format_time(record: LogRecord, datefmt: str = "") -> str:
    """Render the record creation time with a strftime-style template."""
    return record.created.strftime(datefmt or DEFAULT_DATE_FMT)


def color_for_level(level: int) -> str:
    """Return the ANSI escape for a level (white when unknown)."""
    return f"\033[{COLOR_BY_LEVEL.get(level, WHITE)}m"


class Formatter(ABC):
    """Converts a record into a single line of text."""

    @abstractmethod
    def format(self, record: LogRecord) -> str:
        """Render the record."""

    def load_config(self, config: Mapping[str, Any]) -> None:
        """Reload settings from a configuration mapping."""


# -----------------------------------------------------------------------------
# Text
# -----------------------------------------------------------------------------
class TextFormatter(Formatter):
    """
    Placeholder-substituting text formatter.

    Args:
        fmt: Record template; empty selects the default without colors.
        datefmt: strftime template for ``%(time)``.
        enable_colors: Emit level colors when the output supports them.
        color_capable: Capability probe; defaults to the stderr TTY check.
    """

    def __init__(
            self,
            fmt: str = DEFAULT_FMT,
            datefmt: str = DEFAULT_DATE_FMT,
            enable_colors: bool = False,
            color_capable: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.fmt = fmt
        self.datefmt = datefmt
        self.enable_colors = enable_colors
        self.color_capable = color_capable or is_color_terminal

    def __repr__(self) -> str:
        return (
            f"TextFormatter(fmt={self.fmt!r}, datefmt={self.datefmt!r}, "
            f"enable_colors={self.enable_colors!r})"
        )

    def load_config(self, config: Mapping[str, Any]) -> None:
        cfg = TextFormatterConfig.from_mapping(config)
        self.fmt = cfg.fmt
        self.datefmt = cfg.datefmt
        self.enable_colors = cfg.enable_colors

    def format(self, record: LogRecord) -> str:
        fmt = self.fmt
        enable_colors = self.enable_colors
        if not fmt:
            fmt = DEFAULT_FMT
            enable_colors = False

        color = ""
        end_color = ""
        if enable_colors and self.color_capable():
            color = color_for_level(record.level)
            end_color = RESET_COLOR

        fmt += self._format_fields(record)

        def _substitute(match: "re.Match[str]") -> str:
            token = match.group(1)
            if token == "name":
                return record.name
            if token == "time":
                return format_time(record, self.datefmt)
            if token == "levelno":
                return str(record.level)
            if token == "levelname":
                return record.level_name
            if token == "pathname":
                return record.pathname
            if token == "filename":
                return record.filename
            if token == "funcname":
                return record.short_func_name
            if token == "lineno":
                return str(record.lineno)
            if token == "message":
                return record.get_message()
            if token == "color":
                return color
            if token == "endColor":
                return end_color
            return match.group(0)

        return RECORD_FIELD_PATTERN.sub(_substitute, fmt)

    @staticmethod
    def _format_fields(record: LogRecord) -> str:
        parts = ["%(color)"]
        for key, value in record.fields.items():
            parts.append(f" {key}={value}")
        parts.append("%(endColor)")
        return "".join(parts)


# -----------------------------------------------------------------------------
# JSON
# -----------------------------------------------------------------------------
class JsonFormatter(Formatter):
    """Single-line JSON formatter."""

    def __init__(self, datefmt: str = DEFAULT_DATE_FMT) -> None:
        self.datefmt = datefmt

    def __repr__(self) -> str:
        return f"JsonFormatter(datefmt={self.datefmt!r})"

    def load_config(self, config: Mapping[str, Any]) -> None:
        self.datefmt = JsonFormatterConfig.from_mapping(config).datefmt

    def format(self, record: LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": format_time(record, self.datefmt),
            "message": record.get_message(),
            "file": record.filename,
            "line": record.lineno,
            "level": record.level_name,
        }
        if record.fields:
            payload["_fields"] = dict(record.fields)

        try:
            return json.dumps(payload, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise FormatError(f"Marshal fields to JSON failed, [{e}]") from e


# -----------------------------------------------------------------------------
# Shared instances
# -----------------------------------------------------------------------------
DEFAULT_FORMATTER = TextFormatter(DEFAULT_FMT, DEFAULT_DATE_FMT, enable_colors=False)
TERMINAL_FORMATTER = TextFormatter(DEFAULT_FMT, DEFAULT_DATE_FMT, enable_colors=True)
